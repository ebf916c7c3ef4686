"""Exceptions raised by dm-inspect."""


class InvalidFilterError(ValueError):
    """A filter, pattern or id list supplied by the caller could not be parsed."""


class SnapshotError(ValueError):
    """A registry snapshot could not be read or failed validation."""
