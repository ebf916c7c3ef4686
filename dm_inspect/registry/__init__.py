"""Registry providers: where component snapshots come from."""

from __future__ import annotations

from dm_inspect.registry.base import RegistryProvider, StaticRegistry, units_of
from dm_inspect.registry.snapshot import dump_snapshot, load_snapshot, parse_snapshot

__all__ = [
    "RegistryProvider",
    "StaticRegistry",
    "load_snapshot",
    "parse_snapshot",
    "dump_snapshot",
    "units_of",
]
