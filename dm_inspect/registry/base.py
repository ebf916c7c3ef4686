"""Registry provider protocol and the in-memory implementation."""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from dm_inspect.models import Component, Unit


class RegistryProvider(Protocol):
    """Host collaborator handing over a consistent view of the registry."""

    def list_components(self) -> Sequence[Component]:
        ...

    def list_units(self) -> Sequence[Unit]:
        ...


def units_of(components: Iterable[Component]) -> list[Unit]:
    """Distinct owning units of ``components``, in first-seen order."""
    seen: dict[int, Unit] = {}
    for component in components:
        seen.setdefault(component.unit.id, component.unit)
    return list(seen.values())


class StaticRegistry:
    """In-memory registry built from already captured components."""

    def __init__(self, components: Sequence[Component], units: Sequence[Unit] | None = None):
        self._components = list(components)
        self._units = units_of(self._components) if units is None else list(units)

    def list_components(self) -> list[Component]:
        return list(self._components)

    def list_units(self) -> list[Unit]:
        return list(self._units)
