"""Sorted, queryable view over one registry snapshot."""

from __future__ import annotations

from typing import Iterable, Sequence

from dm_inspect.models import Component, ComponentState, Unit
from dm_inspect.names import name_matches
from dm_inspect.registry.base import RegistryProvider, units_of


class ComponentGraph:
    """All components across all units, ordered by unit id.

    Components of the same unit keep the order in which the registry listed
    them. Dependencies link to components by name only; use
    :meth:`find_by_name` to follow them.
    """

    def __init__(self, components: Iterable[Component], units: Sequence[Unit] | None = None):
        # sorted() is stable, so ties keep arrival order
        self._components = tuple(sorted(components, key=lambda c: c.unit.id))
        if units is None:
            units = units_of(self._components)
        self._units = tuple(sorted(units, key=lambda u: u.id))

    @classmethod
    def from_registry(cls, provider: RegistryProvider) -> ComponentGraph:
        return cls(provider.list_components(), provider.list_units())

    def all_components(self) -> list[Component]:
        return list(self._components)

    def down_components(self) -> list[Component]:
        return [c for c in self._components if c.state is ComponentState.UNREGISTERED]

    def units(self) -> list[Unit]:
        return list(self._units)

    def find_by_name(
        self,
        qualified_name: str,
        among: Iterable[Component] | None = None,
    ) -> Component | None:
        """First component answering to ``qualified_name``, or None.

        Query properties must be a subset of the candidate's own properties.
        ``among`` narrows the search to the given components.
        """
        candidates = self._components if among is None else among
        for component in candidates:
            if name_matches(qualified_name, component.name):
                return component
        return None

    def __len__(self) -> int:
        return len(self._components)
