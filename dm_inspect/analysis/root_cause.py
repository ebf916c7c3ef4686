"""Root-cause resolver: follows failing required dependencies to their source.

For a component that is not registered, the resolver walks its unavailable
required dependencies in declaration order:

* a configuration dependency is always a root cause, and the scan goes on;
* a dependency no down component answers to is a root cause (unit unknown);
* a dependency that closes a loop on the current path is a cycle: the
  component where the loop closes becomes the root cause and the walk stops;
* otherwise the walk descends into the first matching component and its
  result replaces whatever this component had gathered.

Only the first failing non-configuration dependency of each component is
followed. A component with several independently broken chains reports one of
them per top-level walk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from dm_inspect.graph import ComponentGraph
from dm_inspect.models import (
    CONFIGURATION,
    SERVICE,
    Component,
    DependencyCycle,
    DependencyState,
    Diagnosis,
    RootCause,
)

logger = logging.getLogger(__name__)

# (dependency name, dependency kind)
DependencyKey = tuple[str, str]


@dataclass
class RootCauseResult:
    root_causes: list[RootCause] = field(default_factory=list)
    cycles: list[DependencyCycle] = field(default_factory=list)


class RootCauseResolver:
    """Resolve root causes over the down components of a graph."""

    def __init__(self, graph: ComponentGraph):
        self._graph = graph
        self._down = graph.down_components()

    def resolve_root(
        self,
        component: Component,
        visited: tuple[DependencyKey, ...] = (),
    ) -> RootCauseResult:
        """Root causes explaining why ``component`` is down.

        ``visited`` holds the dependencies already followed on the current
        path; it is never mutated.
        """
        current = component
        path = tuple(visited)

        while True:
            down_deps = 0
            causes: list[RootCause] = []
            next_component: Component | None = None

            for dep in current.dependencies:
                if dep.state is not DependencyState.UNAVAILABLE_REQUIRED:
                    continue
                down_deps += 1

                if dep.kind == CONFIGURATION:
                    causes.append(RootCause(dep.name, CONFIGURATION, current.unit.symbolic_name))
                    continue

                target = self._graph.find_by_name(dep.name, among=self._down)
                if target is None:
                    causes.append(RootCause(dep.name, dep.kind, None))
                    continue

                key = (dep.name, dep.kind)
                if key in path:
                    cycle = DependencyCycle(tuple(name for name, _ in path), dep.name)
                    logger.info("Circular dependency found: %s -> %s",
                                " -> ".join(cycle.path), cycle.closing_name)
                    causes.append(RootCause(current.name, SERVICE, current.unit.symbolic_name))
                    return RootCauseResult(causes, [cycle])

                path = path + (key,)
                next_component = target
                break

            if next_component is None:
                if down_deps > 0 and not causes:
                    causes.append(RootCause(current.name, SERVICE, current.unit.symbolic_name))
                return RootCauseResult(causes)

            logger.debug("[%d] %s -> [%d] %s", current.id, current.name,
                         next_component.id, next_component.name)
            current = next_component


def compute_root_causes(graph: ComponentGraph) -> Diagnosis:
    """Run the resolver from every down component and merge the results."""
    resolver = RootCauseResolver(graph)
    down = graph.down_components()

    causes: set[RootCause] = set()
    cycles: list[DependencyCycle] = []
    for component in down:
        result = resolver.resolve_root(component, ())
        causes.update(result.root_causes)
        for cycle in result.cycles:
            if cycle not in cycles:
                cycles.append(cycle)

    logger.debug("%d down component(s), %d root cause(s)", len(down), len(causes))
    return Diagnosis(
        down_components=down,
        root_causes=sorted(causes, key=lambda c: c.sort_key),
        cycles=cycles,
        units=graph.units(),
    )
