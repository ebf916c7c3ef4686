"""Root-cause summary ("wtf" report)."""

from __future__ import annotations

from dm_inspect.graph import ComponentGraph
from dm_inspect.models import (
    CONFIGURATION,
    SERVICE,
    DependencyState,
    Diagnosis,
    UnitState,
)

SEPARATOR = "-" * 37


def render_diagnosis(diagnosis: Diagnosis) -> list[str]:
    lines: list[str] = []

    down = diagnosis.down_components
    if not down:
        lines.append("No missing dependencies found.")
    else:
        lines.append(f"{len(down)} missing dependencies found.")
        lines.append(SEPARATOR)

    lines.extend(_unit_advisory(diagnosis, UnitState.RESOLVED))
    lines.extend(_unit_advisory(diagnosis, UnitState.INSTALLED))

    for cycle in diagnosis.cycles:
        lines.append("Circular dependency found:")
        lines.append(cycle.describe())

    lines.extend(_missing_configurations(diagnosis))
    lines.extend(_missing_services(diagnosis))
    lines.extend(_missing_other(diagnosis))
    return lines


def _unit_advisory(diagnosis: Diagnosis, state: UnitState) -> list[str]:
    units = [
        u for u in diagnosis.units
        if u.state is state and not (state is UnitState.RESOLVED and u.fragment)
    ]
    if not units:
        return []
    lines = [f"Please note that the following bundles are in the {state.name} state:"]
    lines.extend(f" * [{u.id}] {u.symbolic_name}" for u in units)
    return lines


def _missing_configurations(diagnosis: Diagnosis) -> list[str]:
    causes = diagnosis.causes_of_kind(CONFIGURATION)
    if not causes:
        return []
    lines = ["The following configuration(s) are missing:"]
    lines.extend(f" * {c.name} for bundle {c.unit_name}" for c in causes)
    return lines


def _missing_services(diagnosis: Diagnosis) -> list[str]:
    causes = diagnosis.causes_of_kind(SERVICE)
    if not causes:
        return []

    graph = ComponentGraph(diagnosis.down_components, diagnosis.units)
    lines = ["The following service(s) are missing:"]
    for cause in causes:
        component = graph.find_by_name(cause.name)
        if component is None:
            lines.append(f" * {cause.name} is not found in the service registry")
            continue
        lines.append(f" * {cause.name} and needs:")
        lines.extend(
            f"    {dep.name}"
            for dep in component.dependencies
            if dep.state is DependencyState.UNAVAILABLE_REQUIRED
        )
        lines.append("   to work")
    return lines


def _missing_other(diagnosis: Diagnosis) -> list[str]:
    causes = [c for c in diagnosis.root_causes if c.kind not in (SERVICE, CONFIGURATION)]
    if not causes:
        return []
    lines = ["The following other dependencies are missing:"]
    lines.extend(f" * {c.name} ({c.kind}) is not found in the registry" for c in causes)
    return lines
