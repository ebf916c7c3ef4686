"""Component listing, in verbose or compact form."""

from __future__ import annotations

from typing import Sequence

from dm_inspect.models import Component, Dependency, ReportOptions
from dm_inspect.names import compact_name, compact_state


def render_component_list(components: Sequence[Component], options: ReportOptions) -> list[str]:
    """Render components grouped under a header for each run of the same unit."""
    lines: list[str] = []
    last_unit_id: int | None = None

    for component in components:
        if component.unit.id != last_unit_id:
            last_unit_id = component.unit.id
            unit_name = component.unit.symbolic_name
            if options.compact:
                unit_name = compact_name(unit_name)
            lines.append(f"[{component.unit.id}] {unit_name}")

        if options.compact:
            lines.append(_compact_component_line(component, options))
        else:
            lines.append(f" [{component.id}] {component.name} {component.display_state}")
            if not options.hide_deps:
                for dep in _shown_dependencies(component, options):
                    lines.append(f"    {dep.name} {dep.kind} {dep.state.value}")

    return lines


def _compact_component_line(component: Component, options: ReportOptions) -> str:
    line = (
        f" [{component.id}] {compact_name(component.name)} "
        f"{compact_state(component.display_state)}"
    )
    if options.hide_deps or not component.dependencies:
        return line
    deps = " ".join(
        f"{compact_name(dep.name)} {compact_state(dep.kind)} {compact_state(dep.state.value)}"
        for dep in _shown_dependencies(component, options)
    )
    return f"{line}({deps})"


def _shown_dependencies(component: Component, options: ReportOptions) -> list[Dependency]:
    if options.not_available_only:
        return [dep for dep in component.dependencies if not dep.state.is_available]
    return list(component.dependencies)


def render_statistics(
    unit_count: int,
    components: Sequence[Component],
    include_dependencies: bool = True,
) -> list[str]:
    lines = [
        "Statistics:",
        f" - Units: {unit_count}",
        f" - Components: {len(components)}",
    ]
    if include_dependencies:
        total = sum(len(c.dependencies) for c in components)
        lines.append(f" - Dependencies: {total}")
    return lines
