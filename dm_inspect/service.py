"""Entry points used by the CLI and the web view: list and diagnose."""

from __future__ import annotations

import logging

from dm_inspect.analysis.root_cause import compute_root_causes
from dm_inspect.graph import ComponentGraph
from dm_inspect.matcher import Matcher, match_unit, parse_service_filter
from dm_inspect.models import Component, Diagnosis, ReportOptions
from dm_inspect.registry.base import RegistryProvider
from dm_inspect.reporter import render_component_list, render_diagnosis, render_statistics

logger = logging.getLogger(__name__)


def select_components(graph: ComponentGraph, options: ReportOptions) -> list[Component]:
    """Components of ``graph`` passing every listing filter in ``options``.

    Raises:
        InvalidFilterError: If the service filter or a name pattern is invalid.
    """
    matcher = Matcher(
        id_filter=options.id_filter,
        service_predicate=parse_service_filter(options.service_filter),
        name_patterns=options.name_patterns,
    )
    selected = [
        c for c in graph.all_components()
        if matcher.may_display(c)
        and match_unit(c.unit, options.unit_filter)
        and not (options.not_available_only and c.is_registered)
    ]
    logger.debug("Selected %d of %d component(s)", len(selected), len(graph))
    return selected


def list_and_filter(provider: RegistryProvider, options: ReportOptions) -> list[str]:
    """Listing mode: filtered components, their dependencies and optional statistics."""
    graph = ComponentGraph.from_registry(provider)
    components = select_components(graph, options)

    lines = render_component_list(components, options)
    if options.stats:
        lines.extend(render_statistics(
            len(graph.units()), components, include_dependencies=not options.hide_deps,
        ))
    return lines


def run_diagnosis(provider: RegistryProvider) -> Diagnosis:
    return compute_root_causes(ComponentGraph.from_registry(provider))


def diagnose(provider: RegistryProvider) -> list[str]:
    """Root-cause mode over the whole snapshot."""
    return render_diagnosis(run_diagnosis(provider))
