"""FastAPI routes for the read-only snapshot view."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from dm_inspect.errors import InvalidFilterError
from dm_inspect.graph import ComponentGraph
from dm_inspect.matcher import parse_id_filter, split_list, split_patterns
from dm_inspect.models import Component, ReportOptions
from dm_inspect.registry.base import RegistryProvider
from dm_inspect.reporter import render_component_list, render_diagnosis
from dm_inspect.service import run_diagnosis, select_components

router = APIRouter(prefix="/api")


# --- Response models ---

class DependencyOut(BaseModel):
    name: str
    kind: str
    state: str


class ComponentOut(BaseModel):
    id: int
    name: str
    unit_id: int
    unit: str
    state: str
    implementation: str
    services: list[str]
    dependencies: list[DependencyOut]


class RootCauseOut(BaseModel):
    name: str
    kind: str
    unit: str | None


class DiagnosisOut(BaseModel):
    down_components: int
    root_causes: list[RootCauseOut]
    cycles: list[list[str]]
    lines: list[str]


# --- Helpers ---

def _registry(request: Request) -> RegistryProvider:
    return request.app.state.registry


def _options(
    compact: bool,
    nodeps: bool,
    notavail: bool,
    services: str | None,
    components: str | None,
    component_ids: str | None,
    bundle_ids: str | None,
) -> ReportOptions:
    try:
        return ReportOptions(
            compact=compact,
            hide_deps=nodeps,
            not_available_only=notavail,
            id_filter=parse_id_filter(component_ids),
            service_filter=services,
            name_patterns=split_patterns(components),
            unit_filter=split_list(bundle_ids),
        )
    except InvalidFilterError as e:
        raise HTTPException(400, str(e))


def _select(request: Request, options: ReportOptions) -> list[Component]:
    graph = ComponentGraph.from_registry(_registry(request))
    try:
        return select_components(graph, options)
    except InvalidFilterError as e:
        raise HTTPException(400, str(e))


def _component_out(component: Component, notavail: bool) -> ComponentOut:
    deps = [
        d for d in component.dependencies
        if not (notavail and d.state.is_available)
    ]
    return ComponentOut(
        id=component.id,
        name=component.name,
        unit_id=component.unit.id,
        unit=component.unit.symbolic_name,
        state=component.display_state,
        implementation=component.implementation,
        services=list(component.services),
        dependencies=[
            DependencyOut(name=d.name, kind=d.kind, state=d.state.value) for d in deps
        ],
    )


# --- Endpoints ---

@router.get("/components")
def list_components(
    request: Request,
    notavail: bool = False,
    services: str | None = None,
    components: str | None = None,
    component_ids: str | None = Query(None, alias="cid"),
    bundle_ids: str | None = Query(None, alias="bid"),
):
    options = _options(False, False, notavail, services, components, component_ids, bundle_ids)
    selected = _select(request, options)
    return {
        "count": len(selected),
        "components": [_component_out(c, notavail) for c in selected],
    }


@router.get("/components/text")
def list_components_text(
    request: Request,
    compact: bool = False,
    nodeps: bool = False,
    notavail: bool = False,
    services: str | None = None,
    components: str | None = None,
    component_ids: str | None = Query(None, alias="cid"),
    bundle_ids: str | None = Query(None, alias="bid"),
):
    options = _options(compact, nodeps, notavail, services, components, component_ids, bundle_ids)
    return {"lines": render_component_list(_select(request, options), options)}


@router.get("/diagnosis", response_model=DiagnosisOut)
def get_diagnosis(request: Request):
    diagnosis = run_diagnosis(_registry(request))
    return DiagnosisOut(
        down_components=len(diagnosis.down_components),
        root_causes=[
            RootCauseOut(name=c.name, kind=c.kind, unit=c.unit_name)
            for c in diagnosis.root_causes
        ],
        cycles=[list(cycle.path) + [cycle.closing_name] for cycle in diagnosis.cycles],
        lines=render_diagnosis(diagnosis),
    )
