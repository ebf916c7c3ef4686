"""JSON snapshot files: the host's hand-over format for a registry view."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from dm_inspect.errors import SnapshotError
from dm_inspect.models import (
    Component,
    ComponentState,
    Dependency,
    DependencyState,
    SERVICE,
    Unit,
    UnitState,
)
from dm_inspect.registry.base import StaticRegistry

logger = logging.getLogger(__name__)


class UnitModel(BaseModel):
    id: int
    symbolic_name: str
    state: UnitState = UnitState.ACTIVE
    fragment: bool = False


class DependencyModel(BaseModel):
    name: str
    kind: str = SERVICE
    state: DependencyState


class ComponentModel(BaseModel):
    id: int
    name: str
    unit: int
    state: ComponentState
    state_label: str | None = None
    implementation: str = ""
    services: list[str] = Field(default_factory=list)
    properties: dict[str, Any] = Field(default_factory=dict)
    dependencies: list[DependencyModel] = Field(default_factory=list)


class SnapshotModel(BaseModel):
    units: list[UnitModel] = Field(default_factory=list)
    components: list[ComponentModel] = Field(default_factory=list)


def parse_snapshot(data: dict[str, Any]) -> StaticRegistry:
    """Validate a decoded snapshot document and build a registry from it."""
    try:
        snapshot = SnapshotModel.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot: {e}") from e

    units: dict[int, Unit] = {}
    for u in snapshot.units:
        if u.id in units:
            raise SnapshotError(f"Duplicate unit id {u.id} ({u.symbolic_name})")
        units[u.id] = Unit(id=u.id, symbolic_name=u.symbolic_name, state=u.state, fragment=u.fragment)

    components: list[Component] = []
    for c in snapshot.components:
        unit = units.get(c.unit)
        if unit is None:
            raise SnapshotError(f"Component {c.id} ({c.name}) refers to unknown unit {c.unit}")
        components.append(Component(
            id=c.id,
            name=c.name,
            unit=unit,
            state=c.state,
            implementation=c.implementation,
            services=tuple(c.services),
            properties=dict(c.properties),
            dependencies=tuple(
                Dependency(name=d.name, kind=d.kind, state=d.state)
                for d in c.dependencies
            ),
            state_label=c.state_label,
        ))

    return StaticRegistry(components, list(units.values()))


def load_snapshot(path: Path) -> StaticRegistry:
    """Read a snapshot file written by the host (or by :func:`dump_snapshot`)."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e

    registry = parse_snapshot(data)
    logger.info(
        "Loaded snapshot %s: %d unit(s), %d component(s)",
        path, len(registry.list_units()), len(registry.list_components()),
    )
    return registry


def dump_snapshot(units: list[Unit], components: list[Component], path: Path) -> Path:
    """Write units and components in the snapshot file format."""
    snapshot = SnapshotModel(
        units=[
            UnitModel(id=u.id, symbolic_name=u.symbolic_name, state=u.state, fragment=u.fragment)
            for u in units
        ],
        components=[
            ComponentModel(
                id=c.id,
                name=c.name,
                unit=c.unit.id,
                state=c.state,
                state_label=c.state_label,
                implementation=c.implementation,
                services=list(c.services),
                properties=dict(c.properties),
                dependencies=[
                    DependencyModel(name=d.name, kind=d.kind, state=d.state)
                    for d in c.dependencies
                ],
            )
            for c in components
        ],
    )
    path = Path(path)
    path.write_text(snapshot.model_dump_json(indent=2) + "\n", encoding="utf-8")
    return path
