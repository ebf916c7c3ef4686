"""Data models for component snapshots and diagnosis results."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

# Dependency kinds are open-ended; these two drive root-cause classification.
SERVICE = "service"
CONFIGURATION = "configuration"


class ComponentState(enum.Enum):
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"


class DependencyState(enum.Enum):
    UNAVAILABLE_OPTIONAL = "unavailable optional"
    AVAILABLE_OPTIONAL = "available optional"
    UNAVAILABLE_REQUIRED = "unavailable required"
    AVAILABLE_REQUIRED = "available required"

    @property
    def is_available(self) -> bool:
        return self in (DependencyState.AVAILABLE_OPTIONAL, DependencyState.AVAILABLE_REQUIRED)

    @property
    def is_required(self) -> bool:
        return self in (DependencyState.AVAILABLE_REQUIRED, DependencyState.UNAVAILABLE_REQUIRED)


class UnitState(enum.Enum):
    INSTALLED = "installed"
    RESOLVED = "resolved"
    STARTING = "starting"
    STOPPING = "stopping"
    ACTIVE = "active"
    UNINSTALLED = "uninstalled"


@dataclass(frozen=True)
class Unit:
    """Deployable grouping a component belongs to (a bundle)."""
    id: int
    symbolic_name: str
    state: UnitState = UnitState.ACTIVE
    fragment: bool = False


@dataclass(frozen=True)
class Dependency:
    name: str
    kind: str
    state: DependencyState


@dataclass(frozen=True)
class Component:
    """A component as captured in a snapshot.

    ``name`` is the declaration name, possibly a comma separated list of
    provided names followed by a parenthesised property list, e.g.
    ``"com.acme.Store,com.acme.Cache(region=eu)"``.
    """
    id: int
    name: str
    unit: Unit
    state: ComponentState
    implementation: str = ""
    services: tuple[str, ...] = ()
    properties: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)
    dependencies: tuple[Dependency, ...] = ()
    state_label: str | None = None  # richer framework state, display only

    @property
    def is_registered(self) -> bool:
        return self.state is ComponentState.REGISTERED

    @property
    def display_state(self) -> str:
        return self.state_label or self.state.value


@dataclass(frozen=True)
class RootCause:
    """An unmet dependency that explains why components are down."""
    name: str
    kind: str
    unit_name: str | None = None

    @property
    def sort_key(self) -> tuple[str, str, str]:
        return (self.name, self.kind, self.unit_name or "")


@dataclass(frozen=True)
class DependencyCycle:
    path: tuple[str, ...]
    closing_name: str

    def describe(self) -> str:
        return " * " + " -> ".join(self.path + (self.closing_name,))


@dataclass
class Diagnosis:
    """Result of a root-cause run over one snapshot."""
    down_components: list[Component] = field(default_factory=list)
    root_causes: list[RootCause] = field(default_factory=list)
    cycles: list[DependencyCycle] = field(default_factory=list)
    units: list[Unit] = field(default_factory=list)

    def causes_of_kind(self, kind: str) -> list[RootCause]:
        return [cause for cause in self.root_causes if cause.kind == kind]


@dataclass
class ReportOptions:
    """Configuration for the component listing."""
    compact: bool = False
    hide_deps: bool = False
    not_available_only: bool = False
    stats: bool = False
    id_filter: set[int] = field(default_factory=set)
    service_filter: str | None = None
    name_patterns: list[str] = field(default_factory=list)
    unit_filter: list[str] = field(default_factory=list)
