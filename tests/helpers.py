"""Builders shared by the test modules."""

from pathlib import Path

from dm_inspect.models import (
    SERVICE,
    Component,
    ComponentState,
    Dependency,
    DependencyState,
    Unit,
)

FIXTURES = Path(__file__).parent / "fixtures"
REGISTRY_JSON = FIXTURES / "registry.json"

UNIT = Unit(id=3, symbolic_name="org.example.app")

UR = DependencyState.UNAVAILABLE_REQUIRED
UO = DependencyState.UNAVAILABLE_OPTIONAL
AR = DependencyState.AVAILABLE_REQUIRED


def dep(name, state=UR, kind=SERVICE):
    return Dependency(name=name, kind=kind, state=state)


def comp(cid, name, *deps, unit=UNIT, registered=False, implementation=None,
         services=None, properties=None):
    return Component(
        id=cid,
        name=name,
        unit=unit,
        state=ComponentState.REGISTERED if registered else ComponentState.UNREGISTERED,
        implementation=implementation or f"{name}Impl",
        services=tuple(services if services is not None else [name]),
        properties=properties or {},
        dependencies=tuple(deps),
    )
