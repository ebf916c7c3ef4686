"""Component selection for listings: ids, service properties and class-name regexes."""

from __future__ import annotations

import fnmatch
import re
from typing import Any, Callable, Iterable, Mapping

from dm_inspect.errors import InvalidFilterError
from dm_inspect.models import Component, Unit

OBJECT_CLASS = "objectClass"

ServicePredicate = Callable[[Mapping[str, Any]], bool]


def service_properties(component: Component) -> dict[str, Any]:
    """Service properties with ``objectClass`` filled from the provided services."""
    props = dict(component.properties)
    if props.get(OBJECT_CLASS) is None:
        props[OBJECT_CLASS] = list(component.services)
    return props


class Matcher:
    """Decides whether a component shows up in a listing.

    Patterns are compiled once; an invalid regex raises
    :class:`InvalidFilterError` at construction time.
    """

    def __init__(
        self,
        id_filter: Iterable[int] | None = None,
        service_predicate: ServicePredicate | None = None,
        name_patterns: Iterable[str] | None = None,
    ):
        self.id_filter = frozenset(id_filter or ())
        self.service_predicate = service_predicate
        self._patterns: list[tuple[re.Pattern[str], bool]] = []
        for raw in name_patterns or ():
            negate = raw.startswith("!")
            expr = raw[1:] if negate else raw
            try:
                self._patterns.append((re.compile(expr), negate))
            except re.error as e:
                raise InvalidFilterError(f"Invalid component regex {raw!r}: {e}") from e

    def may_display(self, component: Component) -> bool:
        if self.id_filter and component.id not in self.id_filter:
            return False

        if self.service_predicate is None and not self._patterns:
            return True

        return self._services_match(component) or self._implementation_matches(component)

    def _services_match(self, component: Component) -> bool:
        if self.service_predicate is None or not component.services:
            return False
        return bool(self.service_predicate(service_properties(component)))

    def _implementation_matches(self, component: Component) -> bool:
        for pattern, negate in self._patterns:
            match = pattern.fullmatch(component.implementation) is not None
            if negate:
                match = not match
            if match:
                return True
        return False


def may_display(
    component: Component,
    id_filter: Iterable[int] | None = None,
    service_predicate: ServicePredicate | None = None,
    name_patterns: Iterable[str] | None = None,
) -> bool:
    """One-shot form of :meth:`Matcher.may_display`."""
    return Matcher(id_filter, service_predicate, name_patterns).may_display(component)


def parse_service_filter(text: str | None) -> ServicePredicate | None:
    """Build a predicate from ``key=glob`` terms, all of which must match.

    Terms are whitespace separated and may be wrapped in parentheses:
    ``"(objectClass=*.Store) (region=eu)"``. Keys are case-insensitive and a
    list-valued property matches if any element does.
    """
    if text is None or not text.strip():
        return None

    terms: list[tuple[str, str]] = []
    for raw in text.split():
        term = raw
        if term.startswith("(") and term.endswith(")"):
            term = term[1:-1]
        key, sep, pattern = term.partition("=")
        if not sep or not key.strip() or "(" in term or ")" in term:
            raise InvalidFilterError(f"Invalid services filter term {raw!r} in {text!r}")
        terms.append((key.strip().lower(), pattern))

    def predicate(properties: Mapping[str, Any]) -> bool:
        lowered = {str(k).lower(): v for k, v in properties.items()}
        return all(_value_matches(lowered.get(key), pattern) for key, pattern in terms)

    return predicate


def _value_matches(value: Any, pattern: str) -> bool:
    if value is None:
        return False
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(fnmatch.fnmatchcase(str(v), pattern) for v in value)
    return fnmatch.fnmatchcase(str(value), pattern)


def parse_id_filter(text: str | None) -> set[int]:
    """Parse a comma/space separated list of component ids."""
    ids: set[int] = set()
    for token in re.split(r"[,\s]+", text or ""):
        if not token:
            continue
        try:
            ids.add(int(token))
        except ValueError:
            raise InvalidFilterError(f"Invalid value for component ids: {token!r}") from None
    return ids


def split_list(text: str | None) -> list[str]:
    """Split a comma/space separated option value."""
    return [token for token in re.split(r"[,\s]+", text or "") if token]


def split_patterns(text: str | None) -> list[str]:
    """Split regexes separated by whitespace or ", ", keeping commas inside a regex."""
    return [token for token in re.split(r",?\s+", (text or "").strip()) if token]


def match_unit(unit: Unit, unit_filter: Iterable[str]) -> bool:
    """Numeric entries match the unit id, anything else the symbolic name."""
    entries = list(unit_filter)
    if not entries:
        return True
    for entry in entries:
        try:
            if int(entry) == unit.id:
                return True
        except ValueError:
            if entry == unit.symbolic_name:
                return True
    return False
