"""Qualified component names: parsing, matching and compact forms.

A qualified name is one or more comma separated names optionally followed by a
parenthesised property list::

    com.acme.Store(region=eu,tier=gold)
    com.acme.Store,com.acme.Cache

Parsing never raises. A name with unbalanced parentheses, or with anything
after the property list, is treated as a plain name with no properties.
Property entries that are not ``key=value`` are skipped.
"""

from __future__ import annotations

from functools import lru_cache


@lru_cache(maxsize=4096)
def split_qualified_name(name: str) -> tuple[str, dict[str, str]]:
    """Split ``name`` into its simple name and its property set.

    Results are cached; callers must not mutate the returned dict.
    """
    open_idx = name.find("(")
    if open_idx == -1:
        return name.strip(), {}

    close_idx = name.find(")", open_idx + 1)
    if (
        close_idx == -1
        or "(" in name[open_idx + 1:close_idx]
        or ")" in name[:open_idx]
        or name[close_idx + 1:].strip()
    ):
        return name.strip(), {}

    return name[:open_idx].strip(), parse_properties(name[open_idx + 1:close_idx])


def parse_properties(text: str) -> dict[str, str]:
    """Parse a ``k1=v1,k2=v2`` list, dropping malformed entries."""
    props: dict[str, str] = {}
    for entry in text.split(","):
        parts = entry.split("=")
        if len(parts) != 2:
            continue
        key, value = parts[0].strip(), parts[1].strip()
        if key:
            props[key] = value
    return props


def simple_name(name: str) -> str:
    return split_qualified_name(name)[0]


def provided_names(name: str) -> list[str]:
    """Names a component declaration answers to (the comma separated part)."""
    return [part.strip() for part in simple_name(name).split(",") if part.strip()]


def properties_match(needed: dict[str, str], provided: dict[str, str]) -> bool:
    """True if every needed property is provided with an equal value."""
    return all(
        key in provided and provided[key] == value
        for key, value in needed.items()
    )


def name_matches(query: str, candidate: str) -> bool:
    """Check whether a dependency name ``query`` designates ``candidate``."""
    wanted, wanted_props = split_qualified_name(query)
    if wanted not in provided_names(candidate):
        return False
    return properties_match(wanted_props, split_qualified_name(candidate)[1])


def compact_state(state: str) -> str:
    """Shorten a state string to the uppercased first letter of each word.

    ``"unavailable required"`` becomes ``"UR"``.
    """
    return "".join(word[0].upper() for word in state.split())


def compact_name(name: str) -> str:
    """Shorten every dotted segment but the last to its first character.

    ``"org.apache.felix.MyClass"`` becomes ``"o.a.f.MyClass"``. Commas and
    spaces separate independent names and are kept as-is.
    """
    out: list[str] = []
    last = 0
    for i, ch in enumerate(name):
        if ch == ".":
            if last < i:
                out.append(name[last])
            out.append(".")
            last = i + 1
        elif ch in (" ", ","):
            if last < i:
                out.append(name[last:i])
            out.append(ch)
            last = i + 1
    if last < len(name):
        out.append(name[last:])
    return "".join(out)
