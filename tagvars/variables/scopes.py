"""Scope precedence for variable lookups."""

from collections.abc import Mapping
from typing import Any

VARS_KEY = "vars"

Scope = Mapping[str, Any]


def lookup(scope: Scope | None, name: str) -> Any:
    """Return `scope["vars"][name]`, or None when any level is missing."""
    if not scope:
        return None
    variables = scope.get(VARS_KEY)
    if not variables:
        return None
    return variables.get(name)


def resolve_raw(
    name: str,
    event: Scope | None,
    trigger: Scope | None,
    config: Scope | None,
) -> Any:
    """Resolve a variable's raw value.

    Precedence is event > trigger > config. A falsy entry ("", 0, False)
    counts as absent and the lookup falls through to the next scope.
    Returns "" when no scope has a truthy value.
    """
    return lookup(event, name) or lookup(trigger, name) or lookup(config, name) or ""
