"""Placeholder parsing.

The grammar is deliberately small: `|` separates filters and `:`
separates a filter's arguments. Neither character can appear inside a
name or an argument; there is no escape syntax.
"""

import re

from tagvars.exceptions import PlaceholderSyntaxError
from tagvars.variables.models import FilterInvocation, Placeholder, VariableReference

PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]*)\}")
NAME_ARGS_PATTERN = re.compile(r"([^(]*)(\([^)]*\))?")

FILTER_SEPARATOR = "|"
ARGUMENT_SEPARATOR = ":"


def parse_variable_reference(key: str) -> VariableReference:
    """Split `NAME(args)` into the name and the verbatim `(args)` suffix.

    Only a suffix that directly follows the name and closes with `)` is
    recognized; a missing suffix yields "".
    """
    if not key:
        return VariableReference(name="")
    match = NAME_ARGS_PATTERN.match(key)
    if match is None:
        raise PlaceholderSyntaxError(f"Variable with invalid format found: {key!r}")
    return VariableReference(name=match.group(1), arg_list=match.group(2) or "")


def parse_filter_segment(segment: str) -> FilterInvocation:
    """Parse `name:arg1:arg2` into a FilterInvocation.

    Raises:
        PlaceholderSyntaxError: If the filter name is empty
    """
    tokens = segment.split(ARGUMENT_SEPARATOR)
    if not tokens[0]:
        raise PlaceholderSyntaxError(f"Filter {segment!r} is invalid.")
    return FilterInvocation(name=tokens[0], args=tuple(tokens[1:]))


def parse_placeholder(match: str, body: str) -> Placeholder:
    """Parse the body of one `${...}` occurrence.

    Raises:
        PlaceholderSyntaxError: If the variable reference is empty
    """
    tokens = body.split(FILTER_SEPARATOR)
    key = tokens[0].strip()
    if not key:
        raise PlaceholderSyntaxError(f"Placeholder {match!r} has no variable name.")
    return Placeholder(
        match=match,
        reference=parse_variable_reference(key),
        filters=tuple(segment.strip() for segment in tokens[1:]),
    )


def find_placeholders(template: str) -> list[re.Match[str]]:
    """Return every non-overlapping `${...}` occurrence in order."""
    return list(PLACEHOLDER_PATTERN.finditer(template))
