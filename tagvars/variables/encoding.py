"""Percent-encoding of expanded values."""

import json
from typing import Any
from urllib.parse import quote

from tagvars.variables.parser import NAME_ARGS_PATTERN

# Characters encodeURIComponent leaves alone besides letters and digits.
UNRESERVED = "-_.!~*'()"


def encode_component(value: str) -> str:
    """Percent-encode a string the way encodeURIComponent does."""
    return quote(value, safe=UNRESERVED)


def stringify(value: Any) -> str:
    """Render a value as text for string contexts.

    Booleans render as `true`/`false`, sequences comma-joined, mappings as
    compact JSON and None as "".
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def encode_vars(raw: Any) -> str:
    """URL-encode a resolved value.

    Arrays encode element-wise and join with ",". Scalars keep a trailing
    `(args)` suffix verbatim so macro-call values such as
    `QUERY_PARAM(foo,bar)` survive encoding. Text with any other shape is
    encoded whole.
    """
    if not raw:
        return ""
    if isinstance(raw, (list, tuple)):
        return ",".join(encode_component(stringify(item)) for item in raw)

    text = stringify(raw)
    match = NAME_ARGS_PATTERN.fullmatch(text)
    if match is None:
        return encode_component(text)
    return encode_component(match.group(1)) + (match.group(2) or "")
