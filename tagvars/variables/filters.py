"""Filter registry, built-in filters and the filter pipeline.

Every registered handler has the same shape: called with the current
value followed by the literal arguments from the template, it returns an
awaitable of the next value. Synchronous functions are adapted to that
shape by `register_sync`.
"""

import base64
import inspect
import json
import math
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol

from tagvars.exceptions import DigestUnavailableError, FilterArgumentError, PlaceholderSyntaxError
from tagvars.observability.diagnostics import Diagnostics
from tagvars.observability.metrics import FILTER_INVOCATIONS
from tagvars.variables.digest import DigestProvider
from tagvars.variables.encoding import stringify
from tagvars.variables.parser import parse_filter_segment


class FilterHandler(Protocol):
    """Asynchronous filter: (value, *literal_args) -> awaitable value."""

    def __call__(self, value: Any, /, *args: str) -> Awaitable[Any]: ...


class SyncFilterHandler(Protocol):
    """Synchronous filter: (value, *literal_args) -> value."""

    def __call__(self, value: Any, /, *args: str) -> Any: ...


@dataclass(frozen=True)
class RegisteredFilter:
    """A filter name bound to its asynchronous handler."""

    name: str
    handler: FilterHandler
    synchronous: bool = False


def _require_string(value: Any, filter_name: str) -> str:
    if not isinstance(value, str):
        raise FilterArgumentError(f"Filter {filter_name} expects a string, got {type(value).__name__}")
    return value


def _to_integer(arg: Any, label: str) -> int:
    try:
        number = float(arg)
    except (TypeError, ValueError):
        number = math.nan
    if not math.isfinite(number):
        raise FilterArgumentError(f"{label} {arg!r} in substr filter should be a number")
    return int(number)


def default_filter(value: Any, default_value: str = "", *_: str) -> Any:
    return value or default_value or ""


def substr_filter(value: Any, start: str | None = None, length: str | None = None, *_: str) -> str:
    """Slice `length` characters from `start`; a negative start counts from the end."""
    text = _require_string(value, "substr")
    begin = _to_integer(start, "Start index")
    if begin < 0:
        begin = max(len(text) + begin, 0)
    if length is None:
        return text[begin:]
    count = _to_integer(length, "Length")
    if count <= 0:
        return ""
    return text[begin : begin + count]


def trim_filter(value: Any, *_: str) -> str:
    return _require_string(value, "trim").strip()


def json_filter(value: Any, *_: str) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def lower_filter(value: Any, *_: str) -> str:
    return _require_string(value, "toLowerCase").lower()


def upper_filter(value: Any, *_: str) -> str:
    return _require_string(value, "toUpperCase").upper()


def not_filter(value: Any, *_: str) -> str:
    return "false" if value else "true"


def base64_filter(value: Any, *_: str) -> str:
    return base64.b64encode(stringify(value).encode("utf-8")).decode("ascii")


async def if_filter(value: Any, then_value: str = "", else_value: str = "", *_: str) -> str:
    return then_value if value else else_value


class FilterRegistry:
    """Maps filter names to handlers and threads values through filter chains.

    Built-in filters are registered at construction; a name can be
    registered only once.
    """

    def __init__(
        self,
        diagnostics: Diagnostics,
        digest: DigestProvider | None = None,
        record_metrics: bool = True,
    ) -> None:
        self._diagnostics = diagnostics
        self._digest = digest
        self._record_metrics = record_metrics
        self._filters: dict[str, RegisteredFilter] = {}

        self.register_sync("default", default_filter)
        self.register_sync("substr", substr_filter)
        self.register_sync("trim", trim_filter)
        self.register_sync("json", json_filter)
        self.register_sync("toLowerCase", lower_filter)
        self.register_sync("toUpperCase", upper_filter)
        self.register_sync("not", not_filter)
        self.register_sync("base64", base64_filter)
        self.register("hash", self._hash_filter)
        self.register("if", if_filter)

    @property
    def names(self) -> list[str]:
        return list(self._filters)

    def attach_digest(self, digest: DigestProvider) -> None:
        """Make a digest facility available to the hash filter."""
        self._digest = digest

    def register(self, name: str, handler: FilterHandler) -> None:
        """Register an asynchronous filter.

        Raises:
            ConfigurationError: If name is taken or handler is not callable
        """
        self._add(name, handler, synchronous=False)

    def register_sync(self, name: str, handler: SyncFilterHandler) -> None:
        """Register a value-returning filter, adapted to the async shape."""
        self._diagnostics.dev_assert(
            handler is not None and callable(handler), "invalid_filter_handler", filter=name
        )

        async def adapter(value: Any, *args: str) -> Any:
            if inspect.isawaitable(value):
                value = await value
            return handler(value, *args)

        self._add(name, adapter, synchronous=True)

    def _add(self, name: str, handler: FilterHandler, synchronous: bool) -> None:
        self._diagnostics.dev_assert(name not in self._filters, "filter_already_registered", filter=name)
        self._diagnostics.dev_assert(
            handler is not None and callable(handler), "invalid_filter_handler", filter=name
        )
        self._filters[name] = RegisteredFilter(name=name, handler=handler, synchronous=synchronous)

    def get(self, name: str) -> RegisteredFilter | None:
        return self._filters.get(name)

    async def apply_filters(self, value: Any, segments: Iterable[str]) -> Any:
        """Thread value through the filter segments left to right.

        A segment that does not parse, names an unknown filter or fails is
        reported and skipped; the value it received carries on.
        """
        for segment in segments:
            try:
                invocation = parse_filter_segment(segment)
            except PlaceholderSyntaxError as exc:
                self._diagnostics.user_error("invalid_filter", segment=segment, error=exc.message)
                continue

            registered = self._filters.get(invocation.name)
            if registered is None:
                self._diagnostics.user_error("invalid_filter_name", filter=invocation.name)
                continue

            try:
                value = await registered.handler(value, *invocation.args)
            except Exception as exc:  # noqa: BLE001
                self._count(invocation.name, "error")
                self._diagnostics.user_error("filter_failed", filter=invocation.name, error=str(exc))
                continue
            self._count(invocation.name, "ok")

        return value

    def _count(self, name: str, status: str) -> None:
        if self._record_metrics:
            FILTER_INVOCATIONS.labels(filter=name, status=status).inc()

    async def _hash_filter(self, value: Any, *_: str) -> str:
        """Digest a string value.

        Resolves to "" whenever hashing is not possible, so the value it was
        meant to hide never reaches the output.
        """
        if self._digest is None:
            self._diagnostics.user_error("digest_unavailable", filter="hash")
            return ""
        if not isinstance(value, str):
            self._diagnostics.user_error(
                "filter_failed",
                filter="hash",
                error=f"Filter hash expects a string, got {type(value).__name__}",
            )
            return ""
        try:
            return await self._digest.digest(value)
        except DigestUnavailableError as exc:
            self._diagnostics.user_error("digest_unavailable", filter="hash", error=exc.message)
            return ""
        except Exception as exc:  # noqa: BLE001
            self._diagnostics.user_error("filter_failed", filter="hash", error=str(exc))
            return ""
