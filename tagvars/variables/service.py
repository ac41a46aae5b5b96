"""Recursive template expansion.

`${name(args)|filter:arg|...}` placeholders are resolved against the
event, trigger and config scopes. String values are expanded again, up to
a depth budget, before the filter chain and URL encoding run.

Each placeholder is resolved in its own task so slow filters (such as
`hash`) overlap, while substitution into the output always happens in the
order the placeholders appear in the template.
"""

import asyncio
import time
from typing import Any

from tagvars.exceptions import PlaceholderSyntaxError
from tagvars.observability.diagnostics import Diagnostics
from tagvars.observability.metrics import EXPANSION_LATENCY, EXPANSIONS, PLACEHOLDERS_RESOLVED
from tagvars.variables.digest import DigestProvider
from tagvars.variables.encoding import encode_vars, stringify
from tagvars.variables.filters import FilterRegistry
from tagvars.variables.parser import find_placeholders, parse_placeholder
from tagvars.variables.scopes import Scope, resolve_raw

DEFAULT_ITERATIONS = 2


class VariableService:
    """Expands analytics templates.

    One instance is built by the host (see `create_variable_service`) and
    shared by reference. The filter registry is only written during
    construction and by explicit `register` calls at startup, so concurrent
    `expand_template` calls do not interfere.
    """

    def __init__(
        self,
        digest: DigestProvider | None = None,
        max_iterations: int = DEFAULT_ITERATIONS,
        encode: bool = True,
        record_metrics: bool = True,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            digest: Digest facility for the hash filter; may be attached later
            max_iterations: Default nesting budget for expand_template
            encode: Default for percent-encoding substituted values
            record_metrics: Record Prometheus metrics
            diagnostics: Diagnostics channels; a fresh one when omitted
        """
        self._diagnostics = diagnostics or Diagnostics(record_metrics=record_metrics)
        self._filters = FilterRegistry(self._diagnostics, digest, record_metrics)
        self._max_iterations = max_iterations
        self._encode = encode
        self._record_metrics = record_metrics

    @property
    def filters(self) -> FilterRegistry:
        return self._filters

    def attach_digest(self, digest: DigestProvider) -> None:
        self._filters.attach_digest(digest)

    def encode_vars(self, raw: Any) -> str:
        """URL-encode a value; see `tagvars.variables.encoding.encode_vars`."""
        return encode_vars(raw)

    async def expand_template(
        self,
        template: str,
        trigger: Scope | None,
        config: Scope | None,
        event: Scope | None = None,
        iterations: int | None = None,
        encode: bool | None = None,
    ) -> str:
        """Expand every placeholder in template.

        Args:
            template: Text containing `${...}` placeholders
            trigger: Trigger scope, consulted after the event scope
            config: Config scope, consulted last
            event: Event scope, highest precedence
            iterations: Nested re-expansions allowed. Defaults to the
                service's max_iterations.
            encode: Percent-encode substituted values. Defaults to the
                service's setting.

        Returns:
            The expanded string. Problems inside a placeholder are reported
            as diagnostics and never fail the expansion.

        Raises:
            TypeError: If template is not a string
        """
        if not isinstance(template, str):
            raise TypeError("template must be a string")

        iterations = self._max_iterations if iterations is None else iterations
        encode = self._encode if encode is None else encode

        start_time = time.perf_counter()
        result, exhausted = await self._expand(template, trigger, config, event, iterations, encode)

        if self._record_metrics:
            EXPANSION_LATENCY.observe(time.perf_counter() - start_time)
            EXPANSIONS.labels(outcome="depth_exceeded" if exhausted else "ok").inc()
        return result

    async def _expand(
        self,
        template: str,
        trigger: Scope | None,
        config: Scope | None,
        event: Scope | None,
        iterations: int,
        encode: bool,
    ) -> tuple[str, bool]:
        """Expand template, reporting whether the depth budget ran out below it."""
        if iterations < 0:
            self._diagnostics.user_error(
                "max_depth_reached",
                detail="Maximum depth reached while expanding variables. "
                "Please ensure that the variables are not recursive.",
                template=template,
            )
            return template, True

        matches = find_placeholders(template)
        if not matches:
            return template, False

        self._diagnostics.debug("expanding_template", placeholders=len(matches), iterations=iterations)

        pending = [
            asyncio.create_task(
                self._resolve(match.group(0), match.group(1), trigger, config, event, iterations, encode)
            )
            for match in matches
        ]

        # Splice by position, in template order, as each resolution finishes.
        parts: list[str] = []
        cursor = 0
        exhausted = False
        try:
            for match, task in zip(matches, pending):
                value, nested_exhausted = await task
                exhausted = exhausted or nested_exhausted
                parts.append(template[cursor : match.start()])
                parts.append(value)
                cursor = match.end()
        finally:
            for task in pending:
                if not task.done():
                    task.cancel()
        parts.append(template[cursor:])

        return "".join(parts), exhausted

    async def _resolve(
        self,
        match: str,
        body: str,
        trigger: Scope | None,
        config: Scope | None,
        event: Scope | None,
        iterations: int,
        encode: bool,
    ) -> tuple[str, bool]:
        """Resolve, filter and encode a single placeholder."""
        try:
            placeholder = parse_placeholder(match, body)
        except PlaceholderSyntaxError as exc:
            self._diagnostics.user_error("invalid_placeholder", placeholder=match, error=exc.message)
            return "", False

        raw = resolve_raw(placeholder.name, event, trigger, config)

        # Only strings are re-expanded; arrays and objects pass through.
        value: Any
        exhausted = False
        if isinstance(raw, str):
            value, exhausted = await self._expand(raw, trigger, config, event, iterations - 1, encode)
        else:
            value = raw

        value = await self._filters.apply_filters(value, placeholder.filters)

        final = encode_vars(value) if encode else stringify(value)
        if self._record_metrics:
            PLACEHOLDERS_RESOLVED.inc()
        return (final + placeholder.arg_list if final else final), exhausted
