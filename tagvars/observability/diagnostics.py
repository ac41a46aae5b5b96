"""Diagnostics channels used by the expansion engine.

Two severities:
- dev_assert: configuration mistakes a developer must fix. Logs at
  critical and raises ConfigurationError.
- user_error: problems in operator-authored templates. Logged and
  counted, never raised.
"""

from typing import Any

from tagvars.exceptions import ConfigurationError
from tagvars.observability.logging import get_logger
from tagvars.observability.metrics import DIAGNOSTICS

TAG = "Analytics.Variables"


class Diagnostics:
    """Reports configuration and usage problems for one engine instance."""

    def __init__(self, name: str = "tagvars.variables", record_metrics: bool = True) -> None:
        self._logger = get_logger(name)
        self._record_metrics = record_metrics

    def dev_assert(self, condition: Any, event: str, **context: Any) -> None:
        """Raise ConfigurationError if condition is falsy."""
        if condition:
            return
        self._logger.critical(event, tag=TAG, **context)
        raise ConfigurationError(_describe(event, context))

    def user_error(self, event: str, **context: Any) -> None:
        if self._record_metrics:
            DIAGNOSTICS.labels(event=event).inc()
        self._logger.error(event, tag=TAG, **context)

    def debug(self, event: str, **context: Any) -> None:
        self._logger.debug(event, tag=TAG, **context)


def _describe(event: str, context: dict[str, Any]) -> str:
    if not context:
        return event
    details = ", ".join(f"{key}={value!r}" for key, value in context.items())
    return f"{event}: {details}"
