"""Tests for the diagnostics channels."""

import pytest
from prometheus_client import REGISTRY
from structlog.testing import capture_logs

from tagvars.exceptions import ConfigurationError
from tagvars.observability.diagnostics import TAG, Diagnostics


class TestDevAssert:
    """Tests for the developer-facing assertion channel."""

    def test_truthy_condition_passes(self) -> None:
        Diagnostics().dev_assert(True, "never_logged")

    def test_falsy_condition_raises(self) -> None:
        with capture_logs() as logs, pytest.raises(ConfigurationError, match="filter_already_registered"):
            Diagnostics().dev_assert(False, "filter_already_registered", filter="trim")

        assert logs[0]["event"] == "filter_already_registered"
        assert logs[0]["log_level"] == "critical"
        assert logs[0]["filter"] == "trim"

    def test_message_includes_context(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            Diagnostics().dev_assert(None, "invalid_filter_handler", filter="custom")

        assert exc_info.value.message == "invalid_filter_handler: filter='custom'"


class TestUserError:
    """Tests for the user-facing error channel."""

    def test_logs_and_counts(self) -> None:
        labels = {"event": "diagnostics_test_error"}
        before = REGISTRY.get_sample_value("tagvars_diagnostics_total", labels) or 0.0

        with capture_logs() as logs:
            Diagnostics().user_error("diagnostics_test_error", placeholder="${x}")

        assert logs == [
            {
                "event": "diagnostics_test_error",
                "log_level": "error",
                "tag": TAG,
                "placeholder": "${x}",
            }
        ]
        assert REGISTRY.get_sample_value("tagvars_diagnostics_total", labels) == before + 1

    def test_metrics_can_be_disabled(self) -> None:
        labels = {"event": "diagnostics_uncounted"}

        with capture_logs():
            Diagnostics(record_metrics=False).user_error("diagnostics_uncounted")

        assert REGISTRY.get_sample_value("tagvars_diagnostics_total", labels) is None
