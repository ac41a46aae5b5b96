"""Configuration model exports.

    from tagvars.config.models import ExpansionConfig, DigestConfig
"""

from tagvars.config.models.expansion import DigestConfig, ExpansionConfig
from tagvars.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)

__all__ = [
    # Expansion
    "DigestConfig",
    "ExpansionConfig",
    # Observability
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
]
