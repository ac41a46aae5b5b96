"""VariableService factory.

The host application builds one VariableService from settings and passes
it to every call site that expands templates.
"""

from tagvars.config import get_settings
from tagvars.config.settings import Settings
from tagvars.observability.logging import get_logger
from tagvars.variables.digest import HashlibDigestProvider
from tagvars.variables.service import VariableService

logger = get_logger(__name__)


def create_variable_service(settings: Settings | None = None) -> VariableService:
    """Create a VariableService configured from settings.

    Args:
        settings: Settings to use. Loaded with get_settings() when omitted.

    Returns:
        Configured VariableService
    """
    settings = settings or get_settings()

    digest = None
    if settings.digest.enabled:
        digest = HashlibDigestProvider(settings.digest.algorithm)

    logger.info(
        "creating_variable_service",
        max_iterations=settings.expansion.max_iterations,
        encode=settings.expansion.encode,
        digest=settings.digest.algorithm if digest else None,
    )

    return VariableService(
        digest=digest,
        max_iterations=settings.expansion.max_iterations,
        encode=settings.expansion.encode,
        record_metrics=settings.observability.metrics.enabled,
    )
