"""Bootstrap module for host applications.

Loads configuration, configures logging and builds the VariableService
the host keeps for the lifetime of the process.

Example usage:

    from tagvars.bootstrap import bootstrap

    variables = bootstrap()

    url = await variables.expand_template(
        "https://example.com/pixel?page=${title|trim}",
        trigger={"vars": {"title": " Home "}},
        config={},
    )
"""

from tagvars.config import get_settings
from tagvars.config.settings import Settings
from tagvars.observability.logging import get_logger, setup_logging
from tagvars.variables.factory import create_variable_service
from tagvars.variables.service import VariableService

logger = get_logger(__name__)


def bootstrap(settings: Settings | None = None) -> VariableService:
    """Configure logging from settings and create the VariableService."""
    settings = settings or get_settings()
    setup_logging(
        level=settings.observability.logging.level,
        format=settings.observability.logging.format,
    )
    logger.info("bootstrapping", app_name=settings.app_name, debug=settings.debug)
    return create_variable_service(settings)
