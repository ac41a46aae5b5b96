"""Exception hierarchy for variable expansion.

Configuration errors are fatal and surface at construction time.
Everything else is a usage error that the expander reports and contains
to the placeholder or filter that caused it.
"""


class TagVarsError(Exception):
    """Base exception for all tagvars errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(TagVarsError):
    """Raised when the filter registry would become inconsistent."""


class PlaceholderSyntaxError(TagVarsError):
    """Raised when a placeholder or filter segment cannot be parsed."""


class FilterArgumentError(TagVarsError):
    """Raised when a filter receives a value or argument of the wrong kind."""


class DigestUnavailableError(TagVarsError):
    """Raised when the digest facility is not ready."""
