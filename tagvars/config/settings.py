"""Root settings model for tagvars configuration."""

from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from tagvars.config.models.expansion import DigestConfig, ExpansionConfig
from tagvars.config.models.observability import ObservabilityConfig

# TOML values handed to the custom settings source
_toml_config: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Set the TOML configuration to be used by Settings."""
    global _toml_config
    _toml_config = config


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source that reads from the loaded TOML configuration."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return _toml_config.copy()


class Settings(BaseSettings):
    """Root configuration object.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{TAGVARS_ENV}.toml (environment overrides)
    4. TAGVARS_* environment variables (runtime overrides)
    """

    model_config = SettingsConfigDict(
        env_prefix="TAGVARS_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="tagvars", description="Application name for logging")
    debug: bool = Field(default=False, description="Enable debug mode")

    expansion: ExpansionConfig = Field(
        default_factory=ExpansionConfig,
        description="Template expansion defaults",
    )
    digest: DigestConfig = Field(
        default_factory=DigestConfig,
        description="Digest facility for the hash filter",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority order (highest to lowest): init, TAGVARS_* env, TOML, defaults."""
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
