"""Root settings model for redvec configuration."""

from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from redvec.config.models.observability import LoggingConfig
from redvec.config.models.providers import EmbeddingConfig
from redvec.config.models.storage import IndexConfig, RedisConfig

# TOML config handed to the custom settings source
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
    2. config/default.toml
    3. config/{REDVEC_ENV}.toml
    4. REDVEC_* environment variables, e.g. REDVEC_INDEX__BATCH_SIZE=500
    """

    model_config = SettingsConfigDict(
        env_prefix="REDVEC_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="redvec", description="Application name for logging")
    debug: bool = Field(default=False, description="Enable debug mode")

    redis: RedisConfig = Field(default_factory=RedisConfig, description="Redis connection")
    index: IndexConfig = Field(default_factory=IndexConfig, description="Vector index")
    embedding: EmbeddingConfig = Field(
        default_factory=EmbeddingConfig,
        description="Embedding provider",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority: init args, then REDVEC_* env vars, then TOML, then defaults."""
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
