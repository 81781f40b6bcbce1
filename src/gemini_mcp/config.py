"""Application Configuration

Type-safe configuration using Pydantic Settings for environment variable handling.

Patterns Demonstrated:
- Type-safe environment variable parsing with validation
- Sensible defaults for everything except the API key
- Fatal, formatted failure when configuration is invalid
- No module-level settings instance: defaults flow into controllers and
  tool descriptors as explicit parameters
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic import ValidationError as SettingsValidationError
from pydantic_settings import BaseSettings

from .domain.domain_type import Environment, LogLevel
from .domain.errors import ConfigurationError, ConfigurationFailure
from .domain.model_catalog import DEFAULT_CATALOG_PATH


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # =============================================================================
    # APPLICATION
    # =============================================================================

    environment: Environment = Field(default=Environment.DEVELOPMENT, alias="ENVIRONMENT")
    log_level: LogLevel = Field(default=LogLevel.INFO, alias="LOG_LEVEL")

    # =============================================================================
    # GEMINI
    # =============================================================================

    gemini_api_key: SecretStr = Field(..., min_length=1, alias="GEMINI_API_KEY")
    gemini_default_model: str = Field(default="gemini-2.5-flash", min_length=1, alias="GEMINI_DEFAULT_MODEL")
    gemini_max_output_tokens: int = Field(default=65536, gt=0, alias="GEMINI_MAX_OUTPUT_TOKENS")
    gemini_timeout_ms: int = Field(default=300_000, gt=0, alias="GEMINI_TIMEOUT_MS")

    # Whether callers may pick the model; when False the default model is forced
    allow_caller_model_override: bool = Field(default=True, alias="ALLOW_CALLER_MODEL_OVERRIDE")

    # Model Catalog
    model_catalog_path: Path = Field(default=DEFAULT_CATALOG_PATH, alias="MODEL_CATALOG_PATH")

    model_config = {"env_file": ".env", "case_sensitive": False, "extra": "ignore", "protected_namespaces": ()}


def format_validation_failure(exc: SettingsValidationError) -> str:
    lines = []
    for issue in exc.errors():
        field = ".".join(str(part) for part in issue["loc"]) or "settings"
        lines.append(f"  - {field}: {issue['msg']}")
    return "Configuration validation failed:\n" + "\n".join(lines)


def load_settings() -> Settings:
    """Validate the environment.

    Raises:
        ConfigurationFailure: Carrying a CONFIGURATION_ERROR with one line per violation
    """
    try:
        return Settings()  # type: ignore[call-arg]
    except SettingsValidationError as exc:
        raise ConfigurationFailure(ConfigurationError(message=format_validation_failure(exc))) from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


__all__ = ["Settings", "format_validation_failure", "get_settings", "load_settings"]
