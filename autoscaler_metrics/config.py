"""Configuration management using Pydantic settings.

Two-layer configuration system:
1. Environment: Loads raw values from environment variables (UPPER_CASE)
2. Settings: Clean application settings with lowercase fields and derived values
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Environment(BaseSettings):
    """Raw environment variable loading."""

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    FLASK_ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    # ── Exposition endpoint ────────────────────────────────────────────

    METRICS_HOST: str = Field(default="0.0.0.0")
    METRICS_PORT: int = Field(default=8085)
    WAITRESS_THREADS: int = Field(default=4)
    METRICS_DISABLE_CREATED_SERIES: bool = Field(default=True)


class Settings(BaseModel):
    """Application settings with lowercase fields and derived values."""

    model_config = ConfigDict(from_attributes=True)

    flask_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # ── Exposition endpoint ────────────────────────────────────────────

    metrics_host: str = "0.0.0.0"
    metrics_port: int = 8085
    waitress_threads: int = 4
    metrics_disable_created_series: bool = True

    @property
    def is_testing(self) -> bool:
        return self.flask_env == "testing"

    @property
    def is_production(self) -> bool:
        return self.flask_env == "production"

    def validate_config(self) -> None:
        from autoscaler_metrics.exceptions import ConfigurationError

        errors: list[str] = []

        if not self.metrics_host:
            errors.append("METRICS_HOST must not be empty")

        if not 0 < self.metrics_port < 65536:
            errors.append(
                f"METRICS_PORT must be between 1 and 65535, got {self.metrics_port}"
            )

        if self.waitress_threads < 1:
            errors.append("WAITRESS_THREADS must be at least 1")

        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            )

    @classmethod
    def load(cls, env: "Environment | None" = None) -> "Settings":
        if env is None:
            env = Environment()

        # The Flask reloader is never used in production
        debug = env.DEBUG and env.FLASK_ENV != "production"

        return cls(
            flask_env=env.FLASK_ENV,
            debug=debug,
            log_level=env.LOG_LEVEL.upper(),
            metrics_host=env.METRICS_HOST,
            metrics_port=env.METRICS_PORT,
            waitress_threads=env.WAITRESS_THREADS,
            metrics_disable_created_series=env.METRICS_DISABLE_CREATED_SERIES,
        )
