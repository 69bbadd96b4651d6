"""
Configuration loading (pydantic-settings, environment / .env)

Values are read from `CLASSGEN_*` environment variables, falling back to the
`.env` file and then to the defaults below. Credentials must come from the
environment or a secrets store; never commit them.

Usage
-----
from classgen.config import load_config

settings = load_config()
connector = MysqlConnector(settings)
"""

import logging
import os
import time
from typing import Any, Optional
from zoneinfo import ZoneInfo

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.settings_models import ConfigurationSettings, GenerationMode

logger = logging.getLogger("classgen.config")


class ConfigError(ValueError):
    """Raised when the configuration is missing a value or holds an invalid one."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class EnvironmentSettings(BaseSettings):
    """
    Raw settings as found in the environment. Turned into an immutable
    `ConfigurationSettings` by `load_config`.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLASSGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    access_method: str = Field("public", description="'public' or 'private'")
    do_standard: bool = False
    do_prepared: bool = False
    do_static: bool = False
    db_host: str = Field(..., description="Hostname or IP address of the MySQL server.")
    db_user: str = Field(..., description="Database username credential.")
    db_password: SecretStr = Field(..., description="Database password credential.")
    db_name: str = Field(..., description="Name of the database to generate classes for.")
    db_port: int = 3306
    timezone: str = "UTC"

    @field_validator("db_port", mode="before")
    @classmethod
    def reject_boolean_port(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be an integer, not a boolean")
        return value


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CLASSGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    log_dir: str = "logs"

    @field_validator("log_level")
    @classmethod
    def require_known_level(cls, value: str) -> str:
        value = value.strip().upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level '{value}'")
        return value


def _config_error(exc: ValidationError) -> ConfigError:
    # First failing field only. Never echo the input, it may be a password.
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "settings"
    cause = error.get("ctx", {}).get("error")
    return ConfigError(field, str(cause) if cause is not None else error["msg"])


def build_settings(env: EnvironmentSettings) -> ConfigurationSettings:
    try:
        mode = GenerationMode.from_flags(env.do_standard, env.do_prepared, env.do_static)
    except ValueError as exc:
        raise ConfigError("generation_mode", str(exc)) from exc

    try:
        return ConfigurationSettings(
            access_method=env.access_method,
            generation_mode=mode,
            db_host=env.db_host,
            db_user=env.db_user,
            db_password=env.db_password,
            db_name=env.db_name,
            db_port=env.db_port,
            timezone=env.timezone,
        )
    except ValidationError as exc:
        raise _config_error(exc) from exc


def load_config(env_file: Optional[str] = ".env", **overrides: Any) -> ConfigurationSettings:
    """
    Load and validate the configuration.

    Keyword overrides use the `EnvironmentSettings` field names and win over
    environment variables; pass `env_file=None` to skip the `.env` file.
    Raises `ConfigError` naming the offending field.
    """
    unknown = sorted(set(overrides) - set(EnvironmentSettings.model_fields))
    if unknown:
        raise ConfigError(unknown[0], "unknown setting")

    try:
        env = EnvironmentSettings(_env_file=env_file, **overrides)
    except ValidationError as exc:
        raise _config_error(exc) from exc

    settings = build_settings(env)
    logger.info("Configuration loaded | %s", settings.redacted())
    return settings


def load_logging_settings(env_file: Optional[str] = ".env") -> LoggingSettings:
    try:
        return LoggingSettings(_env_file=env_file)
    except ValidationError as exc:
        raise _config_error(exc) from exc


def apply_timezone(settings: ConfigurationSettings) -> ZoneInfo:
    """Make `settings.timezone` the process-wide local timezone."""
    os.environ["TZ"] = settings.timezone
    if hasattr(time, "tzset"):
        time.tzset()
    return ZoneInfo(settings.timezone)
