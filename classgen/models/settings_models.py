from enum import Enum
from typing import Any, Dict
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, SecretStr, StrictInt, field_validator


class AccessMethod(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class GenerationMode(str, Enum):
    STANDARD = "standard"
    PREPARED = "prepared"
    STATIC = "static"

    @classmethod
    def from_flags(cls, standard: bool, prepared: bool, static: bool) -> "GenerationMode":
        """
        Convert the legacy DO_STANDARD / DO_PREPARED / DO_STATIC booleans
        into a single mode. Exactly one flag must be set.
        """
        selected = [
            mode
            for mode, enabled in (
                (cls.STANDARD, standard),
                (cls.PREPARED, prepared),
                (cls.STATIC, static),
            )
            if enabled
        ]
        if not selected:
            raise ValueError("no generation flag is set; enable exactly one of standard, prepared, static")
        if len(selected) > 1:
            names = ", ".join(mode.value for mode in selected)
            raise ValueError(f"generation flags are ambiguous ({names}); enable exactly one")
        return selected[0]


class ConfigurationSettings(BaseModel):
    """
    Immutable settings consumed by the class generator.
    Built once at start-up (see `classgen.config.load_config`) and passed
    explicitly to whatever needs it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    access_method: AccessMethod = Field(
        AccessMethod.PUBLIC,
        description="'private' members get generated getters and setters, 'public' members do not",
    )
    generation_mode: GenerationMode = Field(..., description="Kind of MySQL code to generate")
    db_host: str = Field(..., description="Hostname or IP address of the MySQL server")
    db_user: str
    db_password: SecretStr
    db_name: str
    db_port: StrictInt = Field(3306, ge=1, le=65535)
    timezone: str = "UTC"

    @field_validator("db_host", "db_user", "db_name")
    @classmethod
    def require_non_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("db_password")
    @classmethod
    def require_password(cls, value: SecretStr) -> SecretStr:
        # Kept verbatim: whitespace is a legal password character.
        if not value.get_secret_value():
            raise ValueError("must not be empty")
        return value

    @field_validator("timezone")
    @classmethod
    def require_known_timezone(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone '{value}'") from None
        return value

    @property
    def generates_accessors(self) -> bool:
        return self.access_method == AccessMethod.PRIVATE

    def generation_flags(self) -> Dict[str, bool]:
        return {
            "do_standard": self.generation_mode == GenerationMode.STANDARD,
            "do_prepared": self.generation_mode == GenerationMode.PREPARED,
            "do_static": self.generation_mode == GenerationMode.STATIC,
        }

    def redacted(self) -> Dict[str, Any]:
        """Plain dict of the settings that is safe to log."""
        data = self.model_dump(mode="json")
        data["db_password"] = "***"
        return data
