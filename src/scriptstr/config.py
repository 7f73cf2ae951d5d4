"""
Configuration management using Pydantic Settings
"""
import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Engine settings, read from SCRIPTSTR_* environment variables"""

    model_config = SettingsConfigDict(env_prefix="SCRIPTSTR_", extra="ignore")

    log_level: str = Field(default="WARNING", description="Logging level")
    max_string_length: Optional[int] = Field(
        default=None,
        ge=0,
        description="Largest string (in characters) a script may build; unlimited if unset",
    )
    echo_prints: bool = Field(
        default=False,
        description="Also write print() output to stdout",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept level names case-insensitively"""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> EngineSettings:
    """Get cached settings instance"""
    return EngineSettings()


def configure_logging(level: Optional[str] = None) -> None:
    """Set up a basic root handler for demos and command-line use"""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
