"""
Application configuration management using Pydantic Settings.
"""
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Optional, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


USER_ENV_FILE = "~/.config/ec2-ssh/env"


def user_env_file() -> Optional[Path]:
    """Return the per-user env file path, or None when HOME cannot be determined."""
    try:
        return Path(USER_ENV_FILE).expanduser()
    except RuntimeError:
        return None


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="EC2SSH_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    APP_NAME: str = "ec2-ssh"
    APP_VERSION: str = "1.0.0"

    # SSH client
    SSH_BINARY: str = "ssh"

    # AWS
    REGIONS: Annotated[List[str], NoDecode] = ["us-west-1", "us-west-2"]
    AWS_PROFILE: Optional[str] = None
    AWS_CONNECT_TIMEOUT: int = 10
    AWS_READ_TIMEOUT: int = 30
    AWS_MAX_ATTEMPTS: int = 1  # no retries

    # Provisioning deadline in seconds (None = unbounded)
    DEADLINE_SECONDS: Optional[float] = None

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FILE: Optional[str] = None
    LOG_MAX_BYTES: int = 10 * 1024 * 1024  # 10 MB
    LOG_BACKUP_COUNT: int = 3

    @field_validator("REGIONS", mode="before")
    @classmethod
    def parse_regions(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                v = json.loads(v)
            else:
                v = v.split(",")
        regions = [str(region).strip() for region in v if str(region).strip()]
        if not regions:
            raise ValueError("at least one region must be configured")
        return regions

    @field_validator("LOG_LEVEL")
    @classmethod
    def parse_log_level(cls, v):
        level = str(v).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings(_env_file=user_env_file())
