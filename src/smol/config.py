"""Configuration management for smol."""

import os
from pathlib import Path
from typing import Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

JOURNAL_DIR_NAME = "smoljournals"
LOG_FILE_NAME = "smol.log"


def expand_path(value: Union[str, Path]) -> Path:
    """Expand ``~`` and environment variables in a user supplied path."""
    return Path(os.path.expandvars(os.path.expanduser(str(value))))


class SmolConfig(BaseSettings):
    """Configuration for a journal run."""

    journal_dir: Path = Field(
        default_factory=lambda: Path.home() / ".local" / "share" / JOURNAL_DIR_NAME,
        description="Directory holding the journals",
    )
    root: Path = Field(
        default_factory=Path.home,
        description="Root directory to scan for files",
    )
    log_level: str = Field(default="WARNING", description="Level of the stderr log sink")
    log_file: Optional[Path] = Field(
        default_factory=lambda: Path.home() / ".local" / "state" / "smol" / LOG_FILE_NAME,
        description="Log file, none to disable file logging",
    )

    model_config = SettingsConfigDict(
        env_prefix="SMOL_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("journal_dir", "root", "log_file", mode="before")
    @classmethod
    def expand_user_path(cls, v):
        """Expand ~ and $VARS before the core sees the path."""
        if v is None or v == "":
            return None
        return expand_path(v)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


def get_config(**overrides) -> SmolConfig:
    """Load configuration, letting explicit values win over env and defaults."""
    return SmolConfig(**{k: v for k, v in overrides.items() if v is not None})
