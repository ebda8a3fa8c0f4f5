"""
FolderMirror configuration management.

Provides centralized configuration with validation using Pydantic.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from foldermirror.core.models import ComparisonMode

DEFAULT_CONFIG_PATH = Path.home() / ".foldermirror" / "config.json"


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_enabled: bool = True
    console_enabled: bool = True
    json_format: bool = False
    log_file: Path = Field(default_factory=lambda: Path.cwd() / "sync.log")

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()


class SyncConfig(BaseModel):
    """Configuration for synchronization passes."""

    source: Path | None = None
    replica: Path | None = None
    interval_seconds: int = Field(default=0, ge=0)
    comparison_mode: Literal["metadata", "content"] = "metadata"
    hash_algorithm: Literal["sha256", "sha1", "md5", "blake2b"] = "sha256"
    chunk_size_kb: int = Field(default=1024, ge=4, le=65536)
    status_file: Path | None = None

    @field_validator("source", "replica", "status_file", mode="before")
    @classmethod
    def expand_optional_path(cls, v: str | Path | None) -> Path | None:
        if v is None or v == "":
            return None
        return Path(v).expanduser().resolve()

    @property
    def mode(self) -> ComparisonMode:
        return ComparisonMode.from_string(self.comparison_mode)

    @property
    def chunk_size_bytes(self) -> int:
        return self.chunk_size_kb * 1024


class FolderMirrorConfig(BaseModel):
    """Main FolderMirror configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> FolderMirrorConfig:
        """Load configuration from file or create default."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        if config_path.exists():
            with open(config_path) as f:
                data = json.load(f)
            return cls.model_validate(data)

        return cls()

    def save(self, config_path: Path | None = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, default=str)

    def ensure_directories(self) -> None:
        """Create the directories that hold log and status files."""
        if self.logging.file_enabled:
            self.logging.log_file.parent.mkdir(parents=True, exist_ok=True)
        if self.sync.status_file:
            self.sync.status_file.parent.mkdir(parents=True, exist_ok=True)


def get_default_config() -> FolderMirrorConfig:
    """Get the default configuration."""
    return FolderMirrorConfig()


def load_config(config_path: Path | None = None) -> FolderMirrorConfig:
    """Load or create configuration."""
    config = FolderMirrorConfig.load(config_path)
    config.ensure_directories()
    return config
