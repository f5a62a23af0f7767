# AgentSync Configuration Schema
# Pydantic models for YAML configuration validation

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agentsync.git.remote import is_supported_remote

DEFAULT_SCAN_ROOTS: tuple[str, ...] = ("everyone",)
DEFAULT_CHECKOUT_PATH = "~/.local/share/agentsync/registry"


class ScanMode(str, Enum):
    """How scan roots are chosen for a run."""

    AUTO = "auto"
    EXPLICIT = "explicit"


class Settings(BaseModel):
    """Registry settings handed to the sync engine for one run."""

    model_config = ConfigDict(frozen=True)

    remote_url: str = Field(default="", description="GitHub remote (HTTPS or SSH)")
    scan_mode: ScanMode = Field(default=ScanMode.AUTO, description="auto: use discovered teams; explicit: use scan_roots")
    scan_roots: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SCAN_ROOTS),
        description="Top-level registry folders to scan",
    )
    checkout_path: str = Field(
        default=DEFAULT_CHECKOUT_PATH,
        validate_default=True,
        description="Local checkout of the registry",
    )
    strict_scan_roots: bool = Field(
        default=False,
        description="Fail the run when a selected scan root is missing instead of skipping it",
    )
    auto_sync_enabled: bool = Field(default=True, description="Let the caller sync on a timer")
    auto_sync_interval_minutes: int = Field(default=60, ge=1, description="Auto-sync interval")
    enabled_community_skills: list[str] = Field(
        default_factory=list, description="Opt-in community skills selected by the user"
    )

    @field_validator("remote_url")
    @classmethod
    def check_remote(cls, v: str) -> str:
        """Only accept GitHub HTTPS/SSH remotes (or nothing)."""
        v = v.strip()
        if v and not is_supported_remote(v):
            raise ValueError(f"Only GitHub remotes (HTTPS or SSH) are supported: {v}")
        return v

    @field_validator("checkout_path")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v.strip()).expanduser())

    @property
    def checkout(self) -> Path:
        return Path(self.checkout_path)


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    verbose: bool = Field(default=False, description="Show INFO log lines")
    colored: bool = Field(default=True, description="Enable colored output")
    log_file: str | None = Field(default=None, description="Append every log line to this file")

    @field_validator("log_file")
    @classmethod
    def expand_optional_path(cls, v: str | None) -> str | None:
        """Expand ~ in optional paths."""
        if v is None:
            return None
        return str(Path(v).expanduser())


class AgentSyncConfig(BaseModel):
    """Root configuration model for agentsync."""

    registry: Settings = Field(default_factory=Settings, description="Registry settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")
