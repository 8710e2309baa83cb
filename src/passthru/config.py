"""Configuration management for passthru."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from passthru.errors import ConfigurationError

DEFAULT_PREFIX = "!"
CONTEXT_PREFIX = "$"


class DirectCommandSettings(BaseSettings):
    """Read-only snapshot of the direct command settings for one session."""

    model_config = SettingsConfigDict(
        env_prefix="PASSTHRU_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    enabled: bool = Field(default=True, description="Master switch for direct commands")
    auto_approve: bool = Field(default=False, description="Run direct commands without confirmation")
    prefix: str = Field(default=DEFAULT_PREFIX, description="Leading token of a silent direct command")
    context_max_chars: int | None = Field(
        default=None, gt=0, description="Cut command output kept in context to this many characters"
    )
    timeout_seconds: float | None = Field(default=None, gt=0, description="Backend timeout for one command")
    approval_mode: str = Field(default="on-request", description="Approval mode handed to the backend")
    writable_roots: list[Path] = Field(default_factory=list, description="Writable roots handed to the backend")
    log_level: str = Field(default="INFO", description="Log level")

    @field_validator("prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        if not value:
            raise ValueError("prefix must not be empty")
        if any(ch.isspace() for ch in value):
            raise ValueError("prefix must not contain whitespace")
        if value.startswith(CONTEXT_PREFIX):
            raise ValueError(f"prefix must not start with the context prefix {CONTEXT_PREFIX!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()


def load_settings(workspace: Path | None = None, **overrides: Any) -> DirectCommandSettings:
    """Load settings from the environment and the workspace ``.env`` file.

    Args:
        workspace: Directory holding an optional ``.env`` file.
        **overrides: Explicit values, typically from CLI flags. ``None`` values are ignored.

    Returns:
        A frozen settings snapshot.

    Raises:
        ConfigurationError: If any value fails validation.
    """
    env_file = (workspace or Path.cwd()) / ".env"
    updates = {key: value for key, value in overrides.items() if value is not None}
    try:
        return DirectCommandSettings(_env_file=env_file, **updates)  # type: ignore[call-arg]
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc
