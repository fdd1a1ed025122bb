"""Application settings."""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


def _default_board_path() -> Path:
    return Path.home() / ".config" / "flow" / "boards" / "default"


class JiraSettings(BaseSettings):
    """Jira credentials, read from JIRA_* environment variables."""

    base_url: str | None = None
    email: str | None = None
    api_token: str | None = None
    board_id: str | None = None

    model_config = {
        "env_prefix": "JIRA_",
    }


class Settings(BaseSettings):
    """Application settings."""

    board_path: Path = Field(
        default_factory=_default_board_path,
        description="Path to the board directory containing board.txt (and optional flow.yml)",
    )

    provider: str | None = Field(
        default=None,
        description="Storage provider: local or jira (overrides flow.yml)",
    )

    queue_capacity: int = Field(
        default=64,
        ge=1,
        description="Maximum number of moves waiting for confirmation",
    )

    poll_interval: float = Field(
        default=0.05,
        gt=0,
        description="Seconds between checks for finished moves",
    )

    editor: str = Field(
        default_factory=lambda: os.environ.get("EDITOR", "vim"),
        description="Editor for card editing",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    jira: JiraSettings = Field(default_factory=JiraSettings)

    model_config = {
        "env_prefix": "FLOW_",
    }
