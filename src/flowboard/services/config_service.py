"""Configuration service for loading flow.yml."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import ValidationError

from ..models import FlowConfig
from ..repositories import StoreFactory, create_store_factory

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and caching board configuration.

    ``flow.yml`` in the board directory is optional. Values given through
    settings (CLI flags or FLOW_* / JIRA_* environment variables) win over
    the file.
    """

    CONFIG_FILE = "flow.yml"

    def __init__(self, board_path: Path, settings: Settings | None = None) -> None:
        """Initialize the config service.

        Args:
            board_path: Path to the board directory
            settings: Optional settings overriding the file
        """
        self.board_path = board_path
        self._settings = settings
        self._config: FlowConfig | None = None
        self._config_error: str | None = None

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    def get_config(self) -> FlowConfig:
        """Get configuration, loading from file if not cached."""
        if self._config is None:
            self._config = self._apply_settings(self._load_config())
        return self._config

    def store_factory(self) -> StoreFactory:
        """Build the store factory for the configured provider."""
        return create_store_factory(self.get_config(), self.board_path)

    def reload(self) -> None:
        """Clear cached configuration, forcing reload on next access."""
        self._config = None
        self._config_error = None

    def _load_config(self) -> FlowConfig:
        """Load configuration from file or return default."""
        config_path = self.board_path / self.CONFIG_FILE
        self._config_error = None

        if not config_path.exists():
            logger.debug("No %s found, using defaults", self.CONFIG_FILE)
            return FlowConfig.default()

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self._config_error = f"Invalid YAML in {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return FlowConfig.default()
        except OSError as e:
            self._config_error = f"Error reading {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return FlowConfig.default()

        if data is None:
            self._config_error = f"{self.CONFIG_FILE} is empty"
            logger.warning(self._config_error)
            return FlowConfig.default()

        try:
            config = FlowConfig(**data)
        except (ValidationError, TypeError) as e:
            self._config_error = f"Error loading {self.CONFIG_FILE}: {e}"
            logger.warning(self._config_error)
            return FlowConfig.default()

        logger.info("Loaded %s (provider=%s)", self.CONFIG_FILE, config.provider)
        return config

    def _apply_settings(self, config: FlowConfig) -> FlowConfig:
        """Overlay explicit settings on the file configuration."""
        if self._settings is None:
            return config

        update: dict = {"jira": config.jira.merged(self._settings.jira.model_dump())}
        if self._settings.provider:
            update["provider"] = self._settings.provider
        return FlowConfig.model_validate({**config.model_dump(), **update})
