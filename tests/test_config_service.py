"""Tests for ConfigService."""

from pathlib import Path

import pytest

from flowboard.config import Settings
from flowboard.repositories import JiraStore, LocalStore
from flowboard.services import ConfigService


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of settings."""
    for name in ("JIRA_BASE_URL", "JIRA_EMAIL", "JIRA_API_TOKEN", "JIRA_BOARD_ID", "FLOW_PROVIDER"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def board_dir(tmp_path: Path) -> Path:
    root = tmp_path / "board"
    root.mkdir()
    return root


class TestConfigServiceLoading:
    """Tests for ConfigService file loading."""

    def test_default_on_missing_file(self, board_dir: Path):
        """Missing flow.yml returns default config."""
        service = ConfigService(board_dir)
        config = service.get_config()

        assert config.provider == "local"
        assert not service.has_config_error

    def test_load_jira_config(self, board_dir: Path):
        (board_dir / "flow.yml").write_text(
            """
version: 1
provider: jira
jira:
  base_url: https://example.atlassian.net/
  email: me@example.com
  api_token: secret
  board_id: "42"
"""
        )
        config = ConfigService(board_dir).get_config()

        assert config.provider == "jira"
        assert config.jira.base_url == "https://example.atlassian.net"
        assert config.jira.missing == []

    def test_invalid_yaml_falls_back(self, board_dir: Path):
        (board_dir / "flow.yml").write_text("provider: [jira\n")
        service = ConfigService(board_dir)

        assert service.get_config().provider == "local"
        assert service.has_config_error
        assert "Invalid YAML" in service.config_error

    def test_empty_file_falls_back(self, board_dir: Path):
        (board_dir / "flow.yml").write_text("")
        service = ConfigService(board_dir)

        assert service.get_config().provider == "local"
        assert service.config_error == "flow.yml is empty"

    def test_unknown_provider_falls_back(self, board_dir: Path):
        (board_dir / "flow.yml").write_text("provider: trello\n")
        service = ConfigService(board_dir)

        assert service.get_config().provider == "local"
        assert "Invalid provider" in service.config_error

    def test_config_is_cached_until_reload(self, board_dir: Path):
        service = ConfigService(board_dir)
        assert service.get_config().provider == "local"

        (board_dir / "flow.yml").write_text("provider: jira\n")
        assert service.get_config().provider == "local"

        service.reload()
        assert service.get_config().provider == "jira"


class TestConfigServiceSettings:
    """Tests for settings overriding flow.yml."""

    def test_provider_override(self, board_dir: Path):
        (board_dir / "flow.yml").write_text("provider: local\n")
        settings = Settings(board_path=board_dir, provider="jira")

        assert ConfigService(board_dir, settings).get_config().provider == "jira"

    def test_jira_env_overrides_file(self, board_dir: Path, monkeypatch):
        (board_dir / "flow.yml").write_text(
            "provider: jira\njira:\n  base_url: https://file.example\n  email: file@example.com\n"
        )
        monkeypatch.setenv("JIRA_EMAIL", "env@example.com")
        monkeypatch.setenv("JIRA_API_TOKEN", "env-token")

        config = ConfigService(board_dir, Settings(board_path=board_dir)).get_config()

        assert config.jira.base_url == "https://file.example"
        assert config.jira.email == "env@example.com"
        assert config.jira.api_token == "env-token"
        assert config.jira.missing == ["JIRA_BOARD_ID"]


class TestStoreFactory:
    """Tests for resolving the provider to a store."""

    def test_local_store(self, board_dir: Path):
        store = ConfigService(board_dir).store_factory()()

        assert isinstance(store, LocalStore)
        assert store.root == board_dir

    def test_jira_store(self, board_dir: Path):
        (board_dir / "flow.yml").write_text("provider: jira\n")
        factory = ConfigService(board_dir).store_factory()

        first, second = factory(), factory()

        assert isinstance(first, JiraStore)
        assert first is not second
