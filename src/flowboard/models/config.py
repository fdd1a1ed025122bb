"""Configuration models for flow.yml."""

from typing import ClassVar

from pydantic import BaseModel, Field, field_validator


class JiraConfig(BaseModel):
    """Connection details for a Jira agile board."""

    base_url: str | None = Field(default=None, description="e.g. https://example.atlassian.net")
    email: str | None = None
    api_token: str | None = None
    board_id: str | None = None
    max_results: int = Field(default=200, ge=1, le=1000)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Normalize the base URL so paths can be appended."""
        if v is None:
            return None
        return v.strip().rstrip("/") or None

    @field_validator("email", "api_token", "board_id")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat whitespace-only values as unset."""
        if v is None:
            return None
        return v.strip() or None

    @property
    def missing(self) -> list[str]:
        """Names of required settings that are not set."""
        required = {
            "JIRA_BASE_URL": self.base_url,
            "JIRA_EMAIL": self.email,
            "JIRA_API_TOKEN": self.api_token,
            "JIRA_BOARD_ID": self.board_id,
        }
        return [name for name, value in required.items() if not value]

    def merged(self, overrides: dict) -> "JiraConfig":
        """Return a copy with every non-empty override applied."""
        update = {k: v for k, v in overrides.items() if v not in (None, "")}
        return self.model_validate({**self.model_dump(), **update})


class FlowConfig(BaseModel):
    """Root configuration from flow.yml."""

    version: int = 1
    provider: str = Field(default="local", description="Storage provider: local, jira")
    jira: JiraConfig = Field(default_factory=JiraConfig)

    VALID_PROVIDERS: ClassVar[tuple[str, ...]] = ("local", "jira")

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        """Validate provider is a supported value."""
        if v not in cls.VALID_PROVIDERS:
            raise ValueError(
                f"Invalid provider '{v}'. Must be one of: {', '.join(cls.VALID_PROVIDERS)}"
            )
        return v

    @classmethod
    def default(cls) -> "FlowConfig":
        """Return default configuration."""
        return cls(provider="local")
