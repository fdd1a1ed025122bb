"""Jira API integration."""

from .client import (
    JiraAuthError,
    JiraClient,
    JiraClientError,
    JiraForbiddenError,
    JiraNotFoundError,
    JiraRateLimitError,
)

__all__ = [
    "JiraAuthError",
    "JiraClient",
    "JiraClientError",
    "JiraForbiddenError",
    "JiraNotFoundError",
    "JiraRateLimitError",
]
