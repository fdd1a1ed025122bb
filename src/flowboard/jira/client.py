"""Jira REST API client."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class JiraClientError(Exception):
    """Base exception for Jira client errors."""

    pass


class JiraAuthError(JiraClientError):
    """Authentication failed."""

    pass


class JiraNotFoundError(JiraClientError):
    """Resource not found."""

    pass


class JiraForbiddenError(JiraClientError):
    """Permission denied."""

    pass


class JiraRateLimitError(JiraClientError):
    """Rate limit exceeded."""

    pass


class JiraClient:
    """Jira Cloud REST API client.

    Provides a thin wrapper around the Jira REST and Agile APIs with:
    - Basic authentication (account email + API token)
    - Error mapping to a small exception hierarchy
    - Request timing in the logs
    """

    def __init__(self, base_url: str, email: str, api_token: str, timeout: float = 30.0):
        """Initialize the Jira client.

        Args:
            base_url: Site URL (e.g., https://example.atlassian.net)
            email: Account email used for basic auth
            api_token: API token used for basic auth
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.email = email
        self._client = httpx.Client(
            base_url=self.base_url,
            auth=(email, api_token),
            headers={"Accept": "application/json"},
            timeout=timeout,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def url(self, path: str) -> str:
        """Absolute URL for an API path, used in error messages."""
        return f"{self.base_url}{path}"

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Send a GET request and return the decoded JSON body."""
        return self.request("GET", path, params=params)

    def post(self, path: str, payload: dict[str, Any]) -> Any:
        """Send a POST request and return the decoded JSON body (None if empty)."""
        return self.request("POST", path, json=payload)

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request.

        Raises:
            JiraAuthError: Authentication failed
            JiraNotFoundError: Resource not found
            JiraForbiddenError: Permission denied
            JiraRateLimitError: Rate limit exceeded
            JiraClientError: Other errors
        """
        logger.debug("Jira %s %s", method, path)

        start_time = time.monotonic()
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("Jira %s %s failed after %.0fms: %s", method, path, elapsed_ms, e)
            raise JiraClientError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000
        status = response.status_code

        if status == 401:
            logger.error("Jira %s %s: 401 Unauthorized (%.0fms)", method, path, elapsed_ms)
            raise JiraAuthError("Authentication failed. Check JIRA_EMAIL and JIRA_API_TOKEN.")
        if status == 403:
            logger.error("Jira %s %s: 403 Forbidden (%.0fms)", method, path, elapsed_ms)
            raise JiraForbiddenError(f"Permission denied: {response.text}")
        if status == 404:
            logger.error("Jira %s %s: 404 Not Found (%.0fms)", method, path, elapsed_ms)
            raise JiraNotFoundError("Resource not found")
        if status == 429:
            logger.error("Jira %s %s: 429 Rate Limited (%.0fms)", method, path, elapsed_ms)
            raise JiraRateLimitError("Jira API rate limit exceeded. Try again later.")
        if status >= 400:
            logger.error("Jira %s %s: HTTP %d (%.0fms)", method, path, status, elapsed_ms)
            raise JiraClientError(f"status {status}: {response.text}")

        logger.info("Jira %s %s: %d (%.0fms)", method, path, status, elapsed_ms)

        # Transitions answer 204 No Content
        if status == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error("Jira %s %s: Invalid JSON response (%.0fms)", method, path, elapsed_ms)
            raise JiraClientError(f"Invalid JSON response: {e}") from e
