"""Jira agile board store."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from ..jira import JiraClient, JiraClientError
from ..jira.models import (
    BoardConfigMap,
    BoardConfigResponse,
    SearchResponse,
    Transition,
    TransitionsResponse,
)
from ..models import Board, Card, Column, JiraConfig
from .errors import NotFoundError, ParseError, StoreIOError
from .protocol import StoreCapabilities

logger = logging.getLogger(__name__)

# Column name keywords -> preferred target status name fragments
TRANSITION_PREFERENCES: list[tuple[tuple[str, ...], tuple[str, ...]]] = [
    (("todo", "to do"), ("open", "backlog")),
    (("progress",), ("in progress",)),
    (("review",), ("in review", "review")),
    (("test", "qa"), ("in testing", "testing", "qa")),
    (("done",), ("done", "resolved", "closed", "verified")),
]

SEARCH_FIELDS = ["summary", "description", "status"]


class JiraStore:
    """Store backed by a Jira agile board.

    Columns come from the board configuration. Cards are the issues of the
    board filter that are assigned to the current user in an open sprint.
    Moving a card runs the issue transition that lands in the destination
    column.
    """

    def __init__(self, config: JiraConfig, client: JiraClient | None = None) -> None:
        """
        Initialize the Jira store.

        Args:
            config: Jira connection settings
            client: Optional pre-built client (tests pass a mock)
        """
        self.config = config
        self._error = _misconfiguration(config)
        self._client = client
        if self._client is None and self._error is None:
            self._client = JiraClient(
                config.base_url or "", config.email or "", config.api_token or ""
            )

    @property
    def capabilities(self) -> StoreCapabilities:
        """Cards are edited in Jira itself."""
        return StoreCapabilities(can_create=False, can_edit=False)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    # --- Board Operations ---

    def load(self) -> Board:
        """Load the board columns and the current user's sprint issues."""
        client = self._require_client()
        cfg = self._board_config()
        mapping = BoardConfigMap.from_config(cfg)
        status_to_column = mapping.status_to_column

        jql = (
            f"filter={cfg.filter.id} AND assignee = currentUser() AND sprint in openSprints()"
        )
        data = self._call(
            "jira_search",
            "/rest/api/3/search/jql",
            lambda path: client.post(
                path,
                {"jql": jql, "fields": SEARCH_FIELDS, "maxResults": self.config.max_results},
            ),
        )
        search = self._parse("jira_search", SearchResponse, data)

        cards_by_column: dict[str, list[Card]] = {}
        seen_order: list[str] = []
        for issue in search.issues:
            status = issue.fields.status
            column_name = status_to_column.get(status.id, status.name)
            if column_name not in cards_by_column:
                cards_by_column[column_name] = []
                seen_order.append(column_name)

            description = issue.fields.description
            cards_by_column[column_name].append(
                Card(
                    id=issue.key,
                    title=issue.fields.summary,
                    description=description if isinstance(description, str) else "",
                )
            )

        column_order = list(mapping.order)
        column_order += [name for name in seen_order if name not in column_order]

        logger.debug("Loaded %d issues into %d columns", len(search.issues), len(column_order))
        return Board(
            columns=[
                Column(id=name, title=name, cards=cards_by_column.get(name, []))
                for name in column_order
            ]
        )

    def move(self, card_id: str, column_id: str) -> None:
        """Transition an issue so it lands in the given board column."""
        client = self._require_client()
        path = f"/rest/api/3/issue/{card_id}/transitions"

        data = self._call("jira_transitions", path, client.get)
        transitions = self._parse("jira_transitions", TransitionsResponse, data).transitions

        transition = None
        mapping = BoardConfigMap.from_config(self._board_config())
        status_ids = mapping.column_to_status.get(column_id)
        if status_ids:
            transition = pick_transition_for_column(transitions, column_id, status_ids)
        if transition is None:
            transition = next((t for t in transitions if t.to.name == column_id), None)
        if transition is None:
            raise NotFoundError(column_id)

        self._call(
            "jira_transition",
            path,
            lambda p: client.post(p, {"transition": {"id": transition.id}}),
        )
        logger.info("Issue transitioned: %s -> %s (%s)", card_id, column_id, transition.to.name)

    def create(self, column_id: str) -> str:
        raise StoreIOError("create_card", self.config.base_url or "jira", "not supported")

    def locate(self, card_id: str) -> Path:
        raise NotFoundError(card_id)

    # --- Private Methods ---

    def _require_client(self) -> JiraClient:
        if self._error is not None:
            raise ParseError(self._error)
        assert self._client is not None
        return self._client

    def _board_config(self) -> BoardConfigResponse:
        client = self._require_client()
        path = f"/rest/agile/1.0/board/{self.config.board_id}/configuration"
        data = self._call("jira_board_config", path, client.get)
        return self._parse("jira_board_config", BoardConfigResponse, data)

    def _call(self, op: str, path: str, send):
        """Run a client call, mapping client errors to StoreIOError."""
        assert self._client is not None
        try:
            return send(path)
        except JiraClientError as e:
            raise StoreIOError(op, self._client.url(path), e) from e

    def _parse(self, op: str, model, data):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise StoreIOError(op, self.config.base_url or "jira", e) from e


def pick_transition_for_column(
    transitions: list[Transition],
    column_name: str,
    status_ids: list[str],
) -> Transition | None:
    """
    Pick the transition that best matches a board column.

    Only transitions whose target status belongs to the column are
    considered. Among those, a target whose name matches the column's
    conventional status (e.g. "Open" for a "To Do" column) wins; otherwise
    the first candidate is used.
    """
    col = column_name.lower()
    prefs: tuple[str, ...] = ()
    for keywords, preferred in TRANSITION_PREFERENCES:
        if any(k in col for k in keywords):
            prefs = preferred
            break

    first_match = None
    for t in transitions:
        if t.to.id not in status_ids:
            continue
        name = t.to.name.lower()
        if prefs and any(p in name for p in prefs):
            return t
        if first_match is None:
            first_match = t
    return first_match


def _misconfiguration(config: JiraConfig) -> str | None:
    """Describe missing settings, or None when the config is usable."""
    missing = config.missing
    if not missing:
        return None
    return f"jira misconfigured: missing {', '.join(missing)}"
