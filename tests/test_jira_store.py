"""Tests for JiraStore."""

from unittest.mock import MagicMock

import pytest

from flowboard.jira import JiraNotFoundError
from flowboard.jira.models import BoardConfigMap, BoardConfigResponse, Transition
from flowboard.models import JiraConfig
from flowboard.repositories import JiraStore, NotFoundError, ParseError, StoreIOError
from flowboard.repositories.jira import pick_transition_for_column

BOARD_CONFIG = {
    "columnConfig": {
        "columns": [
            {"name": "To Do", "statuses": [{"id": "1"}, {"id": "2"}]},
            {"name": "In Progress", "statuses": [{"id": "3"}]},
            {"name": "Done", "statuses": [{"id": "4"}, {"id": "5"}]},
        ]
    },
    "filter": {"id": "10000"},
}

SEARCH = {
    "issues": [
        {
            "key": "PROJ-2",
            "fields": {"summary": "Second", "description": "plain", "status": {"id": "3", "name": "In Progress"}},
        },
        {
            "key": "PROJ-1",
            "fields": {
                "summary": "First",
                "description": {"type": "doc", "content": []},
                "status": {"id": "1", "name": "Open"},
            },
        },
        {
            "key": "PROJ-9",
            "fields": {"summary": "Stray", "status": {"id": "77", "name": "Blocked"}},
        },
    ]
}

TRANSITIONS = {
    "transitions": [
        {"id": "11", "to": {"id": "2", "name": "Selected for Development"}},
        {"id": "12", "to": {"id": "1", "name": "Open"}},
        {"id": "31", "to": {"id": "4", "name": "Closed"}},
        {"id": "32", "to": {"id": "5", "name": "Done"}},
        {"id": "77", "to": {"id": "77", "name": "Blocked"}},
    ]
}


@pytest.fixture
def config() -> JiraConfig:
    return JiraConfig(
        base_url="https://example.atlassian.net",
        email="me@example.com",
        api_token="token",
        board_id="42",
    )


@pytest.fixture
def client() -> MagicMock:
    """Mock client answering the board configuration and transitions."""
    client = MagicMock()

    def get(path, params=None):
        if path.endswith("/configuration"):
            return BOARD_CONFIG
        if path.endswith("/transitions"):
            return TRANSITIONS
        raise AssertionError(f"unexpected GET {path}")

    client.get.side_effect = get
    client.post.return_value = SEARCH
    client.url.side_effect = lambda path: f"https://example.atlassian.net{path}"
    return client


@pytest.fixture
def store(config: JiraConfig, client: MagicMock) -> JiraStore:
    return JiraStore(config, client=client)


class TestJiraStoreLoad:
    """Tests for loading a board from Jira."""

    def test_columns_follow_board_config(self, store: JiraStore):
        """Board columns come first in configured order; unknown statuses follow."""
        board = store.load()

        assert [col.id for col in board.columns] == ["To Do", "In Progress", "Done", "Blocked"]

    def test_issues_land_in_mapped_columns(self, store: JiraStore):
        board = store.load()
        cards = {col.id: [c.id for c in col.cards] for col in board.columns}

        assert cards == {
            "To Do": ["PROJ-1"],
            "In Progress": ["PROJ-2"],
            "Done": [],
            "Blocked": ["PROJ-9"],
        }

    def test_non_string_description_is_empty(self, store: JiraStore):
        """Rich-text descriptions are not rendered."""
        board = store.load()

        assert board.columns[0].cards[0].description == ""
        assert board.columns[1].cards[0].description == "plain"

    def test_search_query(self, store: JiraStore, client: MagicMock):
        """The search is limited to the board filter and the user's open sprints."""
        store.load()

        path, payload = client.post.call_args.args
        assert path == "/rest/api/3/search/jql"
        assert payload["jql"] == (
            "filter=10000 AND assignee = currentUser() AND sprint in openSprints()"
        )
        assert payload["maxResults"] == 200

    def test_client_error_becomes_store_error(self, store: JiraStore, client: MagicMock):
        client.post.side_effect = JiraNotFoundError("Resource not found")

        with pytest.raises(StoreIOError, match="jira_search failed for https://example.atlassian.net"):
            store.load()

    def test_malformed_response(self, store: JiraStore, client: MagicMock):
        client.post.return_value = {"issues": [{"key": "X-1"}]}

        with pytest.raises(StoreIOError):
            store.load()


class TestJiraStoreMove:
    """Tests for moving issues through transitions."""

    def test_move_prefers_conventional_status(self, store: JiraStore, client: MagicMock):
        """Moving to "To Do" picks the transition to "Open" over an earlier candidate."""
        store.move("PROJ-2", "To Do")

        client.post.assert_called_once_with(
            "/rest/api/3/issue/PROJ-2/transitions", {"transition": {"id": "12"}}
        )

    def test_move_to_done(self, store: JiraStore, client: MagicMock):
        store.move("PROJ-2", "Done")

        client.post.assert_called_once_with(
            "/rest/api/3/issue/PROJ-2/transitions", {"transition": {"id": "31"}}
        )

    def test_move_falls_back_to_status_name(self, store: JiraStore, client: MagicMock):
        """A column missing from the board config matches a status by name."""
        store.move("PROJ-2", "Blocked")

        client.post.assert_called_once_with(
            "/rest/api/3/issue/PROJ-2/transitions", {"transition": {"id": "77"}}
        )

    def test_move_without_transition(self, store: JiraStore, client: MagicMock):
        with pytest.raises(NotFoundError):
            store.move("PROJ-2", "In Progress")
        client.post.assert_not_called()


class TestJiraStoreConfig:
    """Tests for configuration handling."""

    def test_misconfigured_store_raises_parse_error(self):
        """Every operation reports the missing settings."""
        store = JiraStore(JiraConfig(base_url="https://example.atlassian.net"))

        with pytest.raises(ParseError, match="JIRA_EMAIL, JIRA_API_TOKEN, JIRA_BOARD_ID"):
            store.load()
        with pytest.raises(ParseError):
            store.move("PROJ-1", "Done")

    def test_no_create_or_edit(self, store: JiraStore):
        assert not store.capabilities.can_create
        assert not store.capabilities.can_edit
        with pytest.raises(StoreIOError, match="not supported"):
            store.create("To Do")
        with pytest.raises(NotFoundError):
            store.locate("PROJ-1")

    def test_close_closes_client(self, store: JiraStore, client: MagicMock):
        store.close()
        client.close.assert_called_once()


class TestPickTransition:
    """Tests for choosing a transition for a column."""

    def test_only_column_statuses_considered(self):
        transitions = [
            Transition.model_validate({"id": "1", "to": {"id": "9", "name": "Open"}}),
            Transition.model_validate({"id": "2", "to": {"id": "3", "name": "Reopened"}}),
        ]

        picked = pick_transition_for_column(transitions, "To Do", ["3"])

        assert picked.id == "2"

    def test_no_candidates(self):
        assert pick_transition_for_column([], "Done", ["4"]) is None

    def test_board_config_map(self):
        mapping = BoardConfigMap.from_config(BoardConfigResponse.model_validate(BOARD_CONFIG))

        assert mapping.order == ["To Do", "In Progress", "Done"]
        assert mapping.status_to_column["5"] == "Done"
