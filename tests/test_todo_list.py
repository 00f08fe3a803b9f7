from datetime import datetime

import httpx
import pytest

from starterkit.client import ApiClient, ApiError
from starterkit.todo_list import TodoList


@pytest.fixture
def api(client):
    return ApiClient(base_url="http://testserver", http=client)


@pytest.fixture
def todos(api):
    return TodoList(api)


class TestTodoList:
    def test_load_fetches_once(self, api, todos):
        assert todos.load() == []
        assert todos.loaded is True

        api.create_todo("created behind its back")
        assert todos.load() == []
        assert [t["text"] for t in todos.load(force=True)] == ["created behind its back"]

    def test_add_appends_server_record(self, todos):
        todos.load()
        created = todos.add("  Buy milk ")
        assert created["text"] == "Buy milk"
        assert todos.items == [created]
        assert todos.remaining == 1

    def test_add_rejects_blank_text_without_request(self, todos):
        with pytest.raises(ValueError):
            todos.add("   ")
        assert todos.items == []

    def test_toggle_reconciles_with_server(self, todos):
        created = todos.add("Flip")
        toggled = todos.toggle(created["id"])
        assert toggled["completed"] is True
        assert datetime.fromisoformat(toggled["updatedAt"]) > datetime.fromisoformat(created["updatedAt"])
        assert todos.get(created["id"]) == toggled
        assert todos.remaining == 0

    def test_edit(self, todos):
        created = todos.add("Old")
        todos.edit(created["id"], "New")
        assert todos.get(created["id"])["text"] == "New"

    def test_remove(self, api, todos):
        keep = todos.add("keep")
        drop = todos.add("drop")
        todos.remove(drop["id"])
        assert [t["id"] for t in todos.items] == [keep["id"]]
        assert [t["id"] for t in api.list_todos()] == [keep["id"]]

    def test_unknown_local_id(self, todos):
        with pytest.raises(KeyError):
            todos.toggle(12345)

    def test_failure_keeps_state_and_records_error(self, api, todos):
        created = todos.add("here")
        api.delete_todo(created["id"])

        with pytest.raises(ApiError):
            todos.toggle(created["id"])
        assert todos.error is not None and "404" in todos.error
        assert todos.get(created["id"]) == created

        todos.add("next")
        assert todos.error is None

    def test_load_failure(self):
        http = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(500, json={"error": "x"})))
        todos = TodoList(ApiClient(base_url="http://mocked", http=http))
        with pytest.raises(ApiError):
            todos.load()
        assert todos.loaded is False
        assert todos.error.startswith("API Error: 500")
