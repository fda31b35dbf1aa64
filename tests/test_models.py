"""Tests for models.py: Page parsing."""

import dataclasses

import pytest

from todoist_mcp.exceptions import TodoistError
from todoist_mcp.models import Page


class TestPage:
    def test_defaults(self):
        page = Page()
        assert page.results == []
        assert page.next_cursor is None

    def test_from_response(self):
        page = Page.from_response({"results": [{"id": "1"}], "next_cursor": "abc"}, "tasks list")
        assert page.results == [{"id": "1"}]
        assert page.next_cursor == "abc"

    def test_missing_cursor_means_last_page(self):
        assert Page.from_response({"results": []}, "tasks list").next_cursor is None

    def test_rejects_non_dict(self):
        with pytest.raises(TodoistError, match="expected JSON object, got list"):
            Page.from_response([], "tasks list")

    def test_rejects_missing_results(self):
        with pytest.raises(TodoistError, match="tasks list response is missing"):
            Page.from_response({"next_cursor": None}, "tasks list")

    def test_frozen(self):
        page = Page()
        with pytest.raises(dataclasses.FrozenInstanceError):
            page.next_cursor = "x"
