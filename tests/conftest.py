"""
Shared test fixtures for todoist-mcp tests.
Patches config module to avoid loading real .env and provides an
in-memory remote API for the client facade.
"""

import os
import sys

import pytest

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from todoist_mcp.exceptions import TodoistError  # noqa: E402
from todoist_mcp.models import Page  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state.
    Prevents tests from reading the real .env or logging HTTP traffic."""
    from todoist_mcp import config

    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "API_TOKEN", "fake-token")
    monkeypatch.setattr(config, "BASE_URL", config.DEFAULT_BASE_URL)
    monkeypatch.setattr(config, "PAGE_SIZE", 50)
    monkeypatch.setattr(config, "HTTP_TIMEOUT_SECONDS", 30.0)
    monkeypatch.setattr(config, "HTTP_MAX_RESPONSE_BYTES", 5_000_000)
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "HTTP_LOG_SAMPLE_RATE", 1.0)
    monkeypatch.setattr(config, "MCP_RESPONSE_MODE", "legacy")


def make_pages(items, size):
    """Split ``items`` into pages of ``size`` chained by cursors c1, c2, ..."""
    if not items:
        return [Page(results=[], next_cursor=None)]
    chunks = [items[i : i + size] for i in range(0, len(items), size)]
    return [
        Page(results=chunk, next_cursor=f"c{n + 1}" if n + 1 < len(chunks) else None)
        for n, chunk in enumerate(chunks)
    ]


class FakeApi:
    """In-memory RemoteApi.

    ``pages`` maps a kind to its scripted pages (or exceptions); the page for
    cursor ``cN`` is ``pages[kind][N]``. Every call is recorded in ``calls``.
    """

    def __init__(self, pages=None, items=None):
        self.pages = pages or {}
        self.items = items or {}
        self.calls = []

    def list_calls(self, kind=None):
        return [c for c in self.calls if c[0] == "list" and (kind is None or c[1] == kind)]

    async def list(self, kind, params=None, cursor=None):
        self.calls.append(("list", kind, params, cursor))
        script = self.pages.get(kind, [Page()])
        step = script[0 if cursor is None else int(cursor[1:])]
        if isinstance(step, Exception):
            raise step
        return step

    async def get(self, kind, item_id):
        self.calls.append(("get", kind, item_id))
        try:
            return self.items[(kind, item_id)]
        except KeyError:
            raise TodoistError("[ERROR] Not found. (status=404)") from None

    async def create(self, kind, payload):
        self.calls.append(("create", kind, payload))
        return {"id": "new-1", **{k: v for k, v in payload.items() if v is not None}}

    async def update(self, kind, item_id, payload):
        self.calls.append(("update", kind, item_id, payload))
        return {"id": item_id, **{k: v for k, v in payload.items() if v is not None}}

    async def delete(self, kind, item_id):
        self.calls.append(("delete", kind, item_id))
        return True

    async def close_task(self, task_id):
        self.calls.append(("close_task", task_id))
        return True

    async def reopen_task(self, task_id):
        self.calls.append(("reopen_task", task_id))
        return True

    async def move_tasks(self, task_ids, destination):
        self.calls.append(("move_tasks", task_ids, destination))
        return [{"id": task_id, **destination} for task_id in task_ids]

    async def quick_add_task(self, payload):
        self.calls.append(("quick_add_task", payload))
        return {"id": "q-1", "content": payload["text"]}


@pytest.fixture
def fake_api():
    return FakeApi()
