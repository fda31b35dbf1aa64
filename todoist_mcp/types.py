"""Typed definitions for request payloads and the remote API boundary.

The TypedDicts document the shape of dicts handed to the remote API.
They are optional; runtime behavior is unchanged (plain dicts).
"""

from __future__ import annotations

from typing import Any, Literal, Protocol, TypedDict

from todoist_mcp.models import Page

ViewStyle = Literal["list", "board", "calendar"]
DurationUnit = Literal["minute", "day"]
Priority = Literal[1, 2, 3, 4]

# Resource kinds understood by RemoteApi. "tasks/filter" is list-only.
PROJECTS = "projects"
TASKS = "tasks"
TASKS_FILTER = "tasks/filter"
SECTIONS = "sections"
LABELS = "labels"
COMMENTS = "comments"

# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class CreateProjectParams(TypedDict):
    name: str
    parent_id: str | None
    color: str | None
    is_favorite: bool | None
    view_style: ViewStyle | None


class UpdateProjectParams(TypedDict):
    name: str | None
    color: str | None
    is_favorite: bool | None
    view_style: ViewStyle | None


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


class GetTasksParams(TypedDict, total=False):
    """Filters for the plain task listing."""

    project_id: str | None
    section_id: str | None
    parent_id: str | None
    label: str | None
    ids: list[str] | None


class FilterTasksParams(TypedDict):
    """Filters for the filter-expression task listing."""

    query: str
    lang: str | None


class UpdateTaskParams(TypedDict):
    content: str | None
    description: str | None
    labels: list[str] | None
    priority: Priority | None
    due_string: str | None
    due_date: str | None
    due_datetime: str | None
    due_lang: str | None
    assignee_id: str | None
    duration: int | None
    duration_unit: DurationUnit | None


class CreateTaskParams(UpdateTaskParams):
    project_id: str | None
    section_id: str | None
    parent_id: str | None
    order: int | None


class MoveDestination(TypedDict, total=False):
    """Exactly one key is present."""

    project_id: str
    section_id: str
    parent_id: str


class QuickAddTaskParams(TypedDict):
    text: str
    note: str | None
    reminder: str | None
    auto_reminder: bool | None
    meta: bool | None


# ---------------------------------------------------------------------------
# Sections / labels / comments
# ---------------------------------------------------------------------------


class CreateSectionParams(TypedDict):
    name: str
    project_id: str
    order: int | None


class LabelParams(TypedDict):
    name: str | None
    color: str | None
    order: int | None
    is_favorite: bool | None


class Attachment(TypedDict, total=False):
    file_url: str
    file_name: str
    file_type: str
    resource_type: str


class CreateCommentParams(TypedDict):
    content: str
    task_id: str | None
    project_id: str | None
    attachment: Attachment | None


# ---------------------------------------------------------------------------
# Remote API boundary
# ---------------------------------------------------------------------------


class RemoteApi(Protocol):
    """Verbs the client facade needs from the remote task-management API.

    ``kind`` is one of the resource kind constants above. Implemented over
    HTTP by :class:`todoist_mcp.api.TodoistApi`; tests use in-memory fakes.
    """

    async def list(
        self, kind: str, params: dict[str, Any] | None = None, cursor: str | None = None
    ) -> Page: ...

    async def get(self, kind: str, item_id: str) -> dict[str, Any]: ...

    async def create(self, kind: str, payload: dict[str, Any]) -> dict[str, Any]: ...

    async def update(self, kind: str, item_id: str, payload: dict[str, Any]) -> dict[str, Any]: ...

    async def delete(self, kind: str, item_id: str) -> bool: ...

    async def close_task(self, task_id: str) -> bool: ...

    async def reopen_task(self, task_id: str) -> bool: ...

    async def move_tasks(
        self, task_ids: list[str], destination: MoveDestination
    ) -> list[dict[str, Any]]: ...

    async def quick_add_task(self, payload: QuickAddTaskParams) -> dict[str, Any]: ...
