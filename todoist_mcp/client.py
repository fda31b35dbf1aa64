"""
TodoistClient: public Python API for Todoist projects, tasks, sections,
labels and comments.

Thin facade over a RemoteApi: it turns cursor-paginated listings into
"fetch everything" calls and reconciles tool parameters with the remote
API's calling conventions. All methods are coroutines returning plain
dicts/lists suitable for JSON serialization. Raises TodoistError/SetupError
on failure.
"""

from __future__ import annotations

from typing import Any

from todoist_mcp.exceptions import TodoistError
from todoist_mcp.types import (
    COMMENTS,
    LABELS,
    PROJECTS,
    SECTIONS,
    TASKS,
    TASKS_FILTER,
    Attachment,
    CreateCommentParams,
    CreateProjectParams,
    CreateSectionParams,
    CreateTaskParams,
    DurationUnit,
    FilterTasksParams,
    GetTasksParams,
    LabelParams,
    Priority,
    RemoteApi,
    UpdateProjectParams,
    UpdateTaskParams,
    ViewStyle,
)

# ---------------------------------------------------------------------------
# Parameter reconciliation helpers
# ---------------------------------------------------------------------------


def _reconcile_due(payload):
    """Drop due_date when due_datetime is also given (datetime wins)."""
    if payload.get("due_datetime") is not None and payload.get("due_date") is not None:
        payload["due_date"] = None
    return payload


def _task_update_payload(
    content=None,
    description=None,
    labels=None,
    priority=None,
    due_string=None,
    due_date=None,
    due_datetime=None,
    due_lang=None,
    assignee_id=None,
    duration=None,
    duration_unit=None,
) -> UpdateTaskParams:
    """Build a task payload with every optional key present (None = absent)."""
    payload: UpdateTaskParams = {
        "content": content,
        "description": description,
        "labels": labels,
        "priority": priority,
        "due_string": due_string,
        "due_date": due_date,
        "due_datetime": due_datetime,
        "due_lang": due_lang,
        "assignee_id": assignee_id,
        "duration": duration,
        "duration_unit": duration_unit,
    }
    return _reconcile_due(payload)  # type: ignore[return-value]


def _exactly_one(**candidates):
    """Return the single (name, value) pair that is set, or None."""
    given = [(k, v) for k, v in candidates.items() if v]
    if len(given) != 1:
        return None
    return given[0]


# ---------------------------------------------------------------------------
# TodoistClient
# ---------------------------------------------------------------------------


class TodoistClient:
    """Public API surface for Todoist.

    The remote API is passed in explicitly; construct one client at process
    start and hand it to whatever dispatches operations.
    """

    def __init__(self, api: RemoteApi):
        self._api = api

    # -------------------------------------------------------------------
    # Pagination
    # -------------------------------------------------------------------

    async def _fetch_all(
        self, kind: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Drive a cursor-paginated listing to completion.

        The first call always happens, even for an empty collection. Filter
        params are sent unchanged with every page. Items keep page-arrival
        order. Any page failure propagates and the partial result is dropped.
        """
        items: list[dict[str, Any]] = []
        cursor = None
        while True:
            page = await self._api.list(kind, params, cursor)
            items.extend(page.results)
            cursor = page.next_cursor
            if cursor is None:
                return items

    # -------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------

    async def get_projects(self) -> list[dict[str, Any]]:
        """List every project (personal and workspace)."""
        return await self._fetch_all(PROJECTS)

    async def get_project(self, project_id: str) -> dict[str, Any]:
        return await self._api.get(PROJECTS, project_id)

    async def create_project(
        self,
        name: str,
        *,
        parent_id: str | None = None,
        color: str | None = None,
        is_favorite: bool | None = None,
        view_style: ViewStyle | None = None,
    ) -> dict[str, Any]:
        """Create a project.

        Args:
            name: Project name.
            parent_id: Parent project ID for nesting.
            color: Color key, e.g. 'berry_red'.
            is_favorite: Mark as favorite.
            view_style: list, board or calendar.

        Returns:
            The created project dict.
        """
        payload: CreateProjectParams = {
            "name": name,
            "parent_id": parent_id,
            "color": color,
            "is_favorite": is_favorite,
            "view_style": view_style,
        }
        return await self._api.create(PROJECTS, payload)  # type: ignore[arg-type]

    async def update_project(
        self,
        project_id: str,
        *,
        name: str | None = None,
        color: str | None = None,
        is_favorite: bool | None = None,
        view_style: ViewStyle | None = None,
    ) -> dict[str, Any]:
        """Update a project. Fields left as None are unchanged."""
        payload: UpdateProjectParams = {
            "name": name,
            "color": color,
            "is_favorite": is_favorite,
            "view_style": view_style,
        }
        return await self._api.update(PROJECTS, project_id, payload)  # type: ignore[arg-type]

    async def delete_project(self, project_id: str) -> bool:
        return await self._api.delete(PROJECTS, project_id)

    # -------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------

    async def get_tasks(
        self,
        *,
        project_id: str | None = None,
        section_id: str | None = None,
        parent_id: str | None = None,
        label: str | None = None,
        filter: str | None = None,
        lang: str | None = None,
        ids: list[str] | None = None,
    ) -> list[dict[str, Any]]:
        """List active tasks, following every page.

        A filter expression (Todoist filter syntax, e.g. 'today | overdue')
        switches to the filter listing, which takes ``query``/``lang`` and
        ignores the other filters.

        Returns:
            list of task dicts in the order the API returned them.
        """
        if filter:
            query: FilterTasksParams = {"query": filter, "lang": lang}
            return await self._fetch_all(TASKS_FILTER, query)  # type: ignore[arg-type]
        params: GetTasksParams = {
            "project_id": project_id,
            "section_id": section_id,
            "parent_id": parent_id,
            "label": label,
            "ids": ids,
        }
        if not any(v for v in params.values()):
            return await self._fetch_all(TASKS)
        return await self._fetch_all(TASKS, params)

    async def get_task(self, task_id: str) -> dict[str, Any]:
        return await self._api.get(TASKS, task_id)

    async def create_task(
        self,
        content: str,
        *,
        description: str | None = None,
        project_id: str | None = None,
        section_id: str | None = None,
        parent_id: str | None = None,
        order: int | None = None,
        labels: list[str] | None = None,
        priority: Priority | None = None,
        due_string: str | None = None,
        due_date: str | None = None,
        due_datetime: str | None = None,
        due_lang: str | None = None,
        assignee_id: str | None = None,
        duration: int | None = None,
        duration_unit: DurationUnit | None = None,
    ) -> dict[str, Any]:
        """Create a task.

        When both ``due_date`` and ``due_datetime`` are given, only
        ``due_datetime`` is sent.

        Returns:
            The created task dict.
        """
        payload: CreateTaskParams = {
            **_task_update_payload(
                content=content,
                description=description,
                labels=labels,
                priority=priority,
                due_string=due_string,
                due_date=due_date,
                due_datetime=due_datetime,
                due_lang=due_lang,
                assignee_id=assignee_id,
                duration=duration,
                duration_unit=duration_unit,
            ),
            "project_id": project_id,
            "section_id": section_id,
            "parent_id": parent_id,
            "order": order,
        }
        return await self._api.create(TASKS, payload)  # type: ignore[arg-type]

    async def update_task(
        self,
        task_id: str,
        *,
        content: str | None = None,
        description: str | None = None,
        labels: list[str] | None = None,
        priority: Priority | None = None,
        due_string: str | None = None,
        due_date: str | None = None,
        due_datetime: str | None = None,
        due_lang: str | None = None,
        assignee_id: str | None = None,
        duration: int | None = None,
        duration_unit: DurationUnit | None = None,
    ) -> dict[str, Any]:
        """Update a task. Fields left as None are unchanged."""
        payload = _task_update_payload(
            content=content,
            description=description,
            labels=labels,
            priority=priority,
            due_string=due_string,
            due_date=due_date,
            due_datetime=due_datetime,
            due_lang=due_lang,
            assignee_id=assignee_id,
            duration=duration,
            duration_unit=duration_unit,
        )
        return await self._api.update(TASKS, task_id, payload)  # type: ignore[arg-type]

    async def delete_task(self, task_id: str) -> bool:
        return await self._api.delete(TASKS, task_id)

    async def close_task(self, task_id: str) -> bool:
        return await self._api.close_task(task_id)

    async def reopen_task(self, task_id: str) -> bool:
        return await self._api.reopen_task(task_id)

    async def move_tasks(
        self,
        task_ids: list[str],
        *,
        project_id: str | None = None,
        section_id: str | None = None,
        parent_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """Move tasks to exactly one destination: a project, a section or a parent task.

        Returns:
            list of moved task dicts.
        """
        if not task_ids:
            raise TodoistError("[ERROR] At least one task ID is required.")
        destination = _exactly_one(
            project_id=project_id, section_id=section_id, parent_id=parent_id
        )
        if destination is None:
            raise TodoistError(
                "[ERROR] Exactly one of project_id, section_id or parent_id must be specified."
            )
        key, value = destination
        return await self._api.move_tasks(task_ids, {key: value})  # type: ignore[misc]

    async def quick_add_task(
        self,
        text: str,
        *,
        note: str | None = None,
        reminder: str | None = None,
        auto_reminder: bool | None = None,
        meta: bool | None = None,
    ) -> dict[str, Any]:
        """Create a task from natural language ('Pay rent tomorrow #Home p1')."""
        return await self._api.quick_add_task(
            {
                "text": text,
                "note": note,
                "reminder": reminder,
                "auto_reminder": auto_reminder,
                "meta": meta,
            }
        )

    # -------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------

    async def get_sections(self, project_id: str) -> list[dict[str, Any]]:
        return await self._fetch_all(SECTIONS, {"project_id": project_id})

    async def get_section(self, section_id: str) -> dict[str, Any]:
        return await self._api.get(SECTIONS, section_id)

    async def create_section(
        self, name: str, project_id: str, *, order: int | None = None
    ) -> dict[str, Any]:
        payload: CreateSectionParams = {"name": name, "project_id": project_id, "order": order}
        return await self._api.create(SECTIONS, payload)  # type: ignore[arg-type]

    async def update_section(self, section_id: str, name: str) -> dict[str, Any]:
        return await self._api.update(SECTIONS, section_id, {"name": name})

    async def delete_section(self, section_id: str) -> bool:
        return await self._api.delete(SECTIONS, section_id)

    # -------------------------------------------------------------------
    # Labels
    # -------------------------------------------------------------------

    async def get_labels(self) -> list[dict[str, Any]]:
        """List every personal label."""
        return await self._fetch_all(LABELS)

    async def get_label(self, label_id: str) -> dict[str, Any]:
        return await self._api.get(LABELS, label_id)

    async def create_label(
        self,
        name: str,
        *,
        color: str | None = None,
        order: int | None = None,
        is_favorite: bool | None = None,
    ) -> dict[str, Any]:
        payload: LabelParams = {
            "name": name,
            "color": color,
            "order": order,
            "is_favorite": is_favorite,
        }
        return await self._api.create(LABELS, payload)  # type: ignore[arg-type]

    async def update_label(
        self,
        label_id: str,
        *,
        name: str | None = None,
        color: str | None = None,
        order: int | None = None,
        is_favorite: bool | None = None,
    ) -> dict[str, Any]:
        payload: LabelParams = {
            "name": name,
            "color": color,
            "order": order,
            "is_favorite": is_favorite,
        }
        return await self._api.update(LABELS, label_id, payload)  # type: ignore[arg-type]

    async def delete_label(self, label_id: str) -> bool:
        return await self._api.delete(LABELS, label_id)

    # -------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------

    async def get_task_comments(self, task_id: str) -> list[dict[str, Any]]:
        return await self._fetch_all(COMMENTS, {"task_id": task_id})

    async def get_project_comments(self, project_id: str) -> list[dict[str, Any]]:
        return await self._fetch_all(COMMENTS, {"project_id": project_id})

    async def get_comment(self, comment_id: str) -> dict[str, Any]:
        return await self._api.get(COMMENTS, comment_id)

    async def create_comment(
        self,
        content: str,
        *,
        task_id: str | None = None,
        project_id: str | None = None,
        attachment: Attachment | None = None,
    ) -> dict[str, Any]:
        """Comment on exactly one task or project.

        Args:
            content: Comment text (markdown).
            task_id: Task to comment on (mutually exclusive with project_id).
            project_id: Project to comment on (mutually exclusive with task_id).
            attachment: Optional file attachment; ``file_url`` is required.

        Returns:
            The created comment dict.
        """
        if not task_id and not project_id:
            raise TodoistError("[ERROR] Either task_id or project_id must be provided.")
        if task_id and project_id:
            raise TodoistError(
                "[ERROR] Cannot specify both task_id and project_id - they are mutually exclusive."
            )
        if attachment is not None and not attachment.get("file_url"):
            raise TodoistError("[ERROR] file_url is required when attachment is provided.")
        payload: CreateCommentParams = {
            "content": content,
            "task_id": task_id,
            "project_id": project_id,
            "attachment": attachment,
        }
        return await self._api.create(COMMENTS, payload)  # type: ignore[arg-type]

    async def update_comment(self, comment_id: str, content: str) -> dict[str, Any]:
        return await self._api.update(COMMENTS, comment_id, {"content": content})

    async def delete_comment(self, comment_id: str) -> bool:
        return await self._api.delete(COMMENTS, comment_id)
