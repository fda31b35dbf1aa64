"""Task tools: task CRUD, completion and listing (7 tools)."""

from __future__ import annotations

from typing import Literal

from todoist_mcp import TodoistClient, TodoistError
from todoist_mcp.mcp_server._core import (
    _bool_result,
    _call,
    _contract_error,
    _finalize_tool_result,
    _is_error,
    _validate_id,
    _validate_id_list,
    _validate_text,
)


def _task_message(verb, task):
    return f'Task "{task.get("content")}" (ID: {task.get("id")}) {verb}'


def register(mcp, client: TodoistClient):
    """Register all task tools with the FastMCP instance."""

    @mcp.tool()
    async def create_task(
        content: str,
        description: str | None = None,
        project_id: str | None = None,
        section_id: str | None = None,
        parent_id: str | None = None,
        order: int | None = None,
        labels: list[str] | None = None,
        priority: Literal[1, 2, 3, 4] | None = None,
        due_string: str | None = None,
        due_date: str | None = None,
        due_datetime: str | None = None,
        due_lang: str | None = None,
        assignee_id: str | None = None,
        duration: int | None = None,
        duration_unit: Literal["minute", "day"] | None = None,
    ) -> dict:
        """Create a task.

        Args:
            content: Task title (markdown allowed).
            parent_id: Parent task ID to create a subtask.
            order: Position among siblings.
            labels: Label names.
            priority: 1 (normal) to 4 (urgent).
            due_string: Natural language, e.g. 'tomorrow', 'every monday at 9am'.
            due_date: YYYY-MM-DD.
            due_datetime: RFC 3339; wins over due_date when both are given.
            due_lang: Language of due_string, e.g. 'en'.
            duration/duration_unit: Estimated time, e.g. 30 + 'minute'.

        Returns:
            Dict with message and the created task.
        """
        try:
            content = _validate_text(content, "content")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(
            client,
            "create_task",
            content=content,
            description=description,
            project_id=project_id,
            section_id=section_id,
            parent_id=parent_id,
            order=order,
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
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result({"message": _task_message("created", result), "task": result})

    @mcp.tool()
    async def update_task(
        task_id: str,
        content: str | None = None,
        description: str | None = None,
        labels: list[str] | None = None,
        priority: Literal[1, 2, 3, 4] | None = None,
        due_string: str | None = None,
        due_date: str | None = None,
        due_datetime: str | None = None,
        due_lang: str | None = None,
        assignee_id: str | None = None,
        duration: int | None = None,
        duration_unit: Literal["minute", "day"] | None = None,
    ) -> dict:
        """Update a task. Only the fields you pass are changed. To move a task use move_tasks."""
        try:
            task_id = _validate_id(task_id, "task_id")
            if content is not None:
                content = _validate_text(content, "content")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(
            client,
            "update_task",
            task_id=task_id,
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
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result({"message": _task_message("updated", result), "task": result})

    @mcp.tool()
    async def delete_task(task_id: str) -> dict:
        """Permanently delete a task and its subtasks. Cannot be undone."""
        try:
            task_id = _validate_id(task_id, "task_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "delete_task", task_id=task_id)
        return _bool_result(
            result,
            f"Task (ID: {task_id}) deleted",
            f"Failed to delete task (ID: {task_id})",
            task_id=task_id,
        )

    @mcp.tool()
    async def close_task(task_id: str) -> dict:
        """Complete a task. Recurring tasks move to their next occurrence."""
        try:
            task_id = _validate_id(task_id, "task_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "close_task", task_id=task_id)
        return _bool_result(
            result,
            f"Task (ID: {task_id}) completed",
            f"Failed to complete task (ID: {task_id})",
            task_id=task_id,
        )

    @mcp.tool()
    async def reopen_task(task_id: str) -> dict:
        """Reopen a completed task and return its current state."""
        try:
            task_id = _validate_id(task_id, "task_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        reopened = await _call(client, "reopen_task", task_id=task_id)
        if _is_error(reopened):
            return _finalize_tool_result(reopened)
        if not reopened:
            return _finalize_tool_result(
                _contract_error(f"[ERROR] Failed to reopen task (ID: {task_id})", "error")
            )
        task = await _call(client, "get_task", task_id=task_id)
        if _is_error(task):
            return _finalize_tool_result(task)
        return _finalize_tool_result({"message": _task_message("reopened", task), "task": task})

    @mcp.tool()
    async def get_tasks(
        project_id: str | None = None,
        section_id: str | None = None,
        parent_id: str | None = None,
        label: str | None = None,
        filter: str | None = None,
        lang: str | None = None,
        ids: list[str] | None = None,
    ) -> dict:
        """List active tasks. Follows pagination automatically.

        Args:
            label: Label name.
            filter: Todoist filter query, e.g. 'today | overdue', '#Work & p1'.
                When set, the other filters are ignored.
            lang: Language of the filter query.
            ids: Only these task IDs.

        Returns:
            Dict with message, count and tasks.
        """
        try:
            if ids is not None:
                ids = _validate_id_list(ids)
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(
            client,
            "get_tasks",
            project_id=project_id,
            section_id=section_id,
            parent_id=parent_id,
            label=label,
            filter=filter,
            lang=lang,
            ids=ids,
        )
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {"message": f"Retrieved {len(result)} task(s)", "count": len(result), "tasks": result}
        )

    @mcp.tool()
    async def get_task(task_id: str) -> dict:
        """Get one task with due date, labels, priority and hierarchy."""
        try:
            task_id = _validate_id(task_id, "task_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "get_task", task_id=task_id)
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result({"message": _task_message("fetched", result), "task": result})
