"""Advanced task tools: natural-language quick add and batch move (2 tools)."""

from __future__ import annotations

from todoist_mcp import TodoistClient, TodoistError
from todoist_mcp.mcp_server._core import (
    _call,
    _contract_error,
    _finalize_tool_result,
    _is_error,
    _validate_id_list,
    _validate_text,
)


def register(mcp, client: TodoistClient):
    """Register quick-add and move tools with the FastMCP instance."""

    @mcp.tool()
    async def quick_add_task(
        text: str,
        note: str | None = None,
        reminder: str | None = None,
        auto_reminder: bool | None = None,
        meta: bool | None = None,
    ) -> dict:
        """Create a task from one line of natural language.

        Todoist parses dates, projects (#Work), labels (@errand),
        sections (/Backlog), assignees (+name) and priorities (p1..p4)
        out of the text, e.g. 'Pay rent every 1st #Home p1'.

        Args:
            text: The quick-add line.
            note: Comment attached to the new task.
            reminder: Reminder in natural language, e.g. 'tomorrow 9am'.
            auto_reminder: Add the user's default reminder when a due time is set.
            meta: Include parsing metadata in the response.
        """
        try:
            text = _validate_text(text, "text")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(
            client,
            "quick_add_task",
            text=text,
            note=note,
            reminder=reminder,
            auto_reminder=auto_reminder,
            meta=meta,
        )
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {
                "message": f'Task "{result.get("content")}" created with ID: {result.get("id")}',
                "task": result,
            }
        )

    @mcp.tool()
    async def move_tasks(
        task_ids: list[str],
        project_id: str | None = None,
        section_id: str | None = None,
        parent_id: str | None = None,
    ) -> dict:
        """Move one or more tasks. Give exactly one destination.

        Args:
            task_ids: Tasks to move.
            project_id: Destination project.
            section_id: Destination section.
            parent_id: Destination parent task (tasks become subtasks).

        Tasks are moved in order; the first failure stops the batch.
        """
        try:
            task_ids = _validate_id_list(task_ids, "task_ids")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(
            client,
            "move_tasks",
            task_ids=task_ids,
            project_id=project_id,
            section_id=section_id,
            parent_id=parent_id,
        )
        if _is_error(result):
            return _finalize_tool_result(result)
        destination = (
            f"project {project_id}"
            if project_id
            else f"section {section_id}"
            if section_id
            else f"parent task {parent_id}"
        )
        return _finalize_tool_result(
            {
                "message": f"Moved {len(result)} task(s) to {destination}",
                "count": len(result),
                "tasks": result,
            }
        )
