"""Comment tools: comments on tasks and projects (6 tools)."""

from __future__ import annotations

from todoist_mcp import TodoistClient, TodoistError
from todoist_mcp.mcp_server._core import (
    _bool_result,
    _call,
    _contract_error,
    _finalize_tool_result,
    _is_error,
    _validate_id,
    _validate_text,
)


def register(mcp, client: TodoistClient):
    """Register all comment tools with the FastMCP instance."""

    @mcp.tool()
    async def create_comment(
        content: str,
        task_id: str | None = None,
        project_id: str | None = None,
        attachment: dict | None = None,
    ) -> dict:
        """Add a comment to a task or a project (exactly one of task_id/project_id).

        Args:
            content: Comment text, markdown supported.
            task_id: Task to comment on.
            project_id: Project to comment on.
            attachment: Optional file, {"file_url", "file_name", "file_type",
                "resource_type"}. file_url is required.
        """
        try:
            content = _validate_text(content, "content")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(
            client,
            "create_comment",
            content=content,
            task_id=task_id,
            project_id=project_id,
            attachment=attachment,
        )
        if _is_error(result):
            return _finalize_tool_result(result)
        target = f"task {task_id}" if task_id else f"project {project_id}"
        return _finalize_tool_result(
            {
                "message": f"Comment (ID: {result.get('id')}) added to {target}",
                "comment": result,
            }
        )

    @mcp.tool()
    async def update_comment(comment_id: str, content: str) -> dict:
        """Replace the text of a comment."""
        try:
            comment_id = _validate_id(comment_id, "comment_id")
            content = _validate_text(content, "content")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "update_comment", comment_id=comment_id, content=content)
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {"message": f"Comment (ID: {result.get('id')}) updated", "comment": result}
        )

    @mcp.tool()
    async def delete_comment(comment_id: str) -> dict:
        """Delete a comment."""
        try:
            comment_id = _validate_id(comment_id, "comment_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "delete_comment", comment_id=comment_id)
        return _bool_result(
            result,
            f"Comment (ID: {comment_id}) deleted",
            f"Failed to delete comment (ID: {comment_id})",
            comment_id=comment_id,
        )

    @mcp.tool()
    async def get_comment(comment_id: str) -> dict:
        """Get one comment by ID."""
        try:
            comment_id = _validate_id(comment_id, "comment_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "get_comment", comment_id=comment_id)
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {"message": f"Retrieved comment (ID: {result.get('id')})", "comment": result}
        )

    @mcp.tool()
    async def get_task_comments(task_id: str) -> dict:
        """List every comment on a task, oldest first. Follows pagination automatically."""
        try:
            task_id = _validate_id(task_id, "task_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "get_task_comments", task_id=task_id)
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {
                "message": f"Retrieved {len(result)} comment(s) for task {task_id}",
                "comments": result,
            }
        )

    @mcp.tool()
    async def get_project_comments(project_id: str) -> dict:
        """List every comment on a project. Follows pagination automatically."""
        try:
            project_id = _validate_id(project_id, "project_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "get_project_comments", project_id=project_id)
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {
                "message": f"Retrieved {len(result)} comment(s) for project {project_id}",
                "comments": result,
            }
        )
