"""Project tools: project CRUD (5 tools)."""

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
    _validate_text,
)


def register(mcp, client: TodoistClient):
    """Register all project tools with the FastMCP instance."""

    @mcp.tool()
    async def create_project(
        name: str,
        parent_id: str | None = None,
        color: str | None = None,
        is_favorite: bool | None = None,
        view_style: Literal["list", "board", "calendar"] | None = None,
    ) -> dict:
        """Create a new Todoist project.

        Args:
            name: Project name.
            parent_id: Parent project ID to nest under.
            color: Color key, e.g. 'berry_red', 'blue'.
            is_favorite: Mark the project as favorite.
            view_style: list, board or calendar.

        Returns:
            Dict with message and the created project.
        """
        try:
            name = _validate_text(name, "name")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(
            client,
            "create_project",
            name=name,
            parent_id=parent_id,
            color=color,
            is_favorite=is_favorite,
            view_style=view_style,
        )
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {
                "message": f'Project "{result.get("name")}" created with ID: {result.get("id")}',
                "project": result,
            }
        )

    @mcp.tool()
    async def update_project(
        project_id: str,
        name: str | None = None,
        color: str | None = None,
        is_favorite: bool | None = None,
        view_style: Literal["list", "board", "calendar"] | None = None,
    ) -> dict:
        """Update a project. Only the fields you pass are changed."""
        try:
            project_id = _validate_id(project_id, "project_id")
            if name is not None:
                name = _validate_text(name, "name")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(
            client,
            "update_project",
            project_id=project_id,
            name=name,
            color=color,
            is_favorite=is_favorite,
            view_style=view_style,
        )
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {
                "message": f'Project "{result.get("name")}" (ID: {result.get("id")}) updated',
                "project": result,
            }
        )

    @mcp.tool()
    async def delete_project(project_id: str) -> dict:
        """Permanently delete a project with its sections, tasks and comments. Cannot be undone."""
        try:
            project_id = _validate_id(project_id, "project_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "delete_project", project_id=project_id)
        return _bool_result(
            result,
            f"Project (ID: {project_id}) deleted",
            f"Failed to delete project (ID: {project_id})",
            project_id=project_id,
        )

    @mcp.tool()
    async def get_projects() -> dict:
        """List all projects (personal and workspace). Follows pagination automatically."""
        result = await _call(client, "get_projects")
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {"message": f"Retrieved {len(result)} project(s)", "projects": result}
        )

    @mcp.tool()
    async def get_project(project_id: str) -> dict:
        """Get one project by ID."""
        try:
            project_id = _validate_id(project_id, "project_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "get_project", project_id=project_id)
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {
                "message": f'Retrieved project "{result.get("name")}" (ID: {result.get("id")})',
                "project": result,
            }
        )
