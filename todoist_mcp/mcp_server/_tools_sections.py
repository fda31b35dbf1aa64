"""Section tools: section CRUD within a project (5 tools)."""

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
    """Register all section tools with the FastMCP instance."""

    @mcp.tool()
    async def create_section(name: str, project_id: str, order: int | None = None) -> dict:
        """Create a section inside a project.

        Args:
            name: Section name.
            project_id: Project that owns the section.
            order: Position among the project's sections.
        """
        try:
            name = _validate_text(name, "name")
            project_id = _validate_id(project_id, "project_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(
            client, "create_section", name=name, project_id=project_id, order=order
        )
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {
                "message": f'Section "{result.get("name")}" created with ID: {result.get("id")}',
                "section": result,
            }
        )

    @mcp.tool()
    async def update_section(section_id: str, name: str) -> dict:
        """Rename a section."""
        try:
            section_id = _validate_id(section_id, "section_id")
            name = _validate_text(name, "name")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "update_section", section_id=section_id, name=name)
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {
                "message": f'Section "{result.get("name")}" (ID: {result.get("id")}) updated',
                "section": result,
            }
        )

    @mcp.tool()
    async def delete_section(section_id: str) -> dict:
        """Delete a section and every task in it. Cannot be undone."""
        try:
            section_id = _validate_id(section_id, "section_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "delete_section", section_id=section_id)
        return _bool_result(
            result,
            f"Section (ID: {section_id}) deleted",
            f"Failed to delete section (ID: {section_id})",
            section_id=section_id,
        )

    @mcp.tool()
    async def get_sections(project_id: str) -> dict:
        """List every section of a project. Follows pagination automatically."""
        try:
            project_id = _validate_id(project_id, "project_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "get_sections", project_id=project_id)
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {"message": f"Retrieved {len(result)} section(s)", "sections": result}
        )

    @mcp.tool()
    async def get_section(section_id: str) -> dict:
        """Get one section by ID."""
        try:
            section_id = _validate_id(section_id, "section_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "get_section", section_id=section_id)
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {
                "message": f'Retrieved section "{result.get("name")}" (ID: {result.get("id")})',
                "section": result,
            }
        )
