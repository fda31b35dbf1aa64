"""Label tools: personal label CRUD (5 tools)."""

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
    """Register all label tools with the FastMCP instance."""

    @mcp.tool()
    async def create_label(
        name: str,
        color: str | None = None,
        order: int | None = None,
        is_favorite: bool | None = None,
    ) -> dict:
        """Create a personal label. Tasks reference labels by name."""
        try:
            name = _validate_text(name, "name")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(
            client, "create_label", name=name, color=color, order=order, is_favorite=is_favorite
        )
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {
                "message": f'Label "{result.get("name")}" created with ID: {result.get("id")}',
                "label": result,
            }
        )

    @mcp.tool()
    async def update_label(
        label_id: str,
        name: str | None = None,
        color: str | None = None,
        order: int | None = None,
        is_favorite: bool | None = None,
    ) -> dict:
        """Update a label. Renaming also renames it on every task that uses it."""
        try:
            label_id = _validate_id(label_id, "label_id")
            if name is not None:
                name = _validate_text(name, "name")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(
            client,
            "update_label",
            label_id=label_id,
            name=name,
            color=color,
            order=order,
            is_favorite=is_favorite,
        )
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {
                "message": f'Label "{result.get("name")}" (ID: {result.get("id")}) updated',
                "label": result,
            }
        )

    @mcp.tool()
    async def delete_label(label_id: str) -> dict:
        """Delete a label and remove it from every task."""
        try:
            label_id = _validate_id(label_id, "label_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "delete_label", label_id=label_id)
        return _bool_result(
            result,
            f"Label (ID: {label_id}) deleted",
            f"Failed to delete label (ID: {label_id})",
            label_id=label_id,
        )

    @mcp.tool()
    async def get_labels() -> dict:
        """List every personal label. Follows pagination automatically."""
        result = await _call(client, "get_labels")
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {"message": f"Retrieved {len(result)} label(s)", "labels": result}
        )

    @mcp.tool()
    async def get_label(label_id: str) -> dict:
        """Get one label by ID."""
        try:
            label_id = _validate_id(label_id, "label_id")
        except TodoistError as e:
            return _finalize_tool_result(_contract_error(str(e), "error"))
        result = await _call(client, "get_label", label_id=label_id)
        if _is_error(result):
            return _finalize_tool_result(result)
        return _finalize_tool_result(
            {
                "message": f'Retrieved label "{result.get("name")}" (ID: {result.get("id")})',
                "label": result,
            }
        )
