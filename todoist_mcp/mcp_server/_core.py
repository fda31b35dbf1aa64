"""Core helpers: _call dispatcher, response contract, ID validation, JSON text."""

from __future__ import annotations

import json

from todoist_mcp import SetupError, TodoistClient, TodoistError
from todoist_mcp.config import CONTRACT_SCHEMA_VERSION, MCP_RESPONSE_MODE


def _contract_error(message: str, error_type: str = "error") -> dict:
    """Return a stable MCP error envelope with legacy compatibility fields."""
    return {
        "ok": False,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        "type": error_type,  # legacy
        "error": message,  # legacy
        "error_detail": {
            "type": error_type,
            "message": message,
        },
    }


def _ensure_contract_dict(payload: dict) -> dict:
    """Add stable contract metadata to dict responses."""
    out = dict(payload)
    out.setdefault("schema_version", CONTRACT_SCHEMA_VERSION)
    if out.get("ok") is False:
        error_type = str(out.get("type", "error"))
        error_message = out.get("error", "Unknown error")
        if not isinstance(error_message, str):
            error_message = str(error_message)
            out["error"] = error_message
        out.setdefault(
            "error_detail",
            {
                "type": error_type,
                "message": error_message,
            },
        )
        return out
    out.setdefault("ok", True)
    return out


def _finalize_tool_result(result):
    """Finalize tool response based on configured MCP response mode.

    Modes:
        - legacy (default): dicts gain contract metadata (ok/schema_version)
          and keep their top-level keys.
        - envelope: always return {"ok", "schema_version", "data"} for success.
    """
    if isinstance(result, dict):
        normalized = _ensure_contract_dict(result)
        if normalized.get("ok") is False:
            return normalized
        if MCP_RESPONSE_MODE == "envelope":
            data = dict(normalized)
            data.pop("ok", None)
            data.pop("schema_version", None)
            return {
                "ok": True,
                "schema_version": CONTRACT_SCHEMA_VERSION,
                "data": data,
            }
        return normalized
    if MCP_RESPONSE_MODE == "envelope":
        return {
            "ok": True,
            "schema_version": CONTRACT_SCHEMA_VERSION,
            "data": result,
        }
    return result


_ALLOWED_METHODS = {
    "get_projects",
    "get_project",
    "create_project",
    "update_project",
    "delete_project",
    "get_tasks",
    "get_task",
    "create_task",
    "update_task",
    "delete_task",
    "close_task",
    "reopen_task",
    "move_tasks",
    "quick_add_task",
    "get_sections",
    "get_section",
    "create_section",
    "update_section",
    "delete_section",
    "get_labels",
    "get_label",
    "create_label",
    "update_label",
    "delete_label",
    "get_task_comments",
    "get_project_comments",
    "get_comment",
    "create_comment",
    "update_comment",
    "delete_comment",
}


def _validate_id(value: str, field: str = "id") -> str:
    """Validate that an identifier is a non-empty string. Raises TodoistError if not."""
    if not isinstance(value, str) or not value.strip():
        raise TodoistError(f"[ERROR] {field} must be a non-empty string, got: {value!r}")
    return value.strip()


def _validate_id_list(values: list[str], field: str = "ids") -> list[str]:
    """Validate a non-empty list of identifiers."""
    if not values:
        raise TodoistError(f"[ERROR] {field} must contain at least one ID.")
    return [_validate_id(v, field) for v in values]


def _validate_text(value: str, field: str) -> str:
    """Reject empty required text (names, task content, comment bodies)."""
    if not isinstance(value, str) or not value.strip():
        raise TodoistError(f"[ERROR] {field} is required.")
    return value


async def _call(client: TodoistClient, method_name: str, **kwargs):
    """Await a TodoistClient method, converting exceptions to error dicts."""
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}", "error")
    try:
        return await getattr(client, method_name)(**kwargs)
    except SetupError as e:
        return _contract_error(str(e), "setup")
    except TodoistError as e:
        return _contract_error(str(e), "error")
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}", "error")


def _is_error(result) -> bool:
    return isinstance(result, dict) and result.get("ok") is False


def _json_text(value) -> str:
    """Pretty JSON for resource bodies."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def _bool_result(result, success: str, failure: str, **extra) -> dict:
    """Finalize a boolean client result (delete/close/reopen)."""
    if _is_error(result):
        return _finalize_tool_result(result)
    if not result:
        return _finalize_tool_result(_contract_error(f"[ERROR] {failure}", "error"))
    return _finalize_tool_result({"message": success, **extra})
