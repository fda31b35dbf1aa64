"""Read-only resources: projects and active tasks as JSON documents.

Unlike tools, resource handlers let TodoistError propagate; FastMCP turns
it into a resource read error for the caller.
"""

from __future__ import annotations

from todoist_mcp import TodoistClient
from todoist_mcp.mcp_server._core import _json_text, _validate_id

_JSON = "application/json"


def register(mcp, client: TodoistClient):
    """Register project and task resources with the FastMCP instance."""

    @mcp.resource(
        "todoist://projects",
        name="projects",
        description="Every Todoist project",
        mime_type=_JSON,
    )
    async def projects_resource() -> str:
        return _json_text(await client.get_projects())

    @mcp.resource(
        "todoist://projects/{project_id}",
        name="project",
        description="One Todoist project by ID",
        mime_type=_JSON,
    )
    async def project_resource(project_id: str) -> str:
        return _json_text(await client.get_project(_validate_id(project_id, "project_id")))

    @mcp.resource(
        "todoist://tasks",
        name="tasks",
        description="Every active Todoist task",
        mime_type=_JSON,
    )
    async def tasks_resource() -> str:
        return _json_text(await client.get_tasks())

    @mcp.resource(
        "todoist://tasks/{task_id}",
        name="task",
        description="One Todoist task by ID",
        mime_type=_JSON,
    )
    async def task_resource(task_id: str) -> str:
        return _json_text(await client.get_task(_validate_id(task_id, "task_id")))
