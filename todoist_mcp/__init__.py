"""todoist-mcp: MCP server exposing Todoist projects, tasks, sections, labels and comments."""

from todoist_mcp.api import TodoistApi
from todoist_mcp.client import TodoistClient
from todoist_mcp.config import VERSION
from todoist_mcp.exceptions import SetupError, TodoistError
from todoist_mcp.models import Page
from todoist_mcp.types import RemoteApi

__all__ = [
    "VERSION",
    "Page",
    "RemoteApi",
    "SetupError",
    "TodoistApi",
    "TodoistClient",
    "TodoistError",
]
