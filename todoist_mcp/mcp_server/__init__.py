"""MCP server exposing TodoistClient methods as tools and resources.

Package structure:
  __init__.py          : create_server(), registers every module
  _core.py             : _call dispatcher, response contract, ID validation
  _tools_projects.py   : 5 project tools
  _tools_tasks.py      : 7 task tools
  _tools_advanced.py   : quick_add_task, move_tasks
  _tools_sections.py   : 5 section tools
  _tools_labels.py     : 5 label tools
  _tools_comments.py   : 6 comment tools
  _resources.py        : todoist://projects[/{project_id}], todoist://tasks[/{task_id}]

Run: todoist-mcp  (or python -m todoist_mcp)
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from todoist_mcp import TodoistClient
from todoist_mcp.mcp_server import (
    _resources,
    _tools_advanced,
    _tools_comments,
    _tools_labels,
    _tools_projects,
    _tools_sections,
    _tools_tasks,
)

SERVER_NAME = "todoist"

INSTRUCTIONS = (
    "Todoist task management tools. "
    "List tools (get_projects, get_tasks, get_sections, get_labels, get_*_comments) "
    "already follow every page; never ask for a cursor.\n"
    "get_tasks accepts a Todoist filter query (e.g. 'today | overdue', '#Work & p1'); "
    "when given, the other get_tasks filters are ignored.\n"
    "Priority: 1 normal .. 4 urgent. Give due_datetime or due_date, not both "
    "(due_datetime wins).\n"
    "move_tasks needs exactly one of project_id, section_id, parent_id. "
    "create_comment needs exactly one of task_id, project_id.\n"
    "Results carry ok/schema_version; on failure read 'error'."
)

_MODULES = [
    _tools_projects,
    _tools_tasks,
    _tools_advanced,
    _tools_sections,
    _tools_labels,
    _tools_comments,
    _resources,
]


def create_server(client: TodoistClient) -> FastMCP:
    """Build a FastMCP server whose tools and resources are bound to ``client``."""
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)
    for mod in _MODULES:
        mod.register(mcp, client)
    return mcp


__all__ = ["INSTRUCTIONS", "SERVER_NAME", "create_server"]
