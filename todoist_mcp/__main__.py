"""Entry point for ``python -m todoist_mcp``."""

from todoist_mcp.cli import main

main()
