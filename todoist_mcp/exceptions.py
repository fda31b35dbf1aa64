"""
todoist-mcp exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class TodoistError(Exception):
    """Exit code 1: validation, not-found, network, parse and remote errors."""

    exit_code = 1


class SetupError(TodoistError):
    """Exit code 2: missing or rejected API token."""

    exit_code = 2


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        super().__init__(f"HTTP {code}: {reason}")
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
