"""
Typed models for remote API payloads.
"""

from dataclasses import dataclass, field

from todoist_mcp.exceptions import TodoistError


@dataclass(frozen=True)
class Page:
    """One batch of a cursor-paginated listing.

    ``next_cursor`` is None when the collection is exhausted; any other value
    is opaque and only ever handed back to the next list call.
    """

    results: list = field(default_factory=list)
    next_cursor: str | None = None

    @classmethod
    def from_response(cls, value, context):
        if not isinstance(value, dict):
            raise TodoistError(
                f"[ERROR] Unexpected {context} response shape: "
                f"expected JSON object, got {type(value).__name__}."
            )
        results = value.get("results")
        if not isinstance(results, list):
            raise TodoistError(f"[ERROR] {context} response is missing a 'results' list.")
        return cls(results=results, next_cursor=value.get("next_cursor"))
