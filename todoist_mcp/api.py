"""
HTTP request layer, security helpers, and the Todoist REST API v1 boundary.
"""

from __future__ import annotations

import hashlib
import json
import re
import sys
import time
import uuid
from typing import Any

import httpx

from todoist_mcp import config
from todoist_mcp.exceptions import HTTPError, SetupError, TodoistError
from todoist_mcp.models import Page
from todoist_mcp.types import TASKS, MoveDestination, QuickAddTaskParams

# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


def _compact(data):
    """Drop None values so explicitly-absent fields never reach the wire."""
    return {key: value for key, value in (data or {}).items() if value is not None}


def _query_params(params):
    """Encode list filters (e.g. ids) as comma-separated query values."""
    out = {}
    for key, value in _compact(params).items():
        if isinstance(value, (list, tuple)):
            out[key] = ",".join(str(v) for v in value)
        elif isinstance(value, bool):
            out[key] = "true" if value else "false"
        else:
            out[key] = value
    return out


# ---------------------------------------------------------------------------
# Structured logging
# ---------------------------------------------------------------------------


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _is_sampled_request(request_id):
    """Decide if a request should be logged based on sample rate."""
    rate = config.HTTP_LOG_SAMPLE_RATE
    if rate <= 0:
        return False
    if rate >= 1:
        return True
    if not request_id:
        return False
    digest = hashlib.sha256(request_id.encode("utf-8")).digest()
    bucket = int.from_bytes(digest[:4], "big") / 4294967295.0
    return bucket < rate


def _error_envelope(message, status=None, request_id=None, detail=None):
    """Build a consistent, display-safe HTTP error message."""
    meta = []
    if status is not None:
        meta.append(f"status={status}")
    if request_id:
        meta.append(f"request_id={request_id}")
    suffix = f" ({', '.join(meta)})" if meta else ""
    body = f"[ERROR] {message}{suffix}"
    if detail:
        body += f"\n{detail}"
    return body


def _raise_for_http_error(e: HTTPError, request_id: str | None):
    """Translate an HTTPError into the project exception hierarchy."""
    if e.code in (401, 403):
        raise SetupError(
            "[TOKEN_INVALID] Todoist rejected the API token. "
            "Copy a fresh token from Todoist Settings > Integrations > Developer "
            "and set TODOIST_API_TOKEN."
        ) from e
    if e.code == 404:
        raise TodoistError(
            _error_envelope("Not found.", status=404, request_id=request_id)
        ) from e
    if e.code == 429:
        raise TodoistError(
            "[ERROR] Rate limit reached on the Todoist API. Wait a moment and try again."
        ) from e
    server_req_id = e.headers.get("X-Request-Id") if e.headers else None
    raise TodoistError(
        _error_envelope(
            f"HTTP {e.code}: {e.reason}",
            status=e.code,
            request_id=server_req_id or request_id,
            detail=_sanitize_error(e.body),
        )
    ) from e


# ---------------------------------------------------------------------------
# TodoistApi
# ---------------------------------------------------------------------------


class TodoistApi:
    """Async client for the Todoist REST API v1.

    Exposes the same small set of verbs for every resource kind
    (``list``/``get``/``create``/``update``/``delete``) plus the task-only
    verbs. All responses are plain JSON-derived dicts.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        page_size: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not token:
            raise SetupError(
                "[SETUP_NEEDED] TODOIST_API_TOKEN is not set. "
                "Add it to .env or the environment."
            )
        self._token = token
        self._page_size = page_size or config.PAGE_SIZE
        self._http = httpx.AsyncClient(
            base_url=base_url or config.BASE_URL,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
                "User-Agent": f"todoist-mcp/{config.VERSION}",
            },
            timeout=max(1.0, timeout or config.HTTP_TIMEOUT_SECONDS),
            transport=transport,
        )

    def __repr__(self):
        return f"TodoistApi(token={_mask_token(self._token)!r})"

    async def aclose(self):
        await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    # -------------------------------------------------------------------
    # HTTP plumbing
    # -------------------------------------------------------------------

    async def _http_request(self, method, path, *, params=None, data=None, request_id=None):
        """Make one HTTP request. Returns parsed JSON, or None for empty bodies.

        Raises HTTPError for non-2xx statuses (caller maps codes) and
        TodoistError for network, size and parse failures.
        """
        headers = {"X-Request-Id": request_id} if request_id else {}
        sampled = _is_sampled_request(request_id)
        start = time.perf_counter()
        if sampled:
            _log_http_event(
                phase="request",
                method=method,
                path=path,
                params=params or {},
                request_id=request_id,
            )
        try:
            resp = await self._http.request(
                method, path, params=params or None, json=data, headers=headers
            )
        except httpx.TimeoutException as e:
            if sampled:
                _log_http_event(
                    phase="network_error",
                    method=method,
                    path=path,
                    error="timeout",
                    request_id=request_id,
                )
            raise TodoistError(
                _error_envelope(
                    "Request timed out. Is the Todoist API reachable?", request_id=request_id
                )
            ) from e
        except httpx.TransportError as e:
            if sampled:
                _log_http_event(
                    phase="network_error",
                    method=method,
                    path=path,
                    error=f"transport_error: {e}",
                    request_id=request_id,
                )
            raise TodoistError(
                _error_envelope(f"Connection failed: {e}", request_id=request_id)
            ) from e

        raw = resp.content
        if sampled:
            _log_http_event(
                phase="response",
                method=method,
                path=path,
                status=resp.status_code,
                bytes=len(raw),
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
        if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
            raise TodoistError(
                "[ERROR] Response too large from Todoist API "
                f"(>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
            )
        if resp.status_code >= 400:
            raise HTTPError(
                resp.status_code,
                resp.reason_phrase,
                raw.decode("utf-8", errors="replace"),
                headers=resp.headers,
            )
        if not raw.strip():
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            content_type = resp.headers.get("Content-Type", "")
            if content_type and "json" not in content_type.lower():
                raise TodoistError(
                    f"[ERROR] Unexpected Content-Type from server ({content_type}). "
                    "This may be a proxy or network issue."
                ) from None
            raise TodoistError(
                "[ERROR] Unexpected response from Todoist API (not valid JSON)."
            ) from None

    async def request(self, method, path, *, params=None, data=None):
        """Make an authenticated request and map HTTP errors to TodoistError."""
        request_id = str(uuid.uuid4())
        try:
            return await self._http_request(
                method, path, params=params, data=data, request_id=request_id
            )
        except HTTPError as e:
            _raise_for_http_error(e, request_id)

    async def _object(self, method, path, *, params=None, data=None, context="request"):
        result = await self.request(method, path, params=params, data=data)
        if isinstance(result, dict):
            return result
        raise TodoistError(
            f"[ERROR] Unexpected {context} response shape: "
            f"expected JSON object, got {type(result).__name__}."
        )

    # -------------------------------------------------------------------
    # Generic resource verbs
    # -------------------------------------------------------------------

    async def list(self, kind, params=None, cursor=None) -> Page:
        """Fetch one page of ``kind``. ``cursor=None`` requests the first page."""
        query = _query_params(params)
        query["limit"] = self._page_size
        if cursor is not None:
            query["cursor"] = cursor
        result = await self.request("GET", f"/{kind}", params=query)
        return Page.from_response(result, f"{kind} list")

    async def get(self, kind, item_id) -> dict[str, Any]:
        return await self._object("GET", f"/{kind}/{item_id}", context=f"{kind} get")

    async def create(self, kind, payload) -> dict[str, Any]:
        return await self._object(
            "POST", f"/{kind}", data=_compact(payload), context=f"{kind} create"
        )

    async def update(self, kind, item_id, payload) -> dict[str, Any]:
        return await self._object(
            "POST", f"/{kind}/{item_id}", data=_compact(payload), context=f"{kind} update"
        )

    async def delete(self, kind, item_id) -> bool:
        await self.request("DELETE", f"/{kind}/{item_id}")
        return True

    # -------------------------------------------------------------------
    # Task-only verbs
    # -------------------------------------------------------------------

    async def close_task(self, task_id) -> bool:
        await self.request("POST", f"/{TASKS}/{task_id}/close")
        return True

    async def reopen_task(self, task_id) -> bool:
        await self.request("POST", f"/{TASKS}/{task_id}/reopen")
        return True

    async def move_tasks(self, task_ids, destination: MoveDestination) -> list[dict[str, Any]]:
        """Move tasks one after another; the first failure aborts the batch."""
        moved = []
        body = _compact(destination)
        for task_id in task_ids:
            moved.append(
                await self._object(
                    "POST", f"/{TASKS}/{task_id}/move", data=body, context="task move"
                )
            )
        return moved

    async def quick_add_task(self, payload: QuickAddTaskParams) -> dict[str, Any]:
        return await self._object(
            "POST", f"/{TASKS}/quick", data=_compact(payload), context="quick add"
        )
