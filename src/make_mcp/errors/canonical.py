"""Canonical error definitions for the Make.com MCP server."""

from __future__ import annotations

import re
from typing import Any, Optional

import httpx
from opentelemetry import trace
from pydantic import ValidationError

_TRACE_ID_PAD = "0" * 32
_SECRET_FIELD_PATTERN = re.compile(
    r"(?i)(authorization|[a-z0-9\-]*key|token)\s*[:=]\s*((?:token|bearer)\s+)?([^\s,]+)"
)


def _current_trace_id() -> str:
    span = trace.get_current_span()
    context = span.get_span_context()
    if context is None or not context.is_valid:
        return _TRACE_ID_PAD
    return f"{context.trace_id:032x}"


def _scrub_detail(detail: Optional[str]) -> Optional[str]:
    if detail is None:
        return None
    return _SECRET_FIELD_PATTERN.sub(lambda m: f"{m.group(1)}=<redacted>", detail)


class MakeMCPError(Exception):
    """Base class for errors raised by the server."""


class UpstreamError(MakeMCPError):
    """A call to the Make.com API failed.

    The message always reads ``"<operation> failed: <detail>"`` so callers on
    the other side of the MCP transport can tell which operation broke.
    """

    def __init__(
        self,
        operation: str,
        code: str,
        http: Optional[int] = None,
        detail: Optional[str] = None,
        hint: Optional[str] = None,
        trace_id: Optional[str] = None,
    ) -> None:
        self.operation = operation
        self.code = code
        self.http = http
        self.detail = _scrub_detail(detail) or code
        self.hint = hint
        self.trace_id = trace_id or _current_trace_id()
        super().__init__(f"{operation} failed: {self.detail}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "code": self.code,
            "http": self.http,
            "detail": self.detail,
            "hint": self.hint,
            "trace_id": self.trace_id,
        }


class UnknownToolError(MakeMCPError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class UnknownResourceError(MakeMCPError):
    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(f"Unknown resource: {uri}")


def _response_detail(response: httpx.Response) -> str:
    status = response.status_code
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        if message:
            return f"upstream returned {status}: {message}"
    return f"upstream returned {status}"


def map_httpx_error(operation: str, exc: Exception) -> UpstreamError:
    """Map an httpx exception to an :class:`UpstreamError`."""

    if isinstance(exc, UpstreamError):
        return exc

    if isinstance(exc, httpx.TimeoutException):
        return UpstreamError(
            operation,
            code="network_timeout",
            detail="HTTP request timed out",
            hint="raise MAKE_HTTP_TIMEOUT_MS or check Make.com availability",
        )

    if isinstance(exc, httpx.TransportError):
        if isinstance(exc, httpx.ProxyError):
            hint = "check proxy configuration"
        elif isinstance(exc, httpx.ConnectError):
            hint = "verify MAKE_API_URL is reachable"
        else:
            hint = None
        return UpstreamError(operation, code="network_error", detail=str(exc) or exc.__class__.__name__, hint=hint)

    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        detail = _response_detail(exc.response)
        if status == 401:
            return UpstreamError(
                operation,
                code="unauthorized",
                http=status,
                detail=detail,
                hint="check MAKE_API_TOKEN",
            )
        if status == 403:
            return UpstreamError(operation, code="forbidden", http=status, detail=detail)
        if status == 404:
            return UpstreamError(operation, code="not_found", http=status, detail=detail)
        if status == 429:
            return UpstreamError(operation, code="rate_limited", http=status, detail=detail)
        if 500 <= status < 600:
            return UpstreamError(operation, code="upstream_error", http=status, detail=detail)
        return UpstreamError(operation, code="http_error", http=status, detail=detail)

    return UpstreamError(operation, code="unknown_error", detail=str(exc) or exc.__class__.__name__)


def map_validation_error(operation: str, exc: ValidationError) -> UpstreamError:
    first_error = exc.errors()[0] if exc.errors() else None
    path = "".join(f"[{str(p)}]" for p in first_error.get("loc", [])) if first_error else None
    message = first_error.get("msg") if first_error else str(exc)
    detail = (
        f"malformed response at {path}: {message}" if path else f"malformed response: {message}"
    )
    return UpstreamError(operation, code="malformed_response", detail=detail)


__all__ = [
    "MakeMCPError",
    "UpstreamError",
    "UnknownToolError",
    "UnknownResourceError",
    "map_httpx_error",
    "map_validation_error",
]
