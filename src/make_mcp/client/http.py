"""Single-attempt async HTTP client with tracing, metrics and JSON logs."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urljoin, urlparse

import httpx
from opentelemetry import metrics, trace
from opentelemetry.trace import SpanKind, Status, StatusCode

from ..errors.canonical import UpstreamError, map_httpx_error

_logger = logging.getLogger(__name__)
_tracer = trace.get_tracer("make_mcp.client.http")
_meter = metrics.get_meter("make_mcp.client.http")

_http_client_latency = _meter.create_histogram(
    "http_client_latency_ms",
    unit="ms",
    description="Total latency of Make.com API calls",
)
_tool_errors_total = _meter.create_counter(
    "tool_client_errors_total",
    description="Upstream errors raised by the Make.com HTTP client",
)


@dataclass(slots=True, frozen=True)
class HTTPClientConfig:
    # None keeps httpx's own default timeout.
    timeout_ms: Optional[int] = None
    allowed_hosts: Tuple[str, ...] = ()

    def client_kwargs(self) -> Dict[str, Any]:
        if self.timeout_ms is None:
            return {}
        return {"timeout": httpx.Timeout(self.timeout_ms / 1000.0)}


def _redact_headers(headers: Optional[Dict[str, str]]) -> Dict[str, str]:
    if not headers:
        return {}
    redacted: Dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() == "authorization" or key.lower().endswith("key"):
            redacted[key] = "<redacted>"
        else:
            redacted[key] = value
    return redacted


def _round(value: float) -> float:
    return round(value, 6)


def _status_class(status_code: int) -> str:
    return f"{status_code // 100}xx"


class HTTPToolClient:
    """HTTP client used by the Make.com adapter.

    Every call is exactly one attempt: transport failures and non-2xx
    responses are turned into :class:`UpstreamError` and raised immediately.
    """

    def __init__(
        self,
        tool_id: str,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        config: Optional[HTTPClientConfig] = None,
    ) -> None:
        self.tool_id = tool_id
        self._config = config or HTTPClientConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(**self._config.client_kwargs())
        self._base_url, self._host = self._validate_base_url(base_url)

    @property
    def base_url(self) -> str:
        return self._base_url

    def _validate_base_url(self, base_url: str) -> Tuple[str, str]:
        parsed = urlparse(base_url)
        if parsed.scheme not in {"http", "https"}:
            raise ValueError("base_url must use http or https scheme")
        if not parsed.netloc:
            raise ValueError("base_url must be absolute")
        host = parsed.hostname
        if self._config.allowed_hosts and host not in self._config.allowed_hosts:
            raise ValueError(f"host {host} not in allowed hosts")
        return base_url.rstrip("/"), host or ""

    def _build_url(self, path: str) -> str:
        url = urljoin(self._base_url + "/", path.lstrip("/"))
        if urlparse(url).netloc != urlparse(self._base_url).netloc:
            raise ValueError("requests to a different host are not allowed")
        return url

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        operation: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send one request and return the response, or raise UpstreamError.

        ``operation`` is the human readable name used in error messages; it
        defaults to the client's ``tool_id``.
        """
        operation = operation or self.tool_id
        method_upper = method.upper()
        url = self._build_url(path)
        headers = headers or {}
        start = time.perf_counter()
        with _tracer.start_as_current_span("tool.http", kind=SpanKind.CLIENT) as span:
            span.set_attributes(
                {
                    "tool": self.tool_id,
                    "operation": operation,
                    "http.method": method_upper,
                    "http.url": url,
                }
            )
            _log_json(
                phase="send",
                tool=self.tool_id,
                operation=operation,
                method=method_upper,
                url=url,
                headers=_redact_headers(headers),
            )
            try:
                response = await self._client.request(method_upper, url, headers=headers, **kwargs)
            except Exception as exc:  # broad to map canonical error
                error = map_httpx_error(operation, exc)
                self._record_failure(span, error, method_upper, url, start)
                span.record_exception(exc)
                raise error from exc

            latency_ms = _round((time.perf_counter() - start) * 1000.0)
            span.set_attribute("http.status_code", response.status_code)
            _log_json(
                phase="recv",
                tool=self.tool_id,
                operation=operation,
                method=method_upper,
                url=url,
                status=response.status_code,
                latency_ms=latency_ms,
            )
            _http_client_latency.record(
                latency_ms,
                {
                    "tool": self.tool_id,
                    "method": method_upper,
                    "status_class": _status_class(response.status_code),
                },
            )

            if response.status_code >= 400:
                status_error = httpx.HTTPStatusError(
                    f"HTTP {response.status_code}",
                    request=response.request,
                    response=response,
                )
                error = map_httpx_error(operation, status_error)
                _tool_errors_total.add(1, {"tool": self.tool_id, "code": error.code})
                span.record_exception(error)
                span.set_status(Status(StatusCode.ERROR, error.code))
                raise error

            span.set_status(Status(StatusCode.OK))
            return response

    def _record_failure(
        self,
        span: trace.Span,
        error: UpstreamError,
        method: str,
        url: str,
        start: float,
    ) -> None:
        _tool_errors_total.add(1, {"tool": self.tool_id, "code": error.code})
        span.set_status(Status(StatusCode.ERROR, error.code))
        _http_client_latency.record(
            _round((time.perf_counter() - start) * 1000.0),
            {"tool": self.tool_id, "method": method, "status_class": "error"},
        )
        _log_json(
            phase="error",
            tool=self.tool_id,
            method=method,
            url=url,
            error=error.to_dict(),
        )


def _log_json(**fields: Any) -> None:
    span = trace.get_current_span()
    trace_id = span.get_span_context().trace_id if span.get_span_context().is_valid else 0
    payload = {
        "trace_id": f"{trace_id:032x}" if trace_id else "0" * 32,
    }
    payload.update(fields)
    _logger.info(json.dumps(payload, sort_keys=True, default=str))


__all__ = ["HTTPClientConfig", "HTTPToolClient"]
