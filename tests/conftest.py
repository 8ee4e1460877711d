import logging
import sys
from pathlib import Path
from typing import Callable, List

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

from make_mcp.adapters.make import MakeAdapter  # noqa: E402
from make_mcp.client.http import HTTPToolClient  # noqa: E402

API_URL = "https://make.test/api/v2"
API_TOKEN = "test-token"

SCENARIOS_BODY = {
    "scenarios": [
        {
            "id": 101,
            "name": "Sync CRM",
            "teamId": 7,
            "scheduling": {"type": "indefinitely", "interval": 900},
            "lastRun": "2024-05-01T10:00:00.000Z",
            "folder": {"id": 3, "name": "Sales"},
        },
        {
            "id": 102,
            "name": "Nightly export",
            "scheduling": None,
            "lastRun": None,
        },
        {
            "id": 103,
            "name": "Draft",
            "scheduling": {"type": ""},
            "folder": None,
        },
    ]
}

EXECUTIONS_BODY = {
    "executions": [
        {
            "id": "exec-1",
            "status": "success",
            "startedAt": "2024-05-01T10:00:00.000Z",
            "finishedAt": "2024-05-01T10:00:03.000Z",
            "operations": 4,
            "errors": [],
            "duration": 3000,
        },
        {
            "id": "exec-2",
            "status": "error",
            "startedAt": "2024-05-01T11:00:00.000Z",
            "finishedAt": None,
            "operations": 1,
            "errors": [{"message": "Connection refused"}],
        },
    ]
}


class RecordingHandler:
    """MockTransport handler that remembers every request it answered."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []
        self._responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)


def make_api_responder(request: httpx.Request) -> httpx.Response:
    """Answer the three Make.com endpoints with canned bodies."""
    path = request.url.path
    if request.method == "GET" and path.endswith("/scenarios"):
        return httpx.Response(200, json=SCENARIOS_BODY, request=request)
    if request.method == "POST" and path.endswith("/run"):
        return httpx.Response(200, json={"executionId": "exec-99", "statusUrl": "https://x"}, request=request)
    if request.method == "GET" and path.endswith("/executions"):
        return httpx.Response(200, json=EXECUTIONS_BODY, request=request)
    return httpx.Response(404, json={"message": "Not found"}, request=request)


@pytest.fixture(autouse=True)
def _restore_package_logger():
    # configure_logging() detaches "make_mcp" from the root logger.
    logger = logging.getLogger("make_mcp")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def make_adapter():
    """Factory building a MakeAdapter whose HTTP traffic goes to ``responder``."""

    def _factory(responder=make_api_responder, token: str = API_TOKEN):
        handler = RecordingHandler(responder)
        async_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        tool_client = HTTPToolClient("make", API_URL, client=async_client)
        return MakeAdapter(token, API_URL, client=tool_client), handler

    return _factory
