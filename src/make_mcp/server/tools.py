"""Tool declarations and dispatch onto the Make.com adapter."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from mcp import types

from make_mcp.adapters.make import DEFAULT_LOG_LIMIT, MakeAdapter
from make_mcp.errors.canonical import UnknownToolError
from make_mcp.server.formatting import text_content

logger = logging.getLogger(__name__)

LIST_SCENARIOS_TOOL = "list_scenarios"
RUN_SCENARIO_TOOL = "run_scenario"
GET_SCENARIO_LOGS_TOOL = "get_scenario_logs"

RUN_STARTED_MESSAGE = "Scenario execution started"

TOOLS: List[types.Tool] = [
    types.Tool(
        name=LIST_SCENARIOS_TOOL,
        description="List all available Make.com scenarios",
        inputSchema={
            "type": "object",
            "properties": {},
        },
    ),
    types.Tool(
        name=RUN_SCENARIO_TOOL,
        description="Run the given Make.com scenario",
        inputSchema={
            "type": "object",
            "properties": {
                "scenarioId": {
                    "type": "string",
                    "description": "ID of the scenario to run",
                },
                "data": {
                    "type": "object",
                    "description": "Data passed to the scenario",
                },
            },
            "required": ["scenarioId"],
        },
    ),
    types.Tool(
        name=GET_SCENARIO_LOGS_TOOL,
        description="Get execution logs of a Make.com scenario",
        inputSchema={
            "type": "object",
            "properties": {
                "scenarioId": {
                    "type": "string",
                    "description": "Scenario ID",
                },
                "limit": {
                    "type": "number",
                    "description": "Number of log entries to return",
                    "default": DEFAULT_LOG_LIMIT,
                },
            },
            "required": ["scenarioId"],
        },
    ),
]

Payload = Dict[str, Any]


def _coerce_limit(value: Any) -> Any:
    if value is None:
        return DEFAULT_LOG_LIMIT
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class ToolDispatcher:
    """Route a tool name and its arguments to one adapter call."""

    def __init__(self, adapter: MakeAdapter) -> None:
        self._adapter = adapter
        self._handlers: Dict[str, Callable[[Mapping[str, Any]], Awaitable[Payload]]] = {
            LIST_SCENARIOS_TOOL: self._list_scenarios,
            RUN_SCENARIO_TOOL: self._run_scenario,
            GET_SCENARIO_LOGS_TOOL: self._get_scenario_logs,
        }

    @property
    def tools(self) -> List[types.Tool]:
        return list(TOOLS)

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Payload:
        """Run tool ``name`` and return its JSON-ready payload.

        Raises :class:`UnknownToolError` before any HTTP call when ``name``
        is not one of the declared tools.
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownToolError(name)
        logger.debug("dispatching tool %s", name)
        return await handler(arguments or {})

    async def call(
        self, name: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> List[types.TextContent]:
        return text_content(await self.dispatch(name, arguments))

    async def _list_scenarios(self, arguments: Mapping[str, Any]) -> Payload:
        scenarios = await self._adapter.list_scenarios()
        return {"scenarios": [scenario.to_payload() for scenario in scenarios]}

    async def _run_scenario(self, arguments: Mapping[str, Any]) -> Payload:
        result = await self._adapter.run_scenario(
            arguments.get("scenarioId", ""),
            arguments.get("data"),
        )
        return {**result.to_payload(), "message": RUN_STARTED_MESSAGE}

    async def _get_scenario_logs(self, arguments: Mapping[str, Any]) -> Payload:
        executions = await self._adapter.get_scenario_logs(
            arguments.get("scenarioId", ""),
            _coerce_limit(arguments.get("limit")),
        )
        return {"logs": [execution.to_payload() for execution in executions]}
