"""Make.com API adapter: scenarios, scenario runs and execution logs."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..client.http import HTTPClientConfig, HTTPToolClient
from .base import BaseAdapter, UpstreamModel

DEFAULT_BASE_URL = "https://eu1.make.com/api/v2"
DEFAULT_LOG_LIMIT = 10
INACTIVE_STATUS = "inactive"

LIST_SCENARIOS = "List scenarios"
RUN_SCENARIO = "Run scenario"
GET_SCENARIO_LOGS = "Get scenario logs"

ScenarioId = Union[int, str]


class _OutputModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Scenario(_OutputModel):
    id: ScenarioId
    name: Optional[str] = None
    status: str = INACTIVE_STATUS
    last_run: Optional[Any] = Field(default=None, alias="lastRun")
    folder: Optional[str] = None


class Execution(_OutputModel):
    # Fields other than id are passed through as Make.com reports them.
    id: ScenarioId
    status: Optional[Any] = None
    started_at: Optional[Any] = Field(default=None, alias="startedAt")
    finished_at: Optional[Any] = Field(default=None, alias="finishedAt")
    operations: Optional[Any] = 0
    errors: Optional[Any] = Field(default_factory=list)


class RunScenarioResult(_OutputModel):
    success: bool = True
    execution_id: ScenarioId = Field(alias="executionId")


class UpstreamScheduling(UpstreamModel):
    type: Optional[str] = None


class UpstreamFolder(UpstreamModel):
    name: Optional[str] = None


class UpstreamScenario(UpstreamModel):
    id: ScenarioId
    name: Optional[str] = None
    scheduling: Optional[UpstreamScheduling] = None
    last_run: Optional[Any] = Field(default=None, alias="lastRun")
    folder: Optional[UpstreamFolder] = None

    def to_scenario(self) -> Scenario:
        scheduling_type = self.scheduling.type if self.scheduling else None
        return Scenario(
            id=self.id,
            name=self.name,
            status=scheduling_type or INACTIVE_STATUS,
            last_run=self.last_run,
            folder=self.folder.name if self.folder else None,
        )


class ScenarioListResponse(UpstreamModel):
    scenarios: List[UpstreamScenario]


class RunScenarioResponse(UpstreamModel):
    execution_id: ScenarioId = Field(alias="executionId")


class ExecutionListResponse(UpstreamModel):
    executions: List[Execution]


class MakeAdapter(BaseAdapter):
    """Client for the three Make.com endpoints the server exposes.

    The token is sent on every request as ``Authorization: Token <token>``,
    even when it is empty; Make.com is left to reject it.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        client: Optional[HTTPToolClient] = None,
        config: Optional[HTTPClientConfig] = None,
    ) -> None:
        super().__init__(
            "make",
            base_url,
            default_headers={
                "Authorization": f"Token {token or ''}".rstrip(),
                "Content-Type": "application/json",
            },
            client=client,
            config=config,
        )

    async def list_scenarios(self) -> List[Scenario]:
        body = await self._request_json(
            "GET",
            "/scenarios",
            operation=LIST_SCENARIOS,
            response_model=ScenarioListResponse,
        )
        return [scenario.to_scenario() for scenario in body.scenarios]

    async def run_scenario(
        self,
        scenario_id: ScenarioId,
        data: Optional[Dict[str, Any]] = None,
    ) -> RunScenarioResult:
        # scenario_id is not checked locally; Make.com rejects unknown ids.
        body = await self._request_json(
            "POST",
            f"/scenarios/{scenario_id}/run",
            operation=RUN_SCENARIO,
            json={"data": data if data is not None else {}},
            response_model=RunScenarioResponse,
        )
        return RunScenarioResult(execution_id=body.execution_id)

    async def get_scenario_logs(
        self,
        scenario_id: ScenarioId,
        limit: int = DEFAULT_LOG_LIMIT,
    ) -> List[Execution]:
        body = await self._request_json(
            "GET",
            f"/scenarios/{scenario_id}/executions",
            operation=GET_SCENARIO_LOGS,
            params={"limit": limit},
            response_model=ExecutionListResponse,
        )
        return list(body.executions)


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_LOG_LIMIT",
    "Execution",
    "MakeAdapter",
    "RunScenarioResult",
    "Scenario",
]
