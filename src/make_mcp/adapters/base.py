"""Typed base adapter for Make.com API clients."""

from __future__ import annotations

from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from ..client.http import HTTPClientConfig, HTTPToolClient
from ..errors.canonical import UpstreamError, map_validation_error

_ResponseModel = TypeVar("_ResponseModel", bound=BaseModel)


class UpstreamModel(BaseModel):
    """Base model for upstream bodies; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BaseAdapter:
    """Base class for HTTP API adapters."""

    def __init__(
        self,
        tool_id: str,
        base_url: str,
        *,
        default_headers: Optional[Dict[str, str]] = None,
        client: Optional[HTTPToolClient] = None,
        config: Optional[HTTPClientConfig] = None,
    ) -> None:
        self.tool_id = tool_id
        self._default_headers = default_headers or {}
        self._client = client or HTTPToolClient(tool_id, base_url, config=config)

    @property
    def client(self) -> HTTPToolClient:
        return self._client

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        response_model: Optional[Type[_ResponseModel]] = None,
        **kwargs: Any,
    ) -> Dict[str, Any] | _ResponseModel:
        merged_headers = {**self._default_headers, **(headers or {})}
        response = await self._client.request(
            method,
            path,
            operation=operation,
            params=params,
            json=json,
            headers=merged_headers,
            **kwargs,
        )
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(
                operation,
                code="malformed_response",
                http=response.status_code,
                detail=f"response body is not JSON: {exc}",
            ) from exc
        if response_model is None:
            return payload
        return self._validate(response_model, payload, operation=operation)

    def _validate(
        self,
        model: Type[_ResponseModel],
        data: Any,
        *,
        operation: Optional[str] = None,
    ) -> _ResponseModel:
        try:
            adapter = TypeAdapter(model)
            return adapter.validate_python(data)
        except ValidationError as exc:
            raise map_validation_error(operation or self.tool_id, exc) from exc
