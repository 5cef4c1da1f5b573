"""REST request runner using endpoint specs and response adapters."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .http_client import HTTPClient


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    method: str  # only "GET" is used by the exchange connectors
    build_path: Callable[[dict[str, Any]], str]
    build_query: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_headers: Callable[[dict[str, Any]], dict[str, str]] | None = None


class ResponseAdapter:
    def parse(self, response: Any, params: dict[str, Any]) -> Any:
        return response


class RestRunner:
    def __init__(self, client: HTTPClient) -> None:
        self._client = client

    async def run(
        self, *, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Any:
        path = spec.build_path(params)
        query = spec.build_query(params) if spec.build_query else None
        headers = spec.build_headers(params) if spec.build_headers else None

        if spec.method.upper() != "GET":
            raise ValueError(f"Unsupported method for endpoint {spec.id}: {spec.method}")
        data = await self._client.get(path, params=query, headers=headers)

        # Single request per call; no pagination
        return adapter.parse(data, params)
