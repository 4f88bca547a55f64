"""Shared pytest fixtures for fastapi-request-controller tests."""

from __future__ import annotations

from typing import Any

import pytest
from starlette.requests import Request

from fastapi_request_controller.context import RequestContext, RouteData


@pytest.fixture
def make_request() -> Any:
    """Factory for creating Starlette Request objects from a raw scope."""

    def _make(
        method: str = "GET",
        path: str = "/",
        headers: dict[str, str] | None = None,
        query_string: str = "",
        path_params: dict[str, Any] | None = None,
        client: tuple[str, int] | None = ("127.0.0.1", 50000),
        session: dict[str, Any] | None = None,
    ) -> Request:
        scope: dict[str, Any] = {
            "type": "http",
            "method": method,
            "path": path,
            "query_string": query_string.encode(),
            "headers": [
                (k.lower().encode(), v.encode()) for k, v in (headers or {}).items()
            ],
            "root_path": "",
            "path_params": path_params or {},
            "client": client,
        }
        if session is not None:
            # Stands in for what SessionMiddleware places in the scope.
            scope["session"] = session
        return Request(scope)

    return _make


@pytest.fixture
def make_request_context(make_request: Any) -> Any:
    """Factory for RequestContext objects around a fresh request."""

    def _make(
        values: dict[str, Any] | None = None,
        data_tokens: dict[str, Any] | None = None,
        **request_kwargs: Any,
    ) -> RequestContext:
        return RequestContext(
            http_context=make_request(**request_kwargs),
            route_data=RouteData(
                values=dict(values or {}), data_tokens=dict(data_tokens or {})
            ),
        )

    return _make
