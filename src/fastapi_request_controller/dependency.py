"""controller_endpoint(): factory producing FastAPI-compatible endpoints."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from starlette.requests import Request

from fastapi_request_controller._types import ControllerFactory
from fastapi_request_controller.context import RequestContext, RouteData
from fastapi_request_controller.controller import ControllerBase
from fastapi_request_controller.hooks import ControllerHook

logger = logging.getLogger(__name__)


def request_context_from(
    request: Request, *, action: str | None = None
) -> RequestContext:
    """Build a RequestContext from a Starlette request and its path params."""
    values: dict[str, Any] = dict(request.path_params)
    if action is not None:
        values.setdefault("action", action)
    route_data = RouteData(values=values, route=request.scope.get("route"))
    return RequestContext(http_context=request, route_data=route_data)


def controller_endpoint(
    controller_cls: type[ControllerBase],
    *,
    factory: ControllerFactory | None = None,
    hooks: Sequence[ControllerHook] = (),
    action: str | None = None,
) -> Callable[[Request], Awaitable[Any]]:
    """Return an endpoint that executes a controller for each request.

    ``factory`` defaults to ``controller_cls``; a factory must return a new
    instance per request, since controllers refuse to execute twice.
    ``action`` fills the ``action`` route value when the path does not.
    """
    create = factory or controller_cls
    registered_hooks = tuple(hooks)

    async def endpoint(request: Request) -> Any:
        request_context = request_context_from(request, action=action)
        controller = create()
        logger.debug(
            "Dispatching %s %s to %s",
            request.method,
            request.url.path,
            type(controller).__qualname__,
        )

        for hook in registered_hooks:
            await hook.on_execute_start(controller, request_context)

        try:
            result = await controller.execute(request_context)
        except Exception as exc:
            for hook in registered_hooks:
                await hook.on_execute_end(controller, exc)
            raise

        for hook in registered_hooks:
            await hook.on_execute_end(controller, None)

        return result

    endpoint.__name__ = f"{controller_cls.__name__}_endpoint"
    endpoint._controller_cls = controller_cls  # type: ignore[attr-defined]
    return endpoint
