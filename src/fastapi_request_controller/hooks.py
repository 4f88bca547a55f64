"""ControllerHook base and convenience hook classes."""

from __future__ import annotations

from fastapi_request_controller._types import AfterExecuteCallback, BeforeExecuteCallback
from fastapi_request_controller.context import RequestContext
from fastapi_request_controller.controller import ControllerBase


class ControllerHook:
    """Base abstraction for dispatch hooks. All methods are no-op by default."""

    async def on_execute_start(
        self, controller: ControllerBase, request_context: RequestContext
    ) -> None:
        pass

    async def on_execute_end(
        self, controller: ControllerBase, error: BaseException | None
    ) -> None:
        pass


class BeforeExecute(ControllerHook):
    """Convenience hook that only fires before the controller executes."""

    def __init__(self, callback: BeforeExecuteCallback) -> None:
        self._callback = callback

    async def on_execute_start(
        self, controller: ControllerBase, request_context: RequestContext
    ) -> None:
        await self._callback(controller, request_context)


class AfterExecute(ControllerHook):
    """Convenience hook that fires after the controller executes or fails."""

    def __init__(self, callback: AfterExecuteCallback) -> None:
        self._callback = callback

    async def on_execute_end(
        self, controller: ControllerBase, error: BaseException | None
    ) -> None:
        await self._callback(controller, error)
