"""Shared type aliases."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi_request_controller.context import ControllerContext, RequestContext
    from fastapi_request_controller.controller import ControllerBase

# Creates the controller instance for one request
ControllerFactory = Callable[[], "ControllerBase"]
# Derives the temp data storage key for a request; None disables storage
TempDataKeyFunc = Callable[["ControllerContext"], "str | None"]
# Callbacks used by the convenience hooks
BeforeExecuteCallback = Callable[["ControllerBase", "RequestContext"], Awaitable[None]]
AfterExecuteCallback = Callable[
    ["ControllerBase", "BaseException | None"], Awaitable[None]
]
