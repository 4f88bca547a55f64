"""Request, route and controller context containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from starlette.requests import Request

from fastapi_request_controller.exceptions import InvalidOperationError
from fastapi_request_controller.temp_data import TempDataDictionary
from fastapi_request_controller.view_data import ViewDataDictionary

if TYPE_CHECKING:
    from fastapi_request_controller.controller import ControllerBase

# Route data token under which a parent action's ViewContext is stored
# when a child action is executed.
PARENT_ACTION_VIEW_CONTEXT = "ParentActionViewContext"


@dataclass
class RouteData:
    """Values and data tokens produced by route matching."""

    values: dict[str, Any] = field(default_factory=dict)
    data_tokens: dict[str, Any] = field(default_factory=dict)
    route: Any | None = None

    def get_required_string(self, key: str) -> str:
        value = self.values.get(key)
        if isinstance(value, str) and value:
            return value
        raise InvalidOperationError(
            f"The route data must contain an item named '{key}' with a "
            "non-empty string value."
        )


@dataclass
class RequestContext:
    """HTTP context and route data for a single request."""

    http_context: Request | None
    route_data: RouteData = field(default_factory=RouteData)


@dataclass(eq=False)
class ControllerContext:
    """Per-request state owned by a controller after initialization."""

    http_context: Request | None
    route_data: RouteData
    controller: ControllerBase | None = None

    @property
    def request_context(self) -> RequestContext:
        return RequestContext(
            http_context=self.http_context, route_data=self.route_data
        )

    @property
    def parent_action_view_context(self) -> ViewContext | None:
        return self.route_data.data_tokens.get(PARENT_ACTION_VIEW_CONTEXT)

    @property
    def is_child_action(self) -> bool:
        return self.parent_action_view_context is not None


@dataclass(eq=False)
class ViewContext:
    """Data made available to a view while it renders."""

    controller_context: ControllerContext | None = None
    view_data: ViewDataDictionary = field(default_factory=ViewDataDictionary)
    temp_data: TempDataDictionary = field(default_factory=TempDataDictionary)
