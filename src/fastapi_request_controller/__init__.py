"""FastAPI Request Controller - single-use MVC-style controllers for FastAPI."""

from fastapi_request_controller.actions import Controller, action
from fastapi_request_controller.context import (
    PARENT_ACTION_VIEW_CONTEXT,
    ControllerContext,
    RequestContext,
    RouteData,
    ViewContext,
)
from fastapi_request_controller.controller import ControllerBase, ControllerState
from fastapi_request_controller.dependency import (
    controller_endpoint,
    request_context_from,
)
from fastapi_request_controller.exceptions import (
    ArgumentError,
    ArgumentNullError,
    ControllerException,
    InvalidOperationError,
)
from fastapi_request_controller.hooks import AfterExecute, BeforeExecute, ControllerHook
from fastapi_request_controller.temp_data import (
    InMemoryTempDataProvider,
    TempDataDictionary,
    TempDataProvider,
)
from fastapi_request_controller.value_providers import (
    DictionaryValueProvider,
    QueryStringValueProvider,
    QueryStringValueProviderFactory,
    RouteDataValueProvider,
    RouteDataValueProviderFactory,
    ValueProvider,
    ValueProviderCollection,
    ValueProviderFactory,
    ValueProviderFactoryCollection,
    ValueProviderResult,
    value_provider_factories,
)
from fastapi_request_controller.view_data import DynamicViewData, ViewDataDictionary

__all__ = [
    "PARENT_ACTION_VIEW_CONTEXT",
    "AfterExecute",
    "ArgumentError",
    "ArgumentNullError",
    "BeforeExecute",
    "Controller",
    "ControllerBase",
    "ControllerContext",
    "ControllerException",
    "ControllerHook",
    "ControllerState",
    "DictionaryValueProvider",
    "DynamicViewData",
    "InMemoryTempDataProvider",
    "InvalidOperationError",
    "QueryStringValueProvider",
    "QueryStringValueProviderFactory",
    "RequestContext",
    "RouteData",
    "RouteDataValueProvider",
    "RouteDataValueProviderFactory",
    "TempDataDictionary",
    "TempDataProvider",
    "ValueProvider",
    "ValueProviderCollection",
    "ValueProviderFactory",
    "ValueProviderFactoryCollection",
    "ValueProviderResult",
    "ViewContext",
    "ViewDataDictionary",
    "action",
    "controller_endpoint",
    "request_context_from",
    "value_provider_factories",
]
