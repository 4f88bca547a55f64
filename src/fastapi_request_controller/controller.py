"""ControllerBase abstract base class and ControllerState enum."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from fastapi_request_controller.context import ControllerContext, RequestContext
from fastapi_request_controller.exceptions import (
    ArgumentError,
    ArgumentNullError,
    InvalidOperationError,
)
from fastapi_request_controller.temp_data import TempDataDictionary
from fastapi_request_controller.value_providers import (
    ValueProvider,
    ValueProviderFactoryCollection,
    value_provider_factories as default_value_provider_factories,
)
from fastapi_request_controller.view_data import DynamicViewData, ViewDataDictionary

logger = logging.getLogger(__name__)


class ControllerState(Enum):
    """Lifecycle of a controller instance. EXECUTED is terminal."""

    NOT_EXECUTED = "not_executed"
    EXECUTED = "executed"


class ControllerBase(ABC):
    """Base for controllers that handle exactly one request each.

    ``execute`` validates the request context, marks the instance as
    executed, then runs ``initialize`` followed by ``execute_core``.
    A second call on the same instance raises ``InvalidOperationError``.
    """

    def __init__(
        self,
        *,
        value_provider_factories: ValueProviderFactoryCollection | None = None,
        validate_request: bool = True,
    ) -> None:
        self._state = ControllerState.NOT_EXECUTED
        self._value_provider_factories = value_provider_factories
        self.validate_request = validate_request
        self.controller_context: ControllerContext | None = None
        self._temp_data: TempDataDictionary | None = None
        self._view_data: ViewDataDictionary | None = None
        self._view_bag: DynamicViewData | None = None
        self._value_provider: ValueProvider | None = None

    @property
    def state(self) -> ControllerState:
        return self._state

    async def execute(self, request_context: RequestContext | None) -> Any:
        if self._state is ControllerState.EXECUTED:
            controller_type = type(self)
            logger.warning(
                "Rejected reuse of controller %s", controller_type.__qualname__
            )
            raise InvalidOperationError(
                f"A single instance of controller "
                f"'{controller_type.__module__}.{controller_type.__qualname__}' "
                "cannot be used to handle multiple requests. If a custom "
                "controller factory is in use, make sure that it creates a new "
                "instance of the controller for each request."
            )
        if request_context is None:
            raise ArgumentNullError("requestContext")
        if request_context.http_context is None:
            raise ArgumentError(
                "Cannot execute Controller with a null HttpContext.",
                param_name="requestContext",
            )

        self._state = ControllerState.EXECUTED
        logger.debug("Executing controller %s", type(self).__qualname__)
        self.initialize(request_context)
        return await self.execute_core()

    def initialize(self, request_context: RequestContext) -> None:
        self.controller_context = ControllerContext(
            http_context=request_context.http_context,
            route_data=request_context.route_data,
            controller=self,
        )

    @abstractmethod
    async def execute_core(self) -> Any: ...

    @property
    def temp_data(self) -> TempDataDictionary:
        context = self.controller_context
        parent = context.parent_action_view_context if context else None
        if parent is not None:
            # Child actions always share the parent's dictionary.
            return parent.temp_data
        if self._temp_data is None:
            self._temp_data = TempDataDictionary()
        return self._temp_data

    @temp_data.setter
    def temp_data(self, value: TempDataDictionary | None) -> None:
        self._temp_data = value

    @property
    def view_data(self) -> ViewDataDictionary:
        if self._view_data is None:
            self._view_data = ViewDataDictionary()
        return self._view_data

    @view_data.setter
    def view_data(self, value: ViewDataDictionary | None) -> None:
        self._view_data = value

    @property
    def view_bag(self) -> DynamicViewData:
        if self._view_bag is None:
            self._view_bag = DynamicViewData(lambda: self.view_data)
        return self._view_bag

    @property
    def value_provider(self) -> ValueProvider:
        if self._value_provider is None:
            factories = self._value_provider_factories
            if factories is None:
                factories = default_value_provider_factories
            self._value_provider = factories.get_value_provider(
                self.controller_context
            )
        return self._value_provider

    @value_provider.setter
    def value_provider(self, value: ValueProvider | None) -> None:
        self._value_provider = value
