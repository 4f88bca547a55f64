"""Tests for ControllerBase lifecycle and per-request data properties."""

from __future__ import annotations

from typing import Any

import pytest

from fastapi_request_controller.context import (
    PARENT_ACTION_VIEW_CONTEXT,
    RequestContext,
    RouteData,
    ViewContext,
)
from fastapi_request_controller.controller import ControllerBase, ControllerState
from fastapi_request_controller.exceptions import (
    ArgumentError,
    ArgumentNullError,
    InvalidOperationError,
)
from fastapi_request_controller.temp_data import TempDataDictionary
from fastapi_request_controller.value_providers import (
    DictionaryValueProvider,
    ValueProviderCollection,
    ValueProviderFactoryCollection,
    value_provider_factories,
)
from fastapi_request_controller.view_data import DynamicViewData, ViewDataDictionary


class _RecordingController(ControllerBase):
    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    def initialize(self, request_context: RequestContext) -> None:
        self.calls.append("initialize")
        super().initialize(request_context)

    async def execute_core(self) -> Any:
        self.calls.append("execute_core")
        return "done"


class _EmptyController(ControllerBase):
    def __init__(self) -> None:
        super().__init__()
        self.num_times_execute_core_called = 0

    async def execute_core(self) -> None:
        self.num_times_execute_core_called += 1


class _HelperController(ControllerBase):
    async def execute_core(self) -> None:
        raise NotImplementedError


class TestControllerBaseAbstract:
    def test_cannot_instantiate_abstract(self) -> None:
        with pytest.raises(TypeError):
            ControllerBase()  # type: ignore[abstract]

    def test_subclass_must_implement_execute_core(self) -> None:
        class Incomplete(ControllerBase):
            pass

        with pytest.raises(TypeError):
            Incomplete()  # type: ignore[abstract]


class TestExecute:
    async def test_calls_initialize_then_execute_core(
        self, make_request_context: Any
    ) -> None:
        controller = _RecordingController()
        await controller.execute(make_request_context())
        assert controller.calls == ["initialize", "execute_core"]

    async def test_returns_execute_core_result(self, make_request_context: Any) -> None:
        controller = _RecordingController()
        assert await controller.execute(make_request_context()) == "done"

    async def test_transitions_to_executed(self, make_request_context: Any) -> None:
        controller = _EmptyController()
        assert controller.state is ControllerState.NOT_EXECUTED
        await controller.execute(make_request_context())
        assert controller.state is ControllerState.EXECUTED

    async def test_throws_if_called_twice(self, make_request_context: Any) -> None:
        controller = _EmptyController()
        request_context = make_request_context()
        await controller.execute(request_context)

        with pytest.raises(InvalidOperationError) as exc_info:
            await controller.execute(request_context)

        qualified = f"{_EmptyController.__module__}._EmptyController"
        assert str(exc_info.value) == (
            f"A single instance of controller '{qualified}' cannot be used to "
            "handle multiple requests. If a custom controller factory is in use, "
            "make sure that it creates a new instance of the controller for each "
            "request."
        )
        assert controller.num_times_execute_core_called == 1

    async def test_second_call_does_not_reinitialize(
        self, make_request_context: Any
    ) -> None:
        controller = _RecordingController()
        await controller.execute(make_request_context())
        with pytest.raises(InvalidOperationError):
            await controller.execute(make_request_context())
        assert controller.calls == ["initialize", "execute_core"]

    async def test_reuse_checked_before_arguments(
        self, make_request_context: Any
    ) -> None:
        controller = _EmptyController()
        await controller.execute(make_request_context())
        with pytest.raises(InvalidOperationError):
            await controller.execute(None)

    async def test_throws_if_request_context_is_none(self) -> None:
        controller = _HelperController()
        with pytest.raises(ArgumentNullError) as exc_info:
            await controller.execute(None)
        assert exc_info.value.param_name == "requestContext"

    async def test_throws_if_http_context_is_none(self) -> None:
        controller = _HelperController()
        with pytest.raises(ArgumentError) as exc_info:
            await controller.execute(RequestContext(http_context=None))
        assert str(exc_info.value) == (
            "Cannot execute Controller with a null HttpContext.\r\n"
            "Parameter name: requestContext"
        )
        assert not isinstance(exc_info.value, ArgumentNullError)

    async def test_argument_errors_leave_state_unchanged(
        self, make_request_context: Any
    ) -> None:
        controller = _EmptyController()
        with pytest.raises(ArgumentNullError):
            await controller.execute(None)
        with pytest.raises(ArgumentError):
            await controller.execute(RequestContext(http_context=None))
        assert controller.state is ControllerState.NOT_EXECUTED

        await controller.execute(make_request_context())
        assert controller.num_times_execute_core_called == 1

    async def test_failed_execute_core_still_marks_executed(
        self, make_request_context: Any
    ) -> None:
        controller = _HelperController()
        with pytest.raises(NotImplementedError):
            await controller.execute(make_request_context())
        with pytest.raises(InvalidOperationError):
            await controller.execute(make_request_context())


class TestInitialize:
    def test_sets_controller_context(self, make_request_context: Any) -> None:
        controller = _HelperController()
        request_context = make_request_context()

        controller.initialize(request_context)

        context = controller.controller_context
        assert context is not None
        assert context.http_context is request_context.http_context
        assert context.route_data is request_context.route_data
        assert context.controller is controller

    def test_controller_context_defaults_to_none(self) -> None:
        assert _HelperController().controller_context is None


class TestTempDataProperty:
    def test_default_instance(self) -> None:
        controller = _HelperController()
        temp_data = controller.temp_data
        assert isinstance(temp_data, TempDataDictionary)
        assert len(temp_data) == 0
        assert controller.temp_data is temp_data

    def test_set_replaces_instance(self) -> None:
        controller = _HelperController()
        replacement = TempDataDictionary()
        controller.temp_data = replacement
        assert controller.temp_data is replacement

    def test_set_none_restores_default(self) -> None:
        controller = _HelperController()
        replacement = TempDataDictionary({"a": 1})
        controller.temp_data = replacement
        controller.temp_data = None
        assert controller.temp_data is not replacement
        assert len(controller.temp_data) == 0

    def test_returns_parent_temp_data_when_in_child_request(
        self, make_request: Any
    ) -> None:
        temp_data = TempDataDictionary()
        view_context = ViewContext(temp_data=temp_data)
        route_data = RouteData(
            data_tokens={PARENT_ACTION_VIEW_CONTEXT: view_context}
        )
        request_context = RequestContext(
            http_context=make_request(), route_data=route_data
        )
        controller = _HelperController()
        controller.initialize(request_context)

        assert controller.temp_data is temp_data

    def test_child_request_ignores_temp_data_read_before_initialize(
        self, make_request: Any
    ) -> None:
        temp_data = TempDataDictionary()
        view_context = ViewContext(temp_data=temp_data)
        request_context = RequestContext(
            http_context=make_request(),
            route_data=RouteData(
                data_tokens={PARENT_ACTION_VIEW_CONTEXT: view_context}
            ),
        )
        controller = _HelperController()
        early = controller.temp_data
        controller.initialize(request_context)

        assert controller.temp_data is temp_data
        assert controller.temp_data is not early

    async def test_child_request_writes_reach_parent_after_early_read(
        self, make_request: Any
    ) -> None:
        class _FlashController(ControllerBase):
            async def execute_core(self) -> None:
                self.temp_data["message"] = "from child"

        view_context = ViewContext()
        request_context = RequestContext(
            http_context=make_request(),
            route_data=RouteData(
                data_tokens={PARENT_ACTION_VIEW_CONTEXT: view_context}
            ),
        )
        controller = _FlashController()
        controller.temp_data.keep()
        await controller.execute(request_context)

        assert view_context.temp_data.peek("message") == "from child"


class TestValidateRequestProperty:
    def test_defaults_to_true(self) -> None:
        assert _HelperController().validate_request is True

    def test_can_be_set_false(self) -> None:
        controller = _HelperController()
        controller.validate_request = False
        assert controller.validate_request is False


class TestValueProviderProperty:
    def test_default_built_from_global_registry(self) -> None:
        original = list(value_provider_factories)
        try:
            value_provider_factories.clear()
            controller = _HelperController()
            default = controller.value_provider
            assert isinstance(default, ValueProviderCollection)
            assert len(default) == 0
            assert controller.value_provider is default

            provider = DictionaryValueProvider({"x": "1"})
            controller.value_provider = provider
            assert controller.value_provider is provider
        finally:
            value_provider_factories[:] = original

    def test_uses_injected_factories(self, make_request_context: Any) -> None:
        controller = _HelperController(
            value_provider_factories=ValueProviderFactoryCollection()
        )
        controller.initialize(make_request_context(values={"id": "7"}))
        assert len(controller.value_provider) == 0

    def test_default_registry_reads_route_and_query(
        self, make_request_context: Any
    ) -> None:
        controller = _HelperController()
        controller.initialize(
            make_request_context(values={"id": "7"}, query_string="page=2")
        )
        assert controller.value_provider.get_value("id").raw_value == "7"
        assert controller.value_provider.get_value("page").raw_value == "2"

    def test_set_none_restores_default(self) -> None:
        controller = _HelperController(
            value_provider_factories=ValueProviderFactoryCollection()
        )
        provider = DictionaryValueProvider({"x": "1"})
        controller.value_provider = provider
        controller.value_provider = None

        restored = controller.value_provider
        assert restored is not provider
        assert isinstance(restored, ValueProviderCollection)
        assert len(restored) == 0
        assert controller.value_provider is restored


class TestViewDataProperty:
    def test_default_instance(self) -> None:
        controller = _HelperController()
        view_data = controller.view_data
        assert isinstance(view_data, ViewDataDictionary)
        assert view_data == {}
        assert controller.view_data is view_data

    def test_set_replaces_instance(self) -> None:
        controller = _HelperController()
        replacement = ViewDataDictionary()
        controller.view_data = replacement
        assert controller.view_data is replacement

    def test_set_none_restores_default(self) -> None:
        controller = _HelperController()
        replacement = ViewDataDictionary({"a": 1})
        controller.view_data = replacement
        controller.view_data = None

        restored = controller.view_data
        assert restored is not replacement
        assert isinstance(restored, ViewDataDictionary)
        assert restored == {}
        assert controller.view_data is restored


class TestViewBagProperty:
    def test_reflects_view_data(self) -> None:
        controller = _HelperController()
        controller.view_data["A"] = 1
        assert isinstance(controller.view_bag, DynamicViewData)
        assert controller.view_bag.A == 1

    def test_reflects_new_view_data_instance(self) -> None:
        controller = _HelperController()
        controller.view_data["A"] = 1
        bag = controller.view_bag
        controller.view_data = ViewDataDictionary({"A": "bar"})
        assert bag.A == "bar"
        assert controller.view_bag.A == "bar"

    def test_propagates_changes_to_view_data(self) -> None:
        controller = _HelperController()
        controller.view_data["A"] = 1

        controller.view_bag.A = "foo"
        controller.view_bag.B = 2

        assert controller.view_data["A"] == "foo"
        assert controller.view_data["B"] == 2
