"""Value providers: named input lookup and the factory registry."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from starlette.requests import Request

from fastapi_request_controller.exceptions import ArgumentNullError

if TYPE_CHECKING:
    from fastapi_request_controller.context import ControllerContext, RouteData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValueProviderResult:
    """A value found by a provider.

    ``raw_value`` is the value as stored (a list for repeated query keys),
    ``attempted_value`` its string form.
    """

    raw_value: Any
    attempted_value: str | None


@runtime_checkable
class ValueProvider(Protocol):
    """Resolves input values by name."""

    def contains_prefix(self, prefix: str) -> bool: ...

    def get_value(self, key: str) -> ValueProviderResult | None: ...


def _is_prefix_of(prefix: str, key: str) -> bool:
    if not prefix:
        return True
    if not key.lower().startswith(prefix.lower()):
        return False
    if len(key) == len(prefix):
        return True
    return key[len(prefix)] in ".["


class DictionaryValueProvider:
    """Provider over an in-memory mapping. Keys compare case-insensitively."""

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values: dict[str, tuple[str, Any]] = {
            key.lower(): (key, value) for key, value in values.items()
        }

    def contains_prefix(self, prefix: str) -> bool:
        if not prefix:
            return bool(self._values)
        return any(_is_prefix_of(prefix, key) for key, _ in self._values.values())

    def get_value(self, key: str) -> ValueProviderResult | None:
        entry = self._values.get(key.lower())
        if entry is None:
            return None
        _, value = entry
        return ValueProviderResult(
            raw_value=value,
            attempted_value=None if value is None else _attempted(value),
        )


def _attempted(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


class RouteDataValueProvider(DictionaryValueProvider):
    """Provider over route values."""

    def __init__(self, route_data: RouteData) -> None:
        super().__init__(route_data.values)


class QueryStringValueProvider(DictionaryValueProvider):
    """Provider over the request query string; repeated keys yield lists."""

    def __init__(self, request: Request) -> None:
        values: dict[str, Any] = {}
        for key in request.query_params.keys():
            items = request.query_params.getlist(key)
            values[key] = items if len(items) > 1 else items[0]
        super().__init__(values)


class ValueProviderCollection(list[ValueProvider]):
    """Providers consulted in order; the first match wins."""

    def contains_prefix(self, prefix: str) -> bool:
        return any(provider.contains_prefix(prefix) for provider in self)

    def get_value(self, key: str) -> ValueProviderResult | None:
        for provider in self:
            result = provider.get_value(key)
            if result is not None:
                return result
        return None


class ValueProviderFactory(ABC):
    """Creates a value provider for a controller context."""

    @abstractmethod
    def get_value_provider(
        self, controller_context: ControllerContext | None
    ) -> ValueProvider | None: ...


class RouteDataValueProviderFactory(ValueProviderFactory):
    def get_value_provider(
        self, controller_context: ControllerContext | None
    ) -> ValueProvider | None:
        if controller_context is None:
            raise ArgumentNullError("controllerContext")
        return RouteDataValueProvider(controller_context.route_data)


class QueryStringValueProviderFactory(ValueProviderFactory):
    def get_value_provider(
        self, controller_context: ControllerContext | None
    ) -> ValueProvider | None:
        if controller_context is None:
            raise ArgumentNullError("controllerContext")
        if controller_context.http_context is None:
            return None
        return QueryStringValueProvider(controller_context.http_context)


class ValueProviderFactoryCollection(list[ValueProviderFactory]):
    """Ordered factory registry."""

    def __init__(self, factories: Iterable[ValueProviderFactory] = ()) -> None:
        super().__init__(factories)

    def get_value_provider(
        self, controller_context: ControllerContext | None
    ) -> ValueProviderCollection:
        providers = ValueProviderCollection()
        for factory in self:
            provider = factory.get_value_provider(controller_context)
            if provider is not None:
                providers.append(provider)
        logger.debug(
            "Built value provider from %d of %d factories", len(providers), len(self)
        )
        return providers


def create_value_provider_factories() -> ValueProviderFactoryCollection:
    return ValueProviderFactoryCollection(
        [RouteDataValueProviderFactory(), QueryStringValueProviderFactory()]
    )


# Process-wide registry used by controllers that are not given their own.
value_provider_factories = create_value_provider_factories()
