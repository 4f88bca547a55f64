"""Temp data: TempDataDictionary, TempDataProvider, InMemoryTempDataProvider."""

from __future__ import annotations

import logging
import uuid
from collections.abc import ItemsView, Iterator, Mapping, MutableMapping, ValuesView
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fastapi_request_controller._types import TempDataKeyFunc
    from fastapi_request_controller.context import ControllerContext

logger = logging.getLogger(__name__)


@runtime_checkable
class TempDataProvider(Protocol):
    """Pluggable storage for temp data between requests."""

    def load_temp_data(self, controller_context: ControllerContext) -> dict[str, Any]: ...

    def save_temp_data(
        self, controller_context: ControllerContext, values: dict[str, Any]
    ) -> None: ...


class TempDataDictionary(MutableMapping[str, Any]):
    """Values that survive until they are read in a later request.

    A key read through ``[]`` or ``get`` is dropped on the next ``save``
    unless it is kept with ``keep``. ``peek``, ``items()``, ``values()`` and
    equality read without marking. ``dict(temp_data)`` goes through ``[]``
    and marks every key.
    """

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(values or {})
        self._unread_keys: set[str] = set(self._data)
        self._retained_keys: set[str] = set()

    def __getitem__(self, key: str) -> Any:
        value = self._data[key]
        self._unread_keys.discard(key)
        return value

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._unread_keys.add(key)

    def __delitem__(self, key: str) -> None:
        del self._data[key]
        self._unread_keys.discard(key)
        self._retained_keys.discard(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TempDataDictionary):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other.items())
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def items(self) -> ItemsView[str, Any]:
        return self._data.items()

    def values(self) -> ValuesView[Any]:
        return self._data.values()

    def clear(self) -> None:
        self._data.clear()
        self._unread_keys.clear()
        self._retained_keys.clear()

    def peek(self, key: str) -> Any:
        return self._data.get(key)

    def keep(self, key: str | None = None) -> None:
        if key is None:
            self._retained_keys.clear()
            self._retained_keys.update(self._data)
        else:
            self._retained_keys.add(key)

    def load(
        self, controller_context: ControllerContext, provider: TempDataProvider
    ) -> None:
        provided = provider.load_temp_data(controller_context) or {}
        self._data = dict(provided)
        self._unread_keys = set(self._data)
        self._retained_keys.clear()
        logger.debug("Loaded %d temp data item(s)", len(self._data))

    def save(
        self, controller_context: ControllerContext, provider: TempDataProvider
    ) -> None:
        for key in list(self._data):
            if key not in self._unread_keys and key not in self._retained_keys:
                del self._data[key]
        provider.save_temp_data(controller_context, dict(self._data))
        logger.debug("Saved %d temp data item(s)", len(self._data))


# Session entry holding the id that temp data is stored under.
TEMP_DATA_SESSION_KEY = "_temp_data_id"


def _session_temp_data_id(
    controller_context: ControllerContext, *, create: bool
) -> str | None:
    """Return the temp data id kept in the request session.

    Requires Starlette's ``SessionMiddleware``. Without a session there is
    no per-user identity and ``None`` is returned.
    """
    request = controller_context.http_context
    if request is None or "session" not in request.scope:
        return None
    session = request.session
    temp_data_id = session.get(TEMP_DATA_SESSION_KEY)
    if temp_data_id is None and create:
        temp_data_id = uuid.uuid4().hex
        session[TEMP_DATA_SESSION_KEY] = temp_data_id
    return temp_data_id


class InMemoryTempDataProvider:
    """Default in-memory temp data provider. Single-process only.

    Values are stored under an id kept in the request session, or under
    whatever ``key_func`` returns. Requests with no key get no temp data
    and nothing they save is persisted.
    """

    def __init__(
        self, *, key_func: TempDataKeyFunc | None = None
    ) -> None:
        self._key_func = key_func
        self._store: dict[str, dict[str, Any]] = {}

    def _key(
        self, controller_context: ControllerContext, *, create: bool
    ) -> str | None:
        if self._key_func is not None:
            return self._key_func(controller_context)
        return _session_temp_data_id(controller_context, create=create)

    def load_temp_data(self, controller_context: ControllerContext) -> dict[str, Any]:
        key = self._key(controller_context, create=False)
        if key is None:
            return {}
        # Values are handed out once; save writes back what survives.
        return self._store.pop(key, {})

    def save_temp_data(
        self, controller_context: ControllerContext, values: dict[str, Any]
    ) -> None:
        key = self._key(controller_context, create=bool(values))
        if key is None:
            if values:
                logger.debug(
                    "No session for this request; dropping %d temp data item(s)",
                    len(values),
                )
            return
        if values:
            self._store[key] = dict(values)
        else:
            self._store.pop(key, None)
