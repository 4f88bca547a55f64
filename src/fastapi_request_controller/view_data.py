"""ViewDataDictionary and the DynamicViewData attribute facade."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


class ViewDataDictionary(dict[str, Any]):
    """Mapping of values passed from a controller to a view."""

    def __init__(self, *args: Any, model: Any | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        if args and isinstance(args[0], ViewDataDictionary) and model is None:
            model = args[0].model
        self.model = model


class DynamicViewData:
    """Attribute-style access to whatever view data a getter returns.

    The getter is called on every access, so replacing the underlying
    dictionary is reflected immediately. Missing names read as ``None``.
    """

    __slots__ = ("_get_view_data",)

    def __init__(self, get_view_data: Callable[[], ViewDataDictionary]) -> None:
        object.__setattr__(self, "_get_view_data", get_view_data)

    @property
    def _view_data(self) -> ViewDataDictionary:
        return self._get_view_data()

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._view_data.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            raise AttributeError(f"Cannot set private attribute {name!r}")
        self._view_data[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._view_data[name]
        except KeyError:
            raise AttributeError(name) from None

    def __dir__(self) -> list[str]:
        return sorted(self._view_data.keys())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._view_data)!r})"
