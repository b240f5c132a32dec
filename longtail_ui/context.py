from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import threading
from typing import Any, Callable, Generic, TypeVar

from .errors import MissingContextDefault, TypeMismatchError


T = TypeVar("T")
R = TypeVar("R")


class _Missing:
    def __repr__(self) -> str:
        return "<no default>"


NO_DEFAULT: Any = _Missing()


@dataclass(frozen=True, eq=False)
class ContextKey(Generic[T]):
    """Typed slot for an ambient value.

    Keys compare by identity: two keys that share a name are still
    independent slots.
    """

    name: str
    value_type: type[T]
    default: T = NO_DEFAULT

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("context key name must be non-empty")
        if self.has_default:
            self.validate(self.default)

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    def validate(self, value: object) -> T:
        if not isinstance(value, self.value_type):
            raise TypeMismatchError(f"context key `{self.name}`", self.value_type, type(value))
        return value

    def __repr__(self) -> str:
        return f"ContextKey({self.name!r}, {self.value_type.__name__})"


class ContextFrame(Mapping["ContextKey[Any]", object]):
    """Immutable key/value snapshot. Updates return a new shadowing frame."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[ContextKey[Any], object] | None = None) -> None:
        checked: dict[ContextKey[Any], object] = {}
        for key, value in (values or {}).items():
            if not isinstance(key, ContextKey):
                raise TypeError(f"context frame keys must be ContextKey, got {type(key).__name__}")
            checked[key] = key.validate(value)
        self._values = checked

    def __getitem__(self, key: ContextKey[Any]) -> object:
        return self._values[key]

    def __iter__(self) -> Iterator[ContextKey[Any]]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        body = ", ".join(f"{key.name}={value!r}" for key, value in self._values.items())
        return f"ContextFrame({body})"

    def set(self, key: ContextKey[T], value: T) -> "ContextFrame":
        values = dict(self._values)
        values[key] = value
        return ContextFrame(values)

    def merged(self, inner: Mapping[ContextKey[Any], object]) -> "ContextFrame":
        """Return a frame where `inner` shadows this frame's values."""

        if not inner:
            return self
        values = dict(self._values)
        values.update(inner)
        return ContextFrame(values)

    def lookup(self, key: ContextKey[T]) -> T:
        if key in self._values:
            return self._values[key]  # type: ignore[return-value]
        if key.has_default:
            return key.default
        raise MissingContextDefault(key.name)

    def as_dict(self) -> dict[str, object]:
        return {key.name: value for key, value in self._values.items()}


EMPTY_FRAME = ContextFrame()

_ACTIVE_FRAME: ContextVar[ContextFrame] = ContextVar("longtail_ui_active_frame", default=EMPTY_FRAME)
_KEY_REGISTRY: dict[str, ContextKey[Any]] = {}
_KEY_REGISTRY_LOCK = threading.Lock()


def declare_context_key(name: str, value_type: type[T], default: T = NO_DEFAULT) -> ContextKey[T]:
    """Declare a key and register its name process-wide.

    Raises ValueError when another key already uses `name`.
    """

    key = ContextKey(name=name, value_type=value_type, default=default)
    with _KEY_REGISTRY_LOCK:
        if name in _KEY_REGISTRY:
            raise ValueError(f"context key `{name}` is already declared")
        _KEY_REGISTRY[name] = key
    return key


def registered_context_keys() -> dict[str, ContextKey[Any]]:
    with _KEY_REGISTRY_LOCK:
        return dict(_KEY_REGISTRY)


def current_frame() -> ContextFrame:
    return _ACTIVE_FRAME.get()


@contextmanager
def context_scope(values: Mapping[ContextKey[Any], object] | None = None) -> Iterator[ContextFrame]:
    """Shadow `values` over the active frame until the block exits."""

    frame = _ACTIVE_FRAME.get().merged(ContextFrame(values))
    token = _ACTIVE_FRAME.set(frame)
    try:
        yield frame
    finally:
        _ACTIVE_FRAME.reset(token)


def with_context(key: ContextKey[T], value: T, body: Callable[[], R]) -> R:
    with context_scope({key: value}):
        return body()


def read_context(key: ContextKey[T]) -> T:
    return _ACTIVE_FRAME.get().lookup(key)
