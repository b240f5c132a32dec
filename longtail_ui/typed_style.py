from __future__ import annotations

from dataclasses import dataclass
import threading
from typing import Any, Generic, TypeVar

from .component_schema import ComponentBase
from .context import ContextKey
from .decoration import Decoration
from .errors import TypeMismatchError
from .modifiers import Modifier


C = TypeVar("C", bound=ComponentBase)


@dataclass(frozen=True)
class TypedStyle(Generic[C]):
    """Named modifier bundle usable only with `target` components.

    Applying the style establishes `context` around the component first, then
    applies `modifiers` in order.
    """

    name: str
    target: type[C]
    modifiers: tuple[Modifier, ...] = ()
    context: tuple[tuple[ContextKey[Any], object], ...] = ()

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("style name must be non-empty")
        if not isinstance(self.target, type) or not issubclass(self.target, ComponentBase):
            raise TypeError("style target must be a ComponentBase subclass")
        for modifier in self.modifiers:
            if modifier.target is not None and not issubclass(self.target, modifier.target):
                raise TypeMismatchError(
                    f"modifier `{modifier.name}` in style `{self.name}`", modifier.target, self.target
                )
        for key, value in self.context:
            key.validate(value)

    def apply(self, component: C) -> Decoration:
        if not isinstance(component, self.target):
            raise TypeMismatchError(f"style `{self.name}`", self.target, type(component))
        decoration = component.render()
        if self.context:
            decoration = decoration.with_frame(dict(self.context))
        return decoration.apply(*self.modifiers)

    __call__ = apply


class StyleRegistry:
    """Named styles keyed by `(target type, name)`.

    Lookups walk the component type's MRO, so a style registered for a base
    class is available to its subclasses unless shadowed.
    """

    def __init__(self) -> None:
        self._styles: dict[tuple[type, str], TypedStyle[Any]] = {}
        self._lock = threading.Lock()

    def register(self, style: TypedStyle[C]) -> TypedStyle[C]:
        key = (style.target, style.name)
        with self._lock:
            if key in self._styles:
                raise ValueError(f"style `{style.name}` is already registered for `{style.target.__name__}`")
            self._styles[key] = style
        return style

    def lookup(self, component_type: type[C], name: str) -> TypedStyle[C]:
        with self._lock:
            for cls in component_type.__mro__:
                style = self._styles.get((cls, name))
                if style is not None:
                    return style
        raise KeyError(f"no style `{name}` registered for `{component_type.__name__}`")

    def names_for(self, component_type: type) -> tuple[str, ...]:
        with self._lock:
            names = {name for (cls, name) in self._styles if cls in component_type.__mro__}
        return tuple(sorted(names))

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._styles

    def __len__(self) -> int:
        with self._lock:
            return len(self._styles)


DEFAULT_STYLE_REGISTRY = StyleRegistry()


def register_style(style: TypedStyle[C], registry: StyleRegistry | None = None) -> TypedStyle[C]:
    target = registry if registry is not None else DEFAULT_STYLE_REGISTRY
    return target.register(style)
