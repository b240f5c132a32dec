from __future__ import annotations

from contextlib import contextmanager
from dataclasses import asdict, dataclass, field, is_dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Iterator, Literal, Mapping, TypeVar, Union

from .component_schema import BoundingBox, ComponentBase, ContentDescription
from .context import EMPTY_FRAME, ContextFrame, ContextKey, context_scope

if TYPE_CHECKING:
    from .modifiers import Modifier


OverlayAlignment = Literal["top_leading", "top_trailing", "bottom_leading", "bottom_trailing", "center"]
T = TypeVar("T")
E = TypeVar("E", bound="Effect")


@dataclass(frozen=True)
class CardFrame:
    """Background fill plus optional border; `bounds` are the outer bounds after padding and border."""

    kind: ClassVar[str] = "card_frame"

    background: str
    corner_radius: float
    border_color: str | None
    border_width: float
    padding: float
    bounds: BoundingBox

    @property
    def has_border(self) -> bool:
        return self.border_color is not None and self.border_width > 0

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "background": self.background,
            "corner_radius": self.corner_radius,
            "border_color": self.border_color,
            "border_width": self.border_width,
            "padding": self.padding,
            "bounds": self.bounds.to_dict(),
        }


@dataclass(frozen=True)
class Shadow:
    """Drop shadow cast from the bounds the decoration had when it was applied."""

    kind: ClassVar[str] = "shadow"

    color: str
    radius: float
    offset_x: float
    offset_y: float
    opacity: float
    corner_radius: float
    cast_from: BoundingBox

    @property
    def footprint(self) -> BoundingBox:
        return self.cast_from.offset(self.offset_x, self.offset_y).expanded(self.radius)

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "color": self.color,
            "radius": self.radius,
            "offset_x": self.offset_x,
            "offset_y": self.offset_y,
            "opacity": self.opacity,
            "corner_radius": self.corner_radius,
            "cast_from": self.cast_from.to_dict(),
        }


@dataclass(frozen=True)
class Overlay:
    kind: ClassVar[str] = "overlay"

    name: str
    content: ContentDescription
    alignment: OverlayAlignment
    bounds: BoundingBox

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "name": self.name,
            "alignment": self.alignment,
            "content": self.content.to_dict(),
            "bounds": self.bounds.to_dict(),
        }


@dataclass(frozen=True)
class TapGesture:
    kind: ClassVar[str] = "tap_gesture"

    handler: Callable[[], object]
    handler_name: str
    region: BoundingBox

    def to_dict(self) -> dict[str, object]:
        return {"kind": self.kind, "handler": self.handler_name, "region": self.region.to_dict()}


Effect = Union[CardFrame, Shadow, Overlay, TapGesture]


@dataclass(frozen=True)
class Decoration:
    """A component plus the ordered effects applied to it.

    `content_bounds` is where the component's own content sits; `bounds` is
    the current outer edge, grown by frame-like effects. `frame` holds the
    context the component was rendered under plus the values set by
    context-setting modifiers, and `content` is always the component
    described under that frame.
    """

    component: ComponentBase
    content: ContentDescription
    content_bounds: BoundingBox
    bounds: BoundingBox
    frame: ContextFrame = field(default_factory=lambda: EMPTY_FRAME)
    effects: tuple[Effect, ...] = ()

    @contextmanager
    def scope(self) -> Iterator[ContextFrame]:
        with context_scope(self.frame) as frame:
            yield frame

    def with_context(self, key: ContextKey[T], value: T) -> "Decoration":
        return self.with_frame({key: value})

    def with_frame(self, values: Mapping[ContextKey[Any], object]) -> "Decoration":
        frame = self.frame.merged(ContextFrame(values))
        with context_scope(frame):
            content = self.component.describe()
        return replace(self, frame=frame, content=content)

    def with_effect(self, effect: Effect, *, bounds: BoundingBox | None = None) -> "Decoration":
        return replace(self, effects=self.effects + (effect,), bounds=bounds or self.bounds)

    def modifier(self, modifier: "Modifier") -> "Decoration":
        return modifier(self)

    def apply(self, *modifiers: "Modifier") -> "Decoration":
        decoration = self
        for modifier in modifiers:
            decoration = modifier(decoration)
        return decoration

    def effects_of(self, effect_type: type[E]) -> tuple[E, ...]:
        return tuple(effect for effect in self.effects if isinstance(effect, effect_type))

    @property
    def background(self) -> str | None:
        """Fill of the outermost card frame, or None when no frame is applied."""

        frames = self.effects_of(CardFrame)
        return frames[-1].background if frames else None

    @property
    def border(self) -> tuple[str, float] | None:
        for effect in reversed(self.effects_of(CardFrame)):
            if effect.border_color is not None and effect.border_width > 0:
                return (effect.border_color, effect.border_width)
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "component_type": type(self.component).__name__,
            "component_id": self.component.identity,
            "content": self.content.to_dict(),
            "content_bounds": self.content_bounds.to_dict(),
            "bounds": self.bounds.to_dict(),
            "context": {name: _jsonable(value) for name, value in self.frame.as_dict().items()},
            "effects": [effect.to_dict() for effect in self.effects],
        }


def _jsonable(value: object) -> object:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return value
