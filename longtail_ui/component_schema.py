from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .decoration import Decoration
    from .modifiers import Modifier
    from .typed_style import StyleRegistry, TypedStyle


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("BoundingBox width/height must be >= 0")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def expanded(self, amount: float) -> "BoundingBox":
        if amount < 0:
            raise ValueError("BoundingBox expansion must be >= 0")
        return BoundingBox(
            x=self.x - amount,
            y=self.y - amount,
            width=self.width + 2 * amount,
            height=self.height + 2 * amount,
        )

    def offset(self, dx: float, dy: float) -> "BoundingBox":
        return BoundingBox(x=self.x + dx, y=self.y + dy, width=self.width, height=self.height)

    def union(self, other: "BoundingBox") -> "BoundingBox":
        x0 = min(self.x, other.x)
        y0 = min(self.y, other.y)
        return BoundingBox(x=x0, y=y0, width=max(self.right, other.right) - x0, height=max(self.bottom, other.bottom) - y0)

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


class ContentDescription(Protocol):
    """What a component draws before any modifier is applied."""

    def to_dict(self) -> dict[str, object]:
        ...

    def text_lines(self) -> tuple[str, ...]:
        ...


@dataclass(frozen=True)
class ComponentBase:
    """Shared contract for long-tail components.

    Subclasses hold required data only. Presentation (colors, borders,
    shadows, spacing) is layered on afterwards with modifiers, and ambient
    flags are read from the context store inside `describe()`.
    """

    @property
    def identity(self) -> str:
        raise NotImplementedError

    def describe(self) -> ContentDescription:
        raise NotImplementedError

    def intrinsic_size(self, content: ContentDescription) -> tuple[float, float]:
        raise NotImplementedError

    def render(self) -> "Decoration":
        from .context import current_frame
        from .decoration import Decoration

        content = self.describe()
        width, height = self.intrinsic_size(content)
        bounds = BoundingBox(x=0.0, y=0.0, width=float(width), height=float(height))
        return Decoration(
            component=self, content=content, content_bounds=bounds, bounds=bounds, frame=current_frame()
        )

    def decorate(self, *modifiers: "Modifier") -> "Decoration":
        return self.render().apply(*modifiers)

    def style(self, style: "TypedStyle | str", registry: "StyleRegistry | None" = None) -> "Decoration":
        if isinstance(style, str):
            from .typed_style import DEFAULT_STYLE_REGISTRY

            style = (DEFAULT_STYLE_REGISTRY if registry is None else registry).lookup(type(self), style)
        return style.apply(self)
