from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, Union

from longtail_ui.component_schema import BoundingBox, ContentDescription
from longtail_ui.decoration import CardFrame, Decoration, Overlay, Shadow, TapGesture


ContentRole = Literal["content", "overlay"]


@dataclass(frozen=True)
class ShadowCommand:
    component_id: str
    bounds: BoundingBox
    corner_radius: float
    color_hex: str
    blur_radius: float
    opacity: float


@dataclass(frozen=True)
class RectCommand:
    component_id: str
    bounds: BoundingBox
    corner_radius: float
    fill_hex: str
    stroke_hex: str | None = None
    stroke_width: float = 0.0


@dataclass(frozen=True)
class ContentCommand:
    component_id: str
    bounds: BoundingBox
    content: ContentDescription
    role: ContentRole = "content"


@dataclass(frozen=True)
class HitRegionCommand:
    component_id: str
    bounds: BoundingBox
    handler_name: str


DrawCommand = Union[ShadowCommand, RectCommand, ContentCommand, HitRegionCommand]


@dataclass(frozen=True)
class DecorationRenderBatch:
    """Back-to-front render list for one decoration.

    `bounds` covers every command, shadows included, so a backend can size its
    surface without walking the commands.
    """

    component_id: str
    bounds: BoundingBox
    commands: tuple[DrawCommand, ...]


class DecorationRenderer(Protocol):
    """Backend-agnostic renderer that draws a whole decoration in one batch call."""

    def draw_decoration_batch(self, batch: DecorationRenderBatch) -> None:
        ...


def build_render_batch(decoration: Decoration) -> DecorationRenderBatch:
    """Flatten a decoration into draw commands.

    Backgrounds are stacked outermost first: the last frame or shadow applied
    wraps everything before it, so it is drawn furthest back. Content follows,
    then overlays in application order, then hit regions.
    """

    component_id = decoration.component.identity
    background: list[DrawCommand] = []
    overlays: list[DrawCommand] = []
    regions: list[DrawCommand] = []
    extent = decoration.bounds.union(decoration.content_bounds)

    for effect in reversed(decoration.effects):
        if isinstance(effect, CardFrame):
            background.append(
                RectCommand(
                    component_id=component_id,
                    bounds=effect.bounds,
                    corner_radius=effect.corner_radius,
                    fill_hex=effect.background,
                    stroke_hex=effect.border_color,
                    stroke_width=effect.border_width,
                )
            )
        elif isinstance(effect, Shadow):
            footprint = effect.cast_from.offset(effect.offset_x, effect.offset_y)
            background.append(
                ShadowCommand(
                    component_id=component_id,
                    bounds=footprint,
                    corner_radius=effect.corner_radius,
                    color_hex=effect.color,
                    blur_radius=effect.radius,
                    opacity=effect.opacity,
                )
            )
            extent = extent.union(effect.footprint)

    for effect in decoration.effects:
        if isinstance(effect, Overlay):
            overlays.append(
                ContentCommand(component_id=component_id, bounds=effect.bounds, content=effect.content, role="overlay")
            )
            extent = extent.union(effect.bounds)
        elif isinstance(effect, TapGesture):
            regions.append(HitRegionCommand(component_id=component_id, bounds=effect.region, handler_name=effect.handler_name))

    content = ContentCommand(component_id=component_id, bounds=decoration.content_bounds, content=decoration.content)
    return DecorationRenderBatch(
        component_id=component_id,
        bounds=extent,
        commands=tuple(background) + (content,) + tuple(overlays) + tuple(regions),
    )


def render_decoration(decoration: Decoration, renderer: DecorationRenderer) -> DecorationRenderBatch:
    batch = build_render_batch(decoration)
    renderer.draw_decoration_batch(batch)
    return batch


def hit_test(decoration: Decoration, x: float, y: float) -> TapGesture | None:
    """Return the tap gesture that owns the point.

    The smallest containing region wins, so a control nested inside the card
    keeps its taps even when a whole-card gesture is applied after it. Equal
    regions go to the gesture applied last.
    """

    best: TapGesture | None = None
    for effect in decoration.effects_of(TapGesture):
        if not effect.region.contains(x, y):
            continue
        area = effect.region.width * effect.region.height
        if best is None or area <= best.region.width * best.region.height:
            best = effect
    return best
