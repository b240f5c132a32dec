from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from longtail_ui.component_schema import BoundingBox

from .commands import (
    ContentCommand,
    DecorationRenderBatch,
    HitRegionCommand,
    RectCommand,
    ShadowCommand,
)

LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]
SHADOW_BLUR_STEPS = 4


def hex_to_rgba(value: str) -> RGBA:
    raw = value.strip().lstrip("#")
    if len(raw) not in (6, 8):
        raise ValueError(f"expected #RRGGBB or #RRGGBBAA, got {value!r}")
    alpha = int(raw[6:8], 16) if len(raw) == 8 else 255
    return (int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16), alpha)


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def rounded_rect_mask(height: int, width: int, box: tuple[float, float, float, float], radius: float) -> np.ndarray:
    """Boolean mask of pixels whose centers fall inside a rounded rectangle."""

    x0, y0, x1, y1 = box
    ys, xs = np.ogrid[0:height, 0:width]
    xc = xs.astype(np.float32) + 0.5
    yc = ys.astype(np.float32) + 0.5
    inside = (xc >= x0) & (xc < x1) & (yc >= y0) & (yc < y1)
    r = min(max(0.0, radius), (x1 - x0) / 2.0, (y1 - y0) / 2.0)
    if r <= 0:
        return inside
    cx = np.clip(xc, x0 + r, x1 - r)
    cy = np.clip(yc, y0 + r, y1 - r)
    return inside & (((xc - cx) ** 2 + (yc - cy) ** 2) <= r * r)


def blend(canvas: np.ndarray, mask: np.ndarray, color: RGBA, opacity: float = 1.0) -> None:
    a = (color[3] / 255.0) * opacity
    if a <= 0 or not mask.any():
        return
    inv = 1.0 - a
    region = canvas[mask]
    region[:, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + region[:, :3].astype(np.float32) * inv).astype(
        np.uint8
    )
    region[:, 3] = 255
    canvas[mask] = region


@dataclass
class PreviewRenderer:
    """Raster preview of decorations for tests and debugging.

    Each batch replaces the canvas; pixel coordinates are decoration
    coordinates shifted so the batch bounds start at the origin.
    """

    clear_color: RGBA = (255, 255, 255, 255)
    scale: float = 1.0
    canvas: np.ndarray | None = None
    origin: tuple[float, float] = (0.0, 0.0)
    hit_regions: list[HitRegionCommand] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError("PreviewRenderer scale must be > 0")

    def draw_decoration_batch(self, batch: DecorationRenderBatch) -> None:
        width = max(1, int(math.ceil(batch.bounds.width * self.scale)))
        height = max(1, int(math.ceil(batch.bounds.height * self.scale)))
        self.canvas = new_canvas(width, height, self.clear_color)
        self.origin = (batch.bounds.x, batch.bounds.y)
        self.hit_regions = []
        for command in batch.commands:
            if isinstance(command, ShadowCommand):
                self._draw_shadow(command)
            elif isinstance(command, RectCommand):
                self._draw_rect(command)
            elif isinstance(command, ContentCommand):
                self._draw_content(command)
            elif isinstance(command, HitRegionCommand):
                self.hit_regions.append(command)
        LOGGER.debug("rendered %d command(s) for %s at %dx%d", len(batch.commands), batch.component_id, width, height)

    def pixel_at(self, x: float, y: float) -> RGBA:
        """Canvas color at a point given in decoration coordinates."""

        canvas = self._require_canvas()
        px = int(math.floor((x - self.origin[0]) * self.scale))
        py = int(math.floor((y - self.origin[1]) * self.scale))
        if py < 0 or py >= canvas.shape[0] or px < 0 or px >= canvas.shape[1]:
            raise IndexError(f"point ({x}, {y}) is outside the rendered canvas")
        r, g, b, a = (int(v) for v in canvas[py, px])
        return (r, g, b, a)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._require_canvas())

    def save_png(self, path: str | Path) -> Path:
        out_path = Path(path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        self.to_image().save(out_path)
        LOGGER.info("wrote decoration preview to %s", out_path)
        return out_path

    def _require_canvas(self) -> np.ndarray:
        if self.canvas is None:
            raise RuntimeError("PreviewRenderer has not drawn a batch yet")
        return self.canvas

    def _box(self, bounds: BoundingBox) -> tuple[float, float, float, float]:
        ox, oy = self.origin
        s = self.scale
        return ((bounds.x - ox) * s, (bounds.y - oy) * s, (bounds.right - ox) * s, (bounds.bottom - oy) * s)

    def _mask(self, bounds: BoundingBox, radius: float) -> np.ndarray:
        canvas = self._require_canvas()
        return rounded_rect_mask(canvas.shape[0], canvas.shape[1], self._box(bounds), radius * self.scale)

    def _draw_shadow(self, command: ShadowCommand) -> None:
        canvas = self._require_canvas()
        color = hex_to_rgba(command.color_hex)
        if command.blur_radius > 0:
            step_opacity = command.opacity / (SHADOW_BLUR_STEPS + 1)
            for i in range(SHADOW_BLUR_STEPS, 0, -1):
                spread = command.blur_radius * i / SHADOW_BLUR_STEPS
                mask = self._mask(command.bounds.expanded(spread), command.corner_radius + spread)
                blend(canvas, mask, color, step_opacity)
        blend(canvas, self._mask(command.bounds, command.corner_radius), color, command.opacity)

    def _draw_rect(self, command: RectCommand) -> None:
        canvas = self._require_canvas()
        fill = hex_to_rgba(command.fill_hex)
        if command.stroke_hex is None or command.stroke_width <= 0:
            blend(canvas, self._mask(command.bounds, command.corner_radius), fill)
            return
        blend(canvas, self._mask(command.bounds, command.corner_radius), hex_to_rgba(command.stroke_hex))
        sw = command.stroke_width
        inner = BoundingBox(
            x=command.bounds.x + sw,
            y=command.bounds.y + sw,
            width=max(0.0, command.bounds.width - 2 * sw),
            height=max(0.0, command.bounds.height - 2 * sw),
        )
        blend(canvas, self._mask(inner, max(0.0, command.corner_radius - sw)), fill)

    def _draw_content(self, command: ContentCommand) -> None:
        canvas = self._require_canvas()
        description = command.content.to_dict()
        background = description.get("background")
        if isinstance(background, str):
            blend(canvas, self._mask(command.bounds, command.bounds.height / 2.0), hex_to_rgba(background))
        text_color = description.get("text_color")
        fill = hex_to_rgba(text_color) if isinstance(text_color, str) else (0, 0, 0, 255)

        image = Image.fromarray(canvas)
        draw = ImageDraw.Draw(image)
        font = ImageFont.load_default()
        x0, y0, _, _ = self._box(command.bounds)
        y = y0 + 4
        for line in command.content.text_lines():
            draw.text((x0 + 4, y), line, fill=fill, font=font)
            y += 14
        self.canvas = np.array(image)
