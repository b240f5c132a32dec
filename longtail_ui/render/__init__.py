"""Render-command flattening and the preview rasterizer."""

from .commands import (
    ContentCommand,
    DecorationRenderBatch,
    DecorationRenderer,
    DrawCommand,
    HitRegionCommand,
    RectCommand,
    ShadowCommand,
    build_render_batch,
    hit_test,
    render_decoration,
)
from .preview import PreviewRenderer, hex_to_rgba

__all__ = [
    "ContentCommand",
    "DecorationRenderBatch",
    "DecorationRenderer",
    "DrawCommand",
    "HitRegionCommand",
    "PreviewRenderer",
    "RectCommand",
    "ShadowCommand",
    "build_render_batch",
    "hex_to_rgba",
    "hit_test",
    "render_decoration",
]
