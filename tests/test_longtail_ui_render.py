from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from PIL import Image

from longtail_ui.decoration import Overlay
from longtail_ui.modifiers import card_shadow, on_tap, theme
from longtail_ui.profile import ProfileCard, follow_button, profile_card_style, profile_verified
from longtail_ui.render.commands import (
    ContentCommand,
    DecorationRenderBatch,
    HitRegionCommand,
    RectCommand,
    ShadowCommand,
    build_render_batch,
    hit_test,
    render_decoration,
)
from longtail_ui.render.preview import PreviewRenderer, hex_to_rgba, rounded_rect_mask
from longtail_ui.style.theme import validate_theme_tokens


class _CaptureRenderer:
    def __init__(self) -> None:
        self.batches: list[DecorationRenderBatch] = []

    def draw_decoration_batch(self, batch: DecorationRenderBatch) -> None:
        self.batches.append(batch)


def _card() -> ProfileCard:
    return ProfileCard(username="newuser", followers=42, following=108, bio="Just joined!")


class RenderBatchTests(unittest.TestCase):
    def test_unmodified_component_is_a_single_content_command(self) -> None:
        batch = build_render_batch(_card().render())
        self.assertEqual(len(batch.commands), 1)
        self.assertIsInstance(batch.commands[0], ContentCommand)
        self.assertEqual(batch.component_id, "profile_card:newuser")

    def test_backgrounds_are_stacked_outermost_first(self) -> None:
        style = profile_card_style(border_color="#FFFF00", border_width=2)
        border_first = build_render_batch(_card().decorate(style, card_shadow()))
        shadow_first = build_render_batch(_card().decorate(card_shadow(), style))

        self.assertEqual(
            [type(c) for c in border_first.commands], [ShadowCommand, RectCommand, ContentCommand]
        )
        self.assertEqual(
            [type(c) for c in shadow_first.commands], [RectCommand, ShadowCommand, ContentCommand]
        )
        self.assertGreater(border_first.bounds.width, shadow_first.bounds.width)

    def test_overlays_and_hit_regions_come_last(self) -> None:
        decoration = _card().decorate(profile_card_style(), follow_button(on_follow=lambda: None))
        batch = build_render_batch(decoration)
        self.assertEqual(
            [type(c) for c in batch.commands], [RectCommand, ContentCommand, ContentCommand, HitRegionCommand]
        )
        self.assertEqual(batch.commands[2].role, "overlay")

    def test_render_decoration_hands_batch_to_renderer(self) -> None:
        renderer = _CaptureRenderer()
        batch = render_decoration(_card().decorate(profile_card_style()), renderer)
        self.assertEqual(renderer.batches, [batch])

    def test_hit_test_picks_innermost_region(self) -> None:
        def open_profile() -> None:
            pass

        def follow() -> None:
            pass

        decoration = _card().decorate(profile_card_style(), on_tap(open_profile), follow_button(on_follow=follow))
        button = decoration.effects[-2].bounds
        self.assertEqual(hit_test(decoration, button.x + 1, button.y + 1).handler, follow)
        self.assertEqual(hit_test(decoration, 10.0, 90.0).handler, open_profile)
        self.assertIsNone(hit_test(decoration, 5000.0, 5000.0))

    def test_hit_test_nested_control_wins_over_later_card_tap(self) -> None:
        def open_profile() -> None:
            pass

        def follow() -> None:
            pass

        decoration = _card().decorate(profile_card_style(), follow_button(on_follow=follow), on_tap(open_profile))
        (button,) = decoration.effects_of(Overlay)
        self.assertEqual(hit_test(decoration, button.bounds.x + 1, button.bounds.y + 1).handler, follow)
        self.assertEqual(hit_test(decoration, 10.0, 90.0).handler, open_profile)

    def test_equal_decorations_hash_equal(self) -> None:
        first = _card().decorate(profile_verified(), profile_card_style(), card_shadow())
        second = _card().decorate(profile_verified(), profile_card_style(), card_shadow())
        self.assertEqual(hash(first), hash(second))
        self.assertEqual(len({first, second}), 1)

    def test_to_dict_is_json_serializable(self) -> None:
        dark = validate_theme_tokens({"card_background": "#0F172A"})
        decoration = _card().decorate(theme(dark), profile_verified(), profile_card_style(), on_tap(lambda: None, "open"))
        payload = json.loads(json.dumps(decoration.to_dict()))
        self.assertEqual(payload["component_type"], "ProfileCard")
        self.assertTrue(payload["context"]["profile.verified"])
        self.assertEqual(payload["context"]["theme"]["card_background"], "#0F172A")
        self.assertEqual([e["kind"] for e in payload["effects"]], ["card_frame", "tap_gesture"])
        self.assertEqual(payload["effects"][1]["handler"], "open")


class PreviewRendererTests(unittest.TestCase):
    def test_hex_to_rgba(self) -> None:
        self.assertEqual(hex_to_rgba("#FF8000"), (255, 128, 0, 255))
        self.assertEqual(hex_to_rgba("#00000080"), (0, 0, 0, 128))
        with self.assertRaises(ValueError):
            hex_to_rgba("#123")

    def test_rounded_rect_mask_cuts_corners(self) -> None:
        mask = rounded_rect_mask(10, 10, (0.0, 0.0, 10.0, 10.0), 4.0)
        self.assertFalse(mask[0, 0])
        self.assertTrue(mask[5, 5])
        self.assertTrue(mask[0, 5])

    def test_border_pixels_and_fill(self) -> None:
        renderer = PreviewRenderer()
        decoration = _card().decorate(profile_card_style(border_color="#808080", border_width=1, corner_radius=0))
        render_decoration(decoration, renderer)
        outer = decoration.bounds
        self.assertEqual(renderer.pixel_at(outer.x + 0.5, outer.bottom - 20), (128, 128, 128, 255))
        self.assertEqual(renderer.pixel_at(outer.x + 3, outer.bottom - 20), (255, 255, 255, 255))

    def test_shadow_order_is_visible_in_pixels(self) -> None:
        style = profile_card_style(border_color="#FFFF00", border_width=2)
        renderer = PreviewRenderer()

        render_decoration(_card().decorate(style, card_shadow()), renderer)
        covered = renderer.pixel_at(270.0, 90.0)
        self.assertEqual(covered, (255, 255, 255, 255))

        render_decoration(_card().decorate(card_shadow(), style), renderer)
        shaded = renderer.pixel_at(270.0, 90.0)
        self.assertLess(shaded[0], 250)

    def test_pixel_at_outside_canvas_raises(self) -> None:
        renderer = PreviewRenderer()
        with self.assertRaises(RuntimeError):
            renderer.pixel_at(0, 0)
        render_decoration(_card().render(), renderer)
        with self.assertRaises(IndexError):
            renderer.pixel_at(-100.0, 0.0)

    def test_save_png_writes_canvas_size(self) -> None:
        renderer = PreviewRenderer(scale=2.0)
        batch = render_decoration(_card().decorate(profile_card_style(), card_shadow()), renderer)
        with tempfile.TemporaryDirectory() as tmp:
            path = renderer.save_png(Path(tmp) / "preview" / "card.png")
            self.assertTrue(path.exists())
            with Image.open(path) as image:
                self.assertEqual(image.size, (int(batch.bounds.width * 2), int(batch.bounds.height * 2)))


if __name__ == "__main__":
    unittest.main()
