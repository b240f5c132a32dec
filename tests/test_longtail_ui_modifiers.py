from __future__ import annotations

from dataclasses import dataclass
import unittest

from longtail_ui.component_schema import BoundingBox, ComponentBase
from longtail_ui.context import context_scope
from longtail_ui.decoration import CardFrame, Overlay, Shadow, TapGesture
from longtail_ui.errors import TypeMismatchError, ValidationError
from longtail_ui.modifiers import aligned_rect, card_shadow, card_style, on_tap, overlay, theme
from longtail_ui.profile import ProfileCard, profile_card_style, profile_verified
from longtail_ui.style.theme import DEFAULT_TOKENS, THEME, validate_theme_tokens


@dataclass(frozen=True)
class _BannerContent:
    title: str

    def text_lines(self) -> tuple[str, ...]:
        return (self.title,)

    def to_dict(self) -> dict[str, object]:
        return {"type": "banner", "title": self.title}


@dataclass(frozen=True)
class _Banner(ComponentBase):
    title: str

    @property
    def identity(self) -> str:
        return f"banner:{self.title}"

    def describe(self) -> _BannerContent:
        return _BannerContent(self.title)

    def intrinsic_size(self, content: _BannerContent) -> tuple[float, float]:
        return (100.0, 20.0)


def _card() -> ProfileCard:
    return ProfileCard(username="newuser", followers=42, following=108, bio="Just joined!")


class ModifierValidationTests(unittest.TestCase):
    def test_negative_radius_names_modifier_and_parameter(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            card_style(corner_radius=-1)
        self.assertEqual(ctx.exception.modifier, "card_style")
        self.assertEqual(ctx.exception.parameter, "corner_radius")
        self.assertIsInstance(ctx.exception, ValueError)

    def test_profile_card_style_reports_its_own_name(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            profile_card_style(border_width=-2)
        self.assertEqual(ctx.exception.modifier, "profile_card_style")
        self.assertEqual(ctx.exception.parameter, "border_width")

    def test_shadow_rejects_bad_opacity_and_color(self) -> None:
        with self.assertRaisesRegex(ValidationError, "opacity"):
            card_shadow(opacity=1.5)
        with self.assertRaisesRegex(ValidationError, "color"):
            card_shadow(color="black")

    def test_tap_and_overlay_parameters_are_checked(self) -> None:
        with self.assertRaisesRegex(ValidationError, "handler"):
            on_tap("not callable")  # type: ignore[arg-type]
        with self.assertRaisesRegex(ValidationError, "alignment"):
            overlay(_BannerContent("x"), width=10, height=10, alignment="middle")  # type: ignore[arg-type]
        with self.assertRaisesRegex(ValidationError, "width"):
            overlay(_BannerContent("x"), width=0, height=10)

    def test_theme_modifier_requires_value(self) -> None:
        with self.assertRaisesRegex(ValidationError, "is required"):
            theme()


class ModifierChainTests(unittest.TestCase):
    def test_card_style_defaults_come_from_theme(self) -> None:
        decoration = _card().decorate(card_style())
        (frame,) = decoration.effects_of(CardFrame)
        self.assertEqual(frame.background, DEFAULT_TOKENS.card_background)
        self.assertEqual(frame.corner_radius, DEFAULT_TOKENS.card_corner_radius)
        self.assertIsNone(frame.border_color)
        self.assertEqual(decoration.bounds, decoration.content_bounds.expanded(DEFAULT_TOKENS.card_padding))

    def test_border_color_falls_back_to_theme_when_width_set(self) -> None:
        decoration = _card().decorate(card_style(border_width=1))
        self.assertEqual(decoration.border, (DEFAULT_TOKENS.card_border, 1.0))

    def test_same_sequence_is_deterministic(self) -> None:
        modifiers = (profile_verified(), profile_card_style(border_color="#808080", border_width=1), card_shadow())
        self.assertEqual(_card().decorate(*modifiers), _card().decorate(*modifiers))

    def test_modifiers_do_not_mutate_their_input(self) -> None:
        base = _card().render()
        styled = base.modifier(card_style())
        self.assertEqual(base.effects, ())
        self.assertEqual(len(styled.effects), 1)
        self.assertEqual(base.bounds, base.content_bounds)

    def test_border_then_shadow_differs_from_shadow_then_border(self) -> None:
        style = profile_card_style(border_color="#FFFF00", border_width=2)
        shadow = card_shadow()
        border_first = _card().decorate(style, shadow)
        shadow_first = _card().decorate(shadow, style)
        self.assertNotEqual(border_first, shadow_first)

        (cast_outer,) = border_first.effects_of(Shadow)
        (cast_inner,) = shadow_first.effects_of(Shadow)
        self.assertEqual(cast_outer.cast_from, border_first.bounds)
        self.assertEqual(cast_inner.cast_from, shadow_first.content_bounds)
        self.assertEqual([type(e) for e in border_first.effects], [CardFrame, Shadow])
        self.assertEqual([type(e) for e in shadow_first.effects], [Shadow, CardFrame])

    def test_nested_cards_grow_bounds_in_order(self) -> None:
        decoration = _card().decorate(card_style(padding=4), card_style(padding=10, border_width=2))
        inner, outer = decoration.effects_of(CardFrame)
        self.assertEqual(inner.bounds, decoration.content_bounds.expanded(4))
        self.assertEqual(outer.bounds, decoration.content_bounds.expanded(16))
        self.assertEqual(decoration.bounds, outer.bounds)

    def test_theme_modifier_reaches_later_modifiers_and_content(self) -> None:
        dark = validate_theme_tokens({"card_background": "#0F172A", "text_primary": "#F8FAFC"})
        decoration = _card().decorate(theme(dark), card_style())
        self.assertEqual(decoration.background, "#0F172A")
        self.assertEqual(decoration.content.text_color, "#F8FAFC")

    def test_modifier_keeps_theme_the_component_was_rendered_under(self) -> None:
        dark = validate_theme_tokens({"card_background": "#0F172A", "text_primary": "#F8FAFC"})
        with context_scope({THEME: dark}):
            base = _card().render()
        styled = base.modifier(card_style())
        self.assertEqual(styled.background, "#0F172A")
        self.assertEqual(styled.content.text_color, "#F8FAFC")

    def test_overlay_is_aligned_inside_current_bounds(self) -> None:
        decoration = _Banner("hi").decorate(overlay(_BannerContent("tag"), width=10, height=6, alignment="bottom_trailing", inset=2))
        (placed,) = decoration.effects_of(Overlay)
        self.assertEqual(placed.bounds, BoundingBox(x=88.0, y=12.0, width=10.0, height=6.0))

    def test_aligned_rect_center(self) -> None:
        rect = aligned_rect(BoundingBox(0, 0, 100, 50), 20, 10, "center")
        self.assertEqual((rect.x, rect.y), (40.0, 20.0))

    def test_on_tap_covers_bounds_at_application(self) -> None:
        calls: list[str] = []

        def open_profile() -> None:
            calls.append("open")

        decoration = _card().decorate(card_style(), on_tap(open_profile))
        (gesture,) = decoration.effects_of(TapGesture)
        self.assertEqual(gesture.region, decoration.bounds)
        self.assertTrue(gesture.handler_name.endswith("open_profile"))
        gesture.handler()
        self.assertEqual(calls, ["open"])

    def test_generic_modifiers_apply_to_any_component(self) -> None:
        decoration = _Banner("hi").decorate(card_style(), card_shadow())
        self.assertEqual(len(decoration.effects), 2)

    def test_restricted_modifier_rejects_other_component_types(self) -> None:
        banner = _Banner("hi").render()
        with self.assertRaises(TypeMismatchError) as ctx:
            banner.modifier(profile_verified())
        self.assertIs(ctx.exception.expected, ProfileCard)
        self.assertIs(ctx.exception.actual, _Banner)
        with self.assertRaises(TypeMismatchError):
            banner.modifier(profile_card_style())


if __name__ == "__main__":
    unittest.main()
