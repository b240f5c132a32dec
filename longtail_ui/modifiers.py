from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from .component_schema import BoundingBox, ContentDescription
from .context import NO_DEFAULT, ContextKey, read_context
from .decoration import CardFrame, Decoration, Overlay, OverlayAlignment, Shadow, TapGesture
from .errors import TypeMismatchError, ValidationError
from .style.theme import HEX_COLOR, THEME, ThemeTokens


T = TypeVar("T")

OVERLAY_ALIGNMENTS = ("top_leading", "top_trailing", "bottom_leading", "bottom_trailing", "center")


@dataclass(frozen=True)
class Modifier:
    """Named pure transformation `Decoration -> Decoration`.

    `target`, when set, restricts the modifier to decorations whose component
    is an instance of that type. Parameters are validated when the modifier is
    built, so applying one never yields an invalid decoration.
    """

    name: str
    transform: Callable[[Decoration], Decoration]
    target: type | None = None
    params: tuple[tuple[str, object], ...] = ()

    def accepts(self, component_type: type) -> bool:
        return self.target is None or issubclass(component_type, self.target)

    def __call__(self, decoration: Decoration) -> Decoration:
        component_type = type(decoration.component)
        target = self.target
        if target is not None and not issubclass(component_type, target):
            raise TypeMismatchError(f"modifier `{self.name}`", target, component_type)
        with decoration.scope():
            return self.transform(decoration)


def context_modifier(
    key: ContextKey[T],
    *,
    name: str,
    target: type | None = None,
    default: T = NO_DEFAULT,
) -> Callable[..., Modifier]:
    """Build a factory for modifiers that shadow `key` around the wrapped component.

    The component is re-described under the new value, so the modifier takes
    effect wherever it appears in the chain.
    """

    def factory(value: T = default) -> Modifier:
        if value is NO_DEFAULT:
            raise ValidationError(name, "value", "is required")
        checked = key.validate(value)
        return Modifier(
            name=name,
            transform=lambda decoration: decoration.with_context(key, checked),
            target=target,
            params=(("value", checked),),
        )

    factory.__name__ = name
    factory.__doc__ = f"Set `{key.name}` for the wrapped component."
    return factory


theme = context_modifier(THEME, name="theme")


def card_style(
    background: str | None = None,
    corner_radius: float | None = None,
    border_color: str | None = None,
    border_width: float = 0.0,
    padding: float | None = None,
    *,
    name: str = "card_style",
    target: type | None = None,
) -> Modifier:
    """Wrap the decoration in a filled, optionally bordered card.

    Unset values fall back to the active theme. A border is drawn only when
    `border_width` is positive; its color defaults to `card_border`.
    """

    _check_color(name, "background", background)
    _check_color(name, "border_color", border_color)
    _check_non_negative(name, "corner_radius", corner_radius)
    _check_non_negative(name, "border_width", border_width)
    _check_non_negative(name, "padding", padding)

    def transform(decoration: Decoration) -> Decoration:
        tokens = read_context(THEME)
        resolved_padding = tokens.card_padding if padding is None else float(padding)
        resolved_border = None
        if border_width > 0:
            resolved_border = border_color or tokens.card_border
        outer = decoration.bounds.expanded(resolved_padding + float(border_width))
        effect = CardFrame(
            background=background or tokens.card_background,
            corner_radius=tokens.card_corner_radius if corner_radius is None else float(corner_radius),
            border_color=resolved_border,
            border_width=float(border_width) if resolved_border else 0.0,
            padding=resolved_padding,
            bounds=outer,
        )
        return decoration.with_effect(effect, bounds=outer)

    return Modifier(
        name=name,
        transform=transform,
        target=target,
        params=_params(
            background=background,
            corner_radius=corner_radius,
            border_color=border_color,
            border_width=border_width,
            padding=padding,
        ),
    )


def card_shadow(
    color: str | None = None,
    radius: float = 8.0,
    x: float = 0.0,
    y: float = 2.0,
    opacity: float = 0.15,
) -> Modifier:
    """Cast a shadow from the decoration's bounds at the point of application."""

    name = "card_shadow"
    _check_color(name, "color", color)
    _check_non_negative(name, "radius", radius)
    _check_number(name, "x", x)
    _check_number(name, "y", y)
    _check_unit_interval(name, "opacity", opacity)

    def transform(decoration: Decoration) -> Decoration:
        tokens = read_context(THEME)
        frames = decoration.effects_of(CardFrame)
        effect = Shadow(
            color=color or tokens.shadow_color,
            radius=float(radius),
            offset_x=float(x),
            offset_y=float(y),
            opacity=float(opacity),
            corner_radius=frames[-1].corner_radius if frames else 0.0,
            cast_from=decoration.bounds,
        )
        return decoration.with_effect(effect)

    return Modifier(
        name=name,
        transform=transform,
        params=_params(color=color, radius=radius, x=x, y=y, opacity=opacity),
    )


def overlay(
    content: ContentDescription | Callable[[ThemeTokens], ContentDescription],
    width: float,
    height: float,
    alignment: OverlayAlignment = "center",
    inset: float = 8.0,
    *,
    name: str = "overlay",
    target: type | None = None,
    on_tap: Callable[[], object] | None = None,
) -> Modifier:
    """Place `content` inside the current bounds at `alignment`.

    `content` may be a callable taking the active theme, for overlays whose
    colors come from tokens.
    """

    if alignment not in OVERLAY_ALIGNMENTS:
        raise ValidationError(name, "alignment", f"must be one of {', '.join(OVERLAY_ALIGNMENTS)}")
    _check_positive(name, "width", width)
    _check_positive(name, "height", height)
    _check_non_negative(name, "inset", inset)
    if on_tap is not None and not callable(on_tap):
        raise ValidationError(name, "on_tap", "must be callable")

    def transform(decoration: Decoration) -> Decoration:
        resolved = content(read_context(THEME)) if callable(content) else content
        region = aligned_rect(decoration.bounds, float(width), float(height), alignment, float(inset))
        decoration = decoration.with_effect(Overlay(name=name, content=resolved, alignment=alignment, bounds=region))
        if on_tap is not None:
            decoration = decoration.with_effect(
                TapGesture(handler=on_tap, handler_name=_handler_name(on_tap, fallback=name), region=region)
            )
        return decoration

    return Modifier(
        name=name,
        transform=transform,
        target=target,
        params=_params(width=width, height=height, alignment=alignment, inset=inset),
    )


def on_tap(handler: Callable[[], object], handler_name: str | None = None) -> Modifier:
    """Bind `handler` to taps anywhere inside the current bounds."""

    name = "on_tap"
    if not callable(handler):
        raise ValidationError(name, "handler", "must be callable")
    if handler_name is not None and not handler_name.strip():
        raise ValidationError(name, "handler_name", "must be non-empty when provided")
    resolved_name = handler_name or _handler_name(handler, fallback=name)

    def transform(decoration: Decoration) -> Decoration:
        return decoration.with_effect(TapGesture(handler=handler, handler_name=resolved_name, region=decoration.bounds))

    return Modifier(name=name, transform=transform, params=(("handler", resolved_name),))


def aligned_rect(
    bounds: BoundingBox,
    width: float,
    height: float,
    alignment: OverlayAlignment,
    inset: float = 0.0,
) -> BoundingBox:
    if alignment == "center":
        x = bounds.x + (bounds.width - width) / 2.0
        y = bounds.y + (bounds.height - height) / 2.0
    else:
        vertical, horizontal = alignment.split("_")
        x = bounds.x + inset if horizontal == "leading" else bounds.right - inset - width
        y = bounds.y + inset if vertical == "top" else bounds.bottom - inset - height
    return BoundingBox(x=x, y=y, width=width, height=height)


def _handler_name(handler: Callable[..., object], *, fallback: str) -> str:
    return str(getattr(handler, "__qualname__", None) or getattr(handler, "__name__", None) or fallback)


def _params(**values: Any) -> tuple[tuple[str, object], ...]:
    return tuple((key, value) for key, value in values.items() if value is not None)


def _check_color(modifier: str, parameter: str, value: str | None) -> None:
    if value is None:
        return
    if not isinstance(value, str) or not HEX_COLOR.match(value):
        raise ValidationError(modifier, parameter, "must be a hex color (#RRGGBB or #RRGGBBAA)")


def _check_number(modifier: str, parameter: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(modifier, parameter, "must be a number")
    return float(value)


def _check_non_negative(modifier: str, parameter: str, value: float | None) -> None:
    if value is None:
        return
    if _check_number(modifier, parameter, value) < 0:
        raise ValidationError(modifier, parameter, f"must be >= 0, got {value}")


def _check_positive(modifier: str, parameter: str, value: float) -> None:
    if _check_number(modifier, parameter, value) <= 0:
        raise ValidationError(modifier, parameter, f"must be > 0, got {value}")


def _check_unit_interval(modifier: str, parameter: str, value: float) -> None:
    number = _check_number(modifier, parameter, value)
    if number < 0.0 or number > 1.0:
        raise ValidationError(modifier, parameter, f"must be in [0, 1], got {value}")
