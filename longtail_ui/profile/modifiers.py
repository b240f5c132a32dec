from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from longtail_ui.decoration import OverlayAlignment
from longtail_ui.errors import ValidationError
from longtail_ui.modifiers import Modifier, card_style, context_modifier, overlay
from longtail_ui.style.theme import ThemeTokens

from .component import PROFILE_PREMIUM, PROFILE_VERIFIED, ProfileCard


FOLLOW_BUTTON_WIDTH_PX = 88.0
FOLLOW_BUTTON_HEIGHT_PX = 32.0


profile_verified = context_modifier(PROFILE_VERIFIED, name="profile_verified", target=ProfileCard, default=True)
profile_premium = context_modifier(PROFILE_PREMIUM, name="profile_premium", target=ProfileCard, default=True)


def profile_card_style(
    background: str | None = None,
    corner_radius: float = 12.0,
    border_color: str | None = None,
    border_width: float = 0.0,
    padding: float = 16.0,
) -> Modifier:
    return card_style(
        background=background,
        corner_radius=corner_radius,
        border_color=border_color,
        border_width=border_width,
        padding=padding,
        name="profile_card_style",
        target=ProfileCard,
    )


@dataclass(frozen=True)
class FollowButtonContent:
    title: str
    is_following: bool
    background: str
    text_color: str

    def text_lines(self) -> tuple[str, ...]:
        return (self.title,)

    def to_dict(self) -> dict[str, object]:
        return {
            "type": "follow_button",
            "title": self.title,
            "is_following": self.is_following,
            "background": self.background,
            "text_color": self.text_color,
        }


def follow_button(
    is_following: bool = False,
    on_follow: Callable[[], object] | None = None,
    alignment: OverlayAlignment = "top_trailing",
) -> Modifier:
    if not isinstance(is_following, bool):
        raise ValidationError("follow_button", "is_following", "must be a bool")

    def content(tokens: ThemeTokens) -> FollowButtonContent:
        if is_following:
            return FollowButtonContent(
                title="Following",
                is_following=True,
                background=tokens.follow_button_bg_following,
                text_color=tokens.text_primary,
            )
        return FollowButtonContent(
            title="Follow",
            is_following=False,
            background=tokens.follow_button_bg,
            text_color=tokens.follow_button_text,
        )

    return overlay(
        content,
        width=FOLLOW_BUTTON_WIDTH_PX,
        height=FOLLOW_BUTTON_HEIGHT_PX,
        alignment=alignment,
        name="follow_button",
        target=ProfileCard,
        on_tap=on_follow,
    )
