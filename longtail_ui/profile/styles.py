from __future__ import annotations

from longtail_ui.modifiers import card_shadow
from longtail_ui.style.theme import DEFAULT_TOKENS
from longtail_ui.typed_style import TypedStyle, register_style

from .component import PROFILE_PREMIUM, PROFILE_VERIFIED, ProfileCard
from .modifiers import profile_card_style


PREMIUM: TypedStyle[ProfileCard] = register_style(
    TypedStyle(
        name="premium",
        target=ProfileCard,
        context=((PROFILE_PREMIUM, True),),
        modifiers=(
            profile_card_style(border_color=DEFAULT_TOKENS.badge_premium, border_width=2.0),
            card_shadow(color=DEFAULT_TOKENS.badge_premium, radius=12.0, y=4.0, opacity=0.3),
        ),
    )
)

VERIFIED: TypedStyle[ProfileCard] = register_style(
    TypedStyle(
        name="verified",
        target=ProfileCard,
        context=((PROFILE_VERIFIED, True),),
        modifiers=(profile_card_style(border_color=DEFAULT_TOKENS.badge_verified, border_width=1.0),),
    )
)
