from __future__ import annotations

from dataclasses import dataclass
import textwrap

from longtail_ui.component_schema import ComponentBase
from longtail_ui.context import declare_context_key, read_context
from longtail_ui.style.theme import THEME


PROFILE_VERIFIED = declare_context_key("profile.verified", bool, False)
PROFILE_PREMIUM = declare_context_key("profile.premium", bool, False)

CARD_WIDTH_PX = 280.0
HEADER_HEIGHT_PX = 56.0
COUNTS_HEIGHT_PX = 24.0
BIO_LINE_HEIGHT_PX = 20.0
BIO_WRAP_CHARS = 36


def format_count(count: int) -> str:
    """Compact follower-style count: 999, 1.2K, 3.4M."""

    if count < 1_000:
        return str(count)
    for threshold, suffix in ((1_000, "K"), (1_000_000, "M"), (1_000_000_000, "B")):
        # tenths of the unit, rounded half up; 999.95K carries over to 1M
        tenths = (count * 10 + threshold // 2) // threshold
        if tenths < 10_000 or suffix == "B":
            break
    whole, fraction = divmod(tenths, 10)
    return f"{whole}{suffix}" if fraction == 0 else f"{whole}.{fraction}{suffix}"


@dataclass(frozen=True)
class ImageRef:
    """Opaque avatar reference; loading and decoding happen in the renderer."""

    source: str

    def __post_init__(self) -> None:
        if not self.source.strip():
            raise ValueError("ImageRef source must be non-empty")


@dataclass(frozen=True)
class ProfileContent:
    username: str
    followers_label: str
    following_label: str
    bio_lines: tuple[str, ...]
    avatar: ImageRef | None
    show_verified_badge: bool
    show_premium_badge: bool
    text_color: str
    secondary_text_color: str
    verified_badge_color: str
    premium_badge_color: str

    def text_lines(self) -> tuple[str, ...]:
        badges = ""
        if self.show_verified_badge:
            badges += " [verified]"
        if self.show_premium_badge:
            badges += " [premium]"
        counts = f"{self.followers_label} followers  {self.following_label} following"
        return (f"@{self.username}{badges}", *self.bio_lines, counts)

    def to_dict(self) -> dict[str, object]:
        return {
            "type": "profile",
            "username": self.username,
            "followers": self.followers_label,
            "following": self.following_label,
            "bio_lines": list(self.bio_lines),
            "avatar": None if self.avatar is None else self.avatar.source,
            "show_verified_badge": self.show_verified_badge,
            "show_premium_badge": self.show_premium_badge,
            "text_color": self.text_color,
            "secondary_text_color": self.secondary_text_color,
        }


@dataclass(frozen=True)
class ProfileCard(ComponentBase):
    """Profile summary built from required data only.

    Verified and premium badges follow `PROFILE_VERIFIED` / `PROFILE_PREMIUM`
    in scope; card chrome comes from modifiers.
    """

    username: str
    followers: int
    following: int
    bio: str = ""
    avatar: ImageRef | None = None
    component_id: str | None = None

    def __post_init__(self) -> None:
        if not self.username.strip():
            raise ValueError("ProfileCard username must be non-empty")
        if self.followers < 0 or self.following < 0:
            raise ValueError("ProfileCard follower/following counts must be >= 0")

    @property
    def identity(self) -> str:
        return self.component_id or f"profile_card:{self.username}"

    def describe(self) -> ProfileContent:
        tokens = read_context(THEME)
        return ProfileContent(
            username=self.username,
            followers_label=format_count(self.followers),
            following_label=format_count(self.following),
            bio_lines=tuple(textwrap.wrap(self.bio, BIO_WRAP_CHARS)),
            avatar=self.avatar,
            show_verified_badge=read_context(PROFILE_VERIFIED),
            show_premium_badge=read_context(PROFILE_PREMIUM),
            text_color=tokens.text_primary,
            secondary_text_color=tokens.text_secondary,
            verified_badge_color=tokens.badge_verified,
            premium_badge_color=tokens.badge_premium,
        )

    def intrinsic_size(self, content: ProfileContent) -> tuple[float, float]:
        return (CARD_WIDTH_PX, HEADER_HEIGHT_PX + BIO_LINE_HEIGHT_PX * len(content.bio_lines) + COUNTS_HEIGHT_PX)
