"""Profile card component, its ambient flags, modifiers and named styles."""

from .component import PROFILE_PREMIUM, PROFILE_VERIFIED, ImageRef, ProfileCard, ProfileContent, format_count
from .modifiers import FollowButtonContent, follow_button, profile_card_style, profile_premium, profile_verified
from .styles import PREMIUM, VERIFIED

__all__ = [
    "FollowButtonContent",
    "ImageRef",
    "PREMIUM",
    "PROFILE_PREMIUM",
    "PROFILE_VERIFIED",
    "ProfileCard",
    "ProfileContent",
    "VERIFIED",
    "follow_button",
    "format_count",
    "profile_card_style",
    "profile_premium",
    "profile_verified",
]
