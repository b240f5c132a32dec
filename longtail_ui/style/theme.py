from __future__ import annotations

from dataclasses import asdict, dataclass, fields
import logging
import os
from pathlib import Path
import re
import tomllib
from typing import Any, Mapping

from longtail_ui.context import declare_context_key

LOGGER = logging.getLogger(__name__)

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")
THEME_ENV_VAR = "LONGTAIL_UI_THEME"

_COLOR_TOKENS = (
    "card_background",
    "card_border",
    "shadow_color",
    "text_primary",
    "text_secondary",
    "badge_verified",
    "badge_premium",
    "follow_button_bg",
    "follow_button_bg_following",
    "follow_button_text",
)
_NON_NEGATIVE_TOKENS = ("card_corner_radius", "card_padding")


@dataclass(frozen=True)
class ThemeTokens:
    """Default token set that unset modifier parameters fall back to."""

    card_background: str = "#FFFFFF"
    card_border: str = "#E5E7EB"
    card_corner_radius: float = 12.0
    card_padding: float = 16.0
    shadow_color: str = "#000000"
    text_primary: str = "#111827"
    text_secondary: str = "#6B7280"
    badge_verified: str = "#1D9BF0"
    badge_premium: str = "#F5B700"
    follow_button_bg: str = "#111827"
    follow_button_bg_following: str = "#E5E7EB"
    follow_button_text: str = "#F8FAFC"
    font_family: str = "System"
    font_size_px: float = 14.0


DEFAULT_TOKENS = ThemeTokens()

THEME = declare_context_key("theme", ThemeTokens, DEFAULT_TOKENS)


def validate_theme_tokens(overrides: Mapping[str, Any] | None = None) -> ThemeTokens:
    """Validate and merge user token overrides against the defaults."""

    raw: dict[str, Any] = asdict(DEFAULT_TOKENS)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown theme token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not HEX_COLOR.match(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    for key in _NON_NEGATIVE_TOKENS:
        if isinstance(raw[key], bool) or not isinstance(raw[key], (int, float)) or float(raw[key]) < 0:
            raise ValueError(f"Token `{key}` must be a non-negative number")

    if not isinstance(raw["font_family"], str) or not raw["font_family"].strip():
        raise ValueError("Token `font_family` must be a non-empty string")

    if not isinstance(raw["font_size_px"], (int, float)) or float(raw["font_size_px"]) <= 0:
        raise ValueError("Token `font_size_px` must be a positive number")

    numeric = {"card_corner_radius", "card_padding", "font_size_px"}
    return ThemeTokens(
        **{f.name: float(raw[f.name]) if f.name in numeric else str(raw[f.name]) for f in fields(ThemeTokens)}
    )


def load_theme_tokens(path: str | Path) -> ThemeTokens:
    """Load tokens from the `[theme]` table of a TOML file."""

    theme_path = Path(path)
    if not theme_path.exists():
        raise FileNotFoundError(f"theme file not found: {theme_path}")
    with theme_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("theme", {})
    if not isinstance(table, dict):
        raise ValueError("`theme` must be a table")
    tokens = validate_theme_tokens(table)
    LOGGER.info("loaded %d theme token override(s) from %s", len(table), theme_path)
    return tokens


def theme_tokens_from_env(env_var: str = THEME_ENV_VAR) -> ThemeTokens:
    raw = os.getenv(env_var, "").strip()
    if not raw:
        LOGGER.debug("%s not set; using default theme tokens", env_var)
        return DEFAULT_TOKENS
    return load_theme_tokens(raw)
