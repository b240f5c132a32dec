"""Theme tokens and their configuration sources."""

from .theme import DEFAULT_TOKENS, THEME, ThemeTokens, load_theme_tokens, theme_tokens_from_env, validate_theme_tokens

__all__ = [
    "DEFAULT_TOKENS",
    "THEME",
    "ThemeTokens",
    "load_theme_tokens",
    "theme_tokens_from_env",
    "validate_theme_tokens",
]
