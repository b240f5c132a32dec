"""Composable, context-aware styling for declarative UI components."""

from .component_schema import BoundingBox, ComponentBase, ContentDescription
from .context import (
    EMPTY_FRAME,
    ContextFrame,
    ContextKey,
    context_scope,
    current_frame,
    declare_context_key,
    read_context,
    registered_context_keys,
    with_context,
)
from .decoration import CardFrame, Decoration, Overlay, Shadow, TapGesture
from .errors import MissingContextDefault, StyleError, TypeMismatchError, ValidationError
from .modifiers import Modifier, card_shadow, card_style, context_modifier, on_tap, overlay, theme
from .profile import (
    PREMIUM,
    PROFILE_PREMIUM,
    PROFILE_VERIFIED,
    VERIFIED,
    ImageRef,
    ProfileCard,
    follow_button,
    profile_card_style,
    profile_premium,
    profile_verified,
)
from .style.theme import DEFAULT_TOKENS, THEME, ThemeTokens, load_theme_tokens, validate_theme_tokens
from .typed_style import DEFAULT_STYLE_REGISTRY, StyleRegistry, TypedStyle, register_style

__all__ = [
    "BoundingBox",
    "CardFrame",
    "ComponentBase",
    "ContentDescription",
    "ContextFrame",
    "ContextKey",
    "DEFAULT_STYLE_REGISTRY",
    "DEFAULT_TOKENS",
    "Decoration",
    "EMPTY_FRAME",
    "ImageRef",
    "MissingContextDefault",
    "Modifier",
    "Overlay",
    "PREMIUM",
    "PROFILE_PREMIUM",
    "PROFILE_VERIFIED",
    "ProfileCard",
    "Shadow",
    "StyleError",
    "StyleRegistry",
    "THEME",
    "TapGesture",
    "ThemeTokens",
    "TypeMismatchError",
    "TypedStyle",
    "VERIFIED",
    "ValidationError",
    "card_shadow",
    "card_style",
    "context_modifier",
    "context_scope",
    "current_frame",
    "declare_context_key",
    "follow_button",
    "load_theme_tokens",
    "on_tap",
    "overlay",
    "profile_card_style",
    "profile_premium",
    "profile_verified",
    "read_context",
    "register_style",
    "registered_context_keys",
    "theme",
    "validate_theme_tokens",
    "with_context",
]
