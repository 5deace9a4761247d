"""Runtime components."""

from sheetkit.runtime.component import StyledComponent
from sheetkit.runtime.context import StyleContext, get_style_context, style_provider
from sheetkit.runtime.hooks import UseStyles, create_use_styles, release_styles, resolve_styles
from sheetkit.runtime.host import Component, Effect, EffectSlot, Root
from sheetkit.runtime.theming import Theming, theme_provider

__all__ = [
    "Component",
    "Effect",
    "EffectSlot",
    "Root",
    "StyleContext",
    "StyledComponent",
    "Theming",
    "UseStyles",
    "create_use_styles",
    "get_style_context",
    "release_styles",
    "resolve_styles",
    "style_provider",
    "theme_provider",
]
