"""Reference-counted style sheets with per-instance dynamic rules."""

from sheetkit.core import (
    NO_THEME,
    SheetsRegistry,
    StyleDefinition,
    StyleSheet,
    create_generate_id,
    sheets_registry,
)
from sheetkit.exceptions import SheetkitError, StyleDefinitionError, StyleOptionsError
from sheetkit.runtime import (
    Root,
    StyleContext,
    StyledComponent,
    Theming,
    UseStyles,
    create_use_styles,
    get_style_context,
    release_styles,
    resolve_styles,
    style_provider,
    theme_provider,
)

__version__ = "0.1.0"

__all__ = [
    "NO_THEME",
    "Root",
    "SheetkitError",
    "SheetsRegistry",
    "StyleContext",
    "StyleDefinition",
    "StyleDefinitionError",
    "StyleOptionsError",
    "StyleSheet",
    "StyledComponent",
    "Theming",
    "UseStyles",
    "create_generate_id",
    "create_use_styles",
    "get_style_context",
    "release_styles",
    "resolve_styles",
    "sheets_registry",
    "style_provider",
    "theme_provider",
]
