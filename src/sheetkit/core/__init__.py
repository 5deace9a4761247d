"""Stylesheet lifecycle core: compilation, caching, ref counting and dynamic rules."""

from sheetkit.core.cache import IdentityKey, SheetCache
from sheetkit.core.classes import EMPTY_CLASSES, ClassNameResolver
from sheetkit.core.compiler import StyleCompiler, create_generate_id
from sheetkit.core.definition import NO_THEME, DynamicStyle, StaticStyle, StyleDefinition
from sheetkit.core.dynamic import DynamicClassName, DynamicRulesController, DynamicRuleSet
from sheetkit.core.index import SheetIndexAllocator, next_sheet_index
from sheetkit.core.manager import SheetRegistration, SheetsManager
from sheetkit.core.registry import SheetsRegistry, sheets_registry
from sheetkit.core.sheet import StyleRule, StyleSheet

__all__ = [
    "ClassNameResolver",
    "DynamicClassName",
    "DynamicRuleSet",
    "DynamicRulesController",
    "DynamicStyle",
    "EMPTY_CLASSES",
    "IdentityKey",
    "NO_THEME",
    "SheetCache",
    "SheetIndexAllocator",
    "SheetRegistration",
    "SheetsManager",
    "SheetsRegistry",
    "StaticStyle",
    "StyleCompiler",
    "StyleDefinition",
    "StyleRule",
    "StyleSheet",
    "create_generate_id",
    "next_sheet_index",
    "sheets_registry",
]
