"""Default compiler turning style definitions into sheets."""
import itertools
import logging
from typing import Any, Optional

from sheetkit.core.definition import NO_THEME, DynamicStyle, StyleDefinition
from sheetkit.core.sheet import GenerateId, StyleSheet

logger = logging.getLogger(__name__)


def create_generate_id(prefix: str = "") -> GenerateId:
    """
    Create a class-name generator.

    Names look like ``{prefix}{sheet prefix}{sheet name}-{key}-{n}``; the
    counter is private to the returned generator.
    """
    counter = itertools.count()

    def generate_id(rule: Any, sheet: Optional[StyleSheet] = None) -> str:
        sheet_prefix = sheet.class_name_prefix if sheet is not None else ""
        name = sheet.name if sheet is not None and sheet.name else ""
        base = f"{name}-{rule.key}" if name else rule.key
        return f"{prefix}{sheet_prefix}{base}-{next(counter)}"

    return generate_id


class StyleCompiler:
    """Compiles a :class:`StyleDefinition` for a theme into a :class:`StyleSheet`."""

    def compile(self, definition: StyleDefinition, theme: Any, options: Any) -> Optional[StyleSheet]:
        if options.disable_styles_generation:
            return None

        generate_id = options.generate_id or create_generate_id()
        sheet = StyleSheet(
            generate_id,
            index=options.index if options.index is not None else 0,
            name=options.name,
            class_name_prefix=options.class_name_prefix or "",
            definition=definition,
            theme=theme if theme is not None else NO_THEME,
        )

        for key, entry in definition.entries(theme).items():
            if isinstance(entry, DynamicStyle):
                # Placeholder so the key always owns a static class name
                sheet.add_rule(key)
                sheet.dynamic_styles[key] = entry
            else:
                sheet.add_rule(key, entry.declarations)

        logger.debug(
            "Compiled %r (%d static, %d dynamic)",
            sheet,
            len(sheet.rules),
            len(sheet.dynamic_styles),
        )
        return sheet
