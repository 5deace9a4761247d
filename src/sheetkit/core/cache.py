"""Identity-keyed memoisation of compiled sheets."""
import logging
from typing import Any, Dict, Optional, Tuple

from sheetkit.core.definition import StyleDefinition
from sheetkit.core.sheet import StyleSheet

logger = logging.getLogger(__name__)


class IdentityKey:
    """Hashable handle comparing the wrapped object by reference."""

    __slots__ = ("obj",)

    def __init__(self, obj: Any):
        self.obj = obj

    def __hash__(self) -> int:
        return id(self.obj)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IdentityKey) and other.obj is self.obj

    def __repr__(self) -> str:
        return f"IdentityKey({self.obj!r})"


CacheKey = Tuple[IdentityKey, IdentityKey, IdentityKey, Optional[int]]


class SheetCache:
    """
    Maps (context, definition, theme, index) identities to compiled sheets.

    The same sheet object is returned for as long as its key is unchanged.
    Sheets are dropped when their last consumer releases them and taken back
    in if a consumer still holding the object manages it again.
    """

    def __init__(self):
        self._sheets: Dict[CacheKey, StyleSheet] = {}

    def get(self, context: Any, definition: StyleDefinition, theme: Any, options: Any) -> Optional[StyleSheet]:
        if options.disable_styles_generation:
            return None

        key: CacheKey = (IdentityKey(context), IdentityKey(definition), IdentityKey(theme), options.index)
        sheet = self._sheets.get(key)
        if sheet is not None:
            return sheet

        sheet = context.compiler.compile(definition, theme, options)
        if sheet is not None:
            sheet.cache_key = key
            self._sheets[key] = sheet
        return sheet

    def adopt(self, sheet: StyleSheet) -> None:
        """Re-cache a sheet that was released but is being managed again."""
        key = sheet.cache_key
        if key is not None and key not in self._sheets:
            logger.debug("Re-adopting %r", sheet)
            self._sheets[key] = sheet

    def discard(self, sheet: StyleSheet) -> None:
        key = sheet.cache_key
        if key is not None and self._sheets.get(key) is sheet:
            del self._sheets[key]

    def clear(self) -> None:
        self._sheets.clear()

    def __contains__(self, sheet: object) -> bool:
        key = getattr(sheet, "cache_key", None)
        return key is not None and self._sheets.get(key) is sheet

    def __len__(self) -> int:
        return len(self._sheets)
