"""Registry of attached sheets."""
import bisect
from typing import Iterator, List

from sheetkit.core.sheet import StyleSheet


class SheetsRegistry:
    """Ordered collection of attached sheets with deterministic serialisation."""

    def __init__(self):
        self._sheets: List[StyleSheet] = []

    def add(self, sheet: StyleSheet) -> bool:
        """Insert *sheet* by index. Returns True if it was not present yet."""
        if sheet in self._sheets:
            return False
        # Equal indexes keep insertion order
        position = bisect.bisect_right([s.index for s in self._sheets], sheet.index)
        self._sheets.insert(position, sheet)
        return True

    def remove(self, sheet: StyleSheet) -> bool:
        if sheet not in self._sheets:
            return False
        self._sheets.remove(sheet)
        return True

    def reset(self) -> None:
        self._sheets.clear()

    @property
    def sheets(self) -> List[StyleSheet]:
        return list(self._sheets)

    def rule_count(self) -> int:
        return sum(len(sheet.rules) for sheet in self._sheets)

    def __contains__(self, sheet: object) -> bool:
        return sheet in self._sheets

    def __iter__(self) -> Iterator[StyleSheet]:
        return iter(list(self._sheets))

    def __len__(self) -> int:
        return len(self._sheets)

    def to_string(self) -> str:
        """CSS of every attached sheet in ascending index order."""
        return "\n".join(text for text in (sheet.to_string() for sheet in self._sheets) if text)

    def __str__(self) -> str:
        return self.to_string()

    def render(self) -> str:
        """Render all sheets as a single <style> block ("" when empty)."""
        css = self.to_string()
        if not css:
            return ""
        return f"<style data-sheetkit>\n{css}\n</style>"


# Process-wide default registry
sheets_registry = SheetsRegistry()
