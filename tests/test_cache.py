import unittest

from sheetkit.core.cache import IdentityKey, SheetCache
from sheetkit.core.definition import NO_THEME, StyleDefinition
from sheetkit.options import SheetOptions
from sheetkit.runtime.context import StyleContext


class TestIdentityKey(unittest.TestCase):
    def test_compares_by_reference(self) -> None:
        a = {"x": 1}
        b = {"x": 1}
        self.assertEqual(IdentityKey(a), IdentityKey(a))
        self.assertNotEqual(IdentityKey(a), IdentityKey(b))
        self.assertEqual(len({IdentityKey(a), IdentityKey(a), IdentityKey(b)}), 2)


class TestSheetCache(unittest.TestCase):
    def setUp(self) -> None:
        self.context = StyleContext()
        self.cache = SheetCache()
        self.definition = StyleDefinition({"a": {"color": "red"}})
        self.options = self.context.sheet_options(SheetOptions(index=1))

    def test_same_key_same_sheet(self) -> None:
        first = self.cache.get(self.context, self.definition, NO_THEME, self.options)
        second = self.cache.get(self.context, self.definition, NO_THEME, self.options)
        self.assertIs(first, second)
        self.assertIn(first, self.cache)
        self.assertEqual(len(self.cache), 1)

    def test_key_parts_are_identities(self) -> None:
        sheet = self.cache.get(self.context, self.definition, NO_THEME, self.options)

        other_definition = StyleDefinition(self.definition.source)
        self.assertIsNot(self.cache.get(self.context, other_definition, NO_THEME, self.options), sheet)
        self.assertIsNot(self.cache.get(StyleContext(), self.definition, NO_THEME, self.options), sheet)
        self.assertIsNot(self.cache.get(self.context, self.definition, {"theme": 1}, self.options), sheet)
        other_index = self.context.sheet_options(SheetOptions(index=2))
        self.assertIsNot(self.cache.get(self.context, self.definition, NO_THEME, other_index), sheet)

    def test_disabled_returns_none(self) -> None:
        options = self.context.sheet_options(SheetOptions(disable_styles_generation=True))
        self.assertIsNone(self.cache.get(self.context, self.definition, NO_THEME, options))
        self.assertEqual(len(self.cache), 0)

    def test_discard_and_adopt(self) -> None:
        sheet = self.cache.get(self.context, self.definition, NO_THEME, self.options)
        self.cache.discard(sheet)
        self.assertNotIn(sheet, self.cache)

        self.cache.adopt(sheet)
        self.assertIs(self.cache.get(self.context, self.definition, NO_THEME, self.options), sheet)

    def test_discard_leaves_newer_sheet(self) -> None:
        old = self.cache.get(self.context, self.definition, NO_THEME, self.options)
        self.cache.discard(old)
        new = self.cache.get(self.context, self.definition, NO_THEME, self.options)
        self.assertIsNot(old, new)

        self.cache.discard(old)
        self.assertIn(new, self.cache)
        # A stale sheet never replaces the cached one
        self.cache.adopt(old)
        self.assertIs(self.cache.get(self.context, self.definition, NO_THEME, self.options), new)


if __name__ == "__main__":
    unittest.main()
