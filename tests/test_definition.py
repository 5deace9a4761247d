import unittest

from sheetkit.core.definition import NO_THEME, DynamicStyle, StaticStyle, StyleDefinition
from sheetkit.exceptions import StyleDefinitionError


class TestStyleDefinition(unittest.TestCase):
    def test_static_and_dynamic_entries(self) -> None:
        definition = StyleDefinition(
            {
                "button": {"color": "green"},
                "item": lambda data: {"color": data["color"]},
                "empty": None,
            }
        )
        entries = definition.entries()

        self.assertIsInstance(entries["button"], StaticStyle)
        self.assertEqual(entries["button"].declarations, {"color": "green"})
        self.assertIsInstance(entries["item"], DynamicStyle)
        self.assertEqual(entries["item"].evaluate({"color": "red"}), {"color": "red"})
        self.assertEqual(entries["empty"].declarations, {})
        self.assertFalse(definition.theme_dependent)

    def test_static_entries_are_normalised_once(self) -> None:
        definition = StyleDefinition({"a": {"color": "red"}})
        self.assertIs(definition.entries(), definition.entries())

    def test_theme_dependent_definition(self) -> None:
        definition = StyleDefinition(lambda theme: {"title": {"color": theme["primary"]}})
        self.assertTrue(definition.theme_dependent)
        entries = definition.entries({"primary": "navy"})
        self.assertEqual(entries["title"].declarations, {"color": "navy"})

    def test_identity_not_structure(self) -> None:
        source = {"a": {"color": "red"}}
        self.assertIsNot(StyleDefinition(source), StyleDefinition(dict(source)))

    def test_no_theme_reads_as_empty_mapping(self) -> None:
        self.assertEqual(NO_THEME.get("color", "green"), "green")
        self.assertNotIn("color", NO_THEME)
        self.assertEqual(len(NO_THEME), 0)
        with self.assertRaises(KeyError):
            NO_THEME["color"]
        self.assertEqual(len({NO_THEME, NO_THEME}), 1)

    def test_theme_function_without_theme(self) -> None:
        definition = StyleDefinition(lambda theme: {"title": {"color": theme.get("primary", "black")}})
        self.assertEqual(definition.entries()["title"].declarations, {"color": "black"})

    def test_of_returns_existing_definition(self) -> None:
        definition = StyleDefinition({})
        self.assertIs(StyleDefinition.of(definition), definition)

    def test_none_source_has_no_entries(self) -> None:
        self.assertEqual(StyleDefinition(None).entries(), {})

    def test_invalid_entry_raises(self) -> None:
        definition = StyleDefinition({"bad": 42})
        with self.assertRaises(StyleDefinitionError) as cm:
            definition.entries()
        self.assertEqual(cm.exception.key, "bad")
        self.assertIn("bad:", str(cm.exception))

    def test_invalid_source_raises(self) -> None:
        with self.assertRaises(StyleDefinitionError):
            StyleDefinition(42)

    def test_theme_function_must_return_mapping(self) -> None:
        definition = StyleDefinition(lambda theme: ["not", "a", "mapping"])
        with self.assertRaises(StyleDefinitionError):
            definition.entries(NO_THEME)

    def test_dynamic_style_none_means_empty(self) -> None:
        self.assertEqual(DynamicStyle(lambda data: None).evaluate({}), {})

    def test_dynamic_style_must_return_mapping(self) -> None:
        with self.assertRaises(StyleDefinitionError):
            DynamicStyle(lambda data: "color: red").evaluate({})


if __name__ == "__main__":
    unittest.main()
