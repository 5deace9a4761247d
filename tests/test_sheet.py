import unittest

from sheetkit.core.sheet import StyleRule, StyleSheet, format_value, hyphenate


def key_id(rule, sheet=None):
    return f"{rule.key}-id"


class TestCssText(unittest.TestCase):
    def test_hyphenate(self) -> None:
        self.assertEqual(hyphenate("fontSize"), "font-size")
        self.assertEqual(hyphenate("color"), "color")
        self.assertEqual(hyphenate("--brandColor"), "--brandColor")

    def test_format_value_units(self) -> None:
        self.assertEqual(format_value("font-size", 60), "60px")
        self.assertEqual(format_value("margin", 0), "0")
        self.assertEqual(format_value("opacity", 0.5), "0.5")
        self.assertEqual(format_value("z-index", 10), "10")
        self.assertEqual(format_value("width", 12.5), "12.5px")
        self.assertEqual(format_value("margin", [0, 4, "auto"]), "0 4px auto")
        self.assertIsNone(format_value("color", None))
        self.assertIsNone(format_value("color", False))

    def test_rule_text(self) -> None:
        rule = StyleRule("button", ".button", {"color": "green", "fontSize": 12}, id="button")
        self.assertEqual(rule.to_string(), ".button {\n  color: green;\n  font-size: 12px;\n}")

    def test_empty_rule_renders_braces(self) -> None:
        rule = StyleRule("item", ".item-id", {}, id="item-id")
        self.assertEqual(rule.to_string(), ".item-id {}")

    def test_nested_rules_follow_parent(self) -> None:
        rule = StyleRule("item", ".item", {"color": "red", "&:hover": {"fontSize": 60}}, id="item")
        self.assertEqual(
            rule.to_string(),
            ".item {\n  color: red;\n}\n.item:hover {\n  font-size: 60px;\n}",
        )

    def test_set_style_keeps_selector_and_id(self) -> None:
        rule = StyleRule("item", ".item-id", {"color": "red"}, id="item-id")
        rule.set_style({"color": "blue", "& span": {"margin": 0}})
        self.assertEqual(rule.id, "item-id")
        self.assertEqual(rule.selector, ".item-id")
        self.assertEqual(rule.declarations, [("color", "blue")])
        self.assertEqual(rule.children[0].selector, ".item-id span")


class TestStyleSheet(unittest.TestCase):
    def test_add_rule_generates_class_name(self) -> None:
        sheet = StyleSheet(key_id)
        rule = sheet.add_rule("button", {"color": "green"})
        self.assertEqual(rule.id, "button-id")
        self.assertEqual(dict(sheet.classes), {"button": "button-id"})
        self.assertIs(sheet.get_rule("button"), rule)

    def test_dynamic_rules_stay_out_of_classes(self) -> None:
        sheet = StyleSheet(key_id)
        sheet.add_rule("item")
        sheet.add_rule("item-d0", {"color": "red"}, class_name="dyn", dynamic=True)
        self.assertEqual(dict(sheet.classes), {"item": "item-id"})
        self.assertEqual(sheet.dynamic_class_name("item-d0"), "dyn")

    def test_classes_mapping_is_stable_and_read_only(self) -> None:
        sheet = StyleSheet(key_id)
        classes = sheet.classes
        sheet.add_rule("a")
        self.assertIs(sheet.classes, classes)
        with self.assertRaises(TypeError):
            classes["b"] = "x"  # type: ignore[index]

    def test_delete_rule(self) -> None:
        sheet = StyleSheet(key_id)
        rule = sheet.add_rule("item-d0", {"color": "red"}, dynamic=True)
        self.assertTrue(sheet.has_rule(rule))
        self.assertTrue(sheet.delete_rule(rule))
        self.assertFalse(sheet.has_rule(rule))
        self.assertFalse(sheet.delete_rule(rule))
        self.assertIsNone(sheet.dynamic_class_name("item-d0"))
        self.assertEqual(sheet.rules, [])

    def test_dynamic_key_does_not_replace_static_rule(self) -> None:
        sheet = StyleSheet(key_id)
        static = sheet.add_rule("x", {"color": "red"})
        sheet.add_rule("x", {"color": "blue"}, class_name="dyn", dynamic=True)
        self.assertTrue(sheet.has_rule(static))
        self.assertEqual(len(sheet.rules), 2)

    def test_to_string_joins_rules(self) -> None:
        sheet = StyleSheet(key_id)
        sheet.add_rule("a", {"color": "red"})
        sheet.add_rule("b")
        self.assertEqual(sheet.to_string(), ".a-id {\n  color: red;\n}\n.b-id {}")
        self.assertEqual(str(sheet), sheet.to_string())

    def test_dynamic_counter(self) -> None:
        sheet = StyleSheet(key_id)
        self.assertEqual([sheet.next_dynamic_index() for _ in range(3)], [0, 1, 2])


if __name__ == "__main__":
    unittest.main()
