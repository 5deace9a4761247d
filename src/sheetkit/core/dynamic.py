"""Per-instance dynamic rules layered on top of a shared sheet."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from sheetkit.core.sheet import StyleRule, StyleSheet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DynamicClassName:
    """Rule key and class name reserved for one dynamic entry of one instance."""

    key: str
    id: str


DynamicClassNames = Mapping[str, DynamicClassName]


class DynamicRuleSet:
    """Rules generated for one instance, keyed by the definition key."""

    def __init__(self, rules: Dict[str, StyleRule]):
        self._rules = rules
        self.removed = False

    def __getitem__(self, key: str) -> StyleRule:
        return self._rules[key]

    def __contains__(self, key: object) -> bool:
        return key in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def items(self) -> Iterator[Tuple[str, StyleRule]]:
        return iter(self._rules.items())

    def class_names(self) -> Dict[str, str]:
        return {key: rule.id for key, rule in self._rules.items()}

    def __repr__(self) -> str:
        return f"DynamicRuleSet({list(self._rules)!r}, removed={self.removed})"


class DynamicRulesController:
    """Adds, rewrites and removes instance rules on a shared sheet."""

    def reserve(self, sheet: Optional[StyleSheet]) -> Optional[Dict[str, DynamicClassName]]:
        """Reserve rule keys and class names for one instance's dynamic entries."""
        if sheet is None or not sheet.dynamic_styles:
            return None

        n = sheet.next_dynamic_index()
        reserved: Dict[str, DynamicClassName] = {}
        for key in sheet.dynamic_styles:
            rule_key = f"{key}-d{n}"
            reserved[key] = DynamicClassName(key=rule_key, id=sheet.generate_class_name(rule_key))
        return reserved

    def add(
        self,
        sheet: Optional[StyleSheet],
        data: Any,
        reserved: Optional[DynamicClassNames] = None,
    ) -> Optional[DynamicRuleSet]:
        if sheet is None or not sheet.dynamic_styles:
            return None

        if reserved is None:
            reserved = self.reserve(sheet) or {}

        rules: Dict[str, StyleRule] = {}
        for key, style in sheet.dynamic_styles.items():
            name = reserved.get(key)
            if name is None:
                rule_key = f"{key}-d{sheet.next_dynamic_index()}"
                name = DynamicClassName(key=rule_key, id=sheet.generate_class_name(rule_key))
            rules[key] = sheet.add_rule(name.key, style.evaluate(data), class_name=name.id, dynamic=True)
        return DynamicRuleSet(rules)

    def update(self, data: Any, sheet: Optional[StyleSheet], rule_set: Optional[DynamicRuleSet]) -> None:
        """Rewrite each rule body from *data*; ids and class names are kept."""
        if sheet is None or rule_set is None:
            return
        if rule_set.removed:
            logger.debug("Skipping update of removed %r", rule_set)
            return

        for key, rule in rule_set.items():
            style = sheet.dynamic_styles.get(key)
            if style is None or not sheet.has_rule(rule):
                logger.debug("Skipping stale dynamic rule %r", rule)
                continue
            rule.set_style(style.evaluate(data))

    def remove(self, sheet: Optional[StyleSheet], rule_set: Optional[DynamicRuleSet]) -> None:
        if sheet is None or rule_set is None or rule_set.removed:
            return
        for _, rule in rule_set.items():
            sheet.delete_rule(rule)
        rule_set.removed = True
