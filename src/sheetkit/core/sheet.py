"""Compiled style sheets and their CSS text."""
import itertools
import logging
import re
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Tuple

from sheetkit.core.definition import NO_THEME, DynamicStyle

logger = logging.getLogger(__name__)

# Properties whose numeric values are emitted without a unit
UNITLESS_PROPERTIES = frozenset(
    {
        "animation-iteration-count",
        "column-count",
        "fill-opacity",
        "flex",
        "flex-grow",
        "flex-shrink",
        "font-weight",
        "line-height",
        "opacity",
        "order",
        "orphans",
        "stroke-opacity",
        "tab-size",
        "widows",
        "z-index",
        "zoom",
    }
)

_UPPER_RE = re.compile(r"[A-Z]")


class PendingRule(NamedTuple):
    """Rule handle passed to id generators before the rule exists."""

    key: str


GenerateId = Callable[[Any, Optional["StyleSheet"]], str]


def hyphenate(name: str) -> str:
    """Convert a camelCase property name to kebab-case."""
    if name.startswith("--"):
        return name
    return _UPPER_RE.sub(lambda m: "-" + m.group(0).lower(), name)


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_value(prop: str, value: Any) -> Optional[str]:
    """Render a declaration value; ``None`` means the declaration is dropped."""
    if value is None or value is False:
        return None
    if isinstance(value, (list, tuple)):
        parts = [format_value(prop, item) for item in value]
        return " ".join(part for part in parts if part)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if value == 0 or prop in UNITLESS_PROPERTIES:
            return _format_number(value)
        return f"{_format_number(value)}px"
    return str(value)


def split_style(style: Mapping[str, Any]) -> Tuple[List[Tuple[str, str]], List[Tuple[str, Mapping[str, Any]]]]:
    """Split a style mapping into declarations and ``&``-nested rules."""
    declarations: List[Tuple[str, str]] = []
    nested: List[Tuple[str, Mapping[str, Any]]] = []
    for prop, value in style.items():
        if "&" in prop:
            if isinstance(value, Mapping):
                nested.append((prop, value))
            else:
                logger.warning("Ignoring non-mapping value for nested selector %r", prop)
            continue
        if isinstance(value, Mapping):
            logger.warning("Ignoring mapping value for property %r", prop)
            continue
        name = hyphenate(prop)
        rendered = format_value(name, value)
        if rendered is not None:
            declarations.append((name, rendered))
    return declarations, nested


class StyleRule:
    """A single CSS rule: a selector, its declarations and nested rules."""

    def __init__(
        self,
        key: str,
        selector: str,
        style: Optional[Mapping[str, Any]] = None,
        id: Optional[str] = None,
        dynamic: bool = False,
    ):
        self.key = key
        self.selector = selector
        self.id = id
        self.dynamic = dynamic
        self.style: Dict[str, Any] = {}
        self.declarations: List[Tuple[str, str]] = []
        self.children: List[StyleRule] = []
        self.set_style(style or {})

    @property
    def class_name(self) -> Optional[str]:
        return self.id

    def set_style(self, style: Mapping[str, Any]) -> None:
        """Replace the rule body in place; selector and id never change."""
        self.style = dict(style)
        self.declarations, nested = split_style(self.style)
        self.children = [
            StyleRule(self.key, selector.replace("&", self.selector), body)
            for selector, body in nested
        ]

    def to_string(self) -> str:
        blocks = []
        if self.declarations:
            body = "\n".join(f"  {prop}: {value};" for prop, value in self.declarations)
            blocks.append(f"{self.selector} {{\n{body}\n}}")
        elif self.id is not None:
            # Top-level rules always render so their class name is present
            blocks.append(f"{self.selector} {{}}")
        for child in self.children:
            text = child.to_string()
            if text:
                blocks.append(text)
        return "\n".join(blocks)

    def __repr__(self) -> str:
        return f"StyleRule(key={self.key!r}, selector={self.selector!r})"


class StyleSheet:
    """
    Compiled artifact of a (definition, theme) pair.

    The static rules are added once by the compiler. Dynamic rules are
    appended and removed afterwards without touching the static part;
    ``classes`` only ever exposes the static class names.
    """

    def __init__(
        self,
        generate_id: GenerateId,
        index: int = 0,
        name: Optional[str] = None,
        class_name_prefix: str = "",
        definition: Any = None,
        theme: Any = NO_THEME,
    ):
        self.index = index
        self.name = name
        self.class_name_prefix = class_name_prefix
        self.definition = definition
        self.theme = theme
        self.attached = False
        self.rules: List[StyleRule] = []
        self.dynamic_styles: Dict[str, DynamicStyle] = {}
        self._generate_id = generate_id
        self._rules_by_key: Dict[Tuple[bool, str], StyleRule] = {}
        self._static_classes: Dict[str, str] = {}
        self._dynamic_classes: Dict[str, str] = {}
        self.classes: Mapping[str, str] = MappingProxyType(self._static_classes)
        self._dynamic_counter = itertools.count()
        # Set by the sheet cache that stored this sheet
        self.cache_key: Any = None

    def generate_class_name(self, key: str) -> str:
        return self._generate_id(PendingRule(key), self)

    def next_dynamic_index(self) -> int:
        return next(self._dynamic_counter)

    def add_rule(
        self,
        key: str,
        style: Optional[Mapping[str, Any]] = None,
        class_name: Optional[str] = None,
        dynamic: bool = False,
    ) -> StyleRule:
        """Append a rule; class name is generated unless given."""
        if class_name is None:
            class_name = self.generate_class_name(key)
        rule = StyleRule(key, f".{class_name}", style, id=class_name, dynamic=dynamic)
        previous = self._rules_by_key.get((dynamic, key))
        if previous is not None:
            self.delete_rule(previous)
        self.rules.append(rule)
        self._rules_by_key[(dynamic, key)] = rule
        if dynamic:
            self._dynamic_classes[key] = class_name
        else:
            self._static_classes[key] = class_name
        return rule

    def get_rule(self, key: str, dynamic: bool = False) -> Optional[StyleRule]:
        return self._rules_by_key.get((dynamic, key))

    def has_rule(self, rule: StyleRule) -> bool:
        return self._rules_by_key.get((rule.dynamic, rule.key)) is rule

    def delete_rule(self, rule: StyleRule) -> bool:
        """Remove *rule*; returns False when it is not part of this sheet."""
        if not self.has_rule(rule):
            return False
        self.rules.remove(rule)
        del self._rules_by_key[(rule.dynamic, rule.key)]
        if rule.dynamic:
            self._dynamic_classes.pop(rule.key, None)
        else:
            self._static_classes.pop(rule.key, None)
        return True

    def dynamic_class_name(self, key: str) -> Optional[str]:
        return self._dynamic_classes.get(key)

    def attach(self) -> None:
        self.attached = True

    def detach(self) -> None:
        self.attached = False

    def to_string(self) -> str:
        return "\n".join(text for text in (rule.to_string() for rule in self.rules) if text)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        label = self.name or "sheet"
        return f"<StyleSheet {label} index={self.index} rules={len(self.rules)} attached={self.attached}>"
