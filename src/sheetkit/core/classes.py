"""Merging static and dynamic class names."""
from types import MappingProxyType
from typing import Mapping, Optional

from sheetkit.core.dynamic import DynamicClassName, DynamicClassNames
from sheetkit.core.sheet import StyleSheet

ClassNameMap = Mapping[str, str]

# Returned whenever there is no sheet
EMPTY_CLASSES: ClassNameMap = MappingProxyType({})


class ClassNameResolver:
    def resolve(self, sheet: Optional[StyleSheet], dynamic_class_names: Optional[DynamicClassNames]) -> ClassNameMap:
        """
        Build the class map handed to callers.

        Without dynamic names the sheet's own ``classes`` mapping is returned
        as is, so the result stays identical while the sheet does. Otherwise
        each static key whose entry is dynamic gets the dynamic class name
        appended after a space. Dynamic-only keys are never surfaced.
        """
        if sheet is None:
            return EMPTY_CLASSES
        if not dynamic_class_names:
            return sheet.classes

        classes = {}
        for key, class_name in sheet.classes.items():
            dynamic = dynamic_class_names.get(key)
            if dynamic is None:
                classes[key] = class_name
            else:
                classes[key] = f"{class_name} {self._dynamic_class_name(sheet, dynamic)}"
        return MappingProxyType(classes)

    @staticmethod
    def _dynamic_class_name(sheet: StyleSheet, dynamic: DynamicClassName) -> str:
        # Use the class the sheet registered for the rule, unless the rule key
        # shadows a static slot or the rule is not inserted (yet or anymore).
        if dynamic.key not in sheet.classes:
            registered = sheet.dynamic_class_name(dynamic.key)
            if registered:
                return registered
        return dynamic.id
