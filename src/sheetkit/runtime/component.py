"""Components with a style definition attached to the class."""
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Optional

from sheetkit.core.classes import EMPTY_CLASSES, ClassNameMap
from sheetkit.runtime.hooks import UseStyles, create_use_styles
from sheetkit.runtime.host import Component


class StyledComponent(Component):
    """
    Component whose ``styles`` are compiled once per class.

    ``render()`` resolves ``self.classes`` from ``style_data()``; subclasses
    extend it to produce their output.
    """

    styles: ClassVar[Any] = None
    style_options: ClassVar[Mapping[str, Any]] = MappingProxyType({})

    def __init__(self, **props: Any) -> None:
        super().__init__(**props)
        self.classes: ClassNameMap = EMPTY_CLASSES

    @classmethod
    def use_styles(cls) -> UseStyles:
        # Stored per class so subclasses never share a parent's sheet
        use_styles: Optional[UseStyles] = cls.__dict__.get("_use_styles")
        if use_styles is None:
            use_styles = create_use_styles(cls.styles, **cls.style_options)
            cls._use_styles = use_styles
        return use_styles

    def style_data(self) -> Mapping[str, Any]:
        """Data handed to dynamic style functions."""
        return self.props

    def render(self) -> Any:
        self.classes = self.use_styles()(self.style_data())
        return self.classes
