"""Style context: the collaborators shared by every hook rendered under it."""
import contextvars
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

from sheetkit.core.cache import SheetCache
from sheetkit.core.classes import ClassNameResolver
from sheetkit.core.compiler import StyleCompiler, create_generate_id
from sheetkit.core.definition import StyleDefinition
from sheetkit.core.dynamic import DynamicRulesController
from sheetkit.core.manager import SheetsManager
from sheetkit.core.registry import SheetsRegistry, sheets_registry
from sheetkit.core.sheet import StyleSheet
from sheetkit.options import ContextOptions, SheetOptions, validate_options


class StyleContext:
    """
    Registry, sheets manager, sheet cache and generation options.

    Hooks rendered under different contexts never share sheets.
    """

    def __init__(
        self,
        registry: Optional[SheetsRegistry] = None,
        compiler: Optional[StyleCompiler] = None,
        **options: Any,
    ):
        self.options = validate_options(options, ContextOptions)
        self.registry = registry if registry is not None else SheetsRegistry()
        self.compiler = compiler or StyleCompiler()
        self.generate_id = self.options.generate_id or create_generate_id()
        self.cache = SheetCache()
        self.manager = SheetsManager(self.registry, on_attach=self.cache.adopt, on_release=self.cache.discard)
        self.dynamic_rules = DynamicRulesController()
        self.resolver = ClassNameResolver()

    @property
    def is_ssr(self) -> bool:
        return self.options.is_ssr

    @property
    def disable_styles_generation(self) -> bool:
        return self.options.disable_styles_generation

    @classmethod
    def from_config(cls, path: Path | str | None = None, **overrides: Any) -> "StyleContext":
        """Build a context from a ``sheetkit.config.py`` file."""
        from sheetkit.config import load_config

        options = load_config(path)
        options.update(overrides)
        return cls(**options)

    def derive(self, **options: Any) -> "StyleContext":
        """Child context inheriting unspecified options and the registry."""
        registry = options.pop("registry", self.registry)
        merged = self.options.model_dump()
        if merged.get("generate_id") is None:
            merged["generate_id"] = self.generate_id
        merged.update(options)
        return StyleContext(registry=registry, compiler=self.compiler, **merged)

    def sheet_options(self, options: SheetOptions) -> SheetOptions:
        """Fill sheet options with this context's defaults."""
        return options.model_copy(
            update={
                "generate_id": options.generate_id or self.generate_id,
                "class_name_prefix": (
                    options.class_name_prefix
                    if options.class_name_prefix is not None
                    else self.options.class_name_prefix
                ),
                "disable_styles_generation": (
                    options.disable_styles_generation or self.options.disable_styles_generation
                ),
            }
        )

    def get_sheet(self, definition: StyleDefinition, theme: Any, options: SheetOptions) -> Optional[StyleSheet]:
        return self.cache.get(self, definition, theme, self.sheet_options(options))

    def reset(self) -> None:
        """Forget every sheet and registration (test isolation)."""
        self.manager.reset()
        self.cache.clear()
        self.registry.reset()

    def __repr__(self) -> str:
        return f"<StyleContext ssr={self.is_ssr} sheets={len(self.registry)}>"


_default_context: Optional[StyleContext] = None

style_context_ctx: contextvars.ContextVar[Optional[StyleContext]] = contextvars.ContextVar(
    "sheetkit_style_context", default=None
)


def default_context() -> StyleContext:
    """Process-wide context backed by the default registry."""
    global _default_context
    if _default_context is None:
        _default_context = StyleContext(registry=sheets_registry)
    return _default_context


def get_style_context() -> StyleContext:
    return style_context_ctx.get() or default_context()


@contextmanager
def style_provider(context: Optional[StyleContext] = None, **options: Any) -> Iterator[StyleContext]:
    """
    Make a style context current for the ``with`` block.

    Pass an existing context, or options to derive one from the current
    context.
    """
    if context is None:
        context = get_style_context().derive(**options)
    elif options:
        context = context.derive(**options)
    token = style_context_ctx.set(context)
    try:
        yield context
    finally:
        style_context_ctx.reset(token)
