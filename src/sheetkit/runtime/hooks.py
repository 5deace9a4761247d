"""Lifecycle adapter: sequences the style core around host effects."""
import logging
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sheetkit.core.cache import IdentityKey
from sheetkit.core.classes import EMPTY_CLASSES, ClassNameMap
from sheetkit.core.definition import NO_THEME, StyleDefinition
from sheetkit.core.dynamic import DynamicClassNames, DynamicRuleSet
from sheetkit.core.index import next_sheet_index
from sheetkit.core.sheet import StyleSheet
from sheetkit.options import SheetOptions, validate_options
from sheetkit.runtime.context import StyleContext, get_style_context
from sheetkit.runtime.host import Cleanup, Effect, EffectSlot, current_component
from sheetkit.runtime.theming import Theming, default_theming, resolve_theme

logger = logging.getLogger(__name__)

# Stands in for missing instance data so the update effect sees a stable value
EMPTY_DATA: Mapping[str, Any] = MappingProxyType({})


class Acquisition:
    """
    One acquire/release pairing of a hook.

    Holds the managed sheet and the dynamic rules added for it. Releasing is
    idempotent and only undoes this pairing's own acquisition.
    """

    def __init__(self, context: StyleContext, sheet: StyleSheet, theme: Any, index: int):
        self.context = context
        self.sheet = sheet
        self.theme = theme
        self.index = index
        self.rules: Optional[DynamicRuleSet] = None
        self.active = False

    def acquire(self, data: Any, reserved: Optional[DynamicClassNames]) -> None:
        if self.active:
            return
        self.context.manager.manage(self.index, self.theme, self.sheet)
        self.rules = self.context.dynamic_rules.add(self.sheet, data, reserved)
        self.active = True

    def update(self, data: Any) -> None:
        if not self.active:
            logger.debug("Skipping update of released acquisition for %r", self.sheet)
            return
        self.context.dynamic_rules.update(data, self.sheet, self.rules)

    def release(self) -> None:
        if not self.active:
            return
        self.active = False
        # Reverse order of acquisition: rules first, then the sheet reference
        self.context.dynamic_rules.remove(self.sheet, self.rules)
        self.rules = None
        self.context.manager.unmanage(self.index, self.theme, self.sheet)

    def __repr__(self) -> str:
        return f"<Acquisition {self.sheet!r} active={self.active}>"


class StylesHook:
    """Per-instance state of a :class:`UseStyles`."""

    def __init__(self, use_styles: "UseStyles"):
        self.use_styles = use_styles
        self.context: Optional[StyleContext] = None
        self.theme: Any = NO_THEME
        self.sheet: Optional[StyleSheet] = None
        self.data: Any = EMPTY_DATA
        self.classes: ClassNameMap = EMPTY_CLASSES
        self.effects: List[Effect] = []
        self._is_first_mount = True
        self._sheet_memo: Optional[Tuple[StyleContext, Any, Optional[StyleSheet]]] = None
        self._reserved_memo: Optional[Tuple[Optional[StyleSheet], Optional[DynamicClassNames]]] = None
        self._classes_memo: Optional[Tuple[Any, Any, ClassNameMap]] = None
        self._acquisition: Optional[Acquisition] = None

    @property
    def acquisition(self) -> Optional[Acquisition]:
        return self._acquisition

    @property
    def dynamic_rules(self) -> Optional[DynamicRuleSet]:
        acquisition = self._acquisition
        return acquisition.rules if acquisition is not None else None

    def render(self, data: Any = None, theme: Any = None) -> ClassNameMap:
        """Resolve the class map for this render and stage the host effects."""
        data = EMPTY_DATA if data is None else data
        if theme is None and isinstance(data, Mapping):
            theme = data.get("theme")

        owner = self.use_styles
        context = get_style_context()
        theme = resolve_theme(owner.definition, theme, owner.theming)
        sheet = self._memo_sheet(context, theme)
        reserved = self._memo_reserved(context, sheet)
        classes = self._memo_classes(context, sheet, reserved)

        self.context, self.theme, self.sheet, self.data, self.classes = context, theme, sheet, data, classes

        if context.is_ssr:
            # Servers never run effects: acquire now, the request registry is discarded
            self.effects = []
            if sheet is not None:
                self._acquire(context, sheet, theme, reserved, data)
            return classes

        def acquire() -> Optional[Cleanup]:
            return self._acquire(context, sheet, theme, reserved, data)

        def update() -> None:
            self._update(sheet, data)

        def mounted() -> None:
            self._is_first_mount = False

        self.effects = [
            Effect(acquire, (sheet,)),
            Effect(update, (data,)),
            Effect(mounted, ()),
        ]
        return classes

    def dispose(self) -> None:
        """Release whatever this hook currently holds."""
        acquisition, self._acquisition = self._acquisition, None
        if acquisition is not None:
            acquisition.release()

    def _memo_sheet(self, context: StyleContext, theme: Any) -> Optional[StyleSheet]:
        memo = self._sheet_memo
        if memo is not None and memo[0] is context and memo[1] is theme:
            return memo[2]
        sheet = context.get_sheet(self.use_styles.definition, theme, self.use_styles.options)
        self._sheet_memo = (context, theme, sheet)
        return sheet

    def _memo_reserved(self, context: StyleContext, sheet: Optional[StyleSheet]) -> Optional[DynamicClassNames]:
        memo = self._reserved_memo
        if memo is not None and memo[0] is sheet:
            return memo[1]
        reserved = context.dynamic_rules.reserve(sheet)
        self._reserved_memo = (sheet, reserved)
        return reserved

    def _memo_classes(
        self,
        context: StyleContext,
        sheet: Optional[StyleSheet],
        reserved: Optional[DynamicClassNames],
    ) -> ClassNameMap:
        if sheet is None:
            return EMPTY_CLASSES
        memo = self._classes_memo
        if memo is not None and memo[0] is sheet and memo[1] is reserved:
            return memo[2]
        classes = context.resolver.resolve(sheet, reserved)
        self._classes_memo = (sheet, reserved, classes)
        return classes

    def _acquire(
        self,
        context: StyleContext,
        sheet: Optional[StyleSheet],
        theme: Any,
        reserved: Optional[DynamicClassNames],
        data: Any,
    ) -> Optional[Cleanup]:
        if sheet is None:
            return None

        live = self._acquisition
        if live is not None and live.active and live.sheet is sheet and live.context is context:
            # Setup ran again without a cleanup in between: keep the live pairing
            logger.debug("Absorbing repeated setup for %r", sheet)
        else:
            live = Acquisition(context, sheet, theme, self.use_styles.index)
            live.acquire(data, reserved)
            self._acquisition = live

        acquisition = live

        def release() -> None:
            acquisition.release()
            if self._acquisition is acquisition:
                self._acquisition = None

        return release

    def _update(self, sheet: Optional[StyleSheet], data: Any) -> None:
        # Rules were created from this very data on the first mount
        if self._is_first_mount or sheet is None:
            return
        acquisition = self._acquisition
        if acquisition is None or acquisition.sheet is not sheet:
            return
        acquisition.update(data)


class UseStyles:
    """
    Styles bound to one definition and one set of sheet options.

    Calling it during a component render returns that component's class map.
    Outside a render, server-side calls each act as a new instance; other
    calls share one detached instance whose effects run immediately and which
    holds its sheet until :meth:`dispose`.
    """

    def __init__(self, styles: Any = None, options: Optional[SheetOptions] = None):
        options = options or SheetOptions()
        self.definition = StyleDefinition.of(styles)
        self.index = options.index if options.index is not None else next_sheet_index()
        self.options = options.model_copy(update={"index": self.index})
        self.theming: Theming = options.theming or default_theming
        self._detached: Optional[StylesHook] = None
        self._detached_slots: List[EffectSlot] = []

    def hook(self) -> StylesHook:
        return StylesHook(self)

    def __call__(self, data: Any = None, theme: Any = None) -> ClassNameMap:
        component = current_component()
        if component is not None:
            return component.use_hook(self, self.hook).render(data, theme)
        if get_style_context().is_ssr:
            return self.hook().render(data, theme)
        return self._render_detached(data, theme)

    def _render_detached(self, data: Any, theme: Any) -> ClassNameMap:
        if self._detached is None:
            self._detached = self.hook()
        hook = self._detached
        classes = hook.render(data, theme)
        slots = self._detached_slots
        slots.extend(EffectSlot() for _ in range(len(hook.effects) - len(slots)))
        for slot, effect in zip(slots, hook.effects):
            slot.commit(effect)
        return classes

    def dispose(self) -> None:
        """Release the sheet held by detached calls."""
        slots, self._detached_slots = self._detached_slots, []
        for slot in slots:
            slot.run_cleanup()
        self._detached = None

    def __repr__(self) -> str:
        return f"<UseStyles {self.options.name or self.definition!r} index={self.index}>"


def create_use_styles(styles: Any = None, **options: Any) -> UseStyles:
    """
    Bind *styles* to validated sheet options.

    Raises:
        StyleOptionsError: if an option is unknown or has the wrong type.
    """
    return UseStyles(styles, validate_options(options, SheetOptions))


# Definitions are usually module-level constants; entries live until released
_use_styles_by_definition: Dict[IdentityKey, UseStyles] = {}


def resolve_styles(
    definition: Any,
    options: Optional[Mapping[str, Any]] = None,
    instance_data: Any = None,
    theme: Any = None,
) -> ClassNameMap:
    """
    Class map for *definition* in the current render.

    The :class:`UseStyles` for a definition is created on first use, from the
    options passed at that point, and kept until :func:`release_styles`.
    """
    if isinstance(definition, UseStyles):
        use_styles = definition
    else:
        key = IdentityKey(definition)
        use_styles = _use_styles_by_definition.get(key)
        if use_styles is None:
            use_styles = create_use_styles(definition, **(options or {}))
            _use_styles_by_definition[key] = use_styles
    return use_styles(instance_data, theme)


def release_styles(definition: Any) -> bool:
    """
    Forget the :class:`UseStyles` kept for *definition* and release its
    detached sheet. Returns False if there was none.
    """
    use_styles = _use_styles_by_definition.pop(IdentityKey(definition), None)
    if use_styles is None:
        return False
    use_styles.dispose()
    return True
