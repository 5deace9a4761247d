"""Minimal component host: render, commit effects, unmount."""
import contextvars
import logging
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Cleanup = Callable[[], None]
Setup = Callable[[], Optional[Cleanup]]

_UNSET: Any = object()

current_component_ctx: contextvars.ContextVar[Optional["Component"]] = contextvars.ContextVar(
    "sheetkit_current_component", default=None
)


def current_component() -> Optional["Component"]:
    """The component currently being rendered, if any."""
    return current_component_ctx.get()


class Effect(NamedTuple):
    """A setup callable and the values it depends on.

    ``deps=None`` reruns on every commit, ``deps=()`` runs once per mount.
    """

    setup: Setup
    deps: Optional[Tuple[Any, ...]] = None


def _same_deps(previous: Optional[Sequence[Any]], current: Optional[Sequence[Any]]) -> bool:
    if previous is None or current is None or len(previous) != len(current):
        return False
    return all(a is b for a, b in zip(previous, current))


class EffectSlot:
    """Holds one effect's dependencies and pending cleanup across commits."""

    def __init__(self):
        self.deps: Any = _UNSET
        self.cleanup: Optional[Cleanup] = None

    def commit(self, effect: Effect) -> bool:
        """Run *effect* if its deps changed, cleaning up the previous run first."""
        if self.deps is not _UNSET and _same_deps(self.deps, effect.deps):
            return False
        self.run_cleanup()
        self.cleanup = effect.setup()
        self.deps = effect.deps
        return True

    def replay(self, effect: Effect) -> None:
        """Run setup again regardless of deps."""
        self.cleanup = effect.setup()
        self.deps = effect.deps

    def run_cleanup(self) -> None:
        cleanup, self.cleanup = self.cleanup, None
        if cleanup is not None:
            cleanup()


class Component:
    """Base class for host components. Subclasses implement ``render``."""

    # Lifecycle hooks registry, called by the host when present
    MOUNT_HOOKS = ["on_mount"]
    UPDATE_HOOKS = ["on_update"]
    UNMOUNT_HOOKS = ["on_unmount"]

    def __init__(self, **props: Any) -> None:
        self.props: Dict[str, Any] = props
        self.output: Any = None
        self._hooks: Dict[Any, Any] = {}
        self._hook_order: List[Any] = []

    def render(self) -> Any:
        raise NotImplementedError

    def use_hook(self, owner: Any, factory: Callable[[], Any]) -> Any:
        """Per-instance hook state for *owner*, created on first use."""
        key = id(owner)
        hook = self._hooks.get(key)
        if hook is None:
            hook = factory()
            self._hooks[key] = hook
            self._hook_order.append(key)
        return hook

    def collect_effects(self) -> List[Effect]:
        effects: List[Effect] = []
        for key in self._hook_order:
            effects.extend(getattr(self._hooks[key], "effects", ()))
        return effects

    def set_props(self, **props: Any) -> None:
        self.props = props

    def _run_hooks(self, names: Sequence[str]) -> None:
        for hook_name in names:
            hook = getattr(self, hook_name, None)
            if hook is not None:
                hook()


class Root:
    """
    Drives components through mount, update and unmount.

    With ``strict=True`` every render happens twice and a fresh mount runs
    its effects setup -> cleanup -> setup, to surface impure setup code.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._slots: Dict[int, List[EffectSlot]] = {}
        self._mounted: Dict[int, Component] = {}

    def render(self, component: Component) -> Any:
        token = current_component_ctx.set(component)
        try:
            component.output = component.render()
            if self.strict:
                component.output = component.render()
        finally:
            current_component_ctx.reset(token)
        return component.output

    def mount(self, component: Component) -> Any:
        output = self.render(component)
        effects = component.collect_effects()
        slots = [EffectSlot() for _ in effects]
        self._slots[id(component)] = slots
        self._mounted[id(component)] = component

        for slot, effect in zip(slots, effects):
            slot.commit(effect)
        if self.strict:
            for slot in slots:
                slot.run_cleanup()
            for slot, effect in zip(slots, effects):
                slot.replay(effect)

        component._run_hooks(component.MOUNT_HOOKS)
        return output

    def update(self, component: Component, **props: Any) -> Any:
        if id(component) not in self._mounted:
            raise RuntimeError(f"{component!r} is not mounted")
        if props:
            component.set_props(**props)
        output = self.render(component)
        slots = self._slots[id(component)]
        effects = component.collect_effects()
        # Hooks first used on this render get fresh slots
        slots.extend(EffectSlot() for _ in range(len(effects) - len(slots)))
        for slot, effect in zip(slots, effects):
            slot.commit(effect)
        component._run_hooks(component.UPDATE_HOOKS)
        return output

    def unmount(self, component: Component) -> None:
        slots = self._slots.pop(id(component), None)
        if slots is None:
            logger.debug("Ignoring unmount of %r: not mounted", component)
            return
        del self._mounted[id(component)]
        for slot in slots:
            slot.run_cleanup()
        component._run_hooks(component.UNMOUNT_HOOKS)

    def unmount_all(self) -> None:
        for component in list(self._mounted.values()):
            self.unmount(component)

    @property
    def mounted(self) -> List[Component]:
        return list(self._mounted.values())
