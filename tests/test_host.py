from typing import Any, List

import pytest

from sheetkit.runtime.host import Component, Effect, EffectSlot, Root, current_component


def test_effect_slot_runs_on_first_commit_and_changed_deps() -> None:
    calls: List[str] = []
    first, second = object(), object()

    def make(label: str):
        def setup():
            calls.append(f"setup {label}")
            return lambda: calls.append(f"cleanup {label}")

        return setup

    slot = EffectSlot()
    assert slot.commit(Effect(make("a"), (first,)))
    assert not slot.commit(Effect(make("b"), (first,)))
    assert slot.commit(Effect(make("c"), (second,)))
    slot.run_cleanup()

    assert calls == ["setup a", "cleanup a", "setup c", "cleanup c"]


def test_effect_slot_compares_deps_by_identity() -> None:
    calls: List[int] = []
    slot = EffectSlot()
    slot.commit(Effect(lambda: calls.append(1), ({"a": 1},)))
    slot.commit(Effect(lambda: calls.append(2), ({"a": 1},)))
    assert calls == [1, 2]


def test_effect_slot_without_deps_always_runs() -> None:
    calls: List[int] = []
    slot = EffectSlot()
    slot.commit(Effect(lambda: calls.append(1)))
    slot.commit(Effect(lambda: calls.append(2)))
    assert calls == [1, 2]


class Recorder:
    def __init__(self, log: List[str]):
        self.log = log
        self.effects: List[Effect] = []

    def render(self) -> None:
        self.log.append("render")

        def setup():
            self.log.append("setup")
            return lambda: self.log.append("cleanup")

        self.effects = [Effect(setup, ())]


class Probe(Component):
    def __init__(self, log: List[str], **props: Any) -> None:
        super().__init__(**props)
        self.log = log
        self.recorder = Recorder(log)

    def render(self) -> Any:
        assert current_component() is self
        self.use_hook(self.recorder, lambda: self.recorder).render()
        return self.props.get("label")

    def on_mount(self) -> None:
        self.log.append("mounted")

    def on_unmount(self) -> None:
        self.log.append("unmounted")


def test_root_mount_update_unmount() -> None:
    log: List[str] = []
    root = Root()
    component = Probe(log, label="a")

    assert root.mount(component) == "a"
    assert root.update(component, label="b") == "b"
    root.unmount(component)

    assert log == ["render", "setup", "mounted", "render", "cleanup", "unmounted"]
    assert current_component() is None
    assert root.mounted == []


def test_strict_root_double_invokes() -> None:
    log: List[str] = []
    root = Root(strict=True)
    component = Probe(log)

    root.mount(component)
    root.unmount(component)

    assert log == [
        "render",
        "render",
        "setup",
        "cleanup",
        "setup",
        "mounted",
        "cleanup",
        "unmounted",
    ]


def test_update_requires_mount() -> None:
    with pytest.raises(RuntimeError):
        Root().update(Probe([]))


def test_unmount_unknown_component_is_ignored() -> None:
    log: List[str] = []
    Root().unmount(Probe(log))
    assert log == []


def test_unmount_all() -> None:
    log: List[str] = []
    root = Root()
    root.mount(Probe(log))
    root.mount(Probe(log))
    root.unmount_all()
    assert root.mounted == []
    assert log.count("cleanup") == 2
