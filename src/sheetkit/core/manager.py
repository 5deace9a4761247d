"""Reference-counted attachment of sheets to the registry."""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from sheetkit.core.cache import IdentityKey
from sheetkit.core.registry import SheetsRegistry
from sheetkit.core.sheet import StyleSheet

logger = logging.getLogger(__name__)

SheetCallback = Callable[[StyleSheet], None]


@dataclass
class SheetRegistration:
    sheet: StyleSheet
    theme: Any
    index: int
    ref_count: int = 0


class SheetsManager:
    """
    Tracks how many consumers hold each (sheet, theme) pair.

    A sheet is attached to the registry when its count goes 0 -> 1 and
    detached when it returns to 0, at which point the registration is
    deleted. Releasing an unknown pair is a no-op.
    """

    def __init__(
        self,
        registry: SheetsRegistry,
        on_attach: Optional[SheetCallback] = None,
        on_release: Optional[SheetCallback] = None,
    ):
        self.registry = registry
        self._on_attach = on_attach
        self._on_release = on_release
        self._registrations: Dict[Tuple[IdentityKey, IdentityKey], SheetRegistration] = {}

    def manage(self, index: int, theme: Any, sheet: Optional[StyleSheet]) -> int:
        """Add a reference; returns the new count (0 for a missing sheet)."""
        if sheet is None:
            return 0

        key = (IdentityKey(sheet), IdentityKey(theme))
        registration = self._registrations.get(key)
        if registration is None:
            registration = SheetRegistration(sheet=sheet, theme=theme, index=index)
            self._registrations[key] = registration
            sheet.index = index
            sheet.attach()
            self.registry.add(sheet)
            if self._on_attach is not None:
                self._on_attach(sheet)
            logger.debug("Attached %r", sheet)

        registration.ref_count += 1
        return registration.ref_count

    def unmanage(self, index: int, theme: Any, sheet: Optional[StyleSheet]) -> int:
        """Drop a reference; returns the remaining count."""
        if sheet is None:
            return 0

        key = (IdentityKey(sheet), IdentityKey(theme))
        registration = self._registrations.get(key)
        if registration is None or registration.ref_count <= 0:
            logger.debug("Ignoring unbalanced unmanage of %r (index=%s)", sheet, index)
            return 0

        registration.ref_count -= 1
        if registration.ref_count == 0:
            del self._registrations[key]
            self.registry.remove(sheet)
            sheet.detach()
            if self._on_release is not None:
                self._on_release(sheet)
            logger.debug("Detached %r", sheet)
        return registration.ref_count

    def get(self, sheet: StyleSheet, theme: Any) -> Optional[SheetRegistration]:
        return self._registrations.get((IdentityKey(sheet), IdentityKey(theme)))

    def ref_count(self, sheet: StyleSheet, theme: Any) -> int:
        registration = self.get(sheet, theme)
        return registration.ref_count if registration is not None else 0

    @property
    def registrations(self) -> List[SheetRegistration]:
        return list(self._registrations.values())

    def reset(self) -> None:
        """Detach everything without running release callbacks."""
        for registration in self._registrations.values():
            self.registry.remove(registration.sheet)
            registration.sheet.detach()
        self._registrations.clear()

    def __len__(self) -> int:
        return len(self._registrations)
