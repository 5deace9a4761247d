"""Theme propagation through context variables."""
import contextvars
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sheetkit.core.definition import NO_THEME, StyleDefinition


class Theming:
    """A theme channel; components read the innermost provided theme."""

    def __init__(self, name: str = "theme", default: Any = None):
        self.name = name
        self._var: contextvars.ContextVar[Any] = contextvars.ContextVar(f"sheetkit_{name}", default=default)

    def get(self) -> Any:
        return self._var.get()

    @contextmanager
    def provide(self, theme: Any) -> Iterator[Any]:
        token = self._var.set(theme)
        try:
            yield theme
        finally:
            self._var.reset(token)

    def __repr__(self) -> str:
        return f"<Theming {self.name!r}>"


default_theming = Theming()


def theme_provider(theme: Any, theming: Optional[Theming] = None):
    """Provide *theme* for the duration of a ``with`` block."""
    return (theming or default_theming).provide(theme)


def resolve_theme(definition: StyleDefinition, explicit: Any = None, theming: Optional[Theming] = None) -> Any:
    """
    Theme for one render: the explicit theme, else the provided one, else
    ``NO_THEME``. Static definitions always get ``NO_THEME`` and never read
    the theme channel.
    """
    if not definition.theme_dependent:
        return NO_THEME
    if explicit is not None:
        return explicit
    provided = (theming or default_theming).get()
    return provided if provided is not None else NO_THEME
