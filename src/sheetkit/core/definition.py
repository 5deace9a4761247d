"""Style definitions as a tagged union of static and dynamic entries."""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Union

from sheetkit.exceptions import StyleDefinitionError

Declarations = Mapping[str, Any]


class _NoTheme(Mapping[str, Any]):
    """
    Theme used when none is given or provided.

    An empty read-only mapping, so theme functions can read it with ``get``
    and ``in``. There is exactly one instance; caches key on its identity.
    """

    def __getitem__(self, key: str) -> Any:
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(())

    def __len__(self) -> int:
        return 0

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return "NO_THEME"


NO_THEME = _NoTheme()


@dataclass(frozen=True, eq=False)
class StaticStyle:
    """Declarations fixed at compile time."""

    declarations: Declarations


@dataclass(frozen=True, eq=False)
class DynamicStyle:
    """Declarations computed from per-instance data."""

    fn: Callable[[Any], Optional[Declarations]]

    def evaluate(self, data: Any) -> Declarations:
        declarations = self.fn(data)
        if declarations is None:
            return {}
        if not isinstance(declarations, Mapping):
            raise StyleDefinitionError(
                f"dynamic style returned {type(declarations).__name__}, expected a mapping"
            )
        return declarations


StyleEntry = Union[StaticStyle, DynamicStyle]


def _to_entry(key: str, value: Any) -> StyleEntry:
    if isinstance(value, (StaticStyle, DynamicStyle)):
        return value
    if value is None:
        return StaticStyle({})
    if isinstance(value, Mapping):
        return StaticStyle(dict(value))
    if callable(value):
        return DynamicStyle(value)
    raise StyleDefinitionError(
        f"expected a mapping or a callable, got {type(value).__name__}", key=key
    )


class StyleDefinition:
    """
    Caller-supplied description of style rules.

    The source is either a mapping of ``key -> value`` or a callable taking
    the theme and returning such a mapping. Each value becomes a
    :class:`StaticStyle` (a mapping of declarations) or a :class:`DynamicStyle`
    (a callable of instance data). Identity is by reference: two definitions
    built from equal sources are still distinct.
    """

    def __init__(self, source: Any = None):
        if isinstance(source, StyleDefinition):
            raise StyleDefinitionError("definition is already normalised")
        if source is not None and not isinstance(source, Mapping) and not callable(source):
            raise StyleDefinitionError(
                f"expected a mapping or a callable, got {type(source).__name__}"
            )
        self.source = source
        self.theme_dependent = callable(source) and not isinstance(source, Mapping)
        self._static_entries: Optional[Dict[str, StyleEntry]] = None

    @classmethod
    def of(cls, source: Any) -> "StyleDefinition":
        """Return *source* if already normalised, else wrap it."""
        if isinstance(source, cls):
            return source
        return cls(source)

    def entries(self, theme: Any = NO_THEME) -> Dict[str, StyleEntry]:
        """Evaluate the definition for *theme* into tagged entries."""
        if not self.theme_dependent:
            if self._static_entries is None:
                self._static_entries = self._normalise(self.source)
            return self._static_entries
        return self._normalise(self.source(theme))

    @staticmethod
    def _normalise(raw: Any) -> Dict[str, StyleEntry]:
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise StyleDefinitionError(
                f"style definition evaluated to {type(raw).__name__}, expected a mapping"
            )
        return {str(key): _to_entry(str(key), value) for key, value in raw.items()}

    def __repr__(self) -> str:
        kind = "themed" if self.theme_dependent else "static"
        return f"<StyleDefinition {kind} at {id(self):#x}>"
