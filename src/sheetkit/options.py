"""Validated option models for sheets and style contexts."""
from typing import Any, Callable, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from sheetkit.exceptions import StyleOptionsError

ModelT = TypeVar("ModelT", bound=BaseModel)


class SheetOptions(BaseModel):
    """Options accepted by ``create_use_styles``."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    name: Optional[str] = None
    index: Optional[int] = None
    generate_id: Optional[Callable[..., str]] = None
    class_name_prefix: Optional[str] = None
    disable_styles_generation: bool = False
    # A ``sheetkit.runtime.theming.Theming``; typed loosely to keep core independent
    theming: Optional[Any] = None


class ContextOptions(BaseModel):
    """Options accepted by ``StyleContext`` and ``style_provider``."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    generate_id: Optional[Callable[..., str]] = None
    class_name_prefix: str = ""
    disable_styles_generation: bool = False
    is_ssr: bool = False


def validate_options(data: Mapping[str, Any], model_class: Type[ModelT]) -> ModelT:
    """
    Instantiate and validate an options model.

    Raises:
        StyleOptionsError: with a ``{field: message}`` mapping on failure.
    """
    try:
        return model_class.model_validate(dict(data))
    except ValidationError as e:
        errors: Dict[str, str] = {}
        for err in e.errors():
            loc = err.get("loc", ())
            field_name = ".".join(str(part) for part in loc) or "__all__"

            msg = err.get("msg", "Invalid value")
            if msg.startswith("Value error, "):
                msg = msg[len("Value error, ") :]

            errors[field_name] = msg
        raise StyleOptionsError(errors) from e
