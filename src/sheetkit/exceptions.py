"""Sheetkit exceptions."""
from typing import Dict, Optional


class SheetkitError(Exception):
    """Base class for errors raised by sheetkit."""


class StyleDefinitionError(SheetkitError):
    """Raised when a style definition cannot be normalised."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.message = message
        self.key = key
        super().__init__(message)

    def __str__(self) -> str:
        if self.key:
            return f"{self.key}: {self.message}"
        return self.message


class StyleOptionsError(SheetkitError):
    """Raised when sheet or context options fail validation."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        details = ", ".join(f"{field}: {msg}" for field, msg in errors.items())
        super().__init__(f"Invalid style options ({details})")
