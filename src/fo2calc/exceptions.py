from __future__ import annotations

from typing import Optional


class Fo2CalcError(Exception):
    """Base exception for the fo2calc package."""


class InvalidInputError(Fo2CalcError, ValueError):
    """Raised when numeric input would make a formula produce NaN/Infinity or nonsense."""


class DataLoadError(Fo2CalcError):
    """Raised when a data or config file is missing or cannot be parsed."""


class DataValidationError(Fo2CalcError):
    """Raised when mod data fails schema or structural validation."""

    def __init__(self, message: str, errors: Optional[list] = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    def to_human(self) -> str:
        parts = [str(self)]
        for e in self.errors:
            path = "/".join(str(p) for p in getattr(e, "path", ())) or "<root>"
            parts.append(f" - at {path}: {getattr(e, 'message', e)}")
        return "\n".join(parts)


class UnknownEntityError(Fo2CalcError, KeyError):
    """Raised when a mod, weapon, ammo or armor name cannot be found."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""
