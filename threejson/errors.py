"""Exception and warning types shared across the package."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ThreeJsonError(Exception):
    """Base class for all threejson errors."""


class InvalidInputError(ThreeJsonError, ValueError):
    """Raised when a caller passes missing or malformed input."""


class ConversionWarning(BaseModel):
    """A recoverable problem reported alongside a successful conversion."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
