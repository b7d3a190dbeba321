"""Exceptions raised while extracting element descriptors."""

from __future__ import annotations

from typing import Optional

from .models import SourceRange


class ElementScanError(RuntimeError):
    """Base class for elementscan failures."""


class UnresolvableKeyError(ElementScanError):
    """Raised when an object or class body entry has no static name."""

    def __init__(self, message: str, location: Optional[SourceRange] = None) -> None:
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self) -> str:
        if self.location is None:
            return self.message
        return f"{self.location}: {self.message}"


__all__ = ["ElementScanError", "UnresolvableKeyError"]
