"""blockread error hierarchy and exceptions."""

from __future__ import annotations


class BlockReadError(Exception):
    """Base exception for all blockread errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(BlockReadError):
    """Raised by strict validation when a metrics setting is out of range."""
    pass


class ReaderClosedError(BlockReadError):
    """Raised when a closed local block reader is used."""
    pass


class InstrumentationError(BlockReadError):
    """Raised when a metrics sink cannot be set up."""
    pass
