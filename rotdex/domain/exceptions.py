"""Exceptions raised by RotDex domain services."""

from __future__ import annotations

from datetime import date


class RotDexError(RuntimeError):
    """Base class for domain exceptions."""


class InvalidCatalog(RotDexError):
    """Raised when a reward catalog cannot be used for draws."""

    def __init__(self, errors: list[str]) -> None:
        formatted = "\n".join(f"- {err}" for err in errors)
        super().__init__(f"Reward catalog is invalid:\n{formatted}")
        self.errors = list(errors)


class AlreadySpunToday(RotDexError):
    """Raised when the daily spin was already used."""

    def __init__(self, day: date) -> None:
        super().__init__(f"Daily spin already used on {day.isoformat()}")
        self.day = day


class InsufficientCurrency(RotDexError):
    """Raised when wallet cannot satisfy a spend operation."""
