"""Injectable sources of time and randomness."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from random import Random
from typing import Iterable, Protocol


class Clock(Protocol):
    def today(self) -> date:
        ...

    def now(self) -> datetime:
        ...


class RandomSource(Protocol):
    def next_uniform(self) -> float:
        """Return a float in [0, 1)."""
        ...


class SystemClock:
    """Wall clock in UTC."""

    def today(self) -> date:
        return self.now().date()

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(slots=True)
class FixedClock:
    """Clock pinned to a given instant; tests move it with ``advance_days``."""

    current: datetime

    def today(self) -> date:
        return self.current.date()

    def now(self) -> datetime:
        return self.current

    def set_day(self, day: date) -> None:
        self.current = self.current.replace(year=day.year, month=day.month, day=day.day)

    def advance_days(self, days: int = 1) -> None:
        self.current = self.current + timedelta(days=days)


class PythonRandomSource:
    """Adapt ``random.Random`` to the RandomSource protocol."""

    def __init__(self, rng: Random | None = None, *, seed: int | None = None) -> None:
        self._rng = rng or (Random(seed) if seed is not None else Random())

    def next_uniform(self) -> float:
        return self._rng.random()


@dataclass(slots=True)
class SequenceRandomSource:
    """Replay a fixed sequence of uniforms, repeating the last one when exhausted."""

    values: list[float] = field(default_factory=list)
    _cursor: int = 0

    @classmethod
    def of(cls, values: Iterable[float]) -> "SequenceRandomSource":
        items = [float(v) for v in values]
        for value in items:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"Uniform value {value} is outside [0, 1)")
        if not items:
            raise ValueError("At least one value is required")
        return cls(values=items)

    def next_uniform(self) -> float:
        index = min(self._cursor, len(self.values) - 1)
        self._cursor += 1
        return self.values[index]
