"""Daily streak tracking."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Sequence

from .rewards import RewardCatalog, StreakMilestone

logger = logging.getLogger(__name__)


class StreakStatus(str, Enum):
    NO_STREAK = "no_streak"
    ACTIVE = "active"
    BROKEN_PENDING_PROTECTION = "broken_pending_protection"


@dataclass(slots=True)
class StreakState:
    current_streak: int = 0
    last_active_day: date | None = None
    protection_charges: int = 0
    longest_streak: int = 0


@dataclass(frozen=True, slots=True)
class StreakUpdate:
    state: StreakState
    milestones_crossed: Sequence[StreakMilestone] = field(default_factory=tuple)
    protection_used: bool = False
    streak_reset: bool = False
    previous_streak: int = 0


class StreakTracker:
    """Own and mutate a single user's StreakState.

    A missed day is forgiven by consuming one protection charge; without a
    charge the streak restarts at 1 and a new streak lifetime begins, so early
    milestones can fire again.
    """

    def __init__(self, catalog: RewardCatalog, state: StreakState | None = None) -> None:
        self._catalog = catalog
        self._state = state or StreakState()

    @property
    def state(self) -> StreakState:
        return replace(self._state)

    def status(self, today: date) -> StreakStatus:
        state = self._state
        if state.current_streak == 0 or state.last_active_day is None:
            return StreakStatus.NO_STREAK
        gap = (today - state.last_active_day).days
        if gap > 1:
            if state.protection_charges > 0:
                return StreakStatus.BROKEN_PENDING_PROTECTION
            return StreakStatus.NO_STREAK
        return StreakStatus.ACTIVE

    def record_activity(self, today: date) -> StreakUpdate:
        state = self._state
        previous = state.current_streak

        if state.last_active_day is not None:
            gap = (today - state.last_active_day).days
            if gap == 0:
                return StreakUpdate(state=self.state, previous_streak=previous)
            if gap < 0:
                logger.warning(
                    "Ignoring activity on %s: earlier than last active day %s.",
                    today.isoformat(),
                    state.last_active_day.isoformat(),
                )
                return StreakUpdate(state=self.state, previous_streak=previous)
        else:
            gap = 1

        protection_used = False
        streak_reset = False
        baseline = previous
        if gap == 1 or previous == 0:
            state.current_streak = previous + 1
        elif state.protection_charges > 0:
            state.protection_charges -= 1
            state.current_streak = previous + 1
            protection_used = True
            logger.debug("Protection charge used to bridge a %s-day gap.", gap)
        else:
            state.current_streak = 1
            baseline = 0
            streak_reset = True

        state.last_active_day = today
        state.longest_streak = max(state.longest_streak, state.current_streak)
        crossed = self._catalog.milestones_between(baseline, state.current_streak)
        return StreakUpdate(
            state=self.state,
            milestones_crossed=tuple(crossed),
            protection_used=protection_used,
            streak_reset=streak_reset,
            previous_streak=previous,
        )

    def add_protection_charge(self, count: int = 1) -> int:
        if count <= 0:
            raise ValueError("Protection charge count must be positive")
        self._state.protection_charges += count
        return self._state.protection_charges
