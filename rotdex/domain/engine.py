"""Session-scoped reward facade."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from .boost import RarityBoostState
from .exceptions import AlreadySpunToday
from .rewards import RewardCatalog, SpinRewardType, StreakMilestone, StreakRewardType
from .sources import Clock, RandomSource, SystemClock
from .spin import SpinEngine, SpinOutcome
from .streak import StreakState, StreakTracker, StreakUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SpinResult:
    outcome: SpinOutcome
    milestones_crossed: Sequence[StreakMilestone] = field(default_factory=tuple)
    streak: StreakState = field(default_factory=StreakState)


class RewardEngine:
    """Compose spin draws, streak tracking and the rarity boost for one user.

    Not thread-safe: callers hold a per-user lock across ``spin`` so that the
    streak update, the draw and the effects it applies appear atomic.
    Protection charges and the rarity boost are applied here; currency
    rewards are left to the caller.
    """

    def __init__(
        self,
        catalog: RewardCatalog,
        *,
        streak: StreakState | None = None,
        boost: RarityBoostState | None = None,
        last_spin_day: date | None = None,
        random_source: RandomSource | None = None,
        clock: Clock | None = None,
        boost_percent: float = 20.0,
        boost_generations: int = 1,
    ) -> None:
        self._clock = clock or SystemClock()
        self._catalog = catalog
        self._tracker = StreakTracker(catalog, streak)
        self._spins = SpinEngine(catalog, random_source=random_source, clock=self._clock)
        self._boost = boost or RarityBoostState()
        self._last_spin_day = last_spin_day
        self._boost_percent = boost_percent
        self._boost_generations = boost_generations

    @property
    def catalog(self) -> RewardCatalog:
        return self._catalog

    @property
    def streak(self) -> StreakState:
        return self._tracker.state

    @property
    def boost(self) -> RarityBoostState:
        return self._boost

    @property
    def last_spin_day(self) -> date | None:
        return self._last_spin_day

    def can_spin(self, today: date | None = None) -> bool:
        today = today or self._clock.today()
        return self._last_spin_day != today

    def check_in(self, today: date | None = None) -> StreakUpdate:
        """Record activity without spinning; milestone side effects are applied."""
        update = self._tracker.record_activity(today or self._clock.today())
        self._apply_milestones(update.milestones_crossed)
        return self._refresh(update)

    def spin(self, today: date | None = None) -> SpinResult:
        today = today or self._clock.today()
        if not self.can_spin(today):
            raise AlreadySpunToday(today)

        update = self.check_in(today)
        outcome = self._spins.draw(max(1, update.state.current_streak))
        self._apply_outcome(outcome)
        self._last_spin_day = today
        logger.debug(
            "Spin on %s: %s x%s (streak %s).",
            today.isoformat(),
            outcome.reward_type.value,
            outcome.amount,
            outcome.streak_day_at_spin,
        )
        return SpinResult(
            outcome=outcome,
            milestones_crossed=update.milestones_crossed,
            streak=self._tracker.state,
        )

    def consume_generation_rarity_boost(self) -> float:
        return self._boost.consume_one_generation()

    def _apply_outcome(self, outcome: SpinOutcome) -> None:
        if outcome.reward_type is SpinRewardType.STREAK_PROTECTION:
            self._tracker.add_protection_charge(outcome.amount)
        elif outcome.reward_type is SpinRewardType.RARITY_BOOST:
            self._boost.apply_boost(self._boost_percent, self._boost_generations * outcome.amount)

    def _apply_milestones(self, milestones: Sequence[StreakMilestone]) -> None:
        for milestone in milestones:
            if milestone.reward_type is StreakRewardType.STREAK_PROTECTION:
                self._tracker.add_protection_charge(milestone.amount)

    def _refresh(self, update: StreakUpdate) -> StreakUpdate:
        if not update.milestones_crossed:
            return update
        return StreakUpdate(
            state=self._tracker.state,
            milestones_crossed=update.milestones_crossed,
            protection_used=update.protection_used,
            streak_reset=update.streak_reset,
            previous_streak=update.previous_streak,
        )
