"""Weighted spin wheel draws."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from .rewards import RewardCatalog, SpinRewardDefinition, SpinRewardType
from .sources import Clock, PythonRandomSource, RandomSource, SystemClock


@dataclass(frozen=True, slots=True)
class SpinOutcome:
    reward_type: SpinRewardType
    amount: int
    streak_day_at_spin: int
    timestamp: datetime
    bonus_gems: int = 0


class SpinEngine:
    """Draw rewards from the catalog's weighted table.

    Selection is a linear scan over the catalog order: ``u`` is drawn in
    ``[0, W)`` and the first entry whose cumulative weight exceeds ``u`` wins.
    """

    def __init__(
        self,
        catalog: RewardCatalog,
        *,
        random_source: RandomSource | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._catalog = catalog
        self._random = random_source or PythonRandomSource()
        self._clock = clock or SystemClock()

    @property
    def catalog(self) -> RewardCatalog:
        return self._catalog

    def draw(self, streak_day: int) -> SpinOutcome:
        if streak_day < 1:
            raise ValueError("Streak day must be at least 1")
        reward = self._select()
        amount = self._resolve_amount(reward)
        return SpinOutcome(
            reward_type=reward.reward_type,
            amount=amount,
            streak_day_at_spin=streak_day,
            timestamp=self._clock.now(),
            bonus_gems=reward.bonus_gems if reward.reward_type is SpinRewardType.JACKPOT else 0,
        )

    def _select(self) -> SpinRewardDefinition:
        rewards = self._catalog.spin_rewards
        threshold = self._random.next_uniform() * self._catalog.total_weight
        cumulative = 0.0
        for reward in rewards:
            cumulative += reward.weight
            if cumulative > threshold:
                return reward
        # Float accumulation can land a hair short of the total.
        return next(reward for reward in reversed(rewards) if reward.weight > 0)

    def _resolve_amount(self, reward: SpinRewardDefinition) -> int:
        span = reward.max_amount - reward.min_amount + 1
        offset = math.floor(self._random.next_uniform() * span)
        return min(reward.max_amount, reward.min_amount + offset)
