"""Spin wheel simulation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict

from ..domain.economy import spin_outcome_credits
from ..domain.rewards import RewardCatalog, SpinRewardType
from ..domain.sources import FixedClock, PythonRandomSource, RandomSource
from ..domain.spin import SpinEngine, SpinOutcome


@dataclass(slots=True)
class SimulationResult:
    spins: int
    counts: Dict[SpinRewardType, int] = field(default_factory=dict)
    credits: Dict[str, int] = field(default_factory=dict)

    def merge(self, outcome: SpinOutcome) -> None:
        self.counts[outcome.reward_type] = self.counts.get(outcome.reward_type, 0) + 1
        for currency, amount in spin_outcome_credits(outcome).items():
            self.credits[currency] = self.credits.get(currency, 0) + amount

    def frequency(self, reward_type: SpinRewardType) -> float:
        if not self.spins:
            return 0.0
        return self.counts.get(reward_type, 0) / self.spins

    def average_credit(self, currency: str) -> float:
        if not self.spins:
            return 0.0
        return self.credits.get(currency, 0) / self.spins


class SpinSimulator:
    """Monte-Carlo simulation to compare observed and configured spin odds."""

    def __init__(self, catalog: RewardCatalog, *, random_source: RandomSource | None = None) -> None:
        self._catalog = catalog
        self._random = random_source or PythonRandomSource()

    def simulate(self, *, spins: int = 10_000, streak_day: int = 1) -> SimulationResult:
        if spins <= 0:
            raise ValueError("Number of spins must be positive")
        engine = SpinEngine(
            self._catalog,
            random_source=self._random,
            clock=FixedClock(datetime(2024, 1, 1, tzinfo=timezone.utc)),
        )
        result = SimulationResult(spins=spins)
        for _ in range(spins):
            result.merge(engine.draw(streak_day))
        return result

    def max_deviation(self, result: SimulationResult) -> float:
        """Largest absolute gap between observed frequency and configured probability."""
        return max(
            abs(result.frequency(reward.reward_type) - self._catalog.probability(reward.reward_type))
            for reward in self._catalog.spin_rewards
        )
