"""Generation-limited rarity boost."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RarityBoostState:
    active: bool = False
    boost_percent: float = 0.0
    expires_after_generations: int = 0

    def apply_boost(self, percent: float, generations: int) -> None:
        """Replace any running boost with a fresh one."""
        if percent <= 0:
            raise ValueError("Boost percent must be positive")
        if generations <= 0:
            raise ValueError("Boost must last at least one generation")
        self.active = True
        self.boost_percent = float(percent)
        self.expires_after_generations = generations

    def consume_one_generation(self) -> float:
        """Spend one generation of budget and return the percent that applies to it."""
        if not self.active or self.expires_after_generations <= 0:
            self.clear()
            return 0.0
        percent = self.boost_percent
        self.expires_after_generations -= 1
        if self.expires_after_generations == 0:
            self.clear()
        return percent

    def clear(self) -> None:
        self.active = False
        self.boost_percent = 0.0
        self.expires_after_generations = 0
