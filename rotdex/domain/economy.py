"""Wallet and reward-to-currency mapping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from .exceptions import InsufficientCurrency
from .rewards import SpinRewardType, StreakMilestone, StreakRewardType
from .spin import SpinOutcome

ENERGY = "energy"

SPIN_REWARD_CURRENCIES: Mapping[SpinRewardType, str] = {
    SpinRewardType.ENERGY: ENERGY,
    SpinRewardType.COINS: "coins",
    SpinRewardType.GEMS: "gems",
    SpinRewardType.FREE_PACK: "free_packs",
    SpinRewardType.JACKPOT: "coins",
}

MILESTONE_CURRENCIES: Mapping[StreakRewardType, str] = {
    StreakRewardType.COINS: "coins",
    StreakRewardType.GEMS: "gems",
    StreakRewardType.ENERGY: ENERGY,
    StreakRewardType.FREE_GENERATION: "free_generations",
    StreakRewardType.RARE_PACK: "rare_packs",
    StreakRewardType.EPIC_PACK: "epic_packs",
    StreakRewardType.LEGENDARY_PACK: "legendary_packs",
    StreakRewardType.CUSTOM_LEGENDARY: "custom_legendaries",
}


@dataclass(slots=True)
class Wallet:
    """Mutable wallet representation used by services."""

    balances: Dict[str, int] = field(default_factory=dict)

    def credit(self, currency: str, amount: int) -> None:
        if amount < 0:
            raise ValueError("Cannot credit negative amount")
        self.balances[currency] = self.balances.get(currency, 0) + amount

    def debit(self, currency: str, amount: int) -> None:
        if amount < 0:
            raise ValueError("Cannot debit negative amount")
        current = self.balances.get(currency, 0)
        if current < amount:
            raise InsufficientCurrency(f"Insufficient {currency}: have {current}, need {amount}")
        self.balances[currency] = current - amount

    def merge(self, rewards: Mapping[str, int]) -> None:
        for currency, amount in rewards.items():
            if amount >= 0:
                self.credit(currency, amount)
            else:
                self.debit(currency, -amount)


def spin_outcome_credits(outcome: SpinOutcome) -> dict[str, int]:
    """Currency credits for a spin; engine-owned rewards map to nothing."""
    credits: dict[str, int] = {}
    currency = SPIN_REWARD_CURRENCIES.get(outcome.reward_type)
    if currency:
        credits[currency] = outcome.amount
    if outcome.bonus_gems:
        credits["gems"] = credits.get("gems", 0) + outcome.bonus_gems
    return credits


def milestone_credits(milestone: StreakMilestone) -> dict[str, int]:
    currency = MILESTONE_CURRENCIES.get(milestone.reward_type)
    return {currency: milestone.amount} if currency else {}
