"""Reward catalog: weighted spin table and streak milestones."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from .exceptions import InvalidCatalog


class SpinRewardType(str, Enum):
    ENERGY = "ENERGY"
    COINS = "COINS"
    GEMS = "GEMS"
    FREE_PACK = "FREE_PACK"
    RARITY_BOOST = "RARITY_BOOST"
    STREAK_PROTECTION = "STREAK_PROTECTION"
    JACKPOT = "JACKPOT"


class StreakRewardType(str, Enum):
    COINS = "COINS"
    GEMS = "GEMS"
    ENERGY = "ENERGY"
    FREE_GENERATION = "FREE_GENERATION"
    RARE_PACK = "RARE_PACK"
    EPIC_PACK = "EPIC_PACK"
    LEGENDARY_PACK = "LEGENDARY_PACK"
    CUSTOM_LEGENDARY = "CUSTOM_LEGENDARY"
    STREAK_PROTECTION = "STREAK_PROTECTION"


@dataclass(frozen=True, slots=True)
class SpinRewardDefinition:
    """One slice of the spin wheel."""

    reward_type: SpinRewardType
    weight: float
    min_amount: int
    max_amount: int
    display_name: str = ""
    description: str = ""
    bonus_gems: int = 0


@dataclass(frozen=True, slots=True)
class StreakMilestone:
    day: int
    reward_type: StreakRewardType
    amount: int
    display_name: str = ""
    description: str = ""


class RewardCatalog:
    """Read-only reward tables shared by every session.

    The spin table keeps its declaration order, which is the order the spin
    engine walks when accumulating weights. Milestones must be strictly
    ascending by day.
    """

    __slots__ = ("_spin_rewards", "_by_type", "_milestones", "_total_weight")

    def __init__(
        self,
        spin_rewards: Iterable[SpinRewardDefinition],
        milestones: Iterable[StreakMilestone] = (),
    ) -> None:
        rewards = tuple(spin_rewards)
        ordered_milestones = tuple(milestones)
        errors = validate_catalog(rewards, ordered_milestones)
        if errors:
            raise InvalidCatalog(errors)
        self._spin_rewards = rewards
        self._by_type = {reward.reward_type: reward for reward in rewards}
        self._milestones = ordered_milestones
        self._total_weight = float(sum(reward.weight for reward in rewards))

    @property
    def spin_rewards(self) -> Sequence[SpinRewardDefinition]:
        return self._spin_rewards

    @property
    def milestones(self) -> Sequence[StreakMilestone]:
        return self._milestones

    @property
    def total_weight(self) -> float:
        return self._total_weight

    def definition(self, reward_type: SpinRewardType) -> SpinRewardDefinition:
        try:
            return self._by_type[reward_type]
        except KeyError as exc:
            raise KeyError(f"Spin reward {reward_type.value} is not configured") from exc

    def probability(self, reward_type: SpinRewardType) -> float:
        return self.definition(reward_type).weight / self._total_weight

    def milestone_for_day(self, day: int) -> StreakMilestone | None:
        for milestone in self._milestones:
            if milestone.day == day:
                return milestone
        return None

    def next_milestone(self, current_streak: int) -> StreakMilestone | None:
        for milestone in self._milestones:
            if milestone.day > current_streak:
                return milestone
        return None

    def milestones_between(self, old_streak: int, new_streak: int) -> list[StreakMilestone]:
        """Milestones with ``old_streak < day <= new_streak``, ascending."""
        return [m for m in self._milestones if old_streak < m.day <= new_streak]


def validate_catalog(
    rewards: Sequence[SpinRewardDefinition],
    milestones: Sequence[StreakMilestone],
) -> list[str]:
    """Return a list of configuration errors; empty when the tables are usable."""
    errors: list[str] = []

    if not rewards:
        errors.append("Spin reward table must not be empty.")

    seen: set[SpinRewardType] = set()
    for reward in rewards:
        name = reward.reward_type.value
        if reward.reward_type in seen:
            errors.append(f"Spin reward {name} defined multiple times.")
        seen.add(reward.reward_type)
        if not math.isfinite(reward.weight):
            errors.append(f"Spin reward {name} has non-finite weight {reward.weight}.")
        elif reward.weight < 0:
            errors.append(f"Spin reward {name} has negative weight {reward.weight}.")
        if reward.min_amount < 0:
            errors.append(f"Spin reward {name} has negative minimum amount {reward.min_amount}.")
        if reward.min_amount > reward.max_amount:
            errors.append(
                f"Spin reward {name} has min amount {reward.min_amount} above max {reward.max_amount}."
            )
        if reward.reward_type is SpinRewardType.JACKPOT:
            if reward.bonus_gems <= 0:
                errors.append("Spin reward JACKPOT must define positive bonus gems.")
        elif reward.bonus_gems:
            errors.append(f"Spin reward {name} cannot define bonus gems.")

    usable_weight = sum(
        reward.weight for reward in rewards if math.isfinite(reward.weight) and reward.weight > 0
    )
    if rewards and usable_weight <= 0:
        errors.append("Sum of spin reward weights must be positive.")

    previous_day = 0
    for milestone in milestones:
        if milestone.day < 1:
            errors.append(f"Milestone day {milestone.day} must be at least 1.")
        elif milestone.day <= previous_day:
            errors.append(
                f"Milestone day {milestone.day} must be greater than previous day {previous_day}."
            )
        if milestone.amount <= 0:
            errors.append(f"Milestone day {milestone.day} must grant a positive amount.")
        previous_day = max(previous_day, milestone.day)

    return errors


def default_catalog() -> RewardCatalog:
    """Spin wheel and milestone tables shipped with the game."""
    return RewardCatalog(
        spin_rewards=(
            SpinRewardDefinition(
                SpinRewardType.ENERGY, 40.0, 1, 3, "Energy", "Instant energy refill"
            ),
            SpinRewardDefinition(
                SpinRewardType.COINS, 45.0, 50, 500, "Coins", "Brainrot coins for your wallet"
            ),
            SpinRewardDefinition(SpinRewardType.GEMS, 13.0, 1, 5, "Gems", "Premium currency"),
            SpinRewardDefinition(
                SpinRewardType.FREE_PACK, 12.0, 1, 1, "Free Card Pack", "3 random cards!"
            ),
            SpinRewardDefinition(
                SpinRewardType.RARITY_BOOST,
                7.0,
                1,
                1,
                "Legendary Luck",
                "+20% Legendary chance next gen",
            ),
            SpinRewardDefinition(
                SpinRewardType.STREAK_PROTECTION,
                8.0,
                1,
                1,
                "Streak Shield",
                "Protect your streak once",
            ),
            SpinRewardDefinition(
                SpinRewardType.JACKPOT,
                1.0,
                1000,
                1000,
                "JACKPOT!",
                "1000 coins + 20 gems!",
                bonus_gems=20,
            ),
        ),
        milestones=(
            StreakMilestone(1, StreakRewardType.ENERGY, 2, "First Day!", "+2 Energy"),
            StreakMilestone(3, StreakRewardType.COINS, 100, "3 Day Streak", "+100 Coins"),
            StreakMilestone(
                7,
                StreakRewardType.RARE_PACK,
                1,
                "Week Warrior",
                "Free Rare Pack (3 cards, 1 guaranteed Rare+)",
            ),
            StreakMilestone(
                14,
                StreakRewardType.EPIC_PACK,
                1,
                "Two Weeks Strong",
                "Free Epic Pack (5 cards, 1 guaranteed Epic+)",
            ),
            StreakMilestone(
                21,
                StreakRewardType.STREAK_PROTECTION,
                2,
                "Triple Week",
                "+2 Streak Protections",
            ),
            StreakMilestone(
                30,
                StreakRewardType.CUSTOM_LEGENDARY,
                1,
                "Month Master",
                "Create your own Legendary card!",
            ),
            StreakMilestone(
                60,
                StreakRewardType.LEGENDARY_PACK,
                1,
                "Two Month Titan",
                "Legendary Pack (10 cards, 1 guaranteed Legendary)",
            ),
            StreakMilestone(
                100,
                StreakRewardType.CUSTOM_LEGENDARY,
                3,
                "Century Club",
                "3 Custom Legendary cards + Special badge",
            ),
        ),
    )
