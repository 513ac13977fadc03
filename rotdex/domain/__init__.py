"""Reward economy: catalog, spins, streaks and the rarity boost.

Services that depend on storage or image generation live in
``rotdex.domain.reward_service`` and ``rotdex.domain.card_art``.
"""

from .boost import RarityBoostState
from .cards import Rarity, boosted_drop_rates, roll_rarity
from .economy import Wallet, milestone_credits, spin_outcome_credits
from .engine import RewardEngine, SpinResult
from .events import EventBus
from .exceptions import AlreadySpunToday, InsufficientCurrency, InvalidCatalog, RotDexError
from .rewards import (
    RewardCatalog,
    SpinRewardDefinition,
    SpinRewardType,
    StreakMilestone,
    StreakRewardType,
    default_catalog,
)
from .sources import (
    Clock,
    FixedClock,
    PythonRandomSource,
    RandomSource,
    SequenceRandomSource,
    SystemClock,
)
from .spin import SpinEngine, SpinOutcome
from .streak import StreakState, StreakStatus, StreakTracker, StreakUpdate

__all__ = [
    "RarityBoostState",
    "Rarity",
    "boosted_drop_rates",
    "roll_rarity",
    "Wallet",
    "milestone_credits",
    "spin_outcome_credits",
    "RewardEngine",
    "SpinResult",
    "EventBus",
    "AlreadySpunToday",
    "InsufficientCurrency",
    "InvalidCatalog",
    "RotDexError",
    "RewardCatalog",
    "SpinRewardDefinition",
    "SpinRewardType",
    "StreakMilestone",
    "StreakRewardType",
    "default_catalog",
    "Clock",
    "FixedClock",
    "PythonRandomSource",
    "RandomSource",
    "SequenceRandomSource",
    "SystemClock",
    "SpinEngine",
    "SpinOutcome",
    "StreakState",
    "StreakStatus",
    "StreakTracker",
    "StreakUpdate",
]
