"""Card rarity rolls."""

from __future__ import annotations

from enum import Enum
from typing import Mapping

from .sources import RandomSource


class Rarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


BASE_DROP_RATES: Mapping[Rarity, float] = {
    Rarity.COMMON: 0.60,
    Rarity.RARE: 0.25,
    Rarity.EPIC: 0.12,
    Rarity.LEGENDARY: 0.03,
}


def boosted_drop_rates(
    boost_percent: float = 0.0,
    *,
    base: Mapping[Rarity, float] = BASE_DROP_RATES,
) -> dict[Rarity, float]:
    """Add ``boost_percent`` points to the legendary rate and shrink the rest proportionally."""
    total = sum(base.values())
    rates = {rarity: rate / total for rarity, rate in base.items()}
    if boost_percent <= 0:
        return rates

    legendary = rates.get(Rarity.LEGENDARY, 0.0)
    boosted = min(1.0, legendary + boost_percent / 100.0)
    remainder = 1.0 - legendary
    scale = (1.0 - boosted) / remainder if remainder > 0 else 0.0
    adjusted = {
        rarity: rate * scale for rarity, rate in rates.items() if rarity is not Rarity.LEGENDARY
    }
    adjusted[Rarity.LEGENDARY] = boosted
    return adjusted


def roll_rarity(random_source: RandomSource, boost_percent: float = 0.0) -> Rarity:
    rates = boosted_drop_rates(boost_percent)
    threshold = random_source.next_uniform()
    cumulative = 0.0
    for rarity in Rarity:
        cumulative += rates.get(rarity, 0.0)
        if cumulative > threshold:
            return rarity
    return Rarity.COMMON
