from datetime import date, timedelta

import pytest

from rotdex.domain.engine import RewardEngine
from rotdex.domain.exceptions import AlreadySpunToday
from rotdex.domain.rewards import (
    RewardCatalog,
    SpinRewardDefinition,
    SpinRewardType,
    StreakMilestone,
    StreakRewardType,
    default_catalog,
)
from rotdex.domain.sources import SequenceRandomSource
from rotdex.domain.streak import StreakState

DAY = date(2024, 3, 1)


def _single_reward_catalog(reward_type: SpinRewardType, milestones=()) -> RewardCatalog:
    return RewardCatalog([SpinRewardDefinition(reward_type, 1.0, 1, 1)], milestones)


def test_one_spin_per_day():
    engine = RewardEngine(default_catalog(), random_source=SequenceRandomSource.of([0.1]))
    assert engine.can_spin(DAY)
    engine.spin(DAY)
    assert not engine.can_spin(DAY)
    with pytest.raises(AlreadySpunToday) as excinfo:
        engine.spin(DAY)
    assert excinfo.value.day == DAY
    assert engine.can_spin(DAY + timedelta(days=1))


def test_spin_records_streak_day_and_milestones():
    engine = RewardEngine(
        default_catalog(),
        streak=StreakState(current_streak=2, last_active_day=DAY - timedelta(days=1)),
        random_source=SequenceRandomSource.of([0.1]),
    )
    result = engine.spin(DAY)
    assert result.outcome.streak_day_at_spin == 3
    assert [m.day for m in result.milestones_crossed] == [3]
    assert result.streak.current_streak == 3


def test_streak_protection_outcome_adds_charge():
    engine = RewardEngine(
        _single_reward_catalog(SpinRewardType.STREAK_PROTECTION),
        random_source=SequenceRandomSource.of([0.5]),
    )
    engine.spin(DAY)
    assert engine.streak.protection_charges == 1


def test_rarity_boost_outcome_arms_boost():
    engine = RewardEngine(
        _single_reward_catalog(SpinRewardType.RARITY_BOOST),
        random_source=SequenceRandomSource.of([0.5]),
        boost_percent=25.0,
        boost_generations=2,
    )
    engine.spin(DAY)
    assert engine.boost.active
    assert engine.consume_generation_rarity_boost() == 25.0
    assert engine.consume_generation_rarity_boost() == 25.0
    assert engine.consume_generation_rarity_boost() == 0.0


def test_protection_milestone_grants_charges_on_check_in():
    catalog = _single_reward_catalog(
        SpinRewardType.COINS,
        [StreakMilestone(2, StreakRewardType.STREAK_PROTECTION, 2)],
    )
    engine = RewardEngine(catalog, streak=StreakState(current_streak=1, last_active_day=DAY))
    update = engine.check_in(DAY + timedelta(days=1))
    assert update.state.protection_charges == 2
    assert engine.streak.protection_charges == 2


def test_check_in_does_not_consume_daily_spin():
    engine = RewardEngine(default_catalog(), random_source=SequenceRandomSource.of([0.1]))
    engine.check_in(DAY)
    assert engine.can_spin(DAY)
    assert engine.spin(DAY).outcome.streak_day_at_spin == 1
