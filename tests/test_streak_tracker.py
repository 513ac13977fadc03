from datetime import date, timedelta

import pytest

from rotdex.domain.rewards import (
    RewardCatalog,
    SpinRewardDefinition,
    SpinRewardType,
    StreakMilestone,
    StreakRewardType,
)
from rotdex.domain.streak import StreakState, StreakStatus, StreakTracker

DAY = date(2024, 3, 1)


@pytest.fixture()
def catalog():
    return RewardCatalog(
        [SpinRewardDefinition(SpinRewardType.COINS, 1.0, 10, 10)],
        [
            StreakMilestone(3, StreakRewardType.COINS, 100),
            StreakMilestone(7, StreakRewardType.RARE_PACK, 1),
            StreakMilestone(14, StreakRewardType.EPIC_PACK, 1),
            StreakMilestone(30, StreakRewardType.CUSTOM_LEGENDARY, 1),
        ],
    )


def test_first_activity_starts_streak(catalog):
    tracker = StreakTracker(catalog)
    update = tracker.record_activity(DAY)
    assert update.state.current_streak == 1
    assert update.state.last_active_day == DAY
    assert update.state.longest_streak == 1
    assert update.milestones_crossed == ()


def test_same_day_activity_is_idempotent(catalog):
    tracker = StreakTracker(catalog)
    tracker.record_activity(DAY)
    before = tracker.state
    update = tracker.record_activity(DAY)
    assert update.state == before
    assert update.milestones_crossed == ()


def test_consecutive_day_crosses_milestone(catalog):
    tracker = StreakTracker(catalog, StreakState(current_streak=2, last_active_day=DAY))
    update = tracker.record_activity(DAY + timedelta(days=1))
    assert update.state.current_streak == 3
    assert [m.day for m in update.milestones_crossed] == [3]


def test_milestones_between_returns_every_crossed_day(catalog):
    assert [m.day for m in catalog.milestones_between(2, 8)] == [3, 7]
    assert catalog.milestones_between(3, 3) == []


def test_gap_without_protection_resets_streak(catalog):
    tracker = StreakTracker(
        catalog, StreakState(current_streak=9, last_active_day=DAY, longest_streak=9)
    )
    update = tracker.record_activity(DAY + timedelta(days=3))
    assert update.streak_reset
    assert update.previous_streak == 9
    assert update.state.current_streak == 1
    assert update.state.longest_streak == 9
    assert not update.protection_used


def test_gap_with_protection_consumes_one_charge(catalog):
    tracker = StreakTracker(
        catalog, StreakState(current_streak=6, last_active_day=DAY, protection_charges=2)
    )
    assert tracker.status(DAY + timedelta(days=2)) is StreakStatus.BROKEN_PENDING_PROTECTION
    update = tracker.record_activity(DAY + timedelta(days=2))
    assert update.protection_used
    assert update.state.current_streak == 7
    assert update.state.protection_charges == 1
    assert [m.day for m in update.milestones_crossed] == [7]


def test_earlier_day_is_ignored(catalog):
    tracker = StreakTracker(catalog, StreakState(current_streak=4, last_active_day=DAY))
    update = tracker.record_activity(DAY - timedelta(days=1))
    assert update.state.current_streak == 4
    assert update.state.last_active_day == DAY


def test_status_transitions(catalog):
    tracker = StreakTracker(catalog)
    assert tracker.status(DAY) is StreakStatus.NO_STREAK
    tracker.record_activity(DAY)
    assert tracker.status(DAY) is StreakStatus.ACTIVE
    assert tracker.status(DAY + timedelta(days=1)) is StreakStatus.ACTIVE
    assert tracker.status(DAY + timedelta(days=5)) is StreakStatus.NO_STREAK


def test_state_property_returns_copy(catalog):
    tracker = StreakTracker(catalog)
    tracker.record_activity(DAY)
    snapshot = tracker.state
    snapshot.current_streak = 99
    assert tracker.state.current_streak == 1


def test_add_protection_charge_rejects_non_positive(catalog):
    tracker = StreakTracker(catalog)
    assert tracker.add_protection_charge(2) == 2
    with pytest.raises(ValueError):
        tracker.add_protection_charge(0)
