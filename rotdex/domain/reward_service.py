"""Per-user orchestration of spins, check-ins and boosts."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import date
from typing import DefaultDict, Mapping, Sequence

from ..config import EconomyConfig
from ..storage.base import HistoryStore, PlayerRecord, PlayerStore
from .economy import ENERGY, Wallet, milestone_credits, spin_outcome_credits
from .engine import RewardEngine, SpinResult
from .events import (
    MILESTONE_REACHED,
    SPIN_COMPLETED,
    EventBus,
    MilestoneReached,
    SpinCompleted,
)
from .rewards import RewardCatalog, StreakMilestone
from .sources import Clock, PythonRandomSource, RandomSource, SystemClock
from .spin import SpinOutcome
from .streak import StreakUpdate

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PlayerProfile:
    user_id: int
    username: str | None
    wallet: Mapping[str, int]
    current_streak: int
    longest_streak: int
    protection_charges: int
    boost_active: bool
    boost_percent: float
    boost_generations_left: int
    can_spin_today: bool
    next_milestone: StreakMilestone | None


@dataclass(frozen=True, slots=True)
class SpinReport:
    result: SpinResult
    credits: Mapping[str, int]
    wallet: Mapping[str, int]


class RewardService:
    """Run reward operations for many users with a single writer per user.

    Each call loads the player's record, rebuilds a :class:`RewardEngine`
    around it, and holds the user's lock until the record, history and
    events are written.
    """

    def __init__(
        self,
        catalog: RewardCatalog,
        player_store: PlayerStore,
        history_store: HistoryStore,
        event_bus: EventBus,
        *,
        economy: EconomyConfig | None = None,
        random_source: RandomSource | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._catalog = catalog
        self._player_store = player_store
        self._history_store = history_store
        self._event_bus = event_bus
        self._economy = economy or EconomyConfig()
        self._random = random_source or PythonRandomSource()
        self._clock = clock or SystemClock()
        # One lock per user seen; entries are never evicted.
        self._locks: DefaultDict[int, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def spin(
        self, user_id: int, today: date | None = None, *, username: str | None = None
    ) -> SpinReport:
        today = today or self._clock.today()
        async with self._locks[user_id]:
            record = await self._player_store.get_or_create(user_id, username)
            engine = self._engine_for(record)
            result = engine.spin(today)

            credits: dict[str, int] = {}
            _add_credits(credits, spin_outcome_credits(result.outcome))
            for milestone in result.milestones_crossed:
                _add_credits(credits, milestone_credits(milestone))

            wallet = Wallet(balances=dict(record.wallet))
            wallet.merge(credits)
            record.wallet = dict(wallet.balances)
            self._store_engine_state(record, engine)
            await self._player_store.save(record)
            await self._history_store.append(user_id, result.outcome)

            await self._publish_milestones(user_id, result.milestones_crossed)
            await self._event_bus.publish(
                SPIN_COMPLETED,
                SpinCompleted(
                    user_id=user_id,
                    reward_type=result.outcome.reward_type.value,
                    amount=result.outcome.amount,
                    bonus_gems=result.outcome.bonus_gems,
                    streak_day=result.outcome.streak_day_at_spin,
                ),
            )

        logger.info(
            "User %s spun %s x%s on streak day %s (%s milestones).",
            user_id,
            result.outcome.reward_type.value,
            result.outcome.amount,
            result.outcome.streak_day_at_spin,
            len(result.milestones_crossed),
        )
        return SpinReport(result=result, credits=credits, wallet=dict(record.wallet))

    async def check_in(self, user_id: int, today: date | None = None) -> StreakUpdate:
        today = today or self._clock.today()
        async with self._locks[user_id]:
            record = await self._player_store.get_or_create(user_id)
            engine = self._engine_for(record)
            update = engine.check_in(today)
            credits: dict[str, int] = {}
            for milestone in update.milestones_crossed:
                _add_credits(credits, milestone_credits(milestone))
            wallet = Wallet(balances=dict(record.wallet))
            wallet.merge(credits)
            record.wallet = dict(wallet.balances)
            self._store_engine_state(record, engine)
            await self._player_store.save(record)
            await self._publish_milestones(user_id, update.milestones_crossed)
        return update

    async def spend_generation_energy(self, user_id: int) -> int:
        """Debit the energy one card generation costs; return the remaining energy.

        Raises :class:`InsufficientCurrency` and leaves the wallet untouched when
        the player cannot afford it.
        """
        cost = self._economy.generation_energy_cost
        async with self._locks[user_id]:
            record = await self._player_store.get_or_create(user_id)
            wallet = Wallet(balances=dict(record.wallet))
            wallet.debit(ENERGY, cost)
            record.wallet = dict(wallet.balances)
            await self._player_store.save(record)
        remaining = record.wallet.get(ENERGY, 0)
        logger.debug("User %s spent %s energy on a generation, %s left.", user_id, cost, remaining)
        return remaining

    async def consume_generation_rarity_boost(self, user_id: int) -> float:
        async with self._locks[user_id]:
            record = await self._player_store.get_or_create(user_id)
            percent = record.boost.consume_one_generation()
            await self._player_store.save(record)
        if percent:
            logger.debug("User %s consumed a %.1f%% rarity boost.", user_id, percent)
        return percent

    async def history(self, user_id: int) -> Sequence[SpinOutcome]:
        return await self._history_store.read_all(user_id)

    async def profile(self, user_id: int, today: date | None = None) -> PlayerProfile:
        today = today or self._clock.today()
        record = await self._player_store.get_or_create(user_id)
        return PlayerProfile(
            user_id=record.user_id,
            username=record.username,
            wallet=dict(record.wallet),
            current_streak=record.streak.current_streak,
            longest_streak=record.streak.longest_streak,
            protection_charges=record.streak.protection_charges,
            boost_active=record.boost.active,
            boost_percent=record.boost.boost_percent,
            boost_generations_left=record.boost.expires_after_generations,
            can_spin_today=record.last_spin_day != today,
            next_milestone=self._catalog.next_milestone(record.streak.current_streak),
        )

    def _engine_for(self, record: PlayerRecord) -> RewardEngine:
        return RewardEngine(
            self._catalog,
            streak=replace(record.streak),
            boost=replace(record.boost),
            last_spin_day=record.last_spin_day,
            random_source=self._random,
            clock=self._clock,
            boost_percent=self._economy.rarity_boost_percent,
            boost_generations=self._economy.rarity_boost_generations,
        )

    def _store_engine_state(self, record: PlayerRecord, engine: RewardEngine) -> None:
        record.streak = engine.streak
        record.boost = engine.boost
        record.last_spin_day = engine.last_spin_day

    async def _publish_milestones(
        self, user_id: int, milestones: Sequence[StreakMilestone]
    ) -> None:
        for milestone in milestones:
            await self._event_bus.publish(
                MILESTONE_REACHED,
                MilestoneReached(
                    user_id=user_id,
                    day=milestone.day,
                    reward_type=milestone.reward_type.value,
                    amount=milestone.amount,
                ),
            )


def _add_credits(target: dict[str, int], credits: Mapping[str, int]) -> None:
    for currency, amount in credits.items():
        target[currency] = target.get(currency, 0) + amount
