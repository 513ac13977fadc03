"""Domain event dispatch."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, DefaultDict, Iterable

SPIN_COMPLETED = "reward.spin.completed"
MILESTONE_REACHED = "reward.milestone.reached"
CARD_GENERATED = "card.art.generated"

EventListener = Callable[[Any], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class SpinCompleted:
    user_id: int
    reward_type: str
    amount: int
    bonus_gems: int
    streak_day: int


@dataclass(frozen=True, slots=True)
class MilestoneReached:
    user_id: int
    day: int
    reward_type: str
    amount: int


@dataclass(frozen=True, slots=True)
class CardGenerated:
    user_id: int
    rarity: str
    art_ref: str
    boost_percent: float


class EventBus:
    """Simple async pub-sub; listeners run in subscription order."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, list[EventListener]] = defaultdict(list)

    def subscribe(self, event_name: str, listener: EventListener) -> None:
        self._listeners[event_name].append(listener)

    async def publish(self, event_name: str, payload: Any) -> None:
        for listener in list(self._listeners.get(event_name, ())):
            await listener(payload)

    def clear(self) -> None:
        self._listeners.clear()

    def listeners(self, event_name: str) -> Iterable[EventListener]:
        return tuple(self._listeners.get(event_name, ()))
