"""Collaborator protocols the RotDex services persist through."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Protocol, Sequence

from ..domain.boost import RarityBoostState
from ..domain.spin import SpinOutcome
from ..domain.streak import StreakState

if TYPE_CHECKING:
    from ..imagegen.models import GeneratedImage


@dataclass(slots=True)
class PlayerRecord:
    user_id: int
    username: str | None = None
    wallet: dict[str, int] = field(default_factory=dict)
    streak: StreakState = field(default_factory=StreakState)
    boost: RarityBoostState = field(default_factory=RarityBoostState)
    last_spin_day: date | None = None


class PlayerStore(Protocol):
    async def get_or_create(self, user_id: int, username: str | None = None) -> PlayerRecord:
        ...

    async def save(self, record: PlayerRecord) -> None:
        ...


class HistoryStore(Protocol):
    async def append(self, user_id: int, outcome: SpinOutcome) -> None:
        ...

    async def read_all(self, user_id: int) -> Sequence[SpinOutcome]:
        ...


class CardArtStore(Protocol):
    async def save(self, user_id: int, image: "GeneratedImage") -> str:
        """Persist the image and return a reference to it."""
        ...
