"""In-memory collaborators for RotDex."""

from __future__ import annotations

from collections import defaultdict, deque
from typing import TYPE_CHECKING, DefaultDict, Deque, Sequence

from ..domain.spin import SpinOutcome
from .base import CardArtStore, HistoryStore, PlayerRecord, PlayerStore

if TYPE_CHECKING:
    from ..imagegen.models import GeneratedImage


class InMemoryPlayerStore(PlayerStore):
    def __init__(self) -> None:
        self._records: dict[int, PlayerRecord] = {}

    async def get_or_create(self, user_id: int, username: str | None = None) -> PlayerRecord:
        if user_id not in self._records:
            self._records[user_id] = PlayerRecord(user_id=user_id, username=username)
        record = self._records[user_id]
        if username and record.username != username:
            record.username = username
        return record

    async def save(self, record: PlayerRecord) -> None:
        self._records[record.user_id] = record


class InMemoryHistoryStore(HistoryStore):
    def __init__(self, *, maxlen: int = 5000) -> None:
        self._maxlen = maxlen
        self._history: DefaultDict[int, Deque[SpinOutcome]] = defaultdict(
            lambda: deque(maxlen=self._maxlen)
        )

    async def append(self, user_id: int, outcome: SpinOutcome) -> None:
        self._history[user_id].append(outcome)

    async def read_all(self, user_id: int) -> Sequence[SpinOutcome]:
        return tuple(self._history.get(user_id, ()))


class InMemoryCardArtStore(CardArtStore):
    """Keep generated images keyed by ``art-<user>-<n>`` references."""

    def __init__(self) -> None:
        self._images: dict[str, "GeneratedImage"] = {}

    async def save(self, user_id: int, image: "GeneratedImage") -> str:
        ref = f"art-{user_id}-{len(self._images) + 1}"
        self._images[ref] = image
        return ref

    def get(self, ref: str) -> "GeneratedImage":
        try:
            return self._images[ref]
        except KeyError as exc:
            raise KeyError(f"Card art {ref} not found") from exc

    def __len__(self) -> int:
        return len(self._images)
