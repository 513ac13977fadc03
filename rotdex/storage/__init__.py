"""Collaborator stores for RotDex services."""

from .base import CardArtStore, HistoryStore, PlayerRecord, PlayerStore
from .memory import InMemoryCardArtStore, InMemoryHistoryStore, InMemoryPlayerStore

__all__ = [
    "CardArtStore",
    "HistoryStore",
    "PlayerRecord",
    "PlayerStore",
    "InMemoryCardArtStore",
    "InMemoryHistoryStore",
    "InMemoryPlayerStore",
]
