"""RotDex core public API."""

from .app import RotDexApp
from .config import RotDexConfig
from .registry import ProviderRegistry

__all__ = [
    "RotDexApp",
    "RotDexConfig",
    "ProviderRegistry",
]
