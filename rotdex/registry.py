"""Runtime registry of image providers."""

from __future__ import annotations

from typing import Dict, Iterable

from .imagegen.providers import ProviderClient


class ProviderRegistry:
    """Register and look up provider clients by name."""

    def __init__(self, providers: Iterable[ProviderClient] = ()) -> None:
        self._providers: Dict[str, ProviderClient] = {}
        for provider in providers:
            self.register(provider)

    def register(self, provider: ProviderClient) -> "ProviderRegistry":
        key = provider.name.lower()
        if key in self._providers:
            raise ValueError(f"Provider {provider.name} already registered")
        self._providers[key] = provider
        return self

    def get(self, name: str) -> ProviderClient:
        try:
            return self._providers[name.lower()]
        except KeyError as exc:
            raise KeyError(f"Provider {name} not found") from exc

    def names(self) -> list[str]:
        return list(self._providers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._providers

    def __len__(self) -> int:
        return len(self._providers)


__all__ = ["ProviderRegistry"]
