"""Top level application object wiring the RotDex core."""

from __future__ import annotations

import logging
from typing import Any

from .config import ProviderConfig, RotDexConfig
from .domain.card_art import CardArtService
from .domain.events import EventBus
from .domain.reward_service import RewardService
from .domain.rewards import RewardCatalog, default_catalog
from .domain.sources import Clock, PythonRandomSource, RandomSource, SystemClock
from .imagegen.gateway import ImageGenerationGateway
from .imagegen.providers import FlatPromptProvider, InstanceBasedProvider, ProviderClient
from .imagegen.transport import AiohttpTransport
from .loaders import load_catalog_from_json
from .registry import ProviderRegistry
from .storage.base import CardArtStore, HistoryStore, PlayerStore
from .storage.memory import InMemoryCardArtStore, InMemoryHistoryStore, InMemoryPlayerStore

logger = logging.getLogger(__name__)


class RotDexApp:
    """Central dependency container used by the game client and tools."""

    def __init__(
        self,
        config: RotDexConfig | None = None,
        *,
        catalog: RewardCatalog | None = None,
        player_store: PlayerStore | None = None,
        history_store: HistoryStore | None = None,
        art_store: CardArtStore | None = None,
        providers: ProviderRegistry | None = None,
        event_bus: EventBus | None = None,
        random_source: RandomSource | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = config or RotDexConfig()
        self.event_bus = event_bus or EventBus()
        self.clock = clock or SystemClock()
        self.random_source = random_source or PythonRandomSource(seed=self.config.economy.rng_seed)
        self.catalog = catalog or self._load_catalog()

        self.player_store = player_store or InMemoryPlayerStore()
        self.history_store = history_store or InMemoryHistoryStore()
        self.art_store = art_store or InMemoryCardArtStore()

        self._transports: list[AiohttpTransport] = []
        self.providers = providers or self._wire_providers(self.config.imagegen.providers)
        self.gateway = ImageGenerationGateway(
            self.providers,
            default_provider=self.config.imagegen.default_provider,
            timeout_seconds=self.config.imagegen.timeout_seconds,
            max_prompt_length=self.config.imagegen.max_prompt_length,
        )

        self.rewards = RewardService(
            self.catalog,
            self.player_store,
            self.history_store,
            self.event_bus,
            economy=self.config.economy,
            random_source=self.random_source,
            clock=self.clock,
        )
        self.card_art = CardArtService(
            self.gateway,
            self.rewards,
            self.art_store,
            self.event_bus,
            random_source=self.random_source,
        )

    def _load_catalog(self) -> RewardCatalog:
        path = self.config.economy.catalog_path
        if path is None:
            return default_catalog()
        logger.info("Loading reward catalog from %s.", path)
        return load_catalog_from_json(path)

    def _wire_providers(self, configs: list[ProviderConfig]) -> ProviderRegistry:
        registry = ProviderRegistry()
        for provider_config in configs:
            registry.register(self._build_provider(provider_config))
        return registry

    def _build_provider(self, provider_config: ProviderConfig) -> ProviderClient:
        transport = AiohttpTransport(
            provider_config.base_url,
            headers=provider_config.headers(),
            timeout_seconds=self.config.imagegen.timeout_seconds,
        )
        self._transports.append(transport)
        options: dict[str, Any] = {"name": provider_config.name}
        if provider_config.endpoint:
            options["endpoint"] = provider_config.endpoint
        if provider_config.kind == "instance":
            if provider_config.model and not provider_config.endpoint:
                options["endpoint"] = f"models/{provider_config.model}:predict"
            return InstanceBasedProvider(transport, **options)
        if provider_config.kind == "flat":
            if provider_config.model:
                options["model"] = provider_config.model
            return FlatPromptProvider(transport, **options)
        raise ValueError(f"Unsupported provider kind {provider_config.kind}")

    def snapshot(self) -> dict[str, Any]:
        """Export current configuration for debugging."""
        return {
            "providers": self.providers.names(),
            "default_provider": self.config.imagegen.default_provider,
            "spin_rewards": {
                reward.reward_type.value: reward.weight for reward in self.catalog.spin_rewards
            },
            "milestones": [milestone.day for milestone in self.catalog.milestones],
            "rarity_boost": {
                "percent": self.config.economy.rarity_boost_percent,
                "generations": self.config.economy.rarity_boost_generations,
            },
            "generation_energy_cost": self.config.economy.generation_energy_cost,
        }

    async def close(self) -> None:
        """Release HTTP sessions opened for configured providers."""
        for transport in self._transports:
            await transport.close()

    async def __aenter__(self) -> "RotDexApp":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
