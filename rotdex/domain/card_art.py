"""Card creation: boost-aware rarity roll around the image gateway."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..imagegen.gateway import ImageGenerationGateway
from ..imagegen.models import GeneratedImage, GenerationParameters, ImagePrompt
from ..storage.base import CardArtStore
from .cards import Rarity, roll_rarity
from .events import CARD_GENERATED, CardGenerated, EventBus
from .reward_service import RewardService
from .sources import PythonRandomSource, RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GeneratedCard:
    image: GeneratedImage
    rarity: Rarity
    boost_percent: float
    art_ref: str


class CardArtService:
    """Generate artwork for a new card and decide its rarity.

    The prompt is validated before anything is spent, so invalid prompts cost
    neither energy nor boost budget. A validated attempt then pays its energy
    cost and consumes one boost generation, even if the provider fails.
    A player short on energy gets :class:`InsufficientCurrency` and keeps the
    boost.
    """

    def __init__(
        self,
        gateway: ImageGenerationGateway,
        rewards: RewardService,
        art_store: CardArtStore,
        event_bus: EventBus,
        *,
        random_source: RandomSource | None = None,
    ) -> None:
        self._gateway = gateway
        self._rewards = rewards
        self._art_store = art_store
        self._event_bus = event_bus
        self._random = random_source or PythonRandomSource()

    async def generate_card(
        self,
        user_id: int,
        prompt: ImagePrompt,
        params: GenerationParameters | None = None,
        provider: str | None = None,
    ) -> GeneratedCard:
        self._gateway.validate_prompt(prompt)
        await self._rewards.spend_generation_energy(user_id)
        boost_percent = await self._rewards.consume_generation_rarity_boost(user_id)
        image = await self._gateway.generate(prompt, params, provider)
        rarity = roll_rarity(self._random, boost_percent)
        art_ref = await self._art_store.save(user_id, image)
        await self._event_bus.publish(
            CARD_GENERATED,
            CardGenerated(
                user_id=user_id,
                rarity=rarity.value,
                art_ref=art_ref,
                boost_percent=boost_percent,
            ),
        )
        logger.info(
            "User %s generated a %s card (boost %.1f%%).", user_id, rarity.value, boost_percent
        )
        return GeneratedCard(
            image=image, rarity=rarity, boost_percent=boost_percent, art_ref=art_ref
        )
