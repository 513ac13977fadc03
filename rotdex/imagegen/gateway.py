"""Single entry point for card-art generation."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from ..registry import ProviderRegistry
from .errors import (
    EmptyResult,
    GatewayError,
    GatewayErrorKind,
    InvalidPrompt,
    ProviderError,
    TransportError,
)
from .models import GeneratedImage, GenerationParameters, ImagePrompt

logger = logging.getLogger(__name__)

CONTENT_POLICY_MARKERS = (
    "content_policy",
    "content-policy",
    "safety",
    "moderation",
    "nsfw",
    "responsible_ai",
    "blocked",
)
UNAVAILABLE_STATUSES = frozenset({408})


def classify_provider_error(
    error: ProviderError, markers: Iterable[str] = CONTENT_POLICY_MARKERS
) -> GatewayErrorKind:
    category = error.category.lower()
    if any(marker in category for marker in markers):
        return GatewayErrorKind.UPSTREAM_REJECTED
    if error.status is not None and (error.status >= 500 or error.status in UNAVAILABLE_STATUSES):
        return GatewayErrorKind.UPSTREAM_UNAVAILABLE
    return GatewayErrorKind.NO_CONTENT_RETURNED


class ImageGenerationGateway:
    """Validate prompts, dispatch to a provider and normalise its failures.

    Stateless between calls: nothing is cached and nothing is retried, so
    concurrent calls for different prompts need no locking. Caller
    cancellation propagates unchanged.
    """

    def __init__(
        self,
        providers: ProviderRegistry,
        *,
        default_provider: str | None = None,
        timeout_seconds: float | None = 60.0,
        max_prompt_length: int = 1000,
    ) -> None:
        self._providers = providers
        self._default_provider = default_provider
        self._timeout = timeout_seconds
        self._max_prompt_length = max_prompt_length

    @property
    def providers(self) -> ProviderRegistry:
        return self._providers

    def validate_prompt(self, prompt: ImagePrompt) -> None:
        text = prompt.text.strip() if isinstance(prompt.text, str) else ""
        if not text:
            raise InvalidPrompt("Prompt must not be empty")
        if len(text) > self._max_prompt_length:
            raise InvalidPrompt(
                f"Prompt is {len(text)} characters; the limit is {self._max_prompt_length}"
            )

    async def generate(
        self,
        prompt: ImagePrompt,
        params: GenerationParameters | None = None,
        provider: str | None = None,
        *,
        timeout: float | None = None,
    ) -> GeneratedImage:
        self.validate_prompt(prompt)
        client = self._providers.get(self._resolve_provider(provider))
        params = params or GenerationParameters()
        limit = timeout if timeout is not None else self._timeout

        logger.debug("Generating image with %s (timeout=%s).", client.name, limit)
        try:
            image = await asyncio.wait_for(client.generate_image(prompt, params), limit)
        except asyncio.TimeoutError as exc:
            logger.warning("Provider %s timed out after %s s.", client.name, limit)
            raise GatewayError(
                GatewayErrorKind.UPSTREAM_UNAVAILABLE,
                f"Timed out after {limit} s",
                provider=client.name,
            ) from exc
        except TransportError as exc:
            logger.warning("Provider %s unreachable: %s", client.name, exc)
            raise GatewayError(
                GatewayErrorKind.UPSTREAM_UNAVAILABLE,
                str(exc),
                provider=client.name,
                code=str(exc.status) if exc.status is not None else None,
            ) from exc
        except EmptyResult as exc:
            logger.warning("Provider %s returned no content: %s", client.name, exc)
            raise GatewayError(
                GatewayErrorKind.NO_CONTENT_RETURNED, str(exc), provider=client.name
            ) from exc
        except ProviderError as exc:
            kind = classify_provider_error(exc)
            logger.warning(
                "Provider %s rejected request (%s, category=%s, code=%s).",
                client.name,
                kind.value,
                exc.category,
                exc.code,
            )
            raise GatewayError(
                kind,
                exc.message,
                provider=client.name,
                category=exc.category,
                code=exc.code,
            ) from exc

        logger.info("Provider %s produced a %s image.", client.name, image.encoding.value)
        return image

    def _resolve_provider(self, provider: str | None) -> str:
        if provider:
            return provider
        if self._default_provider:
            return self._default_provider
        names = self._providers.names()
        if len(names) == 1:
            return names[0]
        raise KeyError("No provider selected and no default provider configured")
