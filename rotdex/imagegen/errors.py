"""Error taxonomy for image generation."""

from __future__ import annotations

from enum import Enum

from ..domain.exceptions import RotDexError


class ImageGenerationError(RotDexError):
    """Base class for image generation failures."""


class InvalidPrompt(ImageGenerationError):
    """Raised before any network call when the prompt is unusable."""


class TransportError(ImageGenerationError):
    """Raised by a transport for timeouts, connection failures and non-2xx replies.

    ``status`` is ``None`` when no HTTP response was received at all.
    """

    def __init__(self, message: str, *, status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class ProviderError(ImageGenerationError):
    """Structured rejection reported by a vendor; ``category`` is the vendor's own text."""

    def __init__(
        self,
        message: str,
        *,
        category: str,
        code: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.code = code
        self.status = status


class EmptyResult(ImageGenerationError):
    """Raised when a vendor reports success without a usable image."""


class GatewayErrorKind(str, Enum):
    NO_CONTENT_RETURNED = "no_content_returned"
    UPSTREAM_REJECTED = "upstream_rejected"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"


class GatewayError(ImageGenerationError):
    """Normalised failure returned to gateway callers."""

    def __init__(
        self,
        kind: GatewayErrorKind,
        underlying_message: str,
        *,
        provider: str,
        category: str | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(f"{provider}: {kind.value}: {underlying_message}")
        self.kind = kind
        self.underlying_message = underlying_message
        self.provider = provider
        self.category = category
        self.code = code
