"""Image generation gateway and vendor provider clients."""

from .errors import (
    EmptyResult,
    GatewayError,
    GatewayErrorKind,
    ImageGenerationError,
    InvalidPrompt,
    ProviderError,
    TransportError,
)
from .models import AspectHint, GeneratedImage, GenerationParameters, ImageEncoding, ImagePrompt
from .transport import AiohttpTransport, Transport
from .providers import FlatPromptProvider, InstanceBasedProvider, ProviderClient
from .gateway import ImageGenerationGateway, classify_provider_error

__all__ = [
    "EmptyResult",
    "GatewayError",
    "GatewayErrorKind",
    "ImageGenerationError",
    "InvalidPrompt",
    "ProviderError",
    "TransportError",
    "AspectHint",
    "GeneratedImage",
    "GenerationParameters",
    "ImageEncoding",
    "ImagePrompt",
    "AiohttpTransport",
    "Transport",
    "FlatPromptProvider",
    "InstanceBasedProvider",
    "ProviderClient",
    "ImageGenerationGateway",
    "classify_provider_error",
]
