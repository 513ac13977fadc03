"""Testing utilities for RotDex."""

from .factory import PNG_PIXEL, PromptFactory, ProviderPayloadFactory
from .fixtures import app_fixture, memory_app
from .stub_transport import RecordedRequest, StubTransport

__all__ = [
    "PNG_PIXEL",
    "PromptFactory",
    "ProviderPayloadFactory",
    "app_fixture",
    "memory_app",
    "RecordedRequest",
    "StubTransport",
]
