"""Pytest fixtures for RotDex."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ..app import RotDexApp
from ..config import RotDexConfig
from ..domain.sources import FixedClock, PythonRandomSource
from ..imagegen.providers import FlatPromptProvider, InstanceBasedProvider
from ..registry import ProviderRegistry
from .stub_transport import StubTransport


@pytest.fixture()
def memory_app() -> RotDexApp:
    return app_fixture()


def app_fixture(
    *,
    seed: int = 7,
    start: datetime | None = None,
    config: RotDexConfig | None = None,
) -> RotDexApp:
    """Helper for ad-hoc tests: stub-backed providers, fixed clock, seeded randomness."""
    providers = ProviderRegistry(
        [
            InstanceBasedProvider(StubTransport(), name="imagen"),
            FlatPromptProvider(StubTransport(), name="deepseek"),
        ]
    )
    config = config or RotDexConfig()
    if config.imagegen.default_provider is None:
        config.imagegen.default_provider = "imagen"
    return RotDexApp(
        config,
        providers=providers,
        clock=FixedClock(start or datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)),
        random_source=PythonRandomSource(seed=seed),
    )
