"""Configuration models for RotDex."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Mapping

ProviderKind = Literal["instance", "flat"]


@dataclass(slots=True)
class ProviderConfig:
    """One image vendor endpoint."""

    name: str
    kind: ProviderKind
    base_url: str
    api_key: str | None = None
    api_key_header: str = "Authorization"
    model: str | None = None
    endpoint: str | None = None
    extra_headers: Mapping[str, str] = field(default_factory=dict)

    def headers(self) -> dict[str, str]:
        headers = dict(self.extra_headers)
        if self.api_key:
            if self.api_key_header.lower() == "authorization":
                headers[self.api_key_header] = f"Bearer {self.api_key}"
            else:
                headers[self.api_key_header] = self.api_key
        return headers


@dataclass(slots=True)
class ImageGenConfig:
    providers: list[ProviderConfig] = field(default_factory=list)
    default_provider: str | None = None
    timeout_seconds: float = 60.0
    max_prompt_length: int = 1000


@dataclass(slots=True)
class EconomyConfig:
    """Tunables for spin side effects and randomness."""

    rarity_boost_percent: float = 20.0
    rarity_boost_generations: int = 1
    generation_energy_cost: int = 1
    rng_seed: int | None = None
    catalog_path: Path | None = None


@dataclass(slots=True)
class RotDexConfig:
    """Top-level configuration container."""

    imagegen: ImageGenConfig = field(default_factory=ImageGenConfig)
    economy: EconomyConfig = field(default_factory=EconomyConfig)

    @classmethod
    def from_env(cls) -> "RotDexConfig":
        """Create config from environment variables prefixed with ROTDEX_."""
        prefix = "ROTDEX_"

        providers: list[ProviderConfig] = []
        instance_url = os.getenv(f"{prefix}IMAGEN_BASE_URL")
        if instance_url:
            providers.append(
                ProviderConfig(
                    name=os.getenv(f"{prefix}IMAGEN_NAME", "imagen") or "imagen",
                    kind="instance",
                    base_url=instance_url,
                    api_key=os.getenv(f"{prefix}IMAGEN_API_KEY"),
                    api_key_header=os.getenv(f"{prefix}IMAGEN_API_KEY_HEADER", "x-goog-api-key"),
                    model=os.getenv(f"{prefix}IMAGEN_MODEL"),
                    endpoint=os.getenv(f"{prefix}IMAGEN_ENDPOINT"),
                    extra_headers=_parse_headers(os.getenv(f"{prefix}IMAGEN_HEADERS")),
                )
            )
        flat_url = os.getenv(f"{prefix}FLAT_BASE_URL")
        if flat_url:
            providers.append(
                ProviderConfig(
                    name=os.getenv(f"{prefix}FLAT_NAME", "deepseek") or "deepseek",
                    kind="flat",
                    base_url=flat_url,
                    api_key=os.getenv(f"{prefix}FLAT_API_KEY"),
                    api_key_header=os.getenv(f"{prefix}FLAT_API_KEY_HEADER", "Authorization"),
                    model=os.getenv(f"{prefix}FLAT_MODEL"),
                    endpoint=os.getenv(f"{prefix}FLAT_ENDPOINT"),
                    extra_headers=_parse_headers(os.getenv(f"{prefix}FLAT_HEADERS")),
                )
            )

        imagegen = ImageGenConfig(
            providers=providers,
            default_provider=os.getenv(f"{prefix}DEFAULT_PROVIDER") or None,
            timeout_seconds=float(os.getenv(f"{prefix}IMAGE_TIMEOUT", "60")),
            max_prompt_length=int(os.getenv(f"{prefix}MAX_PROMPT_LENGTH", "1000")),
        )

        catalog_path = os.getenv(f"{prefix}CATALOG_PATH")
        economy = EconomyConfig(
            rarity_boost_percent=float(os.getenv(f"{prefix}RARITY_BOOST_PERCENT", "20")),
            rarity_boost_generations=int(os.getenv(f"{prefix}RARITY_BOOST_GENERATIONS", "1")),
            generation_energy_cost=int(os.getenv(f"{prefix}GENERATION_ENERGY_COST", "1")),
            rng_seed=(
                int(os.getenv(f"{prefix}RNG_SEED")) if os.getenv(f"{prefix}RNG_SEED") else None
            ),
            catalog_path=Path(catalog_path).expanduser() if catalog_path else None,
        )
        return cls(imagegen=imagegen, economy=economy)


def _parse_headers(raw: str | None) -> Mapping[str, str]:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid JSON for provider headers") from exc
    if not isinstance(data, dict):
        raise ValueError("Provider headers must be a JSON object")
    return {str(k): str(v) for k, v in data.items()}
