"""Validation utilities for RotDex applications."""

from __future__ import annotations

from .app import RotDexApp


def validate_app(app: RotDexApp) -> list[str]:
    """Return list of validation errors discovered in configured app."""
    errors: list[str] = []

    imagegen = app.config.imagegen
    names = app.providers.names()
    if not names:
        errors.append("No image providers registered in application.")
    if imagegen.default_provider and imagegen.default_provider not in app.providers:
        errors.append(f"Default provider '{imagegen.default_provider}' is not registered.")
    if not imagegen.default_provider and len(names) > 1:
        errors.append("Several providers are registered but no default provider is configured.")
    if imagegen.timeout_seconds <= 0:
        errors.append("Image generation timeout must be positive.")
    if imagegen.max_prompt_length <= 0:
        errors.append("Maximum prompt length must be positive.")

    for provider in imagegen.providers:
        if not provider.base_url.startswith(("http://", "https://")):
            errors.append(f"Provider '{provider.name}' base URL '{provider.base_url}' is not HTTP(S).")
        if not provider.api_key:
            errors.append(f"Provider '{provider.name}' has no API key.")

    economy = app.config.economy
    if economy.rarity_boost_percent <= 0 or economy.rarity_boost_percent > 100:
        errors.append("Rarity boost percent must be within (0, 100].")
    if economy.rarity_boost_generations <= 0:
        errors.append("Rarity boost must last at least one generation.")
    if economy.generation_energy_cost < 0:
        errors.append("Card generation energy cost must not be negative.")

    return errors
