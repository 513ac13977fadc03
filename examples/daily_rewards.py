"""Example: a week of daily spins followed by a boosted card generation."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from rich.console import Console

from rotdex import RotDexApp, RotDexConfig
from rotdex.domain.events import CARD_GENERATED, MILESTONE_REACHED, SPIN_COMPLETED
from rotdex.domain.exceptions import InsufficientCurrency
from rotdex.domain.sources import FixedClock
from rotdex.imagegen.errors import GatewayError
from rotdex.imagegen.models import AspectHint, ImagePrompt

console = Console()


async def on_spin(event) -> None:
    console.print(f"Day {event.streak_day}: {event.reward_type} x{event.amount}")


async def on_milestone(event) -> None:
    console.print(f"[bold]Milestone day {event.day}[/bold]: {event.reward_type} x{event.amount}")


async def on_card(event) -> None:
    console.print(f"New {event.rarity} card stored as {event.art_ref}")


def register(app: RotDexApp) -> None:
    app.event_bus.subscribe(SPIN_COMPLETED, on_spin)
    app.event_bus.subscribe(MILESTONE_REACHED, on_milestone)
    app.event_bus.subscribe(CARD_GENERATED, on_card)


async def play_week(app: RotDexApp, clock: FixedClock, user_id: int) -> None:
    for _ in range(7):
        await app.rewards.spin(user_id)
        clock.advance_days()
    console.print(await app.rewards.profile(user_id))


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    clock = FixedClock(datetime.now(timezone.utc))
    async with RotDexApp(RotDexConfig.from_env(), clock=clock) as app:
        register(app)
        await play_week(app, clock, user_id=1)
        prompt = ImagePrompt("a heroic toaster riding a shark", AspectHint.PORTRAIT)
        try:
            await app.card_art.generate_card(1, prompt)
        except (GatewayError, InsufficientCurrency, KeyError) as exc:
            console.print(f"[red]Card generation failed:[/red] {exc}")


if __name__ == "__main__":
    asyncio.run(main())
