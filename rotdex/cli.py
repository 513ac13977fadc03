"""Command line helpers for RotDex."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .domain.exceptions import InvalidCatalog
from .domain.rewards import RewardCatalog, default_catalog
from .domain.sources import PythonRandomSource
from .diagnostics.checklist import run_checklist
from .diagnostics.spin_simulator import SpinSimulator
from .loaders import load_catalog_from_json, validate_catalog_file

console = Console()


def run_simulator(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="RotDex spin wheel simulator")
    parser.add_argument("--catalog", help="Path to reward catalog JSON (defaults to built-in)")
    parser.add_argument("--spins", type=int, default=10_000, help="Number of spins to simulate")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--streak-day", type=int, default=1, help="Streak day recorded on spins")
    args = parser.parse_args(argv)

    catalog = _load_catalog(args.catalog)
    simulator = SpinSimulator(catalog, random_source=PythonRandomSource(seed=args.seed))
    result = simulator.simulate(spins=args.spins, streak_day=args.streak_day)

    table = Table(title=f"{result.spins} simulated spins")
    table.add_column("Reward")
    table.add_column("Configured", justify="right")
    table.add_column("Observed", justify="right")
    for reward in catalog.spin_rewards:
        table.add_row(
            reward.reward_type.value,
            f"{catalog.probability(reward.reward_type):.2%}",
            f"{result.frequency(reward.reward_type):.2%}",
        )
    console.print(table)
    for currency, amount in sorted(result.credits.items()):
        console.print(f"{currency}: {amount} total, {result.average_credit(currency):.2f} per spin")
    console.print(f"Max deviation: {simulator.max_deviation(result):.3%}")


def run_validate(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="RotDex reward catalog validator")
    parser.add_argument("catalog", help="Path to catalog JSON file for validation")
    args = parser.parse_args(argv)

    errors = validate_catalog_file(Path(args.catalog))
    if errors:
        console.print("[bold red]Catalog errors:[/bold red]")
        for err in errors:
            console.print(f"- {err}")
        sys.exit(1)

    catalog = load_catalog_from_json(args.catalog)
    for issue in run_checklist(catalog):
        console.print(f"[{issue.severity.upper()}] {issue.message}", markup=False)
    console.print("[bold green]Catalog is valid[/bold green]")


def _load_catalog(path: str | None) -> RewardCatalog:
    if not path:
        return default_catalog()
    try:
        return load_catalog_from_json(path)
    except InvalidCatalog as exc:
        console.print(str(exc), markup=False)
        sys.exit(1)
