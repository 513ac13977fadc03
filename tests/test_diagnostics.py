import json

import pytest

from rotdex.cli import run_simulator, run_validate
from rotdex.diagnostics import SpinSimulator, run_checklist
from rotdex.domain.rewards import (
    RewardCatalog,
    SpinRewardDefinition,
    SpinRewardType,
    default_catalog,
)
from rotdex.domain.sources import PythonRandomSource
from rotdex.loaders import catalog_to_dict


def test_simulator_tracks_configured_odds():
    catalog = default_catalog()
    simulator = SpinSimulator(catalog, random_source=PythonRandomSource(seed=99))
    result = simulator.simulate(spins=20_000, streak_day=5)
    assert sum(result.counts.values()) == 20_000
    assert simulator.max_deviation(result) < 0.02
    assert result.average_credit("coins") > 0


def test_simulator_rejects_non_positive_spins():
    with pytest.raises(ValueError):
        SpinSimulator(default_catalog()).simulate(spins=0)


def test_default_catalog_passes_checklist_without_warnings():
    severities = {issue.severity for issue in run_checklist(default_catalog())}
    assert "warning" not in severities


def test_checklist_flags_sparse_catalog():
    catalog = RewardCatalog(
        [
            SpinRewardDefinition(SpinRewardType.COINS, 1.0, 1, 1),
            SpinRewardDefinition(SpinRewardType.JACKPOT, 1.0, 1000, 1000, bonus_gems=20),
        ]
    )
    messages = [issue.message for issue in run_checklist(catalog)]
    assert "Spin reward ENERGY is not on the wheel." in messages
    assert "No streak milestones are configured." in messages
    assert any(message.startswith("JACKPOT lands on") for message in messages)
    assert "Nothing grants streak protection; every missed day resets." in messages


def test_cli_simulator_prints_table(capsys):
    run_simulator(["--spins", "500", "--seed", "1"])
    output = capsys.readouterr().out
    assert "500 simulated spins" in output
    assert "Max deviation" in output


def test_cli_validate_accepts_good_catalog(tmp_path, capsys):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog_to_dict(default_catalog())), encoding="utf-8")
    run_validate([str(path)])
    assert "Catalog is valid" in capsys.readouterr().out


def test_cli_validate_exits_on_errors(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"spinRewards": []}), encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        run_validate([str(path)])
    assert excinfo.value.code == 1
