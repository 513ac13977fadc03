"""Load reward catalogs from JSON definitions."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from ..domain.exceptions import InvalidCatalog
from ..domain.rewards import (
    RewardCatalog,
    SpinRewardDefinition,
    SpinRewardType,
    StreakMilestone,
    StreakRewardType,
)


def load_catalog_from_json(path: str | Path) -> RewardCatalog:
    """Read, validate and build a RewardCatalog from a JSON file."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return parse_catalog_dict(data)


def parse_catalog_dict(data: Any) -> RewardCatalog:
    """Parse a JSON dict (already decoded) into a RewardCatalog."""
    if not isinstance(data, dict):
        raise InvalidCatalog(["Catalog root must be a JSON object."])
    errors = validate_catalog_dict(data)
    if errors:
        raise InvalidCatalog(errors)
    rewards = tuple(parse_spin_reward(entry) for entry in data.get("spinRewards", []))
    milestones = tuple(parse_milestone(entry) for entry in data.get("milestones", []))
    return RewardCatalog(rewards, milestones)


def parse_spin_reward(entry: dict[str, Any]) -> SpinRewardDefinition:
    amount = entry.get("amount")
    min_amount = int(entry.get("min", amount if amount is not None else 1))
    max_amount = int(entry.get("max", amount if amount is not None else min_amount))
    return SpinRewardDefinition(
        reward_type=SpinRewardType(entry["type"]),
        weight=float(entry["weight"]),
        min_amount=min_amount,
        max_amount=max_amount,
        display_name=entry.get("displayName", ""),
        description=entry.get("description", ""),
        bonus_gems=int(entry.get("bonusGems", 0)),
    )


def parse_milestone(entry: dict[str, Any]) -> StreakMilestone:
    return StreakMilestone(
        day=int(entry["day"]),
        reward_type=StreakRewardType(entry["rewardType"]),
        amount=int(entry.get("amount", 1)),
        display_name=entry.get("displayName", ""),
        description=entry.get("description", ""),
    )


def validate_catalog_file(path: str | Path) -> list[str]:
    """Validate catalog JSON file and return a list of errors."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        return [f"Catalog file is not valid JSON: {exc}"]
    if not isinstance(data, dict):
        return ["Catalog root must be a JSON object."]
    return validate_catalog_dict(data)


def validate_catalog_dict(data: dict[str, Any]) -> list[str]:
    errors: list[str] = []

    rewards_raw = data.get("spinRewards")
    if not isinstance(rewards_raw, list) or not rewards_raw:
        errors.append("Catalog must contain non-empty 'spinRewards' array.")
        rewards_raw = []

    seen_types: set[str] = set()
    total_weight = 0.0
    for idx, entry in enumerate(rewards_raw, start=1):
        if not isinstance(entry, dict):
            errors.append(f"Spin reward #{idx} must be an object.")
            continue
        reward_type = entry.get("type")
        try:
            SpinRewardType(reward_type)
        except ValueError:
            errors.append(f"Spin reward #{idx} has invalid type '{reward_type}'.")
            continue
        if reward_type in seen_types:
            errors.append(f"Spin reward '{reward_type}' defined multiple times.")
        seen_types.add(reward_type)

        weight = entry.get("weight")
        if (
            not isinstance(weight, (int, float))
            or isinstance(weight, bool)
            or not math.isfinite(weight)
            or weight < 0
        ):
            errors.append(f"Spin reward '{reward_type}' has invalid 'weight' value '{weight}'.")
        else:
            total_weight += float(weight)

        bounds = {key: entry.get(key) for key in ("amount", "min", "max") if key in entry}
        for key, value in bounds.items():
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(
                    f"Spin reward '{reward_type}' has invalid '{key}' value '{value}'."
                )
        low, high = bounds.get("min"), bounds.get("max")
        if isinstance(low, int) and isinstance(high, int) and low > high:
            errors.append(f"Spin reward '{reward_type}' has 'min' above 'max'.")

        bonus = entry.get("bonusGems", 0)
        if not isinstance(bonus, int) or bonus < 0:
            errors.append(f"Spin reward '{reward_type}' has invalid 'bonusGems' value '{bonus}'.")
        elif reward_type == SpinRewardType.JACKPOT.value and bonus == 0:
            errors.append("Spin reward 'JACKPOT' must define positive 'bonusGems'.")
        elif reward_type != SpinRewardType.JACKPOT.value and bonus:
            errors.append(f"Spin reward '{reward_type}' cannot define 'bonusGems'.")

    if rewards_raw and total_weight <= 0:
        errors.append("Sum of spin reward weights must be positive.")

    milestones_raw = data.get("milestones", [])
    if not isinstance(milestones_raw, list):
        errors.append("'milestones' must be an array.")
        milestones_raw = []

    previous_day = 0
    for idx, entry in enumerate(milestones_raw, start=1):
        if not isinstance(entry, dict):
            errors.append(f"Milestone #{idx} must be an object.")
            continue
        day = entry.get("day")
        if not isinstance(day, int) or isinstance(day, bool) or day < 1:
            errors.append(f"Milestone #{idx} has invalid 'day' value '{day}'.")
            continue
        if day <= previous_day:
            errors.append(f"Milestone day {day} must be greater than previous day {previous_day}.")
        previous_day = max(previous_day, day)
        reward_type = entry.get("rewardType")
        try:
            StreakRewardType(reward_type)
        except ValueError:
            errors.append(f"Milestone day {day} has invalid 'rewardType' '{reward_type}'.")
        amount = entry.get("amount", 1)
        if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
            errors.append(f"Milestone day {day} has invalid 'amount' value '{amount}'.")

    return errors


def catalog_to_dict(catalog: RewardCatalog) -> dict[str, Any]:
    """Inverse of ``parse_catalog_dict``."""
    return {
        "spinRewards": [
            {
                "type": reward.reward_type.value,
                "weight": reward.weight,
                "min": reward.min_amount,
                "max": reward.max_amount,
                "displayName": reward.display_name,
                "description": reward.description,
                **({"bonusGems": reward.bonus_gems} if reward.bonus_gems else {}),
            }
            for reward in catalog.spin_rewards
        ],
        "milestones": [
            {
                "day": milestone.day,
                "rewardType": milestone.reward_type.value,
                "amount": milestone.amount,
                "displayName": milestone.display_name,
                "description": milestone.description,
            }
            for milestone in catalog.milestones
        ],
    }
