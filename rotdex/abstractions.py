"""High-level helpers for authoring reward catalogs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from .domain.exceptions import InvalidCatalog
from .domain.rewards import RewardCatalog, SpinRewardType, StreakRewardType
from .loaders import parse_catalog_dict, validate_catalog_dict


@dataclass(slots=True)
class RewardCatalogBuilder:
    """Imperative builder that produces JSON reward catalogs."""

    spin_rewards: list[dict] = field(default_factory=list)
    milestones: list[dict] = field(default_factory=list)

    def add_spin_reward(
        self,
        reward_type: SpinRewardType | str,
        weight: float,
        *,
        min_amount: int = 1,
        max_amount: int | None = None,
        display_name: str = "",
        description: str = "",
        bonus_gems: int = 0,
    ) -> "RewardCatalogBuilder":
        entry: dict = {
            "type": SpinRewardType(reward_type).value,
            "weight": weight,
            "min": min_amount,
            "max": max_amount if max_amount is not None else min_amount,
        }
        if display_name:
            entry["displayName"] = display_name
        if description:
            entry["description"] = description
        if bonus_gems:
            entry["bonusGems"] = bonus_gems
        self.spin_rewards.append(entry)
        return self

    def add_milestone(
        self,
        day: int,
        reward_type: StreakRewardType | str,
        amount: int = 1,
        *,
        display_name: str = "",
        description: str = "",
    ) -> "RewardCatalogBuilder":
        self.milestones.append(
            {
                "day": day,
                "rewardType": StreakRewardType(reward_type).value,
                "amount": amount,
                "displayName": display_name,
                "description": description,
            }
        )
        return self

    def build(self) -> dict:
        catalog = {"spinRewards": self.spin_rewards, "milestones": self.milestones}
        errors = validate_catalog_dict(catalog)
        if errors:
            raise InvalidCatalog(errors)
        return catalog

    def build_catalog(self) -> RewardCatalog:
        return parse_catalog_dict(self.build())

    def save(self, path: Path) -> None:
        catalog = self.build()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(catalog, ensure_ascii=False, indent=2), encoding="utf-8")


__all__ = ["RewardCatalogBuilder"]
