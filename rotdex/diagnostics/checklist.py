"""Automated checks to highlight balancing issues."""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.rewards import RewardCatalog, SpinRewardType, StreakRewardType


@dataclass(slots=True)
class ChecklistIssue:
    severity: str
    message: str


def run_checklist(catalog: RewardCatalog) -> list[ChecklistIssue]:
    issues: list[ChecklistIssue] = []

    configured = {reward.reward_type for reward in catalog.spin_rewards}
    for reward_type in SpinRewardType:
        if reward_type not in configured:
            issues.append(
                ChecklistIssue("warning", f"Spin reward {reward_type.value} is not on the wheel.")
            )

    for reward in catalog.spin_rewards:
        if reward.weight == 0:
            issues.append(
                ChecklistIssue("warning", f"Spin reward {reward.reward_type.value} has zero weight.")
            )

    if SpinRewardType.JACKPOT in configured:
        share = catalog.probability(SpinRewardType.JACKPOT)
        if share > 0.05:
            issues.append(
                ChecklistIssue(
                    "warning",
                    f"JACKPOT lands on {share:.1%} of spins; it is meant to be rare.",
                )
            )

    if not catalog.milestones:
        issues.append(ChecklistIssue("warning", "No streak milestones are configured."))
    elif catalog.milestones[0].day != 1:
        issues.append(
            ChecklistIssue("info", "The first milestone is not on day 1; new streaks start unrewarded.")
        )

    grants_protection = SpinRewardType.STREAK_PROTECTION in configured or any(
        m.reward_type is StreakRewardType.STREAK_PROTECTION for m in catalog.milestones
    )
    if not grants_protection:
        issues.append(
            ChecklistIssue("info", "Nothing grants streak protection; every missed day resets.")
        )

    return issues
