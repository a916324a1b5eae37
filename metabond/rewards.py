"""Weekly reward checkpoints and the per-project reward formula."""

from __future__ import annotations

from dataclasses import dataclass, field

from metabond.errors import ContractError
from metabond.ratio import calculate_ratio

INVALID_CHECKPOINT_WEEK_ERR_MSG = "Invalid checkpoint week"
INDEX_OUT_OF_RANGE_ERR_MSG = "Index out of range"


@dataclass(frozen=True)
class RewardsCheckpoint:
    """Totals staked across all users for one week."""

    total_delegation_supply: int = 0
    total_lkmex_staked: int = 0


@dataclass
class CheckpointLedger:
    """Checkpoints kept in week order; week ``n`` is the ``n``-th entry."""

    checkpoints: list[RewardsCheckpoint] = field(default_factory=list)

    def last_checkpoint_week(self) -> int:
        """Return the week of the most recent checkpoint, or 0 if none exists."""
        return len(self.checkpoints)

    def add_checkpoint(
        self,
        week: int,
        current_week: int,
        total_delegation_supply: int,
        total_lkmex_staked: int,
    ) -> RewardsCheckpoint:
        """Append the checkpoint for ``week``.

        Checkpoints must be added in order and never for a future week.
        """
        if week != self.last_checkpoint_week() + 1 or week > current_week:
            raise ContractError(INVALID_CHECKPOINT_WEEK_ERR_MSG)
        checkpoint = RewardsCheckpoint(total_delegation_supply, total_lkmex_staked)
        self.checkpoints.append(checkpoint)
        return checkpoint

    def get(self, week: int) -> RewardsCheckpoint:
        """Return the checkpoint of ``week``; raise if there is none."""
        if not 1 <= week <= self.last_checkpoint_week():
            raise ContractError(INDEX_OUT_OF_RANGE_ERR_MSG)
        return self.checkpoints[week - 1]


def calculate_reward_amount(
    delegation_reward_supply: int,
    lkmex_reward_supply: int,
    duration_weeks: int,
    user_delegation_amount: int,
    user_lkmex_staked_amount: int,
    checkpoint: RewardsCheckpoint,
) -> int:
    """Return a user's reward for one week of a project.

    Each supply is spread evenly over the project's weeks, then shared in
    proportion to the user's stake against the week's checkpoint totals.
    """
    per_week_delegation = delegation_reward_supply // duration_weeks
    per_week_lkmex = lkmex_reward_supply // duration_weeks

    rewards_delegation = calculate_ratio(
        per_week_delegation,
        user_delegation_amount,
        checkpoint.total_delegation_supply,
    )
    rewards_lkmex = calculate_ratio(
        per_week_lkmex,
        user_lkmex_staked_amount,
        checkpoint.total_lkmex_staked,
    )
    return rewards_delegation + rewards_lkmex