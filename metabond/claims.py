"""Collecting claim arguments and tracking which weeks are claimable."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from metabond.claim_progress import ShiftingClaimProgress, first_index_week_for
from metabond.errors import NO_CLAIM_ARGS_ERR_MSG, ContractError
from metabond.rewards import CheckpointLedger, RewardsCheckpoint

MAX_CLAIM_ARG_PAIRS = 5
SIGNATURE_LEN = 64
TOO_MANY_ARGS_ERR_MSG = "Too many arguments"


@dataclass
class ClaimArgs:
    """One week's claim: the user's stakes, the week's totals and a signature."""

    week: int
    user_delegation_amount: int
    user_lkmex_staked_amount: int
    checkpoint: RewardsCheckpoint = field(default_factory=RewardsCheckpoint)
    signature: bytes = bytes(SIGNATURE_LEN)


@dataclass(frozen=True)
class ClaimableTokens:
    """What is still claimable for a week.

    ``unclaimed_projects`` is ``None`` when every project may be claimed.
    """

    unclaimed_projects: tuple[bytes, ...] | None = None

    @property
    def is_all(self) -> bool:
        return self.unclaimed_projects is None


def collect_claim_args(
    raw_claim_args: Iterable[tuple[int, int, int, bytes]],
    ledger: CheckpointLedger,
) -> list[ClaimArgs]:
    """Turn raw ``(week, delegation, lkmex, signature)`` tuples into claim args."""
    raw = list(raw_claim_args)
    if not raw:
        raise ContractError(NO_CLAIM_ARGS_ERR_MSG)
    if len(raw) > MAX_CLAIM_ARG_PAIRS:
        raise ContractError(TOO_MANY_ARGS_ERR_MSG)

    last_week = ledger.last_checkpoint_week()
    args = []
    for week, delegation, lkmex, signature in raw:
        checkpoint = ledger.get(week) if 1 <= week <= last_week else RewardsCheckpoint()
        args.append(ClaimArgs(week, delegation, lkmex, checkpoint, bytes(signature)))
    return args


def sort_claim_args(claim_args: Iterable[ClaimArgs]) -> list[ClaimArgs]:
    """Return the claim args ordered by week."""
    return sorted(claim_args, key=lambda arg: arg.week)


def mark_weeks_claimed(
    claim_args: Iterable[ClaimArgs],
    progress: ShiftingClaimProgress,
    all_projects: Sequence[bytes],
) -> None:
    """Mark each not-yet-claimed week as claimed with every project left to claim."""
    for arg in claim_args:
        if progress.flags_for_week(arg.week).unclaimed_projects is None:
            progress.set_claimed_for_week(arg.week, list(all_projects))


def claimable_weeks(
    progress: ShiftingClaimProgress,
    current_week: int,
    last_checkpoint_week: int,
) -> list[tuple[int, ClaimableTokens]]:
    """Return each week up to the last checkpoint with what is still claimable."""
    if current_week == 0 or last_checkpoint_week == 0:
        return []

    result = []
    for week in range(first_index_week_for(current_week), last_checkpoint_week + 1):
        flag = progress.flags_for_week(week)
        if flag.unclaimed_projects is None:
            result.append((week, ClaimableTokens()))
        else:
            result.append((week, ClaimableTokens(tuple(flag.unclaimed_projects))))
    return result