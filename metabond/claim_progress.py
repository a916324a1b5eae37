"""Per-user claim flags over a sliding window of weeks."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field

from metabond.errors import (
    INVALID_FLAGS_STATE_ERR_MSG,
    INVALID_WEEK_NR_ERR_MSG,
    ContractError,
)

FIRST_WEEK = 1
PROJECT_EXPIRATION_WEEKS = 4
CLAIM_FLAGS_LEN = PROJECT_EXPIRATION_WEEKS + 1
EPOCHS_IN_WEEK = 7
MAX_PERCENTAGE = 100


@dataclass
class ClaimFlag:
    """Claim state of one week.

    ``unclaimed_projects`` is ``None`` while the week has not been claimed;
    once claimed it lists the projects still left to claim for that week.
    """

    unclaimed_projects: list[bytes] | None = None

    @classmethod
    def from_old_flag(cls, old_flag: bool) -> ClaimFlag:
        """Build a flag from the legacy boolean "claimed" marker."""
        return cls([]) if old_flag else cls()

    def unclaimed(self) -> list[bytes]:
        """Return the (mutable) list of unclaimed projects of a claimed week."""
        if self.unclaimed_projects is None:
            raise ContractError(INVALID_FLAGS_STATE_ERR_MSG)
        return self.unclaimed_projects


def default_claim_flags() -> list[ClaimFlag]:
    """Return a full window of not-claimed flags."""
    return [ClaimFlag() for _ in range(CLAIM_FLAGS_LEN)]


def first_index_week_for(current_week: int) -> int:
    """Return the first week tracked by the window ending at ``current_week``."""
    if current_week > CLAIM_FLAGS_LEN:
        return current_week - CLAIM_FLAGS_LEN + 1
    return FIRST_WEEK


@dataclass
class ShiftingClaimProgress:
    """Claim flags for ``CLAIM_FLAGS_LEN`` consecutive weeks."""

    claim_flags: list[ClaimFlag] = field(default_factory=default_claim_flags)
    first_index_week: int = FIRST_WEEK

    @classmethod
    def for_current_week(
        cls, claim_flags: list[ClaimFlag], current_week: int
    ) -> ShiftingClaimProgress:
        """Create progress whose window ends at ``current_week``."""
        return cls(list(claim_flags), first_index_week_for(current_week))

    @property
    def last_index_week(self) -> int:
        return self.first_index_week + CLAIM_FLAGS_LEN - 1

    def is_week_valid(self, week: int) -> bool:
        """Return whether ``week`` lies inside the tracked window."""
        return self.first_index_week <= week <= self.last_index_week

    def flags_for_week(self, week: int) -> ClaimFlag:
        """Return the flag of ``week``; raise if the week is not tracked."""
        if not self.is_week_valid(week):
            raise ContractError(INVALID_WEEK_NR_ERR_MSG)
        return self.claim_flags[week - self.first_index_week]

    def set_claimed_for_week(self, week: int, unclaimed_projects: list[bytes]) -> None:
        """Mark ``week`` as claimed; weeks outside the window are ignored."""
        if not self.is_week_valid(week):
            return
        self.claim_flags[week - self.first_index_week] = ClaimFlag(list(unclaimed_projects))

    def shift_if_needed(self, current_week: int) -> None:
        """Slide the window forward so that it ends at ``current_week``."""
        if current_week <= CLAIM_FLAGS_LEN:
            return

        new_first_week = first_index_week_for(current_week)
        if new_first_week == self.first_index_week:
            return

        nr_shifts = new_first_week - self.first_index_week
        if nr_shifts < 0:
            raise ValueError("current week lies before the tracked window")

        if nr_shifts < CLAIM_FLAGS_LEN:
            self.claim_flags = self.claim_flags[nr_shifts:] + [
                ClaimFlag() for _ in range(nr_shifts)
            ]
        else:
            self.claim_flags = default_claim_flags()

        self.first_index_week = new_first_week


def load_claim_progress(
    stored: ShiftingClaimProgress | None,
    legacy_flags: Mapping[int, bool],
    current_week: int,
) -> ShiftingClaimProgress:
    """Return a user's progress for ``current_week``.

    Stored progress is copied and shifted; without it, the progress is built
    from the legacy per-week boolean flags.
    """
    if stored is not None:
        progress = copy.deepcopy(stored)
        progress.shift_if_needed(current_week)
        return progress

    claim_flags = default_claim_flags()
    first_week = first_index_week_for(current_week)
    for index, week in enumerate(range(first_week, current_week + 1)):
        claim_flags[index] = ClaimFlag.from_old_flag(legacy_flags.get(week, False))

    return ShiftingClaimProgress.for_current_week(claim_flags, current_week)