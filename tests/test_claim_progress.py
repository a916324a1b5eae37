import pytest

from metabond.claim_progress import (
    CLAIM_FLAGS_LEN,
    FIRST_WEEK,
    ClaimFlag,
    ShiftingClaimProgress,
    default_claim_flags,
    first_index_week_for,
    load_claim_progress,
)
from metabond.errors import ContractError


def not_claimed():
    return ClaimFlag()


def claimed():
    return ClaimFlag([])


def test_claim_progress_shift():
    progress = ShiftingClaimProgress(
        [claimed(), not_claimed(), claimed(), claimed(), not_claimed()],
        FIRST_WEEK,
    )

    # no shift needed
    for week in range(FIRST_WEEK, CLAIM_FLAGS_LEN + 1):
        progress.shift_if_needed(week)
        assert progress.claim_flags == [
            claimed(),
            not_claimed(),
            claimed(),
            claimed(),
            not_claimed(),
        ]
        assert progress.first_index_week == FIRST_WEEK

    # shift by 1
    expected_first_index_week = FIRST_WEEK + 1
    current_week = CLAIM_FLAGS_LEN + 1
    progress.shift_if_needed(current_week)
    assert progress.claim_flags == [
        not_claimed(),
        claimed(),
        claimed(),
        not_claimed(),
        not_claimed(),
    ]
    assert progress.first_index_week == expected_first_index_week

    # shift by 2
    expected_first_index_week += 2
    current_week += 2
    progress.shift_if_needed(current_week)
    assert progress.claim_flags == [
        claimed(),
        not_claimed(),
        not_claimed(),
        not_claimed(),
        not_claimed(),
    ]
    assert progress.first_index_week == expected_first_index_week

    # full shift
    progress.claim_flags = [claimed() for _ in range(5)]
    expected_first_index_week += CLAIM_FLAGS_LEN
    current_week += CLAIM_FLAGS_LEN
    progress.shift_if_needed(current_week)
    assert progress.claim_flags == default_claim_flags()
    assert progress.first_index_week == expected_first_index_week

    # shift all flags but 1
    progress.claim_flags = [claimed() for _ in range(5)]
    expected_first_index_week += CLAIM_FLAGS_LEN - 1
    current_week += CLAIM_FLAGS_LEN - 1
    progress.shift_if_needed(current_week)
    assert progress.claim_flags == [
        claimed(),
        not_claimed(),
        not_claimed(),
        not_claimed(),
        not_claimed(),
    ]
    assert progress.first_index_week == expected_first_index_week


def test_window_length_matches_source():
    assert CLAIM_FLAGS_LEN == 5
    assert len(default_claim_flags()) == CLAIM_FLAGS_LEN
    assert all(flag == ClaimFlag() for flag in default_claim_flags())


def test_first_index_week_for():
    assert first_index_week_for(0) == FIRST_WEEK
    assert first_index_week_for(CLAIM_FLAGS_LEN) == FIRST_WEEK
    assert first_index_week_for(CLAIM_FLAGS_LEN + 1) == FIRST_WEEK + 1
    assert first_index_week_for(CLAIM_FLAGS_LEN + 10) == FIRST_WEEK + 10


def test_default_flags_are_independent():
    flags = default_claim_flags()
    flags[0].unclaimed_projects = [b"a"]
    assert flags[1] == ClaimFlag()


def test_from_old_flag():
    assert ClaimFlag.from_old_flag(True) == ClaimFlag([])
    assert ClaimFlag.from_old_flag(False) == ClaimFlag()


def test_unclaimed_of_not_claimed_raises():
    with pytest.raises(ContractError, match="Invalid flags state"):
        ClaimFlag().unclaimed()


def test_unclaimed_is_mutable():
    flag = ClaimFlag([b"p1", b"p2"])
    flag.unclaimed().remove(b"p1")
    assert flag == ClaimFlag([b"p2"])


def test_is_week_valid_bounds():
    progress = ShiftingClaimProgress.for_current_week(default_claim_flags(), 10)
    assert progress.first_index_week == 10 - CLAIM_FLAGS_LEN + 1
    assert progress.is_week_valid(progress.first_index_week)
    assert progress.is_week_valid(10)
    assert not progress.is_week_valid(progress.first_index_week - 1)
    assert not progress.is_week_valid(11)


def test_flags_for_invalid_week_raises():
    progress = ShiftingClaimProgress.for_current_week(default_claim_flags(), 3)
    with pytest.raises(ContractError, match="Invalid week number"):
        progress.flags_for_week(0)
    with pytest.raises(ContractError, match="Invalid week number"):
        progress.flags_for_week(FIRST_WEEK + CLAIM_FLAGS_LEN)


def test_set_claimed_for_week():
    progress = ShiftingClaimProgress.for_current_week(default_claim_flags(), 3)
    progress.set_claimed_for_week(2, [b"x", b"y"])
    assert progress.flags_for_week(2) == ClaimFlag([b"x", b"y"])
    assert progress.flags_for_week(1) == ClaimFlag()


def test_set_claimed_outside_window_is_ignored():
    progress = ShiftingClaimProgress.for_current_week(default_claim_flags(), 3)
    progress.set_claimed_for_week(FIRST_WEEK + CLAIM_FLAGS_LEN, [b"x"])
    assert progress.claim_flags == default_claim_flags()


def test_load_from_legacy_flags():
    progress = load_claim_progress(None, {1: True, 3: True, 2: False}, 3)
    assert progress.first_index_week == FIRST_WEEK
    assert progress.claim_flags == [
        claimed(),
        not_claimed(),
        claimed(),
        not_claimed(),
        not_claimed(),
    ]


def test_load_from_legacy_flags_late_week():
    current_week = CLAIM_FLAGS_LEN + 2
    legacy = {week: True for week in range(1, current_week + 1)}
    progress = load_claim_progress(None, legacy, current_week)
    assert progress.first_index_week == first_index_week_for(current_week)
    assert progress.claim_flags == [claimed() for _ in range(CLAIM_FLAGS_LEN)]


def test_load_stored_shifts_copy():
    stored = ShiftingClaimProgress([claimed() for _ in range(5)], FIRST_WEEK)
    progress = load_claim_progress(stored, {1: False}, CLAIM_FLAGS_LEN + 1)
    assert progress.first_index_week == FIRST_WEEK + 1
    assert progress.claim_flags[-1] == ClaimFlag()
    assert progress.claim_flags[:-1] == [claimed() for _ in range(4)]
    assert stored.first_index_week == FIRST_WEEK
    assert stored.claim_flags == [claimed() for _ in range(5)]