"""Checks applied to claim arguments before any reward is paid."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import pairwise

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from metabond.claim_progress import FIRST_WEEK, ShiftingClaimProgress
from metabond.claims import ClaimArgs
from metabond.errors import (
    ALREADY_CLAIMED_ERR_MSG,
    INVALID_WEEK_NR_ERR_MSG,
    NO_CLAIM_ARGS_ERR_MSG,
    ContractError,
)

DUPLICATE_CLAIM_ARGS_ERR_MSG = "Duplicate claim args"
INVALID_SIGNATURE_ERR_MSG = "Invalid signature"
OWNER_OR_SIGNER_ERR_MSG = "Only owner or signer may call this function"


def _encode_big_uint(value: int) -> bytes:
    raw = value.to_bytes((value.bit_length() + 7) // 8, "big")
    return len(raw).to_bytes(4, "big") + raw


def signature_message(
    caller: bytes,
    week: int,
    user_delegation_amount: int,
    user_lkmex_staked_amount: int,
) -> bytes:
    """Return the bytes the signer signs for one week's claim."""
    return (
        week.to_bytes(4, "big")
        + bytes(caller)
        + _encode_big_uint(user_delegation_amount)
        + _encode_big_uint(user_lkmex_staked_amount)
    )


def verify_signature(signer: bytes, caller: bytes, claim_arg: ClaimArgs) -> None:
    """Raise unless ``claim_arg`` carries the signer's Ed25519 signature."""
    message = signature_message(
        caller,
        claim_arg.week,
        claim_arg.user_delegation_amount,
        claim_arg.user_lkmex_staked_amount,
    )
    try:
        Ed25519PublicKey.from_public_bytes(bytes(signer)).verify(claim_arg.signature, message)
    except (InvalidSignature, ValueError) as exc:
        raise ContractError(INVALID_SIGNATURE_ERR_MSG) from exc


def check_no_duplicate_claim_args(claim_args: Sequence[ClaimArgs]) -> None:
    """Raise if the week-sorted args are empty or repeat a week."""
    if not claim_args:
        raise ContractError(NO_CLAIM_ARGS_ERR_MSG)
    for previous, current in pairwise(claim_args):
        if previous.week == current.week:
            raise ContractError(DUPLICATE_CLAIM_ARGS_ERR_MSG)


def validate_single_claim_arg(
    signer: bytes,
    caller: bytes,
    claim_arg: ClaimArgs,
    claim_progress: ShiftingClaimProgress,
    last_checkpoint_week: int,
) -> None:
    """Raise unless the week is claimable by ``caller`` and the signature holds."""
    week = claim_arg.week
    if not FIRST_WEEK <= week <= last_checkpoint_week:
        raise ContractError(INVALID_WEEK_NR_ERR_MSG)
    if not claim_progress.is_week_valid(week):
        raise ContractError(INVALID_WEEK_NR_ERR_MSG)

    unclaimed = claim_progress.flags_for_week(week).unclaimed_projects
    if unclaimed is not None and not unclaimed:
        raise ContractError(ALREADY_CLAIMED_ERR_MSG)

    verify_signature(signer, caller, claim_arg)


def validate_claim_args(
    signer: bytes,
    caller: bytes,
    claim_args: Sequence[ClaimArgs],
    claim_progress: ShiftingClaimProgress,
    last_checkpoint_week: int,
) -> None:
    """Validate a week-sorted batch of claim args."""
    check_no_duplicate_claim_args(claim_args)
    for claim_arg in claim_args:
        validate_single_claim_arg(
            signer, caller, claim_arg, claim_progress, last_checkpoint_week
        )


def require_caller_owner_or_signer(caller: bytes, owner: bytes, signer: bytes) -> None:
    """Raise unless ``caller`` is the owner or the signer."""
    if caller != owner and caller != signer:
        raise ContractError(OWNER_OR_SIGNER_ERR_MSG)