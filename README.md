# metabond

Bookkeeping for a weekly reward program in which users earn project rewards
in proportion to their delegated and staked amounts, and claim them with
claims signed by a trusted signer.

## What it covers

- **Reward checkpoints** (`metabond.rewards`): a `CheckpointLedger` holds one
  `RewardsCheckpoint` per week. `add_checkpoint` accepts only the week after
  the last one and never a week later than the current week; `get` returns a
  week's checkpoint and `last_checkpoint_week` the number of checkpoints.
  `calculate_reward_amount` spreads a project's delegation and staking supply
  evenly over its duration and pays a user their share of the week's totals
  (a share is 0 when the week's total is 0).
- **Claim progress** (`metabond.claim_progress`): `ShiftingClaimProgress`
  keeps a sliding window of five `ClaimFlag` values, one per claimable week.
  A flag whose `unclaimed_projects` is `None` is unclaimed; once claimed it
  lists the projects still left. `shift_if_needed` slides the window forward
  as weeks pass, dropping old weeks. `load_claim_progress` copies and shifts
  stored progress, or builds a window from legacy per-week boolean flags.
- **Claims** (`metabond.claims`): `collect_claim_args` turns up to five raw
  `(week, delegation, lkmex, signature)` tuples into `ClaimArgs`, attaching
  each week's checkpoint; `sort_claim_args` orders them by week;
  `mark_weeks_claimed` marks unclaimed weeks as claimed with every project
  still to claim; `claimable_weeks` lists each week up to the last checkpoint
  with a `ClaimableTokens` value (`is_all`, or the projects left).
- **Validation** (`metabond.validation`): `signature_message` builds the
  bytes a signer signs (week as 4 big-endian bytes, the caller address, then
  both amounts length-prefixed); `verify_signature` checks an Ed25519
  signature; `check_no_duplicate_claim_args`, `validate_single_claim_arg`
  and `validate_claim_args` check a batch of claims;
  `require_caller_owner_or_signer` checks the caller.
- **Ratios** (`metabond.ratio`): `calculate_ratio` and `is_in_range`.
- **Price mocks** (`metabond.mocks`): `PairMock` values any `TokenPayment` at
  one dollar per whole 18-decimal token in USDC units; `RouterMock.get_pair`
  returns its pair address when either token is USDC, else 32 zero bytes.

Every rejected request raises `metabond.errors.ContractError`, whose
`message` gives the reason, such as "Invalid week number",
"Already claimed rewards for this week" or "Duplicate claim args".

## Installing

```
pip install metabond
```

Signature checks use Ed25519 from `cryptography`.

## Example

```python
from metabond.rewards import CheckpointLedger, calculate_reward_amount

ledger = CheckpointLedger()
ledger.add_checkpoint(1, 1, 1_000, 500)

reward = calculate_reward_amount(
    delegation_reward_supply=10_000,
    lkmex_reward_supply=4_000,
    duration_weeks=4,
    user_delegation_amount=100,
    user_lkmex_staked_amount=50,
    checkpoint=ledger.get(1),
)
# 2_500 * 100 // 1_000 + 1_000 * 50 // 500 == 350
```

## What it does not do

The package is a set of building blocks, not a running reward program. It
keeps no persistent storage, has no registry of projects (owners, reward
tokens, start and end weeks, expiry), does not take deposits or send token
payments, has no pause switch or whitelist of proxy callers, and offers no
command-line tool. Callers hold the ledger and each user's progress
themselves and decide which projects a claim pays out.

## Running the tests

```
pip install -e ".[test]"
pytest
```