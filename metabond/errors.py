"""Errors raised when a contract rule is broken."""

INVALID_WEEK_NR_ERR_MSG = "Invalid week number"
ALREADY_CLAIMED_ERR_MSG = "Already claimed rewards for this week"
NO_CLAIM_ARGS_ERR_MSG = "No claim args"
INVALID_FLAGS_STATE_ERR_MSG = "Invalid flags state"


class ContractError(Exception):
    """A request was rejected by one of the contract's checks."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message