"""Weekly reward checkpoints, signed claims, claim-progress tracking and price mocks."""

__version__ = "0.1.0"

__all__ = [
    "errors",
    "ratio",
    "claim_progress",
    "mocks",
    "rewards",
    "claims",
    "validation",
]