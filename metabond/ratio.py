"""Integer ratio and range helpers used for reward maths."""


def calculate_ratio(amount: int, part: int, total: int) -> int:
    """Return ``amount * part / total`` rounded down, or 0 when ``total`` is 0."""
    if total == 0:
        return 0
    return amount * part // total


def is_in_range(value: int, minimum: int, maximum: int) -> bool:
    """Return whether ``minimum <= value <= maximum``."""
    return minimum <= value <= maximum