import math


def round_currency(value) -> int:
    """Round half-up to whole currency units (2.5 -> 3, never banker's rounding)."""
    return int(math.floor(value + 0.5))


def percentage_of(amount, percentage) -> int:
    return round_currency(amount * percentage / 100)
