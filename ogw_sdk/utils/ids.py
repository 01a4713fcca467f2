"""Client-side identifier generation."""

import random


def generate_numeric_id(digits: int = 9) -> str:
    """
    Generate a random numeric identifier without a leading zero.

    Used for client-generated order ids and customer ids.

    Args:
        digits: Number of digits (must be >= 1)

    Returns:
        Identifier as a string, e.g. "482910375"
    """
    if digits < 1:
        raise ValueError(f"digits must be >= 1, got {digits}")
    low = 10 ** (digits - 1)
    return str(random.randint(low, 10 * low - 1))
