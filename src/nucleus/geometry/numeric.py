"""Float helpers that follow IEEE-754 semantics instead of raising."""

import math


def safe_divide(numerator: float, denominator: float) -> float:
    """
    Divide without raising on a zero denominator.

    Returns +/-inf for a non-zero numerator and NaN for 0/0, so degenerate
    input propagates through later arithmetic the same way it would in
    compiled floating point code.
    """
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator
