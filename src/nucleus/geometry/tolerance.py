"""
Default numeric tolerances for geometric comparisons.

These are immutable defaults. Operations that compare positions accept an
explicit ``tolerance`` argument and only fall back to these values when the
caller does not pass one.
"""

# Coincidence tolerance for geometric comparisons (closed-curve detection etc.)
GEOMETRIC: float = 1e-4

# Distance within which nodes are considered to be the same connection point
DISTANCE: float = 1e-4

# Angular tolerance in radians
ANGLE: float = 1e-3
