"""Unsigned 64-bit arithmetic helpers for volume accumulation."""

U64_MAX = 2**64 - 1


def saturating_add(a: int, b: int) -> int:
    """Add two u64 values, clamping at U64_MAX instead of wrapping."""
    return min(a + b, U64_MAX)
