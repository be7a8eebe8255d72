"""
Min-max normalization helpers shared by the scorer.

Both helpers map a raw value onto [0, 1] given a range.  A degenerate range
(``hi == lo``) returns 1 instead of dividing by zero, so a candidate set in
which every item has the same price gives every item a full value score.
"""

from __future__ import annotations


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def norm_higher_better(value: float, lo: float, hi: float) -> float:
    """Scale ``value`` so that ``lo`` → 0 and ``hi`` → 1, clamped."""
    if hi == lo:
        return 1.0
    return clamp((value - lo) / (hi - lo), 0.0, 1.0)


def norm_lower_better(value: float, lo: float, hi: float) -> float:
    """Scale ``value`` so that ``lo`` → 1 and ``hi`` → 0, clamped."""
    if hi == lo:
        return 1.0
    return 1.0 - norm_higher_better(value, lo, hi)
