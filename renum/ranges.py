"""
Range Analysis
==============
Derived metadata over a value table: first, last, min, max, span, size.

Span is a bounding-box size (``max - min + 1``), not a count of distinct
values. Gaps make it larger than ``size``; duplicate values can make it
smaller.
"""
from dataclasses import dataclass
from typing import Sequence


def find_min(values: Sequence[int]) -> int:
    """Left-to-right fold with strict comparison; first element seeds it."""
    best = values[0]
    for value in values[1:]:
        if value < best:
            best = value
    return best


def find_max(values: Sequence[int]) -> int:
    best = values[0]
    for value in values[1:]:
        if value > best:
            best = value
    return best


@dataclass(frozen=True)
class RangeInfo:
    """Range metadata of one enum type. Computed once, never mutated."""
    first: int
    last: int
    min: int
    max: int
    size: int

    @property
    def span(self) -> int:
        return self.max - self.min + 1


def analyze_range(values: Sequence[int]) -> RangeInfo:
    """Compute the range metadata of a non-empty value table."""
    return RangeInfo(
        first=values[0],
        last=values[-1],
        min=find_min(values),
        max=find_max(values),
        size=len(values),
    )
