"""
Diff replay: rebuild the new side of a diff from the baseline and its regions.

Regions are replayed literally and in order. No check is made that they
cover the baseline or that they don't overlap.
"""

from __future__ import annotations

from typing import List, Sequence, TypeVar, Union

from pydantic import BaseModel

from .models import Added, Changed, DiffRegion, Hidden, Removed, Unchanged
from .records import from_lines, to_lines

M = TypeVar("M", bound=BaseModel)

RegionLike = Union[DiffRegion, Unchanged, Added, Removed, Changed, Hidden]


class DiffRegionError(ValueError):
    """
    A malformed diff region (bad Hidden bounds, no variant, unknown variant).

    This means the producer of the diff is broken; callers are not expected
    to recover from it.
    """

    def __init__(self, index: int, message: str):
        super().__init__(f"DiffRegion #{index}: {message}")
        self.index = index


def _details(region: RegionLike, index: int) -> object:
    if not isinstance(region, DiffRegion):
        return region

    populated = region.populated()
    if not populated:
        raise DiffRegionError(index, "no variant set")
    if len(populated) > 1:
        names = ", ".join(name for name, _ in populated)
        raise DiffRegionError(index, f"more than one variant set ({names})")
    return populated[0][1]


def _hidden_lines(baseline: Sequence[str], hidden: Hidden, index: int) -> List[str]:
    n = len(baseline)
    start, size = hidden.left_start, hidden.size
    bounds = f"left_start={start} size={size} baseline_len={n}"

    if start < 1:
        raise DiffRegionError(index, f"hidden left_start < 1 ({bounds})")
    if start > n + 1:
        raise DiffRegionError(index, f"hidden left_start past end ({bounds})")
    if size < 0:
        raise DiffRegionError(index, f"hidden size < 0 ({bounds})")
    if start - 1 + size > n:
        raise DiffRegionError(index, f"hidden region runs past end ({bounds})")

    return list(baseline[start - 1:start - 1 + size])


def region_lines(baseline: Sequence[str], region: RegionLike, index: int = 0) -> List[str]:
    """Lines a single region contributes to the new side."""
    details = _details(region, index)

    if isinstance(details, (Unchanged, Added)):
        return list(details.contents)
    if isinstance(details, Removed):
        return []
    if isinstance(details, Changed):
        return list(details.right_contents)
    if isinstance(details, Hidden):
        return _hidden_lines(baseline, details, index)

    kind = type(details).__name__
    if isinstance(region, DiffRegion):
        kind = region.populated()[0][0]
    raise DiffRegionError(index, f"unknown variant '{kind}'")


def reconstruct(baseline: Sequence[str], regions: Sequence[RegionLike]) -> List[str]:
    """Concatenate the lines of every region, in region order."""
    result: List[str] = []
    for i, region in enumerate(regions):
        result.extend(region_lines(baseline, region, i))
    return result


def patch_record(baseline: M, regions: Sequence[RegionLike]) -> M:
    """
    Apply regions to the canonical text of a record and parse the result back
    into the same record type. Raises RecordParseError if it doesn't parse.
    """
    new_lines = reconstruct(to_lines(baseline), regions)
    return from_lines(new_lines, type(baseline))
