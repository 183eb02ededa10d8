"""
Content search over a live program buffer.

The buffer is whatever the editor currently holds: a sequence of raw lines,
with or without label prefixes and anchors. Keys are stored region lines or
marker fields (anchored or plain). Both sides are normalized and compared
exactly, so a region is found wherever its text now lives.

Nothing here mutates or keeps a reference to its inputs, and no-match is
reported through ``NOT_FOUND`` / ``BlockMatch.found``, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import NamedTuple

from gcode_regions.anchors import strip_anchor
from gcode_regions.normalize import normalize

LOG = logging.getLogger("regions.search")

NOT_FOUND = -1


class BlockMatch(NamedTuple):
    """Result of a multi-line search; the span is that of the first match."""

    found: bool
    start_index: int = NOT_FOUND
    end_index: int = NOT_FOUND
    match_count: int = 0


NO_MATCH = BlockMatch(False)


def normalize_key(key: str | None) -> str:
    """Normalize a stored key, dropping its anchor first if it has one."""
    if key is None:
        return ""
    return normalize(strip_anchor(key.strip()))


def matches_line(line: str | None, key: str | None) -> bool:
    return normalize(line) == normalize_key(key)


def resolve_window(count: int, range_start: int | None, range_end: int | None) -> tuple[int, int]:
    """
    Inclusive search window for a buffer of ``count`` lines.

    Any invalid range (missing, negative, reversed or past the end) means
    the whole buffer.
    """
    if (
        range_start is None
        or range_end is None
        or range_start < 0
        or range_end < 0
        or range_start >= count
        or range_end >= count
        or range_end < range_start
    ):
        return 0, count - 1
    return range_start, range_end


def find_single_line(
    buffer: Sequence[str],
    key: str | None,
    range_start: int | None = -1,
    range_end: int | None = -1,
    prefer_last: bool = False,
) -> int:
    """
    Index of the line matching ``key`` inside the window.

    Scans left to right and returns the first match, or with ``prefer_last``
    scans right to left and returns the last one.

    Returns:
        0-based buffer index, or NOT_FOUND
    """
    if not buffer:
        return NOT_FOUND

    needle = normalize_key(key)
    if not needle:
        return NOT_FOUND

    lo, hi = resolve_window(len(buffer), range_start, range_end)
    indices = range(hi, lo - 1, -1) if prefer_last else range(lo, hi + 1)

    for index in indices:
        if normalize(buffer[index]) == needle:
            return index

    return NOT_FOUND


def find_multi_line(
    buffer: Sequence[str],
    region_lines: Sequence[str],
    range_start: int | None = -1,
    range_end: int | None = -1,
) -> BlockMatch:
    """
    Locate a region's block of lines in the buffer.

    Every start offset in the window is tested, so ``match_count`` is the
    true number of occurrences; only the first occurrence's span is kept.

    Args:
        buffer: Raw editor lines
        region_lines: Stored anchored lines of the region, in order
        range_start: Inclusive window start (invalid -> whole buffer)
        range_end: Inclusive window end (invalid -> whole buffer)

    Returns:
        BlockMatch(found, start_index, end_index, match_count)
    """
    if not buffer or not region_lines or len(region_lines) > len(buffer):
        return NO_MATCH

    needle = [normalize_key(line) for line in region_lines]
    if not all(needle):
        LOG.debug("Region block has an empty line after normalization; unmatchable")
        return NO_MATCH

    size = len(needle)
    lo, hi = resolve_window(len(buffer), range_start, range_end)
    if hi - lo + 1 < size:
        return NO_MATCH

    haystack = [normalize(line) for line in buffer]

    start_index = end_index = NOT_FOUND
    match_count = 0
    for start in range(lo, hi - size + 2):
        if haystack[start : start + size] != needle:
            continue
        match_count += 1
        if match_count == 1:
            start_index = start
            end_index = start + size - 1

    return BlockMatch(match_count > 0, start_index, end_index, match_count)
