"""
Resolve captured regions against the live buffer.

Resolution runs the block search for a region and records the outcome on
the region itself (status plus 0-based span), then finds each marker line
inside that span.

Status rules:
    - no stored lines                 -> UNSET
    - block not found                 -> MISSING
    - block found more than once      -> AMBIGUOUS
    - block found exactly once        -> OK

Kinds with strict markers (drill) also require every stored marker to occur
exactly once inside the matched block.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from gcode_regions.builders import layout_for
from gcode_regions.models import Region, RegionResolveStatus
from gcode_regions.search import NOT_FOUND, find_multi_line, find_single_line, matches_line, resolve_window

LOG = logging.getLogger("regions.resolve")


def find_unique_line(
    buffer: Sequence[str],
    key: str | None,
    range_start: int | None = -1,
    range_end: int | None = -1,
) -> tuple[int, RegionResolveStatus]:
    """
    Find ``key`` and require it to occur exactly once in the window.

    Returns:
        (index, OK) for a single match, else (NOT_FOUND, MISSING|AMBIGUOUS)
    """
    if not buffer:
        return NOT_FOUND, RegionResolveStatus.MISSING

    lo, hi = resolve_window(len(buffer), range_start, range_end)
    hits = [index for index in range(lo, hi + 1) if matches_line(buffer[index], key)]

    if not hits:
        return NOT_FOUND, RegionResolveStatus.MISSING
    if len(hits) > 1:
        return NOT_FOUND, RegionResolveStatus.AMBIGUOUS
    return hits[0], RegionResolveStatus.OK


def resolve_region(region: Region, buffer: Sequence[str]) -> RegionResolveStatus:
    """Locate ``region`` in ``buffer`` and store status and span on it."""
    if not region.lines:
        region.clear_resolution(RegionResolveStatus.UNSET)
        return region.status

    match = find_multi_line(buffer, region.lines)

    if not match.found:
        region.clear_resolution(RegionResolveStatus.MISSING)
        LOG.info("Region %r not found in buffer", region.name)
        return region.status

    if match.match_count > 1:
        region.clear_resolution(RegionResolveStatus.AMBIGUOUS)
        LOG.info("Region %r matches %d places in buffer", region.name, match.match_count)
        return region.status

    layout = layout_for(region.kind)
    if layout.strict_markers:
        keys = [getattr(region.fields, spec.field) for spec in layout.markers]

        if not all(key.strip() for key in keys):
            region.status = RegionResolveStatus.UNSET
            region.resolved_start_line = match.start_index
            region.resolved_end_line = match.end_index
            LOG.info("Region %r found but has unset markers", region.name)
            return region.status

        for key in keys:
            _, status = find_unique_line(buffer, key, match.start_index, match.end_index)
            if status != RegionResolveStatus.OK:
                region.clear_resolution(status)
                LOG.info("Region %r marker %r is %s", region.name, key, status.value)
                return region.status

    region.status = RegionResolveStatus.OK
    region.resolved_start_line = match.start_index
    region.resolved_end_line = match.end_index
    LOG.debug("Region %r resolved to %s", region.name, region.status_text)
    return region.status


def locate_markers(region: Region, buffer: Sequence[str]) -> dict[str, int]:
    """
    Buffer index of every marker of ``region``, NOT_FOUND where absent.

    The search is confined to the resolved span when the region is OK and
    its layout keeps markers in the span, and covers the whole buffer
    otherwise. Mill markers are always
    searched in the whole buffer. End markers of turn
    regions take the last occurrence.
    """
    layout = layout_for(region.kind)
    if (
        layout.markers_in_span
        and region.status == RegionResolveStatus.OK
        and region.resolved_start_line is not None
    ):
        range_start = region.resolved_start_line
        range_end = region.resolved_end_line if region.resolved_end_line is not None else -1
    else:
        range_start = range_end = -1

    located: dict[str, int] = {}
    for spec in layout.markers:
        key = getattr(region.fields, spec.field)
        if not key:
            located[spec.field] = NOT_FOUND
            continue
        located[spec.field] = find_single_line(buffer, key, range_start, range_end, prefer_last=spec.prefer_last)

    return located
