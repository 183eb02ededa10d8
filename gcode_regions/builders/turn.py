"""
Turn region builder.

Turn regions carry no stored uid; an edit that rebuilds the lines reuses the
uid parsed from the current first line. :func:`upsert_turn_region` is the
one entry point that looks regions up by name.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, MutableSequence, Sequence

from gcode_regions.builders.engine import AnchoredRegionBuilder, MarkerSpec, RegionLayout, UidPolicy
from gcode_regions.errors import InvalidArgumentError
from gcode_regions.models import Region, RegionKind, TurnRegion

LOG = logging.getLogger("regions.builders.turn")

TURN_LAYOUT = RegionLayout(
    kind=RegionKind.TURN,
    region_cls=TurnRegion,
    markers=(
        MarkerSpec("start_x_line", allow_fallback=True),
        MarkerSpec("start_z_line", allow_fallback=True),
        # identical start/end text resolves to the last occurrence for ends
        MarkerSpec("end_x_line", allow_fallback=True, prefer_last=True),
        MarkerSpec("end_z_line", allow_fallback=True, prefer_last=True),
    ),
    parameters=("tool_usage", "quadrant", "z_ext", "nose_radius"),
    uid_policy=UidPolicy.FIRST_LINE,
)

TURN_BUILDER = AnchoredRegionBuilder(TURN_LAYOUT)


def find_region_by_name(regions: Iterable[Region | None], name: str | None) -> Region | None:
    """First region whose name matches case-insensitively, in collection order."""
    for region in regions:
        if region is not None and region.matches_name(name):
            return region
    return None


def create_turn_region(
    name: str,
    raw_lines: Sequence[str],
    start_x_index: int,
    start_z_index: int,
    end_x_index: int,
    end_z_index: int,
    tool_usage: str,
    quadrant: str,
    z_ext: str,
    nose_radius: str,
    *,
    start_x_line: str | None = None,
    start_z_line: str | None = None,
    end_x_line: str | None = None,
    end_z_line: str | None = None,
    defaults: Mapping[str, str] | None = None,
) -> TurnRegion:
    """Capture a turn region; indices are 0-based into ``raw_lines``."""
    return TURN_BUILDER.create(
        name,
        raw_lines,
        marker_indices={
            "start_x_line": start_x_index,
            "start_z_line": start_z_index,
            "end_x_line": end_x_index,
            "end_z_line": end_z_index,
        },
        parameters={
            "tool_usage": tool_usage,
            "quadrant": quadrant,
            "z_ext": z_ext,
            "nose_radius": nose_radius,
        },
        marker_lines={
            "start_x_line": start_x_line,
            "start_z_line": start_z_line,
            "end_x_line": end_x_line,
            "end_z_line": end_z_line,
        },
        defaults=defaults,
    )


def edit_turn_region(
    region: TurnRegion,
    raw_lines: Sequence[str] | None = None,
    start_x_index: int | None = None,
    start_z_index: int | None = None,
    end_x_index: int | None = None,
    end_z_index: int | None = None,
    tool_usage: str | None = None,
    quadrant: str | None = None,
    z_ext: str | None = None,
    nose_radius: str | None = None,
    *,
    start_x_line: str | None = None,
    start_z_line: str | None = None,
    end_x_line: str | None = None,
    end_z_line: str | None = None,
    defaults: Mapping[str, str] | None = None,
) -> TurnRegion:
    """Edit a turn region in place, preserving its uid where it parses."""
    return TURN_BUILDER.edit_existing(
        region,
        raw_lines=raw_lines,
        marker_indices={
            "start_x_line": start_x_index,
            "start_z_line": start_z_index,
            "end_x_line": end_x_index,
            "end_z_line": end_z_index,
        },
        marker_lines={
            "start_x_line": start_x_line,
            "start_z_line": start_z_line,
            "end_x_line": end_x_line,
            "end_z_line": end_z_line,
        },
        parameters={
            "tool_usage": tool_usage,
            "quadrant": quadrant,
            "z_ext": z_ext,
            "nose_radius": nose_radius,
        },
        defaults=defaults,
    )


def upsert_turn_region(
    regions: MutableSequence[Region],
    name: str | None,
    raw_lines: Sequence[str] | None = None,
    start_x_index: int | None = None,
    start_z_index: int | None = None,
    end_x_index: int | None = None,
    end_z_index: int | None = None,
    tool_usage: str | None = None,
    quadrant: str | None = None,
    z_ext: str | None = None,
    nose_radius: str | None = None,
    *,
    start_x_line: str | None = None,
    start_z_line: str | None = None,
    end_x_line: str | None = None,
    end_z_line: str | None = None,
    defaults: Mapping[str, str] | None = None,
) -> TurnRegion:
    """
    Create-or-update a turn region by name.

    An existing turn region (case-insensitive name, first in collection
    order) is edited in place; regions of other kinds are skipped.
    Otherwise a new region is created, with absent indices as -1 and
    absent strings as "", and appended to ``regions``.

    Raises:
        InvalidArgumentError: If regions is None
    """
    if regions is None:
        raise InvalidArgumentError("regions is required")

    name = name or ""
    existing = find_region_by_name((region for region in regions if isinstance(region, TurnRegion)), name)

    if existing is None:
        created = create_turn_region(
            name,
            raw_lines if raw_lines is not None else [],
            start_x_index if start_x_index is not None else -1,
            start_z_index if start_z_index is not None else -1,
            end_x_index if end_x_index is not None else -1,
            end_z_index if end_z_index is not None else -1,
            tool_usage or "",
            quadrant or "",
            z_ext or "",
            nose_radius or "",
            start_x_line=start_x_line,
            start_z_line=start_z_line,
            end_x_line=end_x_line,
            end_z_line=end_z_line,
            defaults=defaults,
        )
        regions.append(created)
        LOG.info("Added turn region %r", name)
        return created

    return edit_turn_region(
        existing,
        raw_lines,
        start_x_index,
        start_z_index,
        end_x_index,
        end_z_index,
        tool_usage,
        quadrant,
        z_ext,
        nose_radius,
        start_x_line=start_x_line,
        start_z_line=start_z_line,
        end_x_line=end_x_line,
        end_z_line=end_z_line,
        defaults=defaults,
    )
