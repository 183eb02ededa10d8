"""
Mill region builder.

Mill regions keep their uid in the reserved ``__RegionUid`` field, so the
uid survives any number of line rebuilds. The five geometry markers may
point outside the region body through a raw fallback line.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from gcode_regions.builders.engine import AnchoredRegionBuilder, MarkerSpec, RegionLayout, UidPolicy
from gcode_regions.models import MillRegion, RegionKind

MILL_MARKERS = ("plane_z_line", "start_x_line", "start_y_line", "end_x_line", "end_y_line")

MILL_LAYOUT = RegionLayout(
    kind=RegionKind.MILL,
    region_cls=MillRegion,
    markers=tuple(MarkerSpec(field, allow_fallback=True) for field in MILL_MARKERS),
    parameters=("tool_dia", "tool_len", "fuse_all", "remove_splitter", "clipper", "clipper_island"),
    uid_policy=UidPolicy.STORED,
    uid_field="region_uid",
    markers_in_span=False,
)

MILL_BUILDER = AnchoredRegionBuilder(MILL_LAYOUT)


def create_mill_region(
    name: str,
    raw_lines: Sequence[str],
    plane_z_index: int,
    start_x_index: int,
    start_y_index: int,
    end_x_index: int,
    end_y_index: int,
    tool_dia: str,
    tool_len: str,
    fuse_all: str,
    remove_splitter: str,
    clipper: str,
    clipper_island: str,
    *,
    plane_z_line: str | None = None,
    start_x_line: str | None = None,
    start_y_line: str | None = None,
    end_x_line: str | None = None,
    end_y_line: str | None = None,
    defaults: Mapping[str, str] | None = None,
) -> MillRegion:
    """
    Capture a mill region.

    Indices are 0-based into ``raw_lines``. The keyword ``*_line`` arguments
    are raw lines used for a marker whose index does not fall in the region.
    """
    return MILL_BUILDER.create(
        name,
        raw_lines,
        marker_indices={
            "plane_z_line": plane_z_index,
            "start_x_line": start_x_index,
            "start_y_line": start_y_index,
            "end_x_line": end_x_index,
            "end_y_line": end_y_index,
        },
        parameters={
            "tool_dia": tool_dia,
            "tool_len": tool_len,
            "fuse_all": fuse_all,
            "remove_splitter": remove_splitter,
            "clipper": clipper,
            "clipper_island": clipper_island,
        },
        marker_lines={
            "plane_z_line": plane_z_line,
            "start_x_line": start_x_line,
            "start_y_line": start_y_line,
            "end_x_line": end_x_line,
            "end_y_line": end_y_line,
        },
        defaults=defaults,
    )


def edit_mill_region(
    region: MillRegion,
    raw_lines: Sequence[str] | None = None,
    plane_z_index: int | None = None,
    start_x_index: int | None = None,
    start_y_index: int | None = None,
    end_x_index: int | None = None,
    end_y_index: int | None = None,
    tool_dia: str | None = None,
    tool_len: str | None = None,
    fuse_all: str | None = None,
    remove_splitter: str | None = None,
    clipper: str | None = None,
    clipper_island: str | None = None,
    *,
    plane_z_line: str | None = None,
    start_x_line: str | None = None,
    start_y_line: str | None = None,
    end_x_line: str | None = None,
    end_y_line: str | None = None,
    defaults: Mapping[str, str] | None = None,
) -> MillRegion:
    """Edit a mill region in place, keeping its stored uid."""
    return MILL_BUILDER.edit_existing(
        region,
        raw_lines=raw_lines,
        marker_indices={
            "plane_z_line": plane_z_index,
            "start_x_line": start_x_index,
            "start_y_line": start_y_index,
            "end_x_line": end_x_index,
            "end_y_line": end_y_index,
        },
        marker_lines={
            "plane_z_line": plane_z_line,
            "start_x_line": start_x_line,
            "start_y_line": start_y_line,
            "end_x_line": end_x_line,
            "end_y_line": end_y_line,
        },
        parameters={
            "tool_dia": tool_dia,
            "tool_len": tool_len,
            "fuse_all": fuse_all,
            "remove_splitter": remove_splitter,
            "clipper": clipper,
            "clipper_island": clipper_island,
        },
        defaults=defaults,
    )
