"""
Drill region builder.

A drill region tracks one marker, the drill-depth line, which must be one of
the region's own lines. Every rebuild of the lines mints a new uid.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from gcode_regions.builders.engine import AnchoredRegionBuilder, MarkerSpec, RegionLayout, UidPolicy
from gcode_regions.models import DrillRegion, RegionKind

DRILL_LAYOUT = RegionLayout(
    kind=RegionKind.DRILL,
    region_cls=DrillRegion,
    markers=(MarkerSpec("drill_depth_line"),),
    parameters=("coord_mode", "chamfer", "hole_dia", "point_angle", "z_hole_top", "z_plus_ext"),
    uid_policy=UidPolicy.FRESH,
    strict_markers=True,
)

DRILL_BUILDER = AnchoredRegionBuilder(DRILL_LAYOUT)


def create_drill_region(
    name: str,
    raw_lines: Sequence[str],
    drill_depth_index: int,
    coord_mode: str,
    chamfer: str,
    hole_dia: str,
    point_angle: str,
    z_hole_top: str,
    z_plus_ext: str,
    defaults: Mapping[str, str] | None = None,
) -> DrillRegion:
    """Capture a drill region; ``drill_depth_index`` is 0-based into raw_lines."""
    return DRILL_BUILDER.create(
        name,
        raw_lines,
        marker_indices={"drill_depth_line": drill_depth_index},
        parameters={
            "coord_mode": coord_mode,
            "chamfer": chamfer,
            "hole_dia": hole_dia,
            "point_angle": point_angle,
            "z_hole_top": z_hole_top,
            "z_plus_ext": z_plus_ext,
        },
        defaults=defaults,
    )


def edit_drill_region(
    region: DrillRegion,
    raw_lines: Sequence[str] | None = None,
    drill_depth_index: int | None = None,
    coord_mode: str | None = None,
    chamfer: str | None = None,
    hole_dia: str | None = None,
    point_angle: str | None = None,
    z_hole_top: str | None = None,
    z_plus_ext: str | None = None,
    defaults: Mapping[str, str] | None = None,
) -> DrillRegion:
    """Edit a drill region in place; pass None for anything to keep."""
    return DRILL_BUILDER.edit_existing(
        region,
        raw_lines=raw_lines,
        marker_indices={"drill_depth_line": drill_depth_index},
        parameters={
            "coord_mode": coord_mode,
            "chamfer": chamfer,
            "hole_dia": hole_dia,
            "point_angle": point_angle,
            "z_hole_top": z_hole_top,
            "z_plus_ext": z_plus_ext,
        },
        defaults=defaults,
    )
