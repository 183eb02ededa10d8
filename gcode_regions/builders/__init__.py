"""
Region builders.

One shared engine (:mod:`gcode_regions.builders.engine`) configured per
region kind:

    - drill: one in-body marker, fresh uid on every rebuild
    - mill: five markers with raw fallback, uid kept in ``__RegionUid``
    - turn: four markers with raw fallback, uid parsed from the first line,
      plus create-or-update by name
"""

from __future__ import annotations

from gcode_regions.builders.drill import DRILL_LAYOUT, create_drill_region, edit_drill_region
from gcode_regions.builders.engine import AnchoredRegionBuilder, MarkerSpec, RegionLayout, UidPolicy
from gcode_regions.builders.mill import MILL_LAYOUT, create_mill_region, edit_mill_region
from gcode_regions.builders.turn import (
    TURN_LAYOUT,
    create_turn_region,
    edit_turn_region,
    find_region_by_name,
    upsert_turn_region,
)
from gcode_regions.models import RegionKind

LAYOUTS: dict[RegionKind, RegionLayout] = {
    RegionKind.DRILL: DRILL_LAYOUT,
    RegionKind.MILL: MILL_LAYOUT,
    RegionKind.TURN: TURN_LAYOUT,
}


def layout_for(kind: RegionKind) -> RegionLayout:
    return LAYOUTS[RegionKind(kind)]


__all__ = [
    # Engine
    "AnchoredRegionBuilder",
    "MarkerSpec",
    "RegionLayout",
    "UidPolicy",
    "LAYOUTS",
    "layout_for",
    # Drill
    "DRILL_LAYOUT",
    "create_drill_region",
    "edit_drill_region",
    # Mill
    "MILL_LAYOUT",
    "create_mill_region",
    "edit_mill_region",
    # Turn
    "TURN_LAYOUT",
    "create_turn_region",
    "edit_turn_region",
    "find_region_by_name",
    "upsert_turn_region",
]
