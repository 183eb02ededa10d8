"""
gcode-regions: content-anchored regions for machining program text.

A region captures lines of a G-code buffer (a drill, mill or turn
operation). Each stored line carries an anchor ``#uid,n#`` binding it to
one build of the region and to its 1-based position. Regions and their
marker lines are found again by exact match of normalized text, so they
survive edits elsewhere in the buffer.

Usage:
    from gcode_regions import create_turn_region, resolve_region

    region = create_turn_region("OD rough", lines, 0, 0, 5, 5, "ON", "3", "", "0.8")
    resolve_region(region, editor_lines)
"""

from __future__ import annotations

from gcode_regions.anchors import encode_anchor, extract_uid, new_uid, strip_anchor
from gcode_regions.builders import (
    AnchoredRegionBuilder,
    MarkerSpec,
    RegionLayout,
    UidPolicy,
    create_drill_region,
    create_mill_region,
    create_turn_region,
    edit_drill_region,
    edit_mill_region,
    edit_turn_region,
    find_region_by_name,
    layout_for,
    upsert_turn_region,
)
from gcode_regions.errors import InvalidArgumentError
from gcode_regions.models import (
    DrillFields,
    DrillRegion,
    MillFields,
    MillRegion,
    Region,
    RegionFields,
    RegionKind,
    RegionResolveStatus,
    TurnFields,
    TurnRegion,
)
from gcode_regions.normalize import normalize
from gcode_regions.resolve import find_unique_line, locate_markers, resolve_region
from gcode_regions.search import (
    NOT_FOUND,
    BlockMatch,
    find_multi_line,
    find_single_line,
    matches_line,
    normalize_key,
)

__all__ = [
    # Normalizer / codec
    "normalize",
    "encode_anchor",
    "strip_anchor",
    "extract_uid",
    "new_uid",
    "InvalidArgumentError",
    # Models
    "Region",
    "RegionFields",
    "RegionKind",
    "RegionResolveStatus",
    "DrillFields",
    "DrillRegion",
    "MillFields",
    "MillRegion",
    "TurnFields",
    "TurnRegion",
    # Builders
    "AnchoredRegionBuilder",
    "MarkerSpec",
    "RegionLayout",
    "UidPolicy",
    "layout_for",
    "create_drill_region",
    "edit_drill_region",
    "create_mill_region",
    "edit_mill_region",
    "create_turn_region",
    "edit_turn_region",
    "find_region_by_name",
    "upsert_turn_region",
    # Search
    "NOT_FOUND",
    "BlockMatch",
    "normalize_key",
    "matches_line",
    "find_single_line",
    "find_multi_line",
    # Resolution
    "find_unique_line",
    "resolve_region",
    "locate_markers",
]
