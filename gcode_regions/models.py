"""
Region records for captured machining operations.

A region is a named, ordered block of anchored lines plus a typed field
record for its kind. Fields keep their interchange keys as pydantic aliases
("DrillDepthLineText", "__RegionUid", ...), so the record can be read and
written either by attribute or by the key the surrounding tooling uses.

Keys that a kind does not know about land in ``Region.extra``.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from gcode_regions.anchors import extract_uid


class RegionKind(str, Enum):
    """Machining operation captured by a region."""

    DRILL = "drill"
    MILL = "mill"
    TURN = "turn"


class RegionResolveStatus(str, Enum):
    """Outcome of locating a region in the live buffer."""

    UNSET = "unset"
    OK = "ok"
    MISSING = "missing"
    AMBIGUOUS = "ambiguous"


class RegionFields(BaseModel):
    """Typed field record; every value is a string, empty when unset."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    @classmethod
    def key_map(cls) -> dict[str, str]:
        """Map interchange key -> attribute name."""
        return {(info.alias or name): name for name, info in cls.model_fields.items()}

    @classmethod
    def attribute_for(cls, key: str) -> str | None:
        """Attribute backing ``key`` (interchange key or attribute name)."""
        if key in cls.model_fields:
            return key
        return cls.key_map().get(key)


class DrillFields(RegionFields):
    drill_depth_line: str = Field("", alias="DrillDepthLineText")

    coord_mode: str = Field("", alias="CoordMode")
    chamfer: str = Field("", alias="TxtChamfer")
    hole_dia: str = Field("", alias="TxtHoleDia")
    point_angle: str = Field("", alias="TxtPointAngle")
    z_hole_top: str = Field("", alias="TxtZHoleTop")
    z_plus_ext: str = Field("", alias="TxtZPlusExt")


class MillFields(RegionFields):
    region_uid: str = Field("", alias="__RegionUid")

    plane_z_line: str = Field("", alias="PlaneZLineText")
    start_x_line: str = Field("", alias="StartXLineText")
    start_y_line: str = Field("", alias="StartYLineText")
    end_x_line: str = Field("", alias="EndXLineText")
    end_y_line: str = Field("", alias="EndYLineText")

    tool_dia: str = Field("", alias="TxtToolDia")
    tool_len: str = Field("", alias="TxtToolLen")
    fuse_all: str = Field("", alias="Fuseall")
    remove_splitter: str = Field("", alias="RemoveSplitter")
    clipper: str = Field("", alias="Clipper")
    clipper_island: str = Field("", alias="ClipperIsland")


class TurnFields(RegionFields):
    start_x_line: str = Field("", alias="__StartXLine")
    start_z_line: str = Field("", alias="__StartZLine")
    end_x_line: str = Field("", alias="__EndXLine")
    end_z_line: str = Field("", alias="__EndZLine")

    tool_usage: str = Field("", alias="__ToolUsage")
    quadrant: str = Field("", alias="__Quadrant")
    z_ext: str = Field("", alias="TxtZExt")
    nose_radius: str = Field("", alias="NRad")


class Region(BaseModel):
    """
    One captured machining operation.

    ``lines`` holds anchored lines (``#uid,n#PAYLOAD``), all from one build.
    ``resolved_start_line``/``resolved_end_line`` are 0-based buffer indices
    set by :func:`gcode_regions.resolve.resolve_region`.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    kind: RegionKind = Field(frozen=True)
    name: str = ""
    lines: list[str] = Field(default_factory=list)
    fields: RegionFields = Field(default_factory=RegionFields)
    extra: dict[str, str] = Field(default_factory=dict)

    status: RegionResolveStatus = RegionResolveStatus.UNSET
    resolved_start_line: int | None = None
    resolved_end_line: int | None = None

    show_in_view_all: bool = True
    export_enabled: bool = True

    def matches_name(self, name: str | None) -> bool:
        """Case-insensitive name comparison."""
        return self.name.casefold() == (name or "").casefold()

    def get_field(self, key: str, default: str = "") -> str:
        attribute = self.fields.attribute_for(key)
        if attribute is not None:
            return getattr(self.fields, attribute)
        return self.extra.get(key, default)

    def set_field(self, key: str, value: str | None) -> None:
        """Write one field by interchange key or attribute name; None writes ''."""
        value = "" if value is None else value
        attribute = self.fields.attribute_for(key)
        if attribute is not None:
            setattr(self.fields, attribute, value)
        else:
            self.extra[key] = value

    def field_values(self) -> dict[str, str]:
        """All fields under their interchange keys, typed fields winning."""
        values = dict(self.extra)
        values.update(self.fields.model_dump(by_alias=True))
        return values

    def first_line_uid(self) -> str | None:
        """Uid of the first non-blank stored line, if it parses."""
        for line in self.lines:
            if line and line.strip():
                return extract_uid(line)
        return None

    def clear_resolution(self, status: RegionResolveStatus = RegionResolveStatus.UNSET) -> None:
        self.status = status
        self.resolved_start_line = None
        self.resolved_end_line = None

    @property
    def status_text(self) -> str:
        if self.status == RegionResolveStatus.OK:
            if self.resolved_start_line is not None and self.resolved_end_line is not None:
                return f"OK (L{self.resolved_start_line + 1}..L{self.resolved_end_line + 1})"
            return "OK"
        return {
            RegionResolveStatus.UNSET: "Unset",
            RegionResolveStatus.MISSING: "Missing",
            RegionResolveStatus.AMBIGUOUS: "Ambiguous",
        }.get(self.status, "?")


class DrillRegion(Region):
    kind: Literal[RegionKind.DRILL] = Field(RegionKind.DRILL, frozen=True)
    fields: DrillFields = Field(default_factory=DrillFields)


class MillRegion(Region):
    kind: Literal[RegionKind.MILL] = Field(RegionKind.MILL, frozen=True)
    fields: MillFields = Field(default_factory=MillFields)


class TurnRegion(Region):
    kind: Literal[RegionKind.TURN] = Field(RegionKind.TURN, frozen=True)
    fields: TurnFields = Field(default_factory=TurnFields)
