"""
Generic anchored-region builder.

Drill, mill and turn regions are built and edited the same way; they only
differ in which marker and parameter fields they carry and in how a rebuild
keeps or replaces the region uid. Those differences live in a
:class:`RegionLayout`, and :class:`AnchoredRegionBuilder` does the rest.

Markers are fields that hold one anchored line, so the line can be found
again on its own. Parameters are opaque strings stored verbatim.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from gcode_regions.anchors import anchor_lines, encode_anchor, new_uid
from gcode_regions.errors import InvalidArgumentError
from gcode_regions.models import Region, RegionKind
from gcode_regions.normalize import normalize

LOG = logging.getLogger("regions.builders")


class UidPolicy(str, Enum):
    """Where an edit takes the uid for rebuilt lines from."""

    FRESH = "fresh"  # always mint
    STORED = "stored"  # layout.uid_field, minted and stored when blank
    FIRST_LINE = "first_line"  # uid of the current first non-blank line


@dataclass(frozen=True)
class MarkerSpec:
    """One marker field of a layout."""

    field: str
    allow_fallback: bool = False
    prefer_last: bool = False


@dataclass(frozen=True)
class RegionLayout:
    """Per-kind configuration of the shared builder."""

    kind: RegionKind
    region_cls: type[Region]
    markers: tuple[MarkerSpec, ...]
    parameters: tuple[str, ...]
    uid_policy: UidPolicy = UidPolicy.FRESH
    uid_field: str | None = None
    strict_markers: bool = False
    markers_in_span: bool = True  # locate markers inside the resolved span only

    def marker(self, field: str) -> MarkerSpec:
        for spec in self.markers:
            if spec.field == field:
                return spec
        raise InvalidArgumentError(f"Unknown marker {field!r} for {self.kind.value} regions")

    def check_parameters(self, names: Iterable[str]) -> None:
        unknown = sorted(set(names) - set(self.parameters))
        if unknown:
            raise InvalidArgumentError(f"Unknown parameters for {self.kind.value} regions: {unknown}")


def _present(values: Mapping | None) -> dict:
    """Drop entries whose value is None ("leave unchanged")."""
    return {key: value for key, value in (values or {}).items() if value is not None}


class AnchoredRegionBuilder:
    """
    Creates and edits regions of one kind.

    Args:
        layout: Kind-specific marker/parameter table and uid policy
        uid_source: Callable returning fresh uids (defaults to new_uid)
    """

    def __init__(self, layout: RegionLayout, uid_source: Callable[[], str] | None = None) -> None:
        self.layout = layout
        self._uid_source = uid_source or new_uid

    def create(
        self,
        name: str | None,
        raw_lines: Sequence[str] | None,
        marker_indices: Mapping[str, int | None] | None = None,
        parameters: Mapping[str, str | None] | None = None,
        marker_lines: Mapping[str, str | None] | None = None,
        defaults: Mapping[str, str | None] | None = None,
    ) -> Region:
        """
        Build a new region under a freshly minted uid.

        Marker indices are 0-based into ``raw_lines``; a missing or invalid
        index stores the normalized fallback line where the marker allows one,
        else an empty string. Defaults are written first so kind values win.

        Raises:
            InvalidArgumentError: If raw_lines is None or a name is unknown
        """
        if raw_lines is None:
            raise InvalidArgumentError("raw_lines is required")

        marker_indices = dict(marker_indices or {})
        marker_lines = _present(marker_lines)
        parameters = dict(parameters or {})
        for field in (*marker_indices, *marker_lines):
            self.layout.marker(field)
        self.layout.check_parameters(parameters)

        uid = self._mint()
        region = self.layout.region_cls(name=name or "", lines=anchor_lines(uid, raw_lines))

        self._apply_defaults(region, defaults)

        if self.layout.uid_field:
            setattr(region.fields, self.layout.uid_field, uid)

        for spec in self.layout.markers:
            index = marker_indices.get(spec.field)
            fallback = marker_lines.get(spec.field) if spec.allow_fallback else None
            value = self._marker_value(region, -1 if index is None else index, fallback, anchor_uid=None)
            setattr(region.fields, spec.field, value)

        for field in self.layout.parameters:
            value = parameters.get(field)
            setattr(region.fields, field, "" if value is None else value)

        LOG.debug(
            "Created %s region %r: %d lines, uid %s",
            self.layout.kind.value,
            region.name,
            len(region.lines),
            uid,
        )
        return region

    def edit_existing(
        self,
        region: Region | None,
        raw_lines: Sequence[str] | None = None,
        marker_indices: Mapping[str, int | None] | None = None,
        marker_lines: Mapping[str, str | None] | None = None,
        parameters: Mapping[str, str | None] | None = None,
        defaults: Mapping[str, str | None] | None = None,
    ) -> Region:
        """
        Edit a region in place. Every None argument leaves its state alone.

        Order: defaults, line rebuild, supplied markers, supplied parameters.
        A marker is recomputed when its index or its fallback line is given.

        Raises:
            InvalidArgumentError: If region is None or not of this kind, or a name is unknown
        """
        if region is None:
            raise InvalidArgumentError("region is required")

        if region.kind != self.layout.kind:
            raise InvalidArgumentError(
                f"Cannot edit a {region.kind.value} region as a {self.layout.kind.value} region"
            )

        marker_indices = _present(marker_indices)
        marker_lines = _present(marker_lines)
        parameters = _present(parameters)
        for field in (*marker_indices, *marker_lines):
            self.layout.marker(field)
        self.layout.check_parameters(parameters)

        self._apply_defaults(region, defaults)

        touched = set(marker_indices) | set(marker_lines)
        uid: str | None = None
        if (
            raw_lines is not None
            or (touched and self.layout.uid_policy is UidPolicy.STORED)
            or self._anchors_fallback(region, marker_indices, marker_lines)
        ):
            uid = self._identity(region)

        if raw_lines is not None:
            region.lines = anchor_lines(uid, raw_lines)
            LOG.debug(
                "Rebuilt %s region %r: %d lines, uid %s",
                self.layout.kind.value,
                region.name,
                len(region.lines),
                uid,
            )

        for spec in self.layout.markers:
            if spec.field not in touched:
                continue
            index = marker_indices.get(spec.field, -1)
            fallback = marker_lines.get(spec.field) if spec.allow_fallback else None
            setattr(region.fields, spec.field, self._marker_value(region, index, fallback, anchor_uid=uid))

        for field, value in parameters.items():
            setattr(region.fields, field, value)

        return region

    # -------------------- helpers --------------------

    def _mint(self) -> str:
        return self._uid_source()

    def _identity(self, region: Region) -> str:
        """Uid for lines built by an edit, following the layout's policy."""
        policy = self.layout.uid_policy

        if policy is UidPolicy.STORED and self.layout.uid_field:
            uid = getattr(region.fields, self.layout.uid_field).strip()
            if not uid:
                uid = self._mint()
                LOG.debug("Minted uid %s for %s region %r", uid, self.layout.kind.value, region.name)
            setattr(region.fields, self.layout.uid_field, uid)
            return uid

        if policy is UidPolicy.FIRST_LINE:
            uid = region.first_line_uid()
            if uid:
                return uid
            uid = self._mint()
            LOG.debug("No anchored first line in %s region %r; minted %s", self.layout.kind.value, region.name, uid)
            return uid

        return self._mint()

    @staticmethod
    def _apply_defaults(region: Region, defaults: Mapping[str, str | None] | None) -> None:
        for key, value in (defaults or {}).items():
            region.set_field(key, value)

    @staticmethod
    def _in_body(region: Region, index: int) -> bool:
        return 0 <= index < len(region.lines)

    def _anchors_fallback(
        self,
        region: Region,
        marker_indices: Mapping[str, int],
        marker_lines: Mapping[str, str],
    ) -> bool:
        """True when some supplied fallback line will be stored past the body."""
        for spec in self.layout.markers:
            if not spec.allow_fallback or spec.field not in marker_lines:
                continue
            if not self._in_body(region, marker_indices.get(spec.field, -1)):
                return True
        return False

    def _marker_value(self, region: Region, index: int, fallback: str | None, anchor_uid: str | None) -> str:
        """
        Stored value for one marker.

        The region's own line wins; then the fallback line, anchored with
        ``anchor_uid`` just past the body when a uid is given, plain
        otherwise; else an empty string.
        """
        if self._in_body(region, index):
            return region.lines[index]

        payload = normalize(fallback)
        if not payload:
            return ""
        if anchor_uid is None:
            return payload
        return encode_anchor(anchor_uid, len(region.lines) + 1, payload)
