"""Tests for turn region building, editing and create-or-update by name."""

import pytest

from gcode_regions.anchors import extract_uid
from gcode_regions.builders import (
    create_drill_region,
    create_turn_region,
    edit_turn_region,
    find_region_by_name,
    upsert_turn_region,
)
from gcode_regions.errors import InvalidArgumentError
from gcode_regions.models import TurnRegion
from gcode_regions.search import normalize_key


def _make(lines, name="OD Finish", **overrides):
    args = dict(
        start_x_index=0,
        start_z_index=0,
        end_x_index=len(lines) - 1,
        end_z_index=len(lines) - 1,
        tool_usage="ON",
        quadrant="3",
        z_ext="-1",
        nose_radius="0.8",
    )
    args.update(overrides)
    return create_turn_region(name, lines, **args)


class TestCreateTurn:
    def test_create(self, profile_lines):
        region = _make(profile_lines)

        assert isinstance(region, TurnRegion)
        uid = extract_uid(region.lines[0])
        assert [extract_uid(line) for line in region.lines] == [uid] * 3
        assert region.fields.start_x_line == region.lines[0]
        assert region.fields.end_z_line == region.lines[2]

    def test_parameters_under_interchange_keys(self, profile_lines):
        values = _make(profile_lines).field_values()
        assert values["__ToolUsage"] == "ON"
        assert values["__Quadrant"] == "3"
        assert values["TxtZExt"] == "-1"
        assert values["NRad"] == "0.8"

    def test_turn_has_no_stored_uid_field(self, profile_lines):
        assert "__RegionUid" not in _make(profile_lines).field_values()

    def test_fallback_plain_normalized(self, profile_lines):
        region = _make(profile_lines, start_x_index=-1, start_x_line="g0 x52 z2")
        assert region.fields.start_x_line == "G0X52Z2"


class TestEditTurn:
    def test_no_arguments_is_noop(self, profile_lines):
        region = _make(profile_lines)
        before = region.model_dump()
        edit_turn_region(region)
        assert region.model_dump() == before

    def test_rebuild_preserves_first_line_uid(self, profile_lines):
        region = _make(profile_lines)
        uid = extract_uid(region.lines[0])

        edit_turn_region(region, raw_lines=["G1 X38 Z0", "G1 X38 Z-25"])

        assert region.lines == [f"#{uid},1#G1X38Z0", f"#{uid},2#G1X38Z-25"]

    def test_blank_first_line_skipped(self, profile_lines):
        region = _make(profile_lines)
        uid = extract_uid(region.lines[0])
        region.lines = ["   ", *region.lines]

        edit_turn_region(region, raw_lines=["G1 X1"])

        assert extract_uid(region.lines[0]) == uid

    def test_unparseable_first_line_mints(self):
        region = TurnRegion(name="imported", lines=["G1 X1", "G1 X2"])
        edit_turn_region(region, raw_lines=["G1 X3"])
        uid = extract_uid(region.lines[0])
        assert uid
        assert region.lines == [f"#{uid},1#G1X3"]

    def test_fallback_encoded_with_first_line_uid(self, profile_lines):
        region = _make(profile_lines)
        uid = extract_uid(region.lines[0])

        edit_turn_region(region, end_x_index=-1, end_x_line="G0 X100")

        assert region.fields.end_x_line == f"#{uid},4#G0X100"

    def test_marker_index_only(self, profile_lines):
        region = _make(profile_lines)
        edit_turn_region(region, start_z_index=1)
        assert region.fields.start_z_line == region.lines[1]
        assert region.fields.start_x_line == region.lines[0]

    def test_parameters_and_defaults(self, profile_lines):
        region = _make(profile_lines)
        edit_turn_region(region, quadrant="2", defaults={"__Quadrant": "8", "Note": "x"})
        assert region.fields.quadrant == "2"
        assert region.extra["Note"] == "x"
        assert region.fields.tool_usage == "ON"


class TestUpsertTurn:
    def test_creates_and_appends(self, profile_lines):
        regions = []
        region = upsert_turn_region(regions, "Face", raw_lines=profile_lines, start_x_index=0, tool_usage="OFF")

        assert regions == [region]
        assert region.name == "Face"
        assert region.fields.start_x_line == region.lines[0]
        assert region.fields.end_x_line == ""
        assert region.fields.tool_usage == "OFF"
        assert region.fields.quadrant == ""

    def test_creates_empty_region_when_nothing_given(self):
        regions = []
        region = upsert_turn_region(regions, "Blank")
        assert region.lines == []
        assert region.field_values()["__StartXLine"] == ""

    def test_edits_existing_case_insensitively(self, profile_lines):
        regions = []
        first = upsert_turn_region(regions, "OD Rough", raw_lines=profile_lines)
        uid = extract_uid(first.lines[0])

        again = upsert_turn_region(regions, "od rough", raw_lines=["G1 X45 Z-5"], nose_radius="0.4")

        assert again is first
        assert len(regions) == 1
        assert first.lines == [f"#{uid},1#G1X45Z-5"]
        assert first.fields.nose_radius == "0.4"
        assert first.name == "OD Rough"

    def test_first_match_wins(self, profile_lines):
        a = _make(profile_lines, name="Dup")
        b = _make(profile_lines, name="DUP")
        regions = [None, a, b]

        assert upsert_turn_region(regions, "dup", z_ext="5") is a
        assert a.fields.z_ext == "5"
        assert b.fields.z_ext == "-1"

    def test_none_collection_raises(self):
        with pytest.raises(InvalidArgumentError, match="regions"):
            upsert_turn_region(None, "x")

    def test_find_region_by_name(self, profile_lines):
        drill = create_drill_region("Mixed", ["G81 Z-5"], 0, "", "", "", "", "", "")
        assert find_region_by_name([drill], "MIXED") is drill
        assert find_region_by_name([drill], "other") is None

    def test_fallback_through_upsert(self, profile_lines):
        regions = []
        region = upsert_turn_region(regions, "F", raw_lines=profile_lines, start_x_line="g0 x60")
        assert normalize_key(region.fields.start_x_line) == "G0X60"

    def test_skips_regions_of_other_kinds(self, profile_lines):
        drill = create_drill_region("Op", ["G81 Z-5"], 0, "", "", "", "", "", "")
        before = drill.model_dump()
        regions = [drill]

        region = upsert_turn_region(regions, "op", raw_lines=["G1 X1"], z_ext="5")

        assert isinstance(region, TurnRegion)
        assert regions == [drill, region]
        assert region.fields.z_ext == "5"
        assert drill.model_dump() == before

    def test_edit_rejects_other_kind_before_mutation(self):
        drill = create_drill_region("Op", ["G81 Z-5"], 0, "", "", "", "", "", "")
        before = drill.model_dump()

        with pytest.raises(InvalidArgumentError, match="drill region as a turn region"):
            edit_turn_region(drill, raw_lines=["G1 X1"], z_ext="5")

        assert drill.model_dump() == before
