"""Tests for the search engine: single-line and block matching."""

import pytest

from gcode_regions.anchors import encode_anchor
from gcode_regions.normalize import normalize
from gcode_regions.search import (
    NOT_FOUND,
    BlockMatch,
    find_multi_line,
    find_single_line,
    matches_line,
    normalize_key,
    resolve_window,
)


class TestKeys:
    def test_normalize_key_anchored_and_plain(self):
        assert normalize_key("#u,1#G0X1") == "G0X1"
        assert normalize_key("g0 x1") == "G0X1"
        assert normalize_key(None) == ""

    def test_normalize_key_leading_whitespace(self):
        assert normalize_key("  #u,1#g0 x1") == "G0X1"

    def test_matches_line(self):
        assert matches_line("10: g0 x1", "#u,3#G0X1")
        assert not matches_line("g0 x2", "#u,3#G0X1")

    @pytest.mark.parametrize("line", ["G0 X1", "n10 g1 x2 f100", "12: T0101", "(comment)"])
    def test_matches_own_anchored_form(self, line):
        assert matches_line(line, encode_anchor("U", 5, normalize(line)))


class TestResolveWindow:
    @pytest.mark.parametrize(
        "start,end",
        [(-1, -1), (-1, 3), (2, -1), (4, 1), (0, 10), (10, 12), (None, None), (None, 2)],
    )
    def test_invalid_range_is_whole_buffer(self, start, end):
        assert resolve_window(6, start, end) == (0, 5)

    def test_valid_range_kept(self):
        assert resolve_window(6, 1, 4) == (1, 4)
        assert resolve_window(6, 3, 3) == (3, 3)


class TestFindSingleLine:
    def test_first_and_last(self):
        buffer = ["A", "B", "A"]
        assert find_single_line(buffer, "A", -1, -1, False) == 0
        assert find_single_line(buffer, "A", -1, -1, True) == 2

    def test_not_found(self):
        assert find_single_line(["A", "B", "A"], "Z", -1, -1, False) == NOT_FOUND

    def test_empty_key_not_found(self):
        assert find_single_line(["A", ""], "", -1, -1, False) == NOT_FOUND
        assert find_single_line(["A", ""], "#u,1#", -1, -1, False) == NOT_FOUND

    def test_empty_buffer(self):
        assert find_single_line([], "A") == NOT_FOUND

    def test_anchored_key_against_raw_buffer(self):
        buffer = ["1: g0 x0", "2: g1 x5 f100", "3: m30"]
        assert find_single_line(buffer, "#abc,2#G1X5F100") == 1

    def test_range_restricts_search(self):
        buffer = ["A", "B", "A", "B", "A"]
        assert find_single_line(buffer, "A", 1, 3, False) == 2
        assert find_single_line(buffer, "A", 1, 3, True) == 2
        assert find_single_line(buffer, "B", 2, 2, False) == NOT_FOUND

    @pytest.mark.parametrize("start,end", [(-5, 2), (3, 1), (0, 99), (99, 100)])
    def test_invalid_range_same_as_unrestricted(self, start, end):
        buffer = ["X", "A", "Y", "A"]
        for prefer_last in (False, True):
            assert find_single_line(buffer, "A", start, end, prefer_last) == find_single_line(
                buffer, "A", -1, -1, prefer_last
            )

    def test_does_not_mutate_buffer(self):
        buffer = ["1: g0 x1", "g1 y2"]
        snapshot = list(buffer)
        find_single_line(buffer, "G1Y2", prefer_last=True)
        assert buffer == snapshot


class TestFindMultiLine:
    def test_counts_all_occurrences_keeps_first_span(self):
        result = find_multi_line(["X", "A", "B", "Y", "A", "B"], ["#u,1#A", "#u,2#B"], -1, -1)
        assert result == BlockMatch(found=True, start_index=1, end_index=2, match_count=2)

    def test_unpacks_as_tuple(self):
        found, start, end, count = find_multi_line(["A", "B"], ["#u,1#A", "#u,2#B"])
        assert (found, start, end, count) == (True, 0, 1, 1)

    def test_overlapping_occurrences_counted(self):
        result = find_multi_line(["A", "A", "A"], ["#u,1#A", "#u,2#A"])
        assert result.match_count == 2
        assert (result.start_index, result.end_index) == (0, 1)

    def test_not_found(self):
        result = find_multi_line(["A", "C", "B"], ["#u,1#A", "#u,2#B"])
        assert result.found is False
        assert result.match_count == 0
        assert result.start_index == NOT_FOUND

    @pytest.mark.parametrize(
        "buffer,region",
        [
            ([], ["#u,1#A"]),
            (["A"], []),
            (["A"], ["#u,1#A", "#u,2#B"]),
        ],
    )
    def test_preconditions(self, buffer, region):
        assert find_multi_line(buffer, region) == BlockMatch(False, NOT_FOUND, NOT_FOUND, 0)

    def test_empty_needle_line_is_unmatchable(self):
        assert not find_multi_line(["A", "", "B"], ["#u,1#A", "#u,2#", "#u,3#B"]).found

    def test_window_smaller_than_block(self):
        assert not find_multi_line(["A", "B", "C"], ["#u,1#A", "#u,2#B"], 1, 1).found

    def test_window_limits_count(self):
        buffer = ["A", "B", "X", "A", "B"]
        result = find_multi_line(buffer, ["#u,1#A", "#u,2#B"], 2, 4)
        assert result == BlockMatch(True, 3, 4, 1)

    def test_block_must_fit_inside_window(self):
        buffer = ["A", "B", "X", "A", "B"]
        assert find_multi_line(buffer, ["#u,1#A", "#u,2#B"], 0, 3) == BlockMatch(True, 0, 1, 1)

    @pytest.mark.parametrize("start,end", [(-1, 3), (4, 2), (0, 6), (-3, -3)])
    def test_invalid_range_same_as_unrestricted(self, start, end):
        buffer = ["X", "A", "B", "Y", "A", "B"]
        region = ["#u,1#A", "#u,2#B"]
        assert find_multi_line(buffer, region, start, end) == find_multi_line(buffer, region)

    def test_raw_buffer_with_prefixes_and_edits(self, turn_program, profile_lines):
        stored = [encode_anchor("U", i, normalize(line)) for i, line in enumerate(profile_lines, start=1)]
        edited = ["(header)"] + [f"  {line.lower()}  " for line in turn_program]
        result = find_multi_line(edited, stored)
        assert result == BlockMatch(True, 4, 6, 1)
