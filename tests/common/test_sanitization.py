"""
Unit Tests for Sanitization Helpers

Tests for value coercion and text matching on loose paper JSON.
"""

import pytest

from qbank_toolkit.common.sanitization import (
    as_list,
    ensure_array,
    ensure_number,
    ensure_string,
    extract_name_candidates,
    find_unique_match,
    has_word_boundary_match,
    is_exact_text_match,
    is_loose_text_match,
    is_number,
    is_present,
    normalize_text,
    text_of,
)


class TestCoercion:
    """Tests for the ensure_* / as_list helpers."""

    def test_is_number_when_bool_then_false(self):
        """Booleans are not counted as numbers."""
        assert is_number(True) is False
        assert is_number(2) is True
        assert is_number(2.5) is True

    @pytest.mark.parametrize("value", [[], {}, "x", 1, True])
    def test_is_present_when_empty_container_or_truthy_then_true(self, value):
        assert is_present(value) is True

    @pytest.mark.parametrize("value", [None, False, 0, 0.0, "", float("nan")])
    def test_is_present_when_falsy_scalar_then_false(self, value):
        assert is_present(value) is False

    def test_ensure_array_when_scalar_then_wrapped(self):
        assert ensure_array("a") == ["a"]
        assert ensure_array(None) == []
        assert ensure_array([1, 2]) == [1, 2]

    def test_as_list_when_not_list_then_empty(self):
        """Non-list values are treated as absent."""
        assert as_list({"a": 1}) == []
        assert as_list("abc") == []
        assert as_list([{}]) == [{}]

    def test_ensure_string_when_list_then_first_element(self):
        assert ensure_string(["first", "second"]) == "first"
        assert ensure_string([]) is None
        assert ensure_string(None) is None
        assert ensure_string(7) == "7"

    def test_text_of_when_none_then_empty_string(self):
        assert text_of(None) == ""
        assert text_of(12) == "12"

    @pytest.mark.parametrize("value,expected", [
        (3, 3),
        ("2.5 marks", 2.5),
        ("  4", 4.0),
        ("-1", -1.0),
    ])
    def test_ensure_number_when_numeric_prefix_then_parsed(self, value, expected):
        assert ensure_number(value) == expected

    def test_ensure_number_when_not_numeric_then_none(self):
        assert ensure_number("n/a") is None
        assert ensure_number(None) is None
        assert ensure_number(True) is None


class TestTextMatching:
    """Tests for normalized text comparison."""

    def test_normalize_text_when_spaced_then_collapsed(self):
        assert normalize_text("  Kinetic   ENERGY ") == "kinetic energy"

    def test_exact_match_when_blank_then_false(self):
        """Two blanks never count as a match."""
        assert is_exact_text_match("", "") is False
        assert is_exact_text_match("Energy", " energy ") is True

    def test_loose_match_when_contained_then_true(self):
        assert is_loose_text_match("kinetic energy", "Energy") is True
        assert is_loose_text_match("momentum", "energy") is False

    def test_find_unique_match_when_exact_then_preferred_over_loose(self):
        """An exact match wins even when loose matches are ambiguous."""
        items = [{"name": "Physics"}, {"name": "Physics Extended"}]
        match = find_unique_match(items, "physics", [lambda item: item["name"]])
        assert match == {"name": "Physics"}

    def test_find_unique_match_when_ambiguous_then_none(self):
        items = [{"name": "Physics Core"}, {"name": "Physics Extended"}]
        assert find_unique_match(items, "physics", [lambda item: item["name"]]) is None

    def test_find_unique_match_when_second_getter_matches_then_found(self):
        items = [{"name": "Physics", "code": "0625"}, {"name": "Chemistry", "code": "0620"}]
        getters = [lambda item: item["name"], lambda item: item["code"]]
        assert find_unique_match(items, "0620", getters)["name"] == "Chemistry"

    def test_word_boundary_when_inside_word_then_no_match(self):
        assert has_word_boundary_match("allow ECF from (a)", "ecf") is True
        assert has_word_boundary_match("decaffeinated", "ecf") is False
        assert has_word_boundary_match(None, "ora") is False

    def test_extract_name_candidates_when_separated_then_split(self):
        assert extract_name_candidates("Physics, Chemistry / Biology") == [
            "Physics", "Chemistry", "Biology",
        ]
        assert extract_name_candidates(["A, B", "C"]) == ["A", "B", "C"]
        assert extract_name_candidates(None) == []
