"""
Unit Tests for ExtractionRules

Tests for defaults, user edits and the camelCase round trip.
"""

import pytest
from dataclasses import FrozenInstanceError

from qbank_toolkit.core.models.rules import (
    Abbreviations,
    EducationalContent,
    ExtractionRules,
    MarkScheme,
)


class TestDefaults:
    """Tests for a fresh rule snapshot."""

    def test_defaults_when_created_then_match_fresh_session(self):
        rules = ExtractionRules()

        assert rules.forward_slash_handling is True
        assert rules.line_by_line_processing is True
        assert rules.alternative_linking is True
        assert rules.context_required is True
        assert rules.figure_detection is True
        assert rules.educational_content == EducationalContent(True, True)
        assert rules.abbreviations == Abbreviations()
        assert rules.answer_structure.accept_alternatives is False
        assert rules.answer_structure.validate_marks is True
        assert rules.mark_scheme == MarkScheme()
        assert rules.exam_board == "Cambridge"

    def test_rules_when_assigned_then_frozen(self):
        rules = ExtractionRules()
        with pytest.raises(FrozenInstanceError):
            rules.forward_slash_handling = False

    def test_rules_when_unknown_board_then_raises(self):
        with pytest.raises(ValueError, match="Unsupported exam board"):
            ExtractionRules(exam_board="AQA")


class TestWithValue:
    """Tests for ExtractionRules.with_value."""

    def test_with_value_when_camel_case_path_then_group_updated(self):
        rules = ExtractionRules()
        updated = rules.with_value("markScheme.componentMarking", False)

        assert updated.mark_scheme.component_marking is False
        assert rules.mark_scheme.component_marking is True

    def test_with_value_when_group_changed_then_other_groups_shared(self):
        """Untouched groups are the same objects in the new snapshot."""
        rules = ExtractionRules()
        updated = rules.with_value("abbreviations.cao", True)

        assert updated.abbreviations is not rules.abbreviations
        assert updated.mark_scheme is rules.mark_scheme
        assert updated.subject_specific is rules.subject_specific

    def test_with_value_when_core_flag_then_updated(self):
        updated = ExtractionRules().with_value("forward_slash_handling", False)
        assert updated.forward_slash_handling is False

    def test_with_value_when_exam_board_then_updated(self):
        assert ExtractionRules().with_value("examBoard", "Edexcel").exam_board == "Edexcel"

    def test_with_value_when_unknown_path_then_key_error(self):
        with pytest.raises(KeyError):
            ExtractionRules().with_value("markScheme.unknownFlag", True)
        with pytest.raises(KeyError):
            ExtractionRules().with_value("nonsense", True)

    def test_with_value_when_not_bool_then_type_error(self):
        with pytest.raises(TypeError):
            ExtractionRules().with_value("abbreviations.ora", "yes")

    def test_with_value_when_bad_board_then_value_error(self):
        with pytest.raises(ValueError):
            ExtractionRules().with_value("examBoard", "CIE")


class TestRulesDict:
    """Tests for to_dict/from_dict."""

    def test_to_dict_when_default_then_camel_case_keys(self):
        data = ExtractionRules().to_dict()

        assert data["forwardSlashHandling"] is True
        assert data["educationalContent"] == {
            "hintsRequired": True,
            "explanationsRequired": True,
        }
        assert data["markScheme"]["requiresManualMarking"] is True
        assert data["examBoard"] == "Cambridge"

    def test_from_dict_when_round_tripped_then_equal(self):
        rules = (
            ExtractionRules()
            .with_value("abbreviations.ecf", True)
            .with_value("subjectSpecific.physics", True)
            .with_value("examBoard", "Both")
        )
        assert ExtractionRules.from_dict(rules.to_dict()) == rules

    def test_from_dict_when_malformed_then_defaults_kept(self):
        """Non-bool values and unknown keys never raise."""
        rules = ExtractionRules.from_dict({
            "forwardSlashHandling": "no",
            "abbreviations": {"cao": 1, "ora": True},
            "markScheme": "broken",
            "unknown": 42,
        })

        assert rules.forward_slash_handling is True
        assert rules.abbreviations.cao is False
        assert rules.abbreviations.ora is True
        assert rules.mark_scheme == MarkScheme()

    def test_from_dict_when_snake_case_then_accepted(self):
        rules = ExtractionRules.from_dict({"figure_detection": False, "exam_board": "Edexcel"})
        assert rules.figure_detection is False
        assert rules.exam_board == "Edexcel"

    def test_from_dict_when_raw_board_name_then_normalized(self):
        assert ExtractionRules.from_dict({"examBoard": "Pearson"}).exam_board == "Edexcel"
        assert ExtractionRules.from_dict({"examBoard": "AQA"}).exam_board == "Cambridge"

    def test_from_dict_when_not_mapping_then_defaults(self):
        assert ExtractionRules.from_dict(None) == ExtractionRules()
        assert ExtractionRules.from_dict([1, 2]) == ExtractionRules()
