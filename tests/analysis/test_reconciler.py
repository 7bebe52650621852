"""
Unit Tests for Extraction Rule Reconciliation

Tests for reconcile_rules: evidence-driven toggles, wholesale groups,
identity return and fixed-point behaviour.
"""

from dataclasses import fields

import pytest

from qbank_toolkit.analysis.guidelines import analyze_guidelines
from qbank_toolkit.analysis.reconciler import reconcile_rules
from qbank_toolkit.core.models.rules import ExtractionRules, SubjectSpecific
from qbank_toolkit.core.models.summary import JsonGuidelineSummary


def _all_off() -> ExtractionRules:
    """Rules with every toggle outside the wholesale groups turned off."""
    rules = ExtractionRules()
    for name in ("forwardSlashHandling", "lineByLineProcessing", "alternativeLinking",
                 "contextRequired", "figureDetection"):
        rules = rules.with_value(name, False)
    for group in ("abbreviations", "answer_structure", "mark_scheme"):
        for f in fields(getattr(rules, group)):
            rules = rules.with_value(f"{group}.{f.name}", False)
    return rules


def _flags(rules: ExtractionRules) -> dict:
    """Flatten the monotonic toggles of a snapshot."""
    flat = {
        name: getattr(rules, name)
        for name in ("forward_slash_handling", "line_by_line_processing",
                     "alternative_linking", "context_required", "figure_detection")
    }
    for group in ("abbreviations", "answer_structure", "mark_scheme"):
        for f in fields(getattr(rules, group)):
            flat[f"{group}.{f.name}"] = getattr(getattr(rules, group), f.name)
    return flat


SUMMARIES = [
    JsonGuidelineSummary(),
    JsonGuidelineSummary(uses_forward_slash=True, includes_hints=True),
    JsonGuidelineSummary(
        answer_requirements=("any_two_from",),
        abbreviations_detected=("CAO", "ORA"),
        subjects_detected=("IGCSE Mathematics",),
        exam_board="Pearson",
    ),
    JsonGuidelineSummary(
        variation_signals=("Reject list provided",),
        includes_contextual_answers=True,
        includes_attachments=True,
        requires_manual_marking=True,
        has_component_marking=True,
        partial_credit_detected=True,
        exam_board="Cambridge and Edexcel",
    ),
]


class TestIndividualRules:
    """Tests for each evidence -> rule mapping."""

    def test_reconcile_when_forward_slash_then_enabled(self):
        rules = _all_off()
        result = reconcile_rules(JsonGuidelineSummary(uses_forward_slash=True), rules)
        assert result.forward_slash_handling is True

    def test_reconcile_when_manual_marking_then_mark_scheme_enabled(self):
        """A diagram question turns on manual marking even if it was off."""
        rules = ExtractionRules().with_value("markScheme.requiresManualMarking", False)
        summary = analyze_guidelines({"questions": [{"answer_format": "diagram"}]})

        assert reconcile_rules(summary, rules).mark_scheme.requires_manual_marking is True

    def test_reconcile_when_requirements_present_then_linking_enabled(self):
        rules = _all_off()
        result = reconcile_rules(JsonGuidelineSummary(answer_requirements=("all",)), rules)

        assert result.alternative_linking is True
        assert result.answer_structure.validate_linking is True
        assert result.answer_structure.accept_alternatives is False

    def test_reconcile_when_attachments_then_figure_detection(self):
        result = reconcile_rules(JsonGuidelineSummary(includes_attachments=True), _all_off())
        assert result.figure_detection is True

    def test_reconcile_when_context_then_both_context_flags(self):
        result = reconcile_rules(JsonGuidelineSummary(includes_contextual_answers=True), _all_off())

        assert result.context_required is True
        assert result.answer_structure.require_context is True

    def test_reconcile_when_partial_credit_then_marks_validated(self):
        result = reconcile_rules(JsonGuidelineSummary(partial_credit_detected=True), _all_off())

        assert result.answer_structure.validate_marks is True
        assert result.mark_scheme.marking_criteria is True
        assert result.mark_scheme.component_marking is False

    def test_reconcile_when_variation_signals_then_alternatives_accepted(self):
        summary = JsonGuidelineSummary(variation_signals=("Ignore list provided",))
        assert reconcile_rules(summary, _all_off()).answer_structure.accept_alternatives is True

    def test_reconcile_when_abbreviations_detected_then_enabled_per_key(self):
        summary = JsonGuidelineSummary(abbreviations_detected=("ECF", "OWTTE"))
        result = reconcile_rules(summary, _all_off())

        assert result.abbreviations.ecf is True
        assert result.abbreviations.owtte is True
        assert result.abbreviations.cao is False
        assert result.abbreviations.ora is False


class TestWholesaleGroups:
    """Tests for the educational content and subject-specific groups."""

    def test_reconcile_when_no_hints_then_requirements_cleared(self):
        result = reconcile_rules(JsonGuidelineSummary(includes_explanations=True), ExtractionRules())

        assert result.educational_content.hints_required is False
        assert result.educational_content.explanations_required is True

    def test_reconcile_when_subjects_detected_then_flags_mirror_them(self):
        rules = ExtractionRules().with_value("subjectSpecific.biology", True)
        summary = JsonGuidelineSummary(subjects_detected=("Physics", "Additional MATHS"))

        result = reconcile_rules(summary, rules)

        assert result.subject_specific == SubjectSpecific(
            physics=True, chemistry=False, biology=False, mathematics=True,
        )


class TestExamBoard:
    """Tests for the board overwrite rule."""

    @pytest.mark.parametrize("raw,expected", [
        ("Pearson Edexcel", "Edexcel"),
        ("Cambridge and Edexcel", "Both"),
        ("CIE", "Cambridge"),
    ])
    def test_reconcile_when_board_detected_then_normalized(self, raw, expected):
        rules = ExtractionRules(exam_board="Edexcel" if expected == "Cambridge" else "Cambridge")
        assert reconcile_rules(JsonGuidelineSummary(exam_board=raw), rules).exam_board == expected

    def test_reconcile_when_board_unknown_then_unchanged(self):
        rules = ExtractionRules(exam_board="Edexcel")
        assert reconcile_rules(JsonGuidelineSummary(exam_board="AQA"), rules).exam_board == "Edexcel"


class TestReconcileContract:
    """Tests for identity return, idempotence and monotonicity."""

    def test_reconcile_when_nothing_changes_then_same_object(self):
        rules = ExtractionRules()
        summary = JsonGuidelineSummary(includes_hints=True, includes_explanations=True)

        assert reconcile_rules(summary, rules) is rules

    def test_reconcile_when_changed_then_untouched_groups_shared(self):
        rules = ExtractionRules()
        summary = JsonGuidelineSummary(
            includes_hints=True,
            includes_explanations=True,
            abbreviations_detected=("CAO",),
        )
        result = reconcile_rules(summary, rules)

        assert result is not rules
        assert result.abbreviations.cao is True
        assert result.mark_scheme is rules.mark_scheme
        assert result.educational_content is rules.educational_content

    @pytest.mark.parametrize("summary", SUMMARIES)
    @pytest.mark.parametrize("rules", [ExtractionRules(), _all_off()])
    def test_reconcile_when_applied_twice_then_fixed_point(self, summary, rules):
        once = reconcile_rules(summary, rules)
        twice = reconcile_rules(summary, once)

        assert twice == once
        assert twice is once

    @pytest.mark.parametrize("summary", SUMMARIES)
    @pytest.mark.parametrize("rules", [ExtractionRules(), _all_off()])
    def test_reconcile_when_flag_enabled_then_stays_enabled(self, summary, rules):
        before = _flags(rules)
        after = _flags(reconcile_rules(summary, rules))

        for name, enabled in before.items():
            if enabled:
                assert after[name] is True, name


class TestEndToEnd:
    """Tests combining analysis and reconciliation."""

    def test_reconcile_when_cambridge_mcq_then_expected_rules(self, cambridge_mcq_document):
        summary = analyze_guidelines(cambridge_mcq_document)
        result = reconcile_rules(summary, _all_off())

        assert result.forward_slash_handling is True
        assert result.alternative_linking is True
        assert result.answer_structure.validate_marks is True
        assert result.answer_structure.validate_linking is True
        assert result.answer_structure.accept_alternatives is True
        assert result.exam_board == "Cambridge"

    def test_reconcile_when_cambridge_mcq_and_defaults_then_board_kept(self, cambridge_mcq_document):
        summary = analyze_guidelines(cambridge_mcq_document)
        result = reconcile_rules(summary, ExtractionRules())

        assert result.answer_structure.accept_alternatives is True
        assert result.exam_board == "Cambridge"
