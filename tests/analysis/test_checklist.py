"""
Unit Tests for the Guideline Checklist

Tests for evaluate_checklist and abbreviation coverage.
"""

import pytest

from qbank_toolkit.analysis.checklist import (
    ChecklistItem,
    abbreviations_configured,
    evaluate_checklist,
    has_warnings,
)
from qbank_toolkit.analysis.reconciler import reconcile_rules
from qbank_toolkit.core.models.rules import ExtractionRules
from qbank_toolkit.core.models.summary import JsonGuidelineSummary


def _statuses(summary: JsonGuidelineSummary, rules: ExtractionRules) -> dict:
    return {item.label: item.status for item in evaluate_checklist(summary, rules)}


class TestChecklistShape:
    """Tests for ordering and sections."""

    def test_checklist_when_empty_summary_then_all_optional(self):
        items = evaluate_checklist(JsonGuidelineSummary(), ExtractionRules())

        assert len(items) == 11
        assert {item.status for item in items} == {"optional"}
        assert has_warnings(items) is False

    def test_checklist_when_evaluated_then_core_before_mark_scheme(self):
        items = evaluate_checklist(JsonGuidelineSummary(), ExtractionRules())
        sections = [item.section for item in items]

        assert sections == ["core"] * 6 + ["mark_scheme"] * 5

    def test_to_dict_when_called_then_plain_fields(self):
        item = ChecklistItem(label="L", description="D", status="warning", section="mark_scheme")
        assert item.to_dict() == {
            "label": "L", "description": "D", "status": "warning", "section": "mark_scheme",
        }


class TestChecklistStatus:
    """One satisfied/warning pair per requirement."""

    @pytest.mark.parametrize("label, summary, rule_path", [
        ("Forward slash alternatives handled",
         JsonGuidelineSummary(uses_forward_slash=True), "forwardSlashHandling"),
        ("Line-by-line mark scheme support",
         JsonGuidelineSummary(uses_line_by_line_marking=True), "lineByLineProcessing"),
        ("Linked alternatives logic",
         JsonGuidelineSummary(uses_alternative_linking=True), "alternativeLinking"),
        ("Linked alternatives logic",
         JsonGuidelineSummary(uses_alternative_linking=True), "answerStructure.validateLinking"),
        ("Context-aware marking",
         JsonGuidelineSummary(includes_contextual_answers=True), "contextRequired"),
        ("Context-aware marking",
         JsonGuidelineSummary(includes_contextual_answers=True), "answerStructure.requireContext"),
        ("Figure and attachment alignment",
         JsonGuidelineSummary(includes_attachments=True), "figureDetection"),
        ("Manual marking readiness",
         JsonGuidelineSummary(requires_manual_marking=True), "markScheme.requiresManualMarking"),
        ("Component marking structure",
         JsonGuidelineSummary(has_component_marking=True), "markScheme.componentMarking"),
        ("Mark allocation validation",
         JsonGuidelineSummary(has_multi_mark_allocations=True), "answerStructure.validateMarks"),
        ("Mark allocation validation",
         JsonGuidelineSummary(has_multi_mark_allocations=True), "markScheme.markingCriteria"),
        ("Partial credit readiness",
         JsonGuidelineSummary(partial_credit_detected=True), "markScheme.markingCriteria"),
    ])
    def test_status_when_detected_then_depends_on_rule(self, label, summary, rule_path):
        enabled = ExtractionRules()
        disabled = enabled.with_value(rule_path, False)

        assert _statuses(summary, enabled)[label] == "satisfied"
        assert _statuses(summary, disabled)[label] == "warning"

    def test_variations_when_detected_then_need_accept_alternatives(self):
        summary = JsonGuidelineSummary(variation_signals=("Reject list provided",))
        rules = ExtractionRules()
        label = "Variation and alternative acceptance"

        assert _statuses(summary, rules)[label] == "warning"
        accepting = rules.with_value("answerStructure.acceptAlternatives", True)
        assert _statuses(summary, accepting)[label] == "satisfied"

    def test_description_when_variations_detected_then_listed(self):
        summary = JsonGuidelineSummary(variation_signals=("A", "B"))
        items = {item.label: item for item in evaluate_checklist(summary, ExtractionRules())}

        assert items["Variation and alternative acceptance"].description.startswith("Detected: A, B.")

    def test_status_when_not_detected_then_optional_even_if_rule_off(self):
        rules = ExtractionRules(forward_slash_handling=False)
        assert _statuses(JsonGuidelineSummary(), rules)["Forward slash alternatives handled"] == "optional"


class TestAbbreviationCoverage:
    """Tests for abbreviations_configured."""

    def test_coverage_when_detected_abbreviation_disabled_then_warning(self):
        summary = JsonGuidelineSummary(abbreviations_detected=("CAO", "ECF"))
        rules = ExtractionRules().with_value("abbreviations.ecf", True)

        assert abbreviations_configured(summary, rules) is False
        assert _statuses(summary, rules)["Abbreviation coverage"] == "warning"

    def test_coverage_when_all_enabled_then_satisfied(self):
        summary = JsonGuidelineSummary(abbreviations_detected=("CAO", "ECF"))
        rules = (
            ExtractionRules()
            .with_value("abbreviations.ecf", True)
            .with_value("abbreviations.cao", True)
        )

        assert abbreviations_configured(summary, rules) is True
        assert _statuses(summary, rules)["Abbreviation coverage"] == "satisfied"

    def test_coverage_when_unknown_label_then_ignored(self):
        summary = JsonGuidelineSummary(abbreviations_detected=("BOD",))
        assert abbreviations_configured(summary, ExtractionRules()) is True


class TestChecklistAfterReconcile:
    """Reconciled rules cover everything the summary detected."""

    def test_checklist_when_rules_reconciled_then_no_warnings(self):
        summary = JsonGuidelineSummary(
            uses_forward_slash=True,
            uses_line_by_line_marking=True,
            uses_alternative_linking=True,
            includes_contextual_answers=True,
            includes_figures=True,
            requires_manual_marking=True,
            has_component_marking=True,
            has_multi_mark_allocations=True,
            partial_credit_detected=True,
            variation_signals=("Correct answer only (CAO)",),
            abbreviations_detected=("CAO", "ORA"),
        )
        rules = ExtractionRules(forward_slash_handling=False, context_required=False)
        assert has_warnings(evaluate_checklist(summary, rules)) is True

        reconciled = reconcile_rules(summary, rules)
        assert has_warnings(evaluate_checklist(summary, reconciled)) is False
