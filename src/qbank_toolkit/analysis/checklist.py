"""
Module: analysis.checklist

Purpose:
    Compare what a guideline summary detected with what an extraction-rule
    snapshot has enabled, one checklist item per requirement.

    Each item is:
        - "optional" when the document shows no need for the rule
        - "satisfied" when it does and the matching rules are on
        - "warning" when it does and a matching rule is off

Key Functions:
    - evaluate_checklist(): summary + rules -> checklist items
    - abbreviations_configured(): Every detected abbreviation is enabled
    - has_warnings(): Any item needs action before publishing

Used By:
    - cli: ``qbank-toolkit analyze --rules``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Literal, Tuple

from qbank_toolkit.core.models.rules import ExtractionRules
from qbank_toolkit.core.models.summary import JsonGuidelineSummary

from .collector import ABBREVIATION_LABELS

ChecklistStatus = Literal["satisfied", "warning", "optional"]
ChecklistSection = Literal["core", "mark_scheme"]

_ABBREVIATION_KEYS = {label: key for key, label in ABBREVIATION_LABELS.items()}


@dataclass(frozen=True)
class ChecklistItem:
    """
    One requirement check.

    Attributes:
        label: Requirement name
        description: What was (or was not) detected
        status: "satisfied", "warning" or "optional"
        section: "core" or "mark_scheme"
    """
    label: str
    description: str
    status: ChecklistStatus
    section: ChecklistSection = "core"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "description": self.description,
            "status": self.status,
            "section": self.section,
        }


def _status(detected: bool, configured: bool) -> ChecklistStatus:
    if not detected:
        return "optional"
    return "satisfied" if configured else "warning"


def _item(
    label: str,
    detected: bool,
    configured: bool,
    when_detected: str,
    when_absent: str,
    section: ChecklistSection = "core",
) -> ChecklistItem:
    return ChecklistItem(
        label=label,
        description=when_detected if detected else when_absent,
        status=_status(detected, configured),
        section=section,
    )


def abbreviations_configured(summary: JsonGuidelineSummary, rules: ExtractionRules) -> bool:
    """
    True when every detected abbreviation has its rule enabled.

    Labels without a matching rule are ignored.
    """
    for label in summary.abbreviations_detected:
        key = _ABBREVIATION_KEYS.get(label)
        if key and not getattr(rules.abbreviations, key):
            return False
    return True


def evaluate_checklist(
    summary: JsonGuidelineSummary,
    rules: ExtractionRules,
) -> Tuple[ChecklistItem, ...]:
    """
    Build the requirement checklist for a summary and a rules snapshot.

    Core requirements come first, then mark-scheme requirements, always in
    the same order.

    Example:
        >>> summary = JsonGuidelineSummary(uses_forward_slash=True)
        >>> rules = ExtractionRules(forward_slash_handling=False)
        >>> evaluate_checklist(summary, rules)[0].status
        'warning'
    """
    answer_structure = rules.answer_structure
    mark_scheme = rules.mark_scheme
    variations = ", ".join(summary.variation_signals)
    abbreviations = ", ".join(summary.abbreviations_detected)
    has_figures = summary.includes_figures or summary.includes_attachments

    return (
        _item(
            "Forward slash alternatives handled",
            summary.uses_forward_slash,
            rules.forward_slash_handling,
            "Detected mark-scheme slashes. Ensure split answers map to alternative IDs.",
            "No slash-based alternatives detected in this JSON payload.",
        ),
        _item(
            "Line-by-line mark scheme support",
            summary.uses_line_by_line_marking,
            rules.line_by_line_processing,
            "Multiple marking points detected. Preserve the one-point-per-line extraction.",
            "No multi-line marking points were found in this upload.",
        ),
        _item(
            "Linked alternatives logic",
            summary.uses_alternative_linking,
            rules.alternative_linking and answer_structure.validate_linking,
            "Detected AND/OR logic or \"any from\" statements. Ensure alternative chains are preserved.",
            "No advanced linking patterns detected.",
        ),
        _item(
            "Context-aware marking",
            summary.includes_contextual_answers,
            rules.context_required and answer_structure.require_context,
            "Some answers carry context metadata (units, conditions). Require context to keep grading fidelity.",
            "No contextual metadata detected in answers.",
        ),
        _item(
            "Variation and alternative acceptance",
            bool(summary.variation_signals),
            answer_structure.accept_alternatives,
            f"Detected: {variations}. Ensure alternative acceptance stays enabled.",
            "No variation flags detected in this upload.",
        ),
        _item(
            "Figure and attachment alignment",
            has_figures,
            rules.figure_detection,
            "Questions reference diagrams, tables, or uploads. Ensure the figure detector remains enabled.",
            "No figure dependencies detected in this batch.",
        ),
        _item(
            "Manual marking readiness",
            summary.requires_manual_marking,
            mark_scheme.requires_manual_marking,
            "Detected drawing, structural, or upload answer formats. Ensure manual marking flags reach reviewers.",
            "All detected answers are auto-markable.",
            section="mark_scheme",
        ),
        _item(
            "Component marking structure",
            summary.has_component_marking,
            mark_scheme.component_marking,
            "Parts or sub-parts detected. Maintain component-level score aggregation.",
            "No multi-part structures detected.",
            section="mark_scheme",
        ),
        _item(
            "Mark allocation validation",
            summary.has_multi_mark_allocations,
            answer_structure.validate_marks and mark_scheme.marking_criteria,
            "Variable mark allocations detected. Keep validation on to prevent silent mark drift.",
            "All questions appear single-mark.",
            section="mark_scheme",
        ),
        _item(
            "Abbreviation coverage",
            bool(summary.abbreviations_detected),
            abbreviations_configured(summary, rules),
            f"Detected: {abbreviations}. Toggle the matching abbreviation processors.",
            "No mark-scheme abbreviations present in this JSON.",
            section="mark_scheme",
        ),
        _item(
            "Partial credit readiness",
            summary.partial_credit_detected,
            mark_scheme.marking_criteria,
            "Partial credit logic detected. Keep mark criteria validation enabled for QA.",
            "No partial credit rules detected.",
            section="mark_scheme",
        ),
    )


def has_warnings(items: Iterable[ChecklistItem]) -> bool:
    return any(item.status == "warning" for item in items)
