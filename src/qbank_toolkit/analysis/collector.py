"""
Module: analysis.collector

Purpose:
    Evidence accumulator threaded through the guideline tree walk. One
    collector lives for exactly one analysis run; it only ever grows
    (sets gain members, flags go False -> True) and is frozen into a
    JsonGuidelineSummary at the end.

Key Classes:
    - GuidelineCollector: Mutable evidence sets and flags

Used By:
    - analysis.guidelines: Created per analyze_guidelines() call
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Set

from qbank_toolkit.core.models.summary import JsonGuidelineSummary

Abbreviation = Literal["owtte", "ora", "ecf", "cao"]

ABBREVIATION_LABELS: Dict[Abbreviation, str] = {
    "owtte": "OWTTE",
    "ora": "ORA",
    "ecf": "ECF",
    "cao": "CAO",
}

ABBREVIATION_SIGNALS: Dict[Abbreviation, str] = {
    "owtte": "Equivalent phrasing allowed",
    "ora": "Reverse argument accepted",
    "ecf": "Error carried forward supported",
    "cao": "Correct answer only (CAO)",
}

CONDITIONAL_MARKING_SIGNAL = "Conditional marking rules present"
REJECT_LIST_SIGNAL = "Reject list provided"
IGNORE_LIST_SIGNAL = "Ignore list provided"
ANSWER_VARIATIONS_SIGNAL = "Documented answer variations"


@dataclass
class GuidelineCollector:
    """Evidence gathered so far in one analysis run."""

    question_types: Set[str] = field(default_factory=set)
    answer_formats: Set[str] = field(default_factory=set)
    answer_requirements: Set[str] = field(default_factory=set)
    # dict keeps first-seen order
    subjects: Dict[str, None] = field(default_factory=dict)
    variation_signals: Set[str] = field(default_factory=set)
    abbreviations: Set[str] = field(default_factory=set)
    context_types: Set[str] = field(default_factory=set)
    exam_board: Optional[str] = None

    uses_forward_slash: bool = False
    uses_line_by_line_marking: bool = False
    uses_alternative_linking: bool = False
    includes_contextual_answers: bool = False
    includes_figures: bool = False
    includes_attachments: bool = False
    includes_hints: bool = False
    includes_explanations: bool = False
    requires_manual_marking: bool = False
    has_component_marking: bool = False
    has_multi_mark_allocations: bool = False
    partial_credit_detected: bool = False

    def add_variation_signal(self, label: str) -> None:
        if label:
            self.variation_signals.add(label)

    def mark_abbreviation(self, key: Abbreviation, *, with_signal: bool = True) -> None:
        """Record an abbreviation and, by default, its variation signal."""
        self.abbreviations.add(ABBREVIATION_LABELS[key])
        if with_signal:
            self.add_variation_signal(ABBREVIATION_SIGNALS[key])

    def add_subject(self, value: object) -> None:
        if value:
            self.subjects.setdefault(str(value), None)

    def add_context_type(self, value: object) -> None:
        self.includes_contextual_answers = True
        self.context_types.add(str(value))

    def build(self) -> JsonGuidelineSummary:
        """Freeze the evidence into a summary with deterministic ordering."""
        return JsonGuidelineSummary(
            question_types=tuple(sorted(self.question_types)),
            answer_formats=tuple(sorted(self.answer_formats)),
            answer_requirements=tuple(sorted(self.answer_requirements)),
            subjects_detected=tuple(subject for subject in self.subjects if subject),
            exam_board=self.exam_board,
            variation_signals=tuple(sorted(self.variation_signals)),
            abbreviations_detected=tuple(sorted(self.abbreviations)),
            context_types_detected=tuple(sorted(self.context_types)),
            uses_forward_slash=self.uses_forward_slash,
            uses_line_by_line_marking=self.uses_line_by_line_marking,
            uses_alternative_linking=self.uses_alternative_linking,
            # Context types can arrive without any other contextual flag
            includes_contextual_answers=(
                self.includes_contextual_answers or bool(self.context_types)
            ),
            includes_figures=self.includes_figures,
            includes_attachments=self.includes_attachments,
            includes_hints=self.includes_hints,
            includes_explanations=self.includes_explanations,
            requires_manual_marking=self.requires_manual_marking,
            has_component_marking=self.has_component_marking,
            has_multi_mark_allocations=self.has_multi_mark_allocations,
            partial_credit_detected=self.partial_credit_detected,
        )
