"""
Module: summary

Purpose:
    Provides JsonGuidelineSummary - the structural facts derived from one
    uploaded paper document. Recomputed from scratch whenever the document
    changes and never persisted on its own.

Key Classes:
    - JsonGuidelineSummary: Frozen analysis result

Dependencies:
    - dataclasses (std)

Used By:
    - analysis.collector: Builds instances
    - analysis.reconciler: Reads flags to adjust ExtractionRules
    - core.utils.serialization: JSON output
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True, slots=True)
class JsonGuidelineSummary:
    """
    Structural summary of a paper document.

    Collection fields are tuples. All of them except ``subjects_detected``
    are sorted; subjects keep the order they were first seen in.

    Attributes:
        question_types: Explicit or inferred node types ("mcq", "complex", ...)
        answer_formats: Distinct ``answer_format`` codes
        answer_requirements: Distinct ``answer_requirement`` strings
        subjects_detected: Subject names/codes from nodes and document metadata
        exam_board: Raw document-level board text, if any
        variation_signals: Human-readable marking-convention notes
        abbreviations_detected: Subset of "CAO", "ECF", "ORA", "OWTTE"
        context_types_detected: Context kinds found on nodes or answers
        uses_forward_slash: Some answer text contains "/"
        uses_line_by_line_marking: Marking points or multi-line mark schemes
        uses_alternative_linking: Answers linked as alternatives
        includes_contextual_answers: Context, unit or measurement data present
        includes_figures: Some node flags a figure
        includes_attachments: Some node carries attachments
        includes_hints: Some node carries a hint
        includes_explanations: Some node carries an explanation
        requires_manual_marking: A format that cannot be auto-marked is used
        has_component_marking: Some node has parts or subparts
        has_multi_mark_allocations: Marks spread over components or answers
        partial_credit_detected: Partial credit data present
    """

    question_types: Tuple[str, ...] = ()
    answer_formats: Tuple[str, ...] = ()
    answer_requirements: Tuple[str, ...] = ()
    subjects_detected: Tuple[str, ...] = ()
    exam_board: Optional[str] = None
    variation_signals: Tuple[str, ...] = ()
    abbreviations_detected: Tuple[str, ...] = ()
    context_types_detected: Tuple[str, ...] = ()
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

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize with the camelCase keys used by stored import sessions.

        ``examBoard`` is omitted when the document named no board.
        """
        data: Dict[str, Any] = {
            "questionTypes": list(self.question_types),
            "answerFormats": list(self.answer_formats),
            "answerRequirements": list(self.answer_requirements),
            "subjectsDetected": list(self.subjects_detected),
            "usesForwardSlash": self.uses_forward_slash,
            "usesLineByLineMarking": self.uses_line_by_line_marking,
            "usesAlternativeLinking": self.uses_alternative_linking,
            "includesContextualAnswers": self.includes_contextual_answers,
            "includesFigures": self.includes_figures,
            "includesAttachments": self.includes_attachments,
            "includesHints": self.includes_hints,
            "includesExplanations": self.includes_explanations,
            "requiresManualMarking": self.requires_manual_marking,
            "hasComponentMarking": self.has_component_marking,
            "hasMultiMarkAllocations": self.has_multi_mark_allocations,
            "variationSignals": list(self.variation_signals),
            "abbreviationsDetected": list(self.abbreviations_detected),
            "contextTypesDetected": list(self.context_types_detected),
            "partialCreditDetected": self.partial_credit_detected,
        }
        if self.exam_board is not None:
            data["examBoard"] = self.exam_board
        return data
