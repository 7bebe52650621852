"""
Module: analysis.guidelines

Purpose:
    Guideline analysis for uploaded paper documents. Walks the question
    tree (question -> parts -> subparts, depth-first, in array order) and
    records structural evidence: question types, answer formats, marking
    conventions, context data and mark allocation patterns.

    Evidence is inclusive across the whole document: a single node that
    uses forward slashes marks the entire document as using them.

Key Functions:
    - analyze_guidelines(): Main entry point, document -> summary
    - walk_question_node(): Recursive walk of one question subtree
    - record_node(): Evidence for a single node (no recursion)

Dependencies:
    - qbank_toolkit.core.models.summary: JsonGuidelineSummary
    - qbank_toolkit.common.sanitization: Presence checks on loose JSON

Used By:
    - cli: ``qbank-toolkit analyze``
    - analysis.reconciler callers (summary input)

Error Handling:
    Never raises. Missing or wrongly-typed fields count as absent evidence.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from qbank_toolkit.common.sanitization import (
    as_list,
    has_word_boundary_match,
    is_number,
    is_present,
    text_of,
)
from qbank_toolkit.core.models.nodes import ParsedPaperDocument, QuestionNode
from qbank_toolkit.core.models.summary import JsonGuidelineSummary

from .collector import (
    ANSWER_VARIATIONS_SIGNAL,
    CONDITIONAL_MARKING_SIGNAL,
    IGNORE_LIST_SIGNAL,
    REJECT_LIST_SIGNAL,
    GuidelineCollector,
)
from .config import AnalysisConfig

logger = logging.getLogger(__name__)

_CHILD_KEYS = ("parts", "subparts")
_ALTERNATIVE_TYPE_KEYWORDS = ("one", "any", "all", "both")
_REQUIREMENT_ABBREVIATIONS = ("owtte", "ora", "ecf", "cao")
_NODE_PARTIAL_CREDIT_KEYS = (
    "partial_credit",
    "partial_marking",
    "partial_mark_distribution",
    "partial_marks",
)
_ANSWER_PARTIAL_CREDIT_KEYS = ("partial_credit", "partial_marking", "partial_marks")
_CONDITION_KEYS = ("conditional_on", "conditions", "marking_conditions")


def analyze_guidelines(
    document: Any,
    config: Optional[AnalysisConfig] = None,
) -> JsonGuidelineSummary:
    """
    Derive a structural summary from a parsed paper document.

    Args:
        document: Parsed JSON root. Anything other than a mapping yields an
            empty summary.
        config: Analysis settings (defaults if None)

    Returns:
        Summary with sorted collections (subjects keep first-seen order).
        Equal documents always produce equal summaries.

    Example:
        >>> summary = analyze_guidelines({"questions": [{"correct_answer": "A/B"}]})
        >>> summary.uses_forward_slash
        True
    """
    config = config or AnalysisConfig()
    collector = GuidelineCollector()

    if not isinstance(document, Mapping):
        return collector.build()

    questions = as_list(document.get("questions"))
    for question in questions:
        walk_question_node(question, collector, config)

    _record_document_metadata(document, collector)

    summary = collector.build()
    logger.debug(
        f"Analyzed {len(questions)} questions: types={list(summary.question_types)}, "
        f"formats={list(summary.answer_formats)}, "
        f"abbreviations={list(summary.abbreviations_detected)}"
    )
    return summary


def walk_question_node(
    node: Any,
    collector: GuidelineCollector,
    config: AnalysisConfig,
) -> None:
    """Record evidence for a node, then for its parts and subparts."""
    if not isinstance(node, Mapping):
        return

    record_node(node, collector, config)

    for key in _CHILD_KEYS:
        children = as_list(node.get(key))
        if not children:
            continue
        collector.has_component_marking = True
        for child in children:
            if isinstance(child, Mapping) and _number_above(child.get("marks"), 0):
                collector.has_multi_mark_allocations = True
            walk_question_node(child, collector, config)


def record_node(
    node: QuestionNode,
    collector: GuidelineCollector,
    config: AnalysisConfig,
) -> None:
    """
    Record the evidence carried by a single node.

    Children are not visited; only their presence is used for type
    inference.
    """
    options = as_list(node.get("options"))
    parts = as_list(node.get("parts"))
    answer_format = node.get("answer_format")

    question_type = node.get("type")
    if not question_type:
        if parts:
            question_type = "complex"
        elif options:
            question_type = "mcq"
        elif answer_format == "true_false":
            question_type = "tf"
    if question_type:
        collector.question_types.add(str(question_type))

    if answer_format:
        collector.answer_formats.add(str(answer_format))
        if str(answer_format) in config.manual_marking_formats:
            collector.requires_manual_marking = True

    if is_present(node.get("requires_manual_marking")):
        collector.requires_manual_marking = True

    requirement = node.get("answer_requirement")
    if requirement:
        _scan_requirement(str(requirement), collector)

    _record_context(node.get("context"), collector)
    context_fields = node.get("context_fields")
    if isinstance(context_fields, list):
        collector.includes_contextual_answers = True
        for context_field in context_fields:
            if isinstance(context_field, Mapping) and context_field.get("type"):
                collector.add_context_type(context_field["type"])
    _record_context_details(node, collector)

    if is_present(node.get("figure")) or is_present(node.get("figure_required")):
        collector.includes_figures = True
    if as_list(node.get("attachments")):
        collector.includes_attachments = True
    if is_present(node.get("hint")):
        collector.includes_hints = True
    if is_present(node.get("explanation")):
        collector.includes_explanations = True

    collector.add_subject(node.get("subject"))
    collector.add_subject(node.get("subject_code"))

    if any(is_present(node.get(key)) for key in _NODE_PARTIAL_CREDIT_KEYS) or _marks_mismatch(node):
        collector.partial_credit_detected = True

    mark_scheme = node.get("mark_scheme")
    if (
        as_list(node.get("marking_points"))
        or as_list(mark_scheme)
        or (isinstance(mark_scheme, str) and "\n" in mark_scheme)
        or node.get("line_by_line") is True
    ):
        collector.uses_line_by_line_marking = True

    if _number_above(node.get("marks"), 1):
        collector.has_multi_mark_allocations = True

    answers = as_list(node.get("correct_answers"))
    if answers:
        if len(answers) > 1:
            collector.has_multi_mark_allocations = True
        for answer in answers:
            _record_answer(answer, collector)
    elif node.get("correct_answer"):
        _record_answer(
            {
                "answer": node.get("correct_answer"),
                "marks": node.get("marks"),
                "answer_requirement": node.get("answer_requirement"),
            },
            collector,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Answer Entries
# ─────────────────────────────────────────────────────────────────────────────

def _record_answer(answer: Any, collector: GuidelineCollector) -> None:
    """Record the evidence carried by one correct-answer entry."""
    if not isinstance(answer, Mapping) or not answer:
        return

    raw_answer = text_of(answer.get("answer"))
    normalized = raw_answer.lower()

    # Alternatives
    if "/" in raw_answer:
        collector.uses_forward_slash = True
    if " or " in normalized or " and " in normalized:
        collector.uses_alternative_linking = True
    if _number_above(answer.get("total_alternatives"), 1):
        collector.uses_alternative_linking = True
    if as_list(answer.get("linked_alternatives")):
        collector.uses_alternative_linking = True
    alternative_type = answer.get("alternative_type")
    if isinstance(alternative_type, str):
        lowered = alternative_type.lower()
        if any(keyword in lowered for keyword in _ALTERNATIVE_TYPE_KEYWORDS):
            collector.uses_alternative_linking = True

    # Context
    _record_context(answer.get("context"), collector)
    _record_context_details(answer, collector)

    # Line-by-line marking
    if "line_number" in answer or "marking_point" in answer:
        collector.uses_line_by_line_marking = True
    if as_list(answer.get("marking_points")):
        collector.uses_line_by_line_marking = True

    # Marking conventions
    if (
        is_present(answer.get("accepts_equivalent_phrasing"))
        or is_present(answer.get("accepts_equivalent"))
        or "owtte" in normalized
    ):
        collector.mark_abbreviation("owtte")
    if (
        is_present(answer.get("accepts_reverse_argument"))
        or "reverse argument" in normalized
        or has_word_boundary_match(raw_answer, "ora")
    ):
        collector.mark_abbreviation("ora")
    if (
        is_present(answer.get("error_carried_forward"))
        or "error carried forward" in normalized
        or has_word_boundary_match(raw_answer, "ecf")
    ):
        collector.mark_abbreviation("ecf")
    accept_level = answer.get("accept_level")
    if isinstance(accept_level, str) and "cao" in accept_level.lower():
        collector.mark_abbreviation("cao")
    if _has_cao_phrase(normalized):
        collector.mark_abbreviation("cao", with_signal=False)

    if any(is_present(answer.get(key)) for key in _CONDITION_KEYS):
        collector.add_variation_signal(CONDITIONAL_MARKING_SIGNAL)
    if as_list(answer.get("rejected_answers")):
        collector.add_variation_signal(REJECT_LIST_SIGNAL)
    if as_list(answer.get("ignored_content")):
        collector.add_variation_signal(IGNORE_LIST_SIGNAL)
    variations = answer.get("answer_variations")
    if isinstance(variations, (Mapping, list, str)) and len(variations) > 0:
        collector.add_variation_signal(ANSWER_VARIATIONS_SIGNAL)

    flags = answer.get("marking_flags")
    if isinstance(flags, Mapping):
        if is_present(flags.get("accepts_equivalent_phrasing")) or is_present(flags.get("owtte")):
            collector.mark_abbreviation("owtte")
        if is_present(flags.get("accepts_reverse_argument")) or is_present(flags.get("ora")):
            collector.mark_abbreviation("ora")
        if is_present(flags.get("error_carried_forward")) or is_present(flags.get("ecf")):
            collector.mark_abbreviation("ecf")
        if is_present(flags.get("correct_answer_only")) or is_present(flags.get("cao")):
            collector.mark_abbreviation("cao")

    # Marks
    if any(is_present(answer.get(key)) for key in _ANSWER_PARTIAL_CREDIT_KEYS) or _marks_mismatch(answer):
        collector.partial_credit_detected = True
    if _number_above(answer.get("marks"), 1):
        collector.has_multi_mark_allocations = True

    requirement = answer.get("answer_requirement")
    if isinstance(requirement, str):
        _scan_requirement(requirement, collector)


def _has_cao_phrase(normalized: str) -> bool:
    """CAO written into lower-cased answer text ("(cao)", "... cao", "cao only")."""
    return (
        "(cao" in normalized
        or " cao " in normalized
        or normalized.endswith(" cao")
        or normalized.startswith("cao ")
        or "cao only" in normalized
    )


# ─────────────────────────────────────────────────────────────────────────────
# Shared Detectors
# ─────────────────────────────────────────────────────────────────────────────

def _scan_requirement(requirement: str, collector: GuidelineCollector) -> None:
    """Keyword scan of an answer_requirement such as "any_two_from"."""
    collector.answer_requirements.add(requirement)
    normalized = requirement.lower()
    if "any" in normalized or "alternative" in normalized:
        collector.uses_alternative_linking = True
    if "all" in normalized or "both" in normalized:
        collector.has_multi_mark_allocations = True
    for key in _REQUIREMENT_ABBREVIATIONS:
        if key in normalized:
            collector.mark_abbreviation(key)


def _record_context(context: Any, collector: GuidelineCollector) -> None:
    """Record a ``context`` value: a list of typed items or a single item."""
    if not is_present(context):
        return
    collector.includes_contextual_answers = True
    if isinstance(context, list):
        for item in context:
            if isinstance(item, Mapping) and item.get("type"):
                collector.add_context_type(item["type"])
    elif isinstance(context, Mapping) and is_present(context.get("type")):
        collector.add_context_type(context["type"])
    else:
        collector.add_context_type("context")


def _record_context_details(entry: Mapping[str, Any], collector: GuidelineCollector) -> None:
    if is_present(entry.get("unit")):
        collector.add_context_type("unit")
    if is_present(entry.get("measurement_details")):
        collector.add_context_type("measurement")
    if is_present(entry.get("context_type")):
        collector.add_context_type(entry["context_type"])


def _number_above(value: Any, threshold: float) -> bool:
    return is_number(value) and value > threshold


def _marks_mismatch(entry: Mapping[str, Any]) -> bool:
    maximum = entry.get("maximum_marks_available")
    marks = entry.get("marks")
    return is_number(maximum) and is_number(marks) and maximum != marks


def _record_document_metadata(document: ParsedPaperDocument, collector: GuidelineCollector) -> None:
    """Subjects and exam board declared at document level."""
    paper_metadata = document.get("paper_metadata")
    if not isinstance(paper_metadata, Mapping):
        paper_metadata = {}
    metadata = document.get("metadata")
    if not isinstance(metadata, Mapping):
        metadata = {}

    for value in (
        document.get("subject"),
        document.get("subject_code"),
        paper_metadata.get("subject"),
        paper_metadata.get("subject_code"),
        metadata.get("subject"),
        metadata.get("subject_code"),
    ):
        collector.add_subject(value)

    for value in (
        document.get("exam_board"),
        document.get("board"),
        paper_metadata.get("exam_board"),
    ):
        if value:
            collector.exam_board = str(value)
            break
