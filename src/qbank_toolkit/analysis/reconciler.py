"""
Module: analysis.reconciler

Purpose:
    Adjust an ExtractionRules snapshot to what a guideline summary shows
    the document actually contains.

    Rules only move towards "enabled": a toggle the user (or an earlier
    pass) turned on is never turned off. Two groups are the exception and
    are replaced wholesale so they track the document exactly:
    educational content (hints/explanations) and subject-specific flags.

    When nothing changes the input snapshot itself is returned, so callers
    can compare by identity to skip redundant work. Reconciling the result
    again with the same summary is a no-op.

Key Functions:
    - reconcile_rules(): summary + rules -> rules

Used By:
    - core.utils.rules_store.RulesStore.apply_summary
    - cli: ``qbank-toolkit analyze --rules``
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional

from qbank_toolkit.common.exam_boards import normalize_exam_board
from qbank_toolkit.core.models.rules import (
    EducationalContent,
    ExtractionRules,
    SubjectSpecific,
)
from qbank_toolkit.core.models.summary import JsonGuidelineSummary

from .collector import ABBREVIATION_LABELS
from .config import AnalysisConfig

logger = logging.getLogger(__name__)


def reconcile_rules(
    summary: JsonGuidelineSummary,
    rules: ExtractionRules,
    config: Optional[AnalysisConfig] = None,
) -> ExtractionRules:
    """
    Enable the rules a document needs.

    Args:
        summary: Guideline summary of the current document
        rules: Current rule snapshot
        config: Analysis settings (defaults if None)

    Returns:
        ``rules`` itself when no change is needed, otherwise a new snapshot
        in which only the changed groups are new objects.

    Example:
        >>> rules = ExtractionRules(forward_slash_handling=False)
        >>> summary = JsonGuidelineSummary(uses_forward_slash=True)
        >>> reconcile_rules(summary, rules).forward_slash_handling
        True
    """
    config = config or AnalysisConfig()
    updates: Dict[str, Any] = {}

    links_alternatives = summary.uses_alternative_linking or bool(summary.answer_requirements)
    weighs_marks = summary.has_multi_mark_allocations or summary.partial_credit_detected

    # Core toggles
    core_evidence = {
        "forward_slash_handling": summary.uses_forward_slash,
        "line_by_line_processing": summary.uses_line_by_line_marking,
        "alternative_linking": links_alternatives,
        "figure_detection": summary.includes_figures or summary.includes_attachments,
        "context_required": summary.includes_contextual_answers,
    }
    for name, evidence in core_evidence.items():
        if evidence and not getattr(rules, name):
            updates[name] = True

    # Tracked exactly, not accumulated
    educational_content = EducationalContent(
        hints_required=summary.includes_hints,
        explanations_required=summary.includes_explanations,
    )
    if educational_content != rules.educational_content:
        updates["educational_content"] = educational_content

    subjects = [subject.lower() for subject in summary.subjects_detected]
    subject_specific = SubjectSpecific(**{
        flag: any(keyword in subject for subject in subjects)
        for flag, keyword in config.subject_keywords
    })
    if subject_specific != rules.subject_specific:
        updates["subject_specific"] = subject_specific

    abbreviation_updates = {
        key: True
        for key, label in ABBREVIATION_LABELS.items()
        if label in summary.abbreviations_detected and not getattr(rules.abbreviations, key)
    }
    if abbreviation_updates:
        updates["abbreviations"] = replace(rules.abbreviations, **abbreviation_updates)

    _enable_group(rules, updates, "answer_structure", {
        "require_context": summary.includes_contextual_answers,
        "validate_linking": links_alternatives,
        "accept_alternatives": bool(summary.variation_signals) or summary.uses_alternative_linking,
        "validate_marks": weighs_marks,
    })
    _enable_group(rules, updates, "mark_scheme", {
        "requires_manual_marking": summary.requires_manual_marking,
        "component_marking": summary.has_component_marking,
        "marking_criteria": weighs_marks,
    })

    board = normalize_exam_board(summary.exam_board)
    if board and board != rules.exam_board:
        updates["exam_board"] = board

    if not updates:
        return rules

    logger.debug(f"Reconciled extraction rules: {sorted(updates)}")
    return replace(rules, **updates)


def _enable_group(
    rules: ExtractionRules,
    updates: Dict[str, Any],
    group_name: str,
    evidence: Dict[str, bool],
) -> None:
    """Turn on the flags of one nested group that have evidence."""
    group = getattr(rules, group_name)
    enabled = {
        flag: True
        for flag, present in evidence.items()
        if present and not getattr(group, flag)
    }
    if enabled:
        updates[group_name] = replace(group, **enabled)
