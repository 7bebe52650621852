"""
Module: analysis

Purpose:
    Guideline analysis of uploaded paper documents and reconciliation of
    extraction rules against the result.

        document --analyze_guidelines--> JsonGuidelineSummary
        summary + ExtractionRules --reconcile_rules--> ExtractionRules
        summary + ExtractionRules --evaluate_checklist--> ChecklistItem tuple

Key Functions:
    - analyze_guidelines(): Structural summary of a document
    - reconcile_rules(): Enable the rules a summary calls for
    - evaluate_checklist(): Requirement status of a summary against rules

Key Classes:
    - AnalysisConfig: Format codes and keywords
    - ChecklistItem: One requirement check
"""

from .checklist import ChecklistItem, abbreviations_configured, evaluate_checklist, has_warnings
from .config import AnalysisConfig, MANUAL_MARKING_FORMATS
from .guidelines import analyze_guidelines
from .reconciler import reconcile_rules

__all__ = [
    "AnalysisConfig",
    "ChecklistItem",
    "MANUAL_MARKING_FORMATS",
    "abbreviations_configured",
    "analyze_guidelines",
    "evaluate_checklist",
    "has_warnings",
    "reconcile_rules",
]
