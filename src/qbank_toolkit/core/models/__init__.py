"""
Core Models Package

Frozen data models shared by the analyzer, the reconciler and the
persistence helpers, plus the fully-optional TypedDicts describing the
uploaded document shape.

| Model | Owner | Lifecycle |
|-------|-------|-----------|
| `ParsedPaperDocument` | caller | read-only input |
| `JsonGuidelineSummary` | analyzer | rebuilt per document |
| `ExtractionRules` | caller | adjusted by the reconciler |
"""

from .nodes import AnswerEntry, ParsedPaperDocument, QuestionNode
from .rules import (
    Abbreviations,
    AnswerStructure,
    EducationalContent,
    ExtractionRules,
    MarkScheme,
    SubjectSpecific,
)
from .summary import JsonGuidelineSummary

__all__ = [
    "Abbreviations",
    "AnswerEntry",
    "AnswerStructure",
    "EducationalContent",
    "ExtractionRules",
    "JsonGuidelineSummary",
    "MarkScheme",
    "ParsedPaperDocument",
    "QuestionNode",
    "SubjectSpecific",
]
