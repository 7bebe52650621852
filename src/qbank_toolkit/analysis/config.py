"""
Module: analysis.config

Purpose:
    Configuration dataclass for guideline analysis and rule reconciliation.
    Immutable settings with the console's defaults.

Key Classes:
    - AnalysisConfig: Format codes and keywords used by the analyzer and
      reconciler

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - analysis.guidelines: Manual-marking format codes
    - analysis.reconciler: Subject keywords
    - cli: Strict document loading
"""

from dataclasses import dataclass, field, fields
from typing import FrozenSet, Tuple

from qbank_toolkit.core.models.rules import SubjectSpecific

# Answer formats that cannot be auto-marked
MANUAL_MARKING_FORMATS: FrozenSet[str] = frozenset({
    "diagram",
    "chemical_structure",
    "structural_diagram",
    "table",
    "graph",
    "multi_line",
    "multi_line_labeled",
    "file_upload",
    "audio",
    "code",
})

# (SubjectSpecific flag, substring of a lower-cased detected subject)
SUBJECT_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("physics", "physics"),
    ("chemistry", "chemistry"),
    ("biology", "biology"),
    ("mathematics", "math"),
)


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Configuration for guideline analysis.

    Attributes:
        manual_marking_formats: answer_format codes that flag manual marking
        subject_keywords: Flag/keyword pairs for the subject-specific rules.
            Every SubjectSpecific flag must appear exactly once.
        strict_schema: Validate loaded documents against the JSON Schema
    """
    manual_marking_formats: FrozenSet[str] = MANUAL_MARKING_FORMATS
    subject_keywords: Tuple[Tuple[str, str], ...] = field(default=SUBJECT_KEYWORDS)
    strict_schema: bool = False

    def __post_init__(self) -> None:
        expected = sorted(f.name for f in fields(SubjectSpecific))
        configured = sorted(flag for flag, _ in self.subject_keywords)
        if configured != expected:
            raise ValueError(
                f"subject_keywords must cover {expected} exactly once, got {configured}"
            )
