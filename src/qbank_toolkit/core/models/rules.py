"""
Module: rules

Purpose:
    Provides ExtractionRules - the rule snapshot that tells the import
    pipeline how to treat a paper document. Owned by the caller (checkbox
    UI, rules file); adjusted by the reconciler when a new summary arrives.

    Snapshots are frozen. Every change, whether a user edit through
    ``with_value()`` or a reconciler pass, produces a new ExtractionRules
    that shares the untouched rule groups with its predecessor.

Key Classes:
    - ExtractionRules: Root snapshot
    - EducationalContent, SubjectSpecific, Abbreviations,
      AnswerStructure, MarkScheme: Nested toggle groups

Dependencies:
    - dataclasses (std)
    - common.exam_boards: Board literals

Used By:
    - analysis.reconciler
    - core.utils.rules_store
    - cli
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Tuple, Type, TypeVar

from qbank_toolkit.common.exam_boards import EXAM_BOARDS, ExamBoard, normalize_exam_board

logger = logging.getLogger(__name__)

G = TypeVar("G")

_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(word.capitalize() for word in rest)


def _to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY_RE.sub("_", name).lower()


# ─────────────────────────────────────────────────────────────────────────────
# Rule Groups
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class EducationalContent:
    """Whether imported questions must carry hints/explanations."""
    hints_required: bool = True
    explanations_required: bool = True


@dataclass(frozen=True, slots=True)
class SubjectSpecific:
    """Subject-specific answer handling (units, equations, ...)."""
    physics: bool = False
    chemistry: bool = False
    biology: bool = False
    mathematics: bool = False


@dataclass(frozen=True, slots=True)
class Abbreviations:
    """Mark-scheme abbreviations the importer should interpret."""
    ora: bool = False
    owtte: bool = False
    ecf: bool = False
    cao: bool = False


@dataclass(frozen=True, slots=True)
class AnswerStructure:
    validate_marks: bool = True
    require_context: bool = True
    validate_linking: bool = True
    accept_alternatives: bool = False


@dataclass(frozen=True, slots=True)
class MarkScheme:
    requires_manual_marking: bool = True
    marking_criteria: bool = True
    component_marking: bool = True
    level_descriptors: bool = True


_GROUP_TYPES: Dict[str, type] = {
    "educational_content": EducationalContent,
    "subject_specific": SubjectSpecific,
    "abbreviations": Abbreviations,
    "answer_structure": AnswerStructure,
    "mark_scheme": MarkScheme,
}

_CORE_FLAGS: Tuple[str, ...] = (
    "forward_slash_handling",
    "line_by_line_processing",
    "alternative_linking",
    "context_required",
    "figure_detection",
)


def _group_to_dict(group: Any) -> Dict[str, bool]:
    return {_to_camel(f.name): getattr(group, f.name) for f in fields(group)}


def _group_from_dict(group_type: Type[G], data: Any) -> G:
    """Build a group from a dict, keeping defaults for missing or non-bool keys."""
    if not isinstance(data, Mapping):
        return group_type()
    values: Dict[str, bool] = {}
    for f in fields(group_type):
        raw = data.get(_to_camel(f.name), data.get(f.name))
        if isinstance(raw, bool):
            values[f.name] = raw
        elif raw is not None:
            logger.debug(f"Ignoring non-boolean rule value {f.name}={raw!r}")
    return group_type(**values)


def _require_bool(path: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise TypeError(f"Rule {path!r} expects a bool, got {value!r}")


# ─────────────────────────────────────────────────────────────────────────────
# Root Snapshot
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class ExtractionRules:
    """
    Extraction rule snapshot.

    Defaults match a fresh import session: every core toggle on, subject
    and abbreviation toggles off, alternatives not yet accepted.

    Invariants:
        - exam_board is one of "Cambridge", "Edexcel", "Both"

    Example:
        >>> rules = ExtractionRules()
        >>> rules.abbreviations.cao
        False
        >>> rules.with_value("abbreviations.cao", True).abbreviations.cao
        True
    """

    forward_slash_handling: bool = True
    line_by_line_processing: bool = True
    alternative_linking: bool = True
    context_required: bool = True
    figure_detection: bool = True
    educational_content: EducationalContent = field(default_factory=EducationalContent)
    subject_specific: SubjectSpecific = field(default_factory=SubjectSpecific)
    abbreviations: Abbreviations = field(default_factory=Abbreviations)
    answer_structure: AnswerStructure = field(default_factory=AnswerStructure)
    mark_scheme: MarkScheme = field(default_factory=MarkScheme)
    exam_board: ExamBoard = "Cambridge"

    def __post_init__(self) -> None:
        if self.exam_board not in EXAM_BOARDS:
            raise ValueError(f"Unsupported exam board: {self.exam_board!r}")

    def with_value(self, path: str, value: Any) -> ExtractionRules:
        """
        Return a copy with one rule changed.

        Args:
            path: Dotted rule path, camelCase or snake_case
                (``"markScheme.componentMarking"``, ``"exam_board"``)
            value: New value (bool, or a board name for ``examBoard``)

        Raises:
            KeyError: Unknown rule path
            TypeError: Non-bool value for a toggle
            ValueError: Unsupported exam board
        """
        keys = [_to_snake(key) for key in path.split(".")]

        if keys == ["exam_board"]:
            return replace(self, exam_board=value)

        if len(keys) == 1 and keys[0] in _CORE_FLAGS:
            _require_bool(path, value)
            return replace(self, **{keys[0]: value})

        if len(keys) == 2 and keys[0] in _GROUP_TYPES:
            group_name, flag = keys
            group = getattr(self, group_name)
            if flag not in {f.name for f in fields(group)}:
                raise KeyError(path)
            _require_bool(path, value)
            return replace(self, **{group_name: replace(group, **{flag: value})})

        raise KeyError(path)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase shape stored with import sessions."""
        data: Dict[str, Any] = {_to_camel(name): getattr(self, name) for name in _CORE_FLAGS}
        for group_name in _GROUP_TYPES:
            data[_to_camel(group_name)] = _group_to_dict(getattr(self, group_name))
        data["examBoard"] = self.exam_board
        return data

    @classmethod
    def from_dict(cls, data: Any) -> ExtractionRules:
        """
        Parse a rules payload, falling back to defaults per key.

        Accepts camelCase or snake_case keys. Malformed values are skipped,
        never raised, so a hand-edited rules file cannot block an import.
        Board names are normalized ("CIE" -> "Cambridge").
        """
        if not isinstance(data, Mapping):
            return cls()

        values: Dict[str, Any] = {}
        for name in _CORE_FLAGS:
            raw = data.get(_to_camel(name), data.get(name))
            if isinstance(raw, bool):
                values[name] = raw

        for group_name, group_type in _GROUP_TYPES.items():
            raw = data.get(_to_camel(group_name), data.get(group_name))
            values[group_name] = _group_from_dict(group_type, raw)

        raw_board = data.get("examBoard", data.get("exam_board"))
        if raw_board in EXAM_BOARDS:
            values["exam_board"] = raw_board
        else:
            board = normalize_exam_board(raw_board)
            if board:
                values["exam_board"] = board

        return cls(**values)
