"""
Module: validation.questions

Purpose:
    Field-level validation of question nodes and answer entries before they
    are imported into the question bank.

    Severities:
        critical: the question cannot be identified or answered at all
        high:     the question is unusable as marked (marks, options, parts)
        medium:   subpart problems that can be fixed during review

Key Functions:
    - validate_question(): Question node plus its parts and subparts
    - validate_part() / validate_subpart(): Indexed child checks
    - validate_answer(): One correct-answer entry
    - batch_validate_questions(): Totals over a paper's questions
    - get_validation_summary(): "2 errors, 1 warning" style message

Used By:
    - cli: ``qbank-toolkit validate``
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Sequence

from qbank_toolkit.common.sanitization import (
    ensure_array,
    ensure_number,
    ensure_string,
    is_present,
)
from qbank_toolkit.core.models.nodes import AnswerEntry, QuestionNode

from .models import (
    BatchValidationResult,
    FieldError,
    FieldInfo,
    FieldWarning,
    ValidationResult,
)

logger = logging.getLogger(__name__)

MCQ_CODE = "mcq"
ALL_PASSED_MESSAGE = "All validations passed"


# ─────────────────────────────────────────────────────────────────────────────
# Field helpers
# ─────────────────────────────────────────────────────────────────────────────

def _is_blank(value: Any) -> bool:
    if not value and not isinstance(value, (list, dict)):
        return True
    text = ensure_string(value)
    return text is None or not text.strip()


def _valid_marks(value: Any) -> bool:
    marks = ensure_number(value)
    return marks is not None and not math.isnan(marks) and marks > 0


def _as_node(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


# ─────────────────────────────────────────────────────────────────────────────
# Validators
# ─────────────────────────────────────────────────────────────────────────────

def validate_question(question: QuestionNode) -> ValidationResult:
    """
    Validate a question node and, recursively, its parts.

    Example:
        >>> result = validate_question({"question_text": "", "marks": 0})
        >>> result.is_valid
        False
        >>> sorted(e.field for e in result.errors)
        ['marks', 'question_number', 'question_text']
    """
    errors: List[FieldError] = []
    warnings: List[FieldWarning] = []
    info: List[FieldInfo] = []

    if _is_blank(question.get("question_text")):
        errors.append(FieldError("question_text", "Question text is required", "critical"))

    if _is_blank(question.get("question_number")):
        errors.append(FieldError("question_number", "Question number is required", "critical"))

    if not _valid_marks(question.get("marks")):
        errors.append(FieldError("marks", "Marks must be a positive number", "high"))

    if _is_blank(question.get("topic")):
        warnings.append(FieldWarning(
            "topic",
            "Topic is missing",
            suggestion="Assign a topic for better organization",
        ))

    if question.get("question_type") == MCQ_CODE or question.get("answer_format") == MCQ_CODE:
        options = ensure_array(question.get("options"))
        if not options:
            errors.append(FieldError("options", "MCQ questions must have options", "critical"))
        elif not any(isinstance(opt, Mapping) and opt.get("is_correct") for opt in options):
            errors.append(FieldError("options", "At least one correct answer must be marked", "high"))

    correct_answers = question.get("correct_answers")
    if is_present(correct_answers):
        if not ensure_array(correct_answers) and question.get("question_type") != MCQ_CODE:
            warnings.append(FieldWarning(
                "correct_answers",
                "No correct answers provided",
                suggestion="Add at least one correct answer",
            ))

    parts = question.get("parts")
    if is_present(parts):
        for index, part in enumerate(ensure_array(parts)):
            part_result = validate_part(_as_node(part), index)
            errors.extend(part_result.errors)
            warnings.extend(part_result.warnings)

    return ValidationResult(tuple(errors), tuple(warnings), tuple(info))


def validate_part(part: QuestionNode, index: int) -> ValidationResult:
    """Validate one part; field paths are prefixed with ``parts[index]``."""
    errors: List[FieldError] = []
    warnings: List[FieldWarning] = []
    label = part.get("part") or index + 1

    if _is_blank(part.get("question_text")):
        errors.append(FieldError(
            f"parts[{index}].question_text",
            f"Part {label} is missing question text",
            "high",
        ))

    if not _valid_marks(part.get("marks")):
        errors.append(FieldError(
            f"parts[{index}].marks",
            f"Part {label} has invalid marks",
            "high",
        ))

    subparts = part.get("subparts")
    if is_present(subparts):
        for sub_index, subpart in enumerate(ensure_array(subparts)):
            subpart_result = validate_subpart(_as_node(subpart), index, sub_index)
            errors.extend(subpart_result.errors)
            warnings.extend(subpart_result.warnings)

    return ValidationResult(tuple(errors), tuple(warnings))


def validate_subpart(
    subpart: QuestionNode,
    part_index: int,
    subpart_index: int,
) -> ValidationResult:
    errors: List[FieldError] = []

    if _is_blank(subpart.get("question_text")):
        label = subpart.get("subpart") or subpart_index + 1
        errors.append(FieldError(
            f"parts[{part_index}].subparts[{subpart_index}].question_text",
            f"Subpart {label} is missing question text",
            "medium",
        ))

    return ValidationResult(tuple(errors))


def validate_answer(answer: AnswerEntry) -> ValidationResult:
    """Validate a correct-answer entry: text is required, marks are advised."""
    errors: List[FieldError] = []
    warnings: List[FieldWarning] = []

    if _is_blank(answer.get("answer")):
        errors.append(FieldError("answer", "Answer text is required", "high"))

    marks = ensure_number(answer.get("marks"))
    if marks is None or math.isnan(marks):
        warnings.append(FieldWarning(
            "marks",
            "Answer marks are not specified",
            suggestion="Specify marks for partial credit",
        ))

    return ValidationResult(tuple(errors), tuple(warnings))


def batch_validate_questions(questions: Sequence[Any]) -> BatchValidationResult:
    """
    Validate every question of a paper.

    Results are keyed by ``id``, then ``question_number``, then
    ``question_<position>``. A repeated key keeps the last result while the
    totals still count every question.
    """
    results: Dict[str, ValidationResult] = {}
    valid_questions = 0
    total_errors = 0
    total_warnings = 0

    for index, raw_question in enumerate(questions):
        question = _as_node(raw_question)
        result = validate_question(question)
        key = question.get("id") or question.get("question_number") or f"question_{index + 1}"
        results[str(key)] = result

        total_errors += len(result.errors)
        total_warnings += len(result.warnings)
        if result.is_valid:
            valid_questions += 1

    logger.debug(
        f"Validated {len(questions)} questions: {valid_questions} valid, "
        f"{total_errors} errors, {total_warnings} warnings"
    )

    return BatchValidationResult(
        total_questions=len(questions),
        valid_questions=valid_questions,
        invalid_questions=len(questions) - valid_questions,
        total_errors=total_errors,
        total_warnings=total_warnings,
        results=results,
    )


def get_validation_summary(result: ValidationResult) -> str:
    """
    One-line summary of a validation result.

    Example:
        >>> get_validation_summary(ValidationResult())
        'All validations passed'
    """
    if result.is_valid:
        return ALL_PASSED_MESSAGE

    pieces = []
    if result.errors:
        count = len(result.errors)
        pieces.append(f"{count} error{'s' if count > 1 else ''}")
    if result.warnings:
        count = len(result.warnings)
        pieces.append(f"{count} warning{'s' if count > 1 else ''}")

    return ", ".join(pieces)
