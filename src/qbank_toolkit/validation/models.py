"""
Module: validation.models

Purpose:
    Result types for question validation. Errors block an import, warnings
    and info entries are advisory.

Key Classes:
    - FieldError / FieldWarning / FieldInfo: One finding against a field path
    - ValidationResult: Findings for a single question, part or answer
    - BatchValidationResult: Totals and per-question results for a paper
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple

Severity = Literal["critical", "high", "medium"]


@dataclass(frozen=True)
class FieldError:
    """
    A problem that makes the question invalid.

    Attributes:
        field: Dotted/indexed path, e.g. "parts[0].subparts[1].question_text"
        message: Human-readable description
        severity: "critical", "high" or "medium"
    """
    field: str
    message: str
    severity: Severity


@dataclass(frozen=True)
class FieldWarning:
    field: str
    message: str
    suggestion: Optional[str] = None


@dataclass(frozen=True)
class FieldInfo:
    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """Findings for one question node or answer entry."""
    errors: Tuple[FieldError, ...] = ()
    warnings: Tuple[FieldWarning, ...] = ()
    info: Tuple[FieldInfo, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": [
                {"field": e.field, "message": e.message, "severity": e.severity}
                for e in self.errors
            ],
            "warnings": [
                {"field": w.field, "message": w.message, "suggestion": w.suggestion}
                for w in self.warnings
            ],
            "info": [{"field": i.field, "message": i.message} for i in self.info],
        }


@dataclass(frozen=True)
class BatchValidationResult:
    """
    Validation totals for a list of questions.

    ``results`` is keyed by question id (or number) in input order.
    """
    total_questions: int
    valid_questions: int
    invalid_questions: int
    total_errors: int
    total_warnings: int
    results: Dict[str, ValidationResult] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalQuestions": self.total_questions,
            "validQuestions": self.valid_questions,
            "invalidQuestions": self.invalid_questions,
            "totalErrors": self.total_errors,
            "totalWarnings": self.total_warnings,
            "results": {key: result.to_dict() for key, result in self.results.items()},
        }
