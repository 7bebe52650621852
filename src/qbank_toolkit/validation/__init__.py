"""
Module: validation

Purpose:
    Pre-import validation of question nodes and answer entries.
"""

from .models import (
    BatchValidationResult,
    FieldError,
    FieldInfo,
    FieldWarning,
    ValidationResult,
)
from .questions import (
    batch_validate_questions,
    get_validation_summary,
    validate_answer,
    validate_part,
    validate_question,
    validate_subpart,
)

__all__ = [
    "BatchValidationResult",
    "FieldError",
    "FieldInfo",
    "FieldWarning",
    "ValidationResult",
    "batch_validate_questions",
    "get_validation_summary",
    "validate_answer",
    "validate_part",
    "validate_question",
    "validate_subpart",
]
