"""
Schemas Package

JSON schema definitions and document validation utilities.
"""

from .validator import (
    ValidationError,
    validate_document,
)

__all__ = [
    "ValidationError",
    "validate_document",
]
