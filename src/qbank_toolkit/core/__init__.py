"""
Question Bank Toolkit Core Package

Shared data models, document validation and serialization helpers. These
models are the single source of truth for the analysis, answers and
validation subpackages.

**DESIGN NOTES:**

1. **Immutable Results**
   - JsonGuidelineSummary and ExtractionRules are frozen dataclasses
   - Changes produce new instances; unchanged rule groups are shared

2. **Loosely-Typed Input**
   - Uploaded documents stay plain dicts
   - `nodes` TypedDicts describe them for readers and type checkers only

3. **Stable Wire Shape**
   - JSON output keeps the camelCase keys stored with import sessions
"""

from .models import ExtractionRules, JsonGuidelineSummary
from .schemas import ValidationError, validate_document

__all__ = [
    "ExtractionRules",
    "JsonGuidelineSummary",
    "ValidationError",
    "validate_document",
]
