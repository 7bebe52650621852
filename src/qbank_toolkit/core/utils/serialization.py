"""
Serialization Utilities

to/from JSON helpers for the summary and rule models, and loading of
uploaded paper documents.

Summaries and rule snapshots are serialized with the camelCase keys the
console stores in import session records, so a snapshot written here can
be attached to a session as-is.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..models.rules import ExtractionRules
from ..models.summary import JsonGuidelineSummary
from ..schemas.validator import validate_document


# ─────────────────────────────────────────────────────────────────────────────
# Summary Serialization
# ─────────────────────────────────────────────────────────────────────────────

def summary_to_dict(summary: JsonGuidelineSummary) -> dict[str, Any]:
    """Serialize a summary to a JSON-ready dictionary."""
    return summary.to_dict()


def summary_to_json(summary: JsonGuidelineSummary, *, indent: int | None = 2) -> str:
    """
    Serialize a summary to a JSON string.

    Output is byte-identical for equal summaries: collections are already
    ordered and key order is fixed by to_dict().
    """
    return json.dumps(summary.to_dict(), indent=indent, ensure_ascii=False)


# ─────────────────────────────────────────────────────────────────────────────
# Rules Serialization
# ─────────────────────────────────────────────────────────────────────────────

def rules_to_dict(rules: ExtractionRules) -> dict[str, Any]:
    """Serialize a rule snapshot to a JSON-ready dictionary."""
    return rules.to_dict()


def rules_from_dict(data: Any) -> ExtractionRules:
    """
    Deserialize a rule snapshot.

    Never raises: unknown or malformed keys fall back to defaults.
    """
    return ExtractionRules.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# Document Loading
# ─────────────────────────────────────────────────────────────────────────────

def load_document(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """
    Load and shape-check an uploaded paper document.

    Args:
        path: Path to the JSON file
        strict: Also validate against the bundled JSON Schema

    Returns:
        The parsed document

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file is not valid JSON
        ValidationError: If the document shape is invalid
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    validate_document(data, strict=strict)
    return data
