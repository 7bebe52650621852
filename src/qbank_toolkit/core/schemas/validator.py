"""
Document Shape Validation

Checks that an uploaded paper document has the shape the analyzer and the
question validators walk: a JSON object whose ``questions`` (when present)
is a list of objects, with ``parts``/``subparts``/``correct_answers`` lists
of objects below them.

This runs when a document is loaded from disk, before analysis. The
analyzer itself never calls it and tolerates any input.

Two levels:
- Basic (default): structural checks with dotted error paths
- Strict: basic checks plus the bundled JSON Schema via ``jsonschema``
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

_SCHEMAS: dict[str, dict] = {}

_CHILD_LISTS = ("parts", "subparts")


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when a document fails shape validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_document(data: Any, *, strict: bool = False) -> None:
    """
    Validate an uploaded paper document.

    Args:
        data: Parsed JSON value
        strict: Also validate against paper_document.schema.json

    Raises:
        ValidationError: If the document shape is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Document root must be an object, got {type(data).__name__}",
            path="",
        )

    if "questions" in data:
        questions = data["questions"]
        if not isinstance(questions, list):
            raise ValidationError(
                "questions must be a list",
                path="questions",
            )
        for i, question in enumerate(questions):
            _validate_node(question, f"questions[{i}]")

    metadata = data.get("paper_metadata")
    if metadata is not None and not isinstance(metadata, dict):
        raise ValidationError(
            "paper_metadata must be an object",
            path="paper_metadata",
        )

    if strict:
        schema = _load_schema("paper_document")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            ) from e


def _validate_node(data: Any, path: str) -> None:
    """Validate a question/part/subpart node recursively."""
    if not isinstance(data, dict):
        raise ValidationError(
            f"Question node must be an object, got {type(data).__name__}",
            path=path,
        )

    answers = data.get("correct_answers")
    if answers is not None:
        if not isinstance(answers, list):
            raise ValidationError(
                "correct_answers must be a list",
                path=f"{path}.correct_answers",
            )
        for i, answer in enumerate(answers):
            if not isinstance(answer, dict):
                raise ValidationError(
                    "Answer entry must be an object",
                    path=f"{path}.correct_answers[{i}]",
                )

    for key in _CHILD_LISTS:
        children = data.get(key)
        if children is None:
            continue
        if not isinstance(children, list):
            raise ValidationError(
                f"{key} must be a list",
                path=f"{path}.{key}",
            )
        for i, child in enumerate(children):
            _validate_node(child, f"{path}.{key}[{i}]")
