"""
Module: common.exam_boards

Purpose:
    Map free-text exam board names found in paper JSON onto the board
    selector used by extraction rules.

Key Functions:
    - normalize_exam_board(): "CIE", "Pearson Edexcel", ... -> board literal

Used By:
    - core.models.rules: Board validation for user edits
    - analysis.reconciler: Board overwrite rule
"""

from __future__ import annotations

from typing import Any, Literal, Optional, Tuple

ExamBoard = Literal["Cambridge", "Edexcel", "Both"]

EXAM_BOARDS: Tuple[str, ...] = ("Cambridge", "Edexcel", "Both")


def normalize_exam_board(value: Any) -> Optional[ExamBoard]:
    """
    Normalize a raw exam board string.

    Args:
        value: Board text from the document (any type; non-strings are
            converted with str())

    Returns:
        "Both" if the text names Cambridge and Edexcel, "Cambridge" for
        Cambridge/CIE, "Edexcel" for Edexcel/Pearson, otherwise None.

    Example:
        >>> normalize_exam_board("Cambridge International (CIE)")
        'Cambridge'
        >>> normalize_exam_board("Pearson")
        'Edexcel'
        >>> normalize_exam_board("AQA") is None
        True
    """
    if not value:
        return None
    normalized = str(value).lower()
    if "cambridge" in normalized and "edexcel" in normalized:
        return "Both"
    if "cambridge" in normalized or "cie" in normalized:
        return "Cambridge"
    if "edexcel" in normalized or "pearson" in normalized:
        return "Edexcel"
    return None
