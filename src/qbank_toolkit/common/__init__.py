"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .exam_boards import EXAM_BOARDS, ExamBoard, normalize_exam_board
from .sanitization import (
    as_list,
    ensure_array,
    ensure_number,
    ensure_string,
    extract_name_candidates,
    find_unique_match,
    has_word_boundary_match,
    is_exact_text_match,
    is_loose_text_match,
    is_number,
    is_present,
    normalize_text,
    text_of,
)

__all__ = [
    # exam_boards
    "EXAM_BOARDS",
    "ExamBoard",
    "normalize_exam_board",
    # sanitization
    "as_list",
    "ensure_array",
    "ensure_number",
    "ensure_string",
    "extract_name_candidates",
    "find_unique_match",
    "has_word_boundary_match",
    "is_exact_text_match",
    "is_loose_text_match",
    "is_number",
    "is_present",
    "normalize_text",
    "text_of",
]
