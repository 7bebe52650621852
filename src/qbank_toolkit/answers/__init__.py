"""
Module: answers

Purpose:
    Helpers that read mark-scheme answers and question text: alternative
    and component extraction, answer requirements and format detection.
"""

from .alternatives import (
    AnswerAlternative,
    AnswerComplexity,
    AnswerComponents,
    AnswerLogic,
    analyze_answer_complexity,
    extract_all_valid_alternatives,
    extract_components,
    get_alternative_count,
    parse_and_or_operators,
    parse_forward_slash_answers,
)
from .formats import (
    FIGURE_KEYWORDS,
    detect_answer_format,
    detect_blank_line_format,
    detect_figure_requirement,
    get_question_description,
)
from .requirements import AnswerRequirement, derive_answer_requirement

__all__ = [
    "AnswerAlternative",
    "AnswerComplexity",
    "AnswerComponents",
    "AnswerLogic",
    "AnswerRequirement",
    "FIGURE_KEYWORDS",
    "analyze_answer_complexity",
    "derive_answer_requirement",
    "detect_answer_format",
    "detect_blank_line_format",
    "detect_figure_requirement",
    "extract_all_valid_alternatives",
    "extract_components",
    "get_alternative_count",
    "get_question_description",
    "parse_and_or_operators",
    "parse_forward_slash_answers",
]
