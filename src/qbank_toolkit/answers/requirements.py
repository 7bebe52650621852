"""
Module: answers.requirements

Purpose:
    Derive what kind of answer a question expects from the command word in
    its text ("calculate", "explain", "state", ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from qbank_toolkit.common.sanitization import text_of
from qbank_toolkit.core.models.nodes import QuestionNode

# (keywords, expectation, partial_credit, strict_marking) in priority order
_COMMAND_WORD_RULES: Tuple[Tuple[Tuple[str, ...], str, bool, bool], ...] = (
    (("calculate", "work out"), "Show working and final answer", True, False),
    (("explain", "describe"), "Detailed explanation required", True, False),
    (("compare", "contrast"), "Compare and contrast both items", True, False),
    (("state", "name"), "Brief, specific answer", False, True),
)

DEFAULT_EXPECTATION = "Complete and accurate answer"


@dataclass(frozen=True)
class AnswerRequirement:
    """
    Expected answer shape for a question.

    Attributes:
        format: The question's answer_format, or "single_line"
        expectation: Human-readable expectation
        keywords: Command words that selected the expectation
        partial_credit: Marks can be awarded for partial answers
        strict_marking: Only the specific answer earns the mark
    """
    format: str
    expectation: str
    keywords: Tuple[str, ...] = ()
    partial_credit: bool = False
    strict_marking: bool = False


def derive_answer_requirement(question: QuestionNode) -> AnswerRequirement:
    """
    Derive the answer requirement from a question's text.

    The first matching command-word group wins, so "Calculate and explain"
    is a calculation.

    Example:
        >>> derive_answer_requirement({"question_text": "State the unit of force."}).strict_marking
        True
    """
    question_text = text_of(question.get("question_text")).lower()
    answer_format = question.get("answer_format") or "single_line"

    for keywords, expectation, partial_credit, strict_marking in _COMMAND_WORD_RULES:
        if any(keyword in question_text for keyword in keywords):
            return AnswerRequirement(
                format=answer_format,
                expectation=expectation,
                keywords=keywords,
                partial_credit=partial_credit,
                strict_marking=strict_marking,
            )

    return AnswerRequirement(format=answer_format, expectation=DEFAULT_EXPECTATION)
