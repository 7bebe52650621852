"""
Module: answers.formats

Purpose:
    Infer answer formats and display text from a question's own content:
    explicit format fields, options, command words and the dotted answer
    lines printed on papers.

Key Functions:
    - detect_answer_format(): Format code for a question node
    - detect_figure_requirement(): Does the text refer to a figure?
    - detect_blank_line_format(): Format implied by dotted answer lines
    - get_question_description(): Best display text for a question

Dependencies:
    - re (std)
    - common.sanitization: Text coercion
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from qbank_toolkit.common.sanitization import as_list, text_of
from qbank_toolkit.core.models.nodes import QuestionNode

FIGURE_KEYWORDS = (
    "diagram",
    "figure",
    "graph",
    "chart",
    "illustration",
    "shown",
    "image",
    "picture",
    "sketch",
    "draw",
)

MCQ_TYPE_CODES = frozenset({"mcq", "multiple_choice"})

# (keywords, format) in priority order
_FORMAT_KEYWORDS = (
    (("calculate", "work out"), "calculation"),
    (("draw", "sketch"), "diagram"),
    (("table",), "table"),
    (("graph", "plot"), "graph"),
    (("explain", "describe"), "multi_line"),
)

_DOTTED_LINE_RE = re.compile(r"\.{3,}")
_LABELED_LINE_RE = re.compile(r"[A-Z]\s*\.{3,}")
_CONNECTED_LINES_RE = re.compile(r"\.{3,}\s+(and|or)\s+\.{3,}", re.IGNORECASE)

MULTI_PART_PREFIX = "[Multi-part question]"


def detect_figure_requirement(question_text: Any) -> bool:
    """True when the text mentions a diagram, graph, picture or similar."""
    text = text_of(question_text).lower()
    return any(keyword in text for keyword in FIGURE_KEYWORDS)


def detect_answer_format(question: QuestionNode) -> str:
    """
    Work out the answer format of a question node.

    Order:
        1. Explicit ``answer_format``
        2. Non-empty ``options`` or an MCQ ``question_type``/``type`` -> "mcq"
        3. Command words in ``question_text`` (calculation, diagram, table,
           graph, multi_line)
        4. "single_line"

    Example:
        >>> detect_answer_format({"question_text": "Sketch the graph of y = x^2"})
        'diagram'
    """
    explicit = question.get("answer_format")
    if explicit:
        return str(explicit)

    if as_list(question.get("options")):
        return "mcq"

    if question.get("question_type") in MCQ_TYPE_CODES or question.get("type") in MCQ_TYPE_CODES:
        return "mcq"

    question_text = text_of(question.get("question_text")).lower()
    for keywords, answer_format in _FORMAT_KEYWORDS:
        if any(keyword in question_text for keyword in keywords):
            return answer_format

    return "single_line"


def detect_blank_line_format(question_text: Any) -> Optional[str]:
    """
    Format implied by the dotted answer lines in printed question text.

    Returns None when the text has no run of three or more dots.

    Example:
        >>> detect_blank_line_format("1 .......... 2 ..........")
        'two_items'
    """
    text = text_of(question_text)
    if not text:
        return None

    dotted_lines = _DOTTED_LINE_RE.findall(text)
    if not dotted_lines:
        return None

    if _LABELED_LINE_RE.search(text):
        return "multi_line_labeled"

    if _CONNECTED_LINES_RE.search(text):
        return "two_items_connected"

    if "equation" in text or "formula" in text:
        return "equation"

    if len(dotted_lines) == 2:
        return "two_items"
    if len(dotted_lines) > 2:
        return "multi_line"

    return "single_line"


def get_question_description(question: QuestionNode) -> str:
    """
    Best available display text for a question.

    Tries ``question_description``, ``question_text`` and
    ``question_header``; multi-part questions fall back to their
    ``description`` or a preview of the first part with text. Placeholders
    are returned for questions whose content lives elsewhere.
    """
    for key in ("question_description", "question_text", "question_header"):
        value = text_of(question.get(key)).strip()
        if value:
            return value

    parts = as_list(question.get("parts"))
    if question.get("type") == "complex" and parts:
        description = text_of(question.get("description")).strip()
        if description:
            return description

        for part in parts:
            if not isinstance(part, Mapping):
                continue
            part_text = (
                text_of(part.get("question_description")).strip()
                or text_of(part.get("question_text")).strip()
            )
            if part_text:
                return f"{MULTI_PART_PREFIX} {part_text[:100]}..."
        return "[See parts below]"

    if question.get("type") == "mcq" and question.get("figure"):
        return "[Figure-based question]"

    if as_list(question.get("options")):
        return "[Multiple choice question]"

    return "[Question content in parts or attachments]"
