"""
Module: answers.alternatives

Purpose:
    Split mark-scheme answer text into alternatives and components.
    Handles forward-slash alternatives ("A / B / C") and AND/OR operators
    ("x and y", "red or blue").

Key Functions:
    - parse_forward_slash_answers(): "A / B" -> independent alternatives
    - parse_and_or_operators(): AND/OR classification of answer text
    - extract_all_valid_alternatives(): Every acceptable variant, deduplicated
    - analyze_answer_complexity(): Alternative/component summary of a question
    - extract_components(): Required and optional components
    - get_alternative_count(): Number of valid alternatives

Dependencies:
    - re (std)
    - common.sanitization: Text coercion

Used By:
    - cli: ``qbank-toolkit inspect``
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Literal, Mapping, Tuple

from qbank_toolkit.common.sanitization import ensure_array, text_of

AlternativeType = Literal["independent", "linked", "conditional"]
LogicType = Literal["simple", "all_required", "any_accepted", "complex"]

_AND_SPLIT_RE = re.compile(r"\s+and\s+|\s+&\s+", re.IGNORECASE)
_OR_SPLIT_RE = re.compile(r"\s+or\s+", re.IGNORECASE)


@dataclass(frozen=True)
class AnswerAlternative:
    """
    One acceptable answer variant.

    Attributes:
        id: 1-based position in the source text
        text: Trimmed variant text
        marks: Marks awarded for this variant
        type: How the variant relates to its siblings
        linked_to: ids of variants this one depends on
    """
    id: int
    text: str
    marks: int = 1
    type: AlternativeType = "independent"
    linked_to: Tuple[int, ...] = ()


@dataclass(frozen=True)
class AnswerLogic:
    """Result of AND/OR parsing."""
    type: LogicType
    required_components: Tuple[str, ...] = ()
    optional_components: Tuple[str, ...] = ()
    alternatives: Tuple[AnswerAlternative, ...] = ()


@dataclass(frozen=True)
class AnswerComponents:
    required: Tuple[str, ...] = ()
    optional: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AnswerComplexity:
    """
    Alternative/component summary for a question's correct answers.

    Attributes:
        has_multiple_answers: More than one correct-answer entry
        has_alternatives: Some entry uses "/" or " or "
        requires_all_components: Some entry uses " and " or " & "
        alternative_count: Alternatives extracted from entries with markers,
            or the raw entry count when no markers were found
    """
    has_multiple_answers: bool
    has_alternatives: bool
    requires_all_components: bool
    alternative_count: int


def parse_forward_slash_answers(answer_text: Any) -> List[AnswerAlternative]:
    """
    Split answer text on forward slashes.

    Example:
        >>> [alt.text for alt in parse_forward_slash_answers("mitochondria / mitochondrion")]
        ['mitochondria', 'mitochondrion']
    """
    if not isinstance(answer_text, str) or not answer_text:
        return []

    segments = [segment.strip() for segment in answer_text.split("/")]
    return [
        AnswerAlternative(id=index, text=segment)
        for index, segment in enumerate((s for s in segments if s), start=1)
    ]


def parse_and_or_operators(answer_text: Any) -> AnswerLogic:
    """
    Classify answer text by its AND/OR operators.

    AND is checked first: text containing both " and " and " or " is
    treated as ``all_required``. Components come from the lower-cased text.

    Returns:
        AnswerLogic of type ``all_required`` (components required),
        ``any_accepted`` (components optional and numbered as
        alternatives) or ``simple`` (the original text as sole component).
    """
    original = text_of(answer_text)
    text = original.lower()

    if " and " in text or " & " in text:
        components = tuple(component.strip() for component in _AND_SPLIT_RE.split(text))
        return AnswerLogic(type="all_required", required_components=components)

    if " or " in text:
        components = tuple(component.strip() for component in _OR_SPLIT_RE.split(text))
        return AnswerLogic(
            type="any_accepted",
            optional_components=components,
            alternatives=tuple(
                AnswerAlternative(id=index, text=component)
                for index, component in enumerate(components, start=1)
            ),
        )

    return AnswerLogic(type="simple", required_components=(original,))


def extract_all_valid_alternatives(answer_text: Any) -> List[str]:
    """
    Collect every acceptable variant of an answer.

    Slash-split and or-split segments are both collected (in that order)
    and deduplicated keeping first occurrence. Text with neither marker
    yields itself, trimmed.

    Example:
        >>> extract_all_valid_alternatives("red or blue")
        ['red', 'blue']
    """
    if not isinstance(answer_text, str) or not answer_text:
        return []

    alternatives: List[str] = []
    if "/" in answer_text:
        alternatives.extend(s.strip() for s in answer_text.split("/") if s.strip())
    if " or " in answer_text.lower():
        alternatives.extend(s.strip() for s in _OR_SPLIT_RE.split(answer_text) if s.strip())

    if not alternatives:
        alternatives.append(answer_text.strip())

    return list(dict.fromkeys(alternatives))


def get_alternative_count(answer_text: Any) -> int:
    return len(extract_all_valid_alternatives(answer_text))


def extract_components(answer_text: Any) -> AnswerComponents:
    """Required/optional components according to parse_and_or_operators()."""
    logic = parse_and_or_operators(answer_text)
    return AnswerComponents(
        required=logic.required_components,
        optional=logic.optional_components,
    )


def analyze_answer_complexity(question: Mapping[str, Any]) -> AnswerComplexity:
    """Summarize the alternatives and components in ``correct_answers``."""
    answers = ensure_array(question.get("correct_answers"))

    has_alternatives = False
    requires_all_components = False
    alternative_count = 0

    for answer in answers:
        answer_text = text_of(answer.get("answer")) if isinstance(answer, Mapping) else ""
        lowered = answer_text.lower()

        if "/" in answer_text or " or " in lowered:
            has_alternatives = True
            alternative_count += len(extract_all_valid_alternatives(answer_text))

        if " and " in lowered or " & " in answer_text:
            requires_all_components = True

    return AnswerComplexity(
        has_multiple_answers=len(answers) > 1,
        has_alternatives=has_alternatives,
        requires_all_components=requires_all_components,
        alternative_count=alternative_count or len(answers),
    )
