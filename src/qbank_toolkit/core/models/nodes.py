"""
Module: nodes

Purpose:
    Structural types for uploaded exam-paper JSON. Every key is optional:
    which fields appear depends on whoever produced the document, so
    consumers must check presence at each access site.

    These are typing aids only. Documents arrive as plain dicts from
    json.load() and are never converted or validated into these types.

Key Types:
    - ParsedPaperDocument: Document root
    - QuestionNode: Question, part or subpart (recursive)
    - AnswerEntry: One entry of ``correct_answers``
    - MarkingFlags: Boolean flag bag nested in an answer entry

Used By:
    - analysis.guidelines
    - answers.*
    - validation.questions
"""

from __future__ import annotations

from typing import Any, Dict, List, TypedDict, Union


class MarkingFlags(TypedDict, total=False):
    accepts_equivalent_phrasing: bool
    owtte: bool
    accepts_reverse_argument: bool
    ora: bool
    error_carried_forward: bool
    ecf: bool
    correct_answer_only: bool
    cao: bool


class AnswerEntry(TypedDict, total=False):
    answer: str
    marks: Union[int, float]
    total_alternatives: int
    linked_alternatives: List[Any]
    alternative_type: str
    context: Union[Dict[str, Any], List[Dict[str, Any]], str]
    context_type: str
    unit: str
    measurement_details: Any
    line_number: int
    marking_point: Any
    marking_points: List[Any]
    accepts_equivalent_phrasing: bool
    accepts_equivalent: bool
    accepts_reverse_argument: bool
    error_carried_forward: bool
    accept_level: str
    marking_flags: MarkingFlags
    conditional_on: Any
    conditions: Any
    marking_conditions: Any
    partial_credit: Any
    partial_marking: Any
    partial_marks: Any
    maximum_marks_available: Union[int, float]
    answer_requirement: str
    rejected_answers: List[Any]
    ignored_content: List[Any]
    answer_variations: Dict[str, Any]


class OptionEntry(TypedDict, total=False):
    label: str
    text: str
    is_correct: bool


class QuestionNode(TypedDict, total=False):
    # Identity / type
    id: str
    question_number: Union[str, int]
    part: str
    subpart: str
    type: str
    question_type: str
    answer_format: str
    answer_requirement: str
    # Text
    question_text: str
    question_description: str
    question_header: str
    description: str
    hint: str
    explanation: str
    topic: str
    # Scoring
    marks: Union[int, float]
    maximum_marks_available: Union[int, float]
    partial_credit: Any
    partial_marking: Any
    partial_mark_distribution: Any
    partial_marks: Any
    mark_scheme: Union[str, List[Any]]
    marking_points: List[Any]
    line_by_line: bool
    requires_manual_marking: bool
    # Structure
    options: List[OptionEntry]
    parts: List["QuestionNode"]
    subparts: List["QuestionNode"]
    # Answers
    correct_answer: str
    correct_answers: List[AnswerEntry]
    # Media
    figure: Any
    figure_required: bool
    attachments: List[Any]
    # Context
    context: Union[Dict[str, Any], List[Dict[str, Any]], str]
    context_fields: List[Dict[str, Any]]
    context_type: str
    unit: str
    measurement_details: Any
    # Classification
    subject: str
    subject_code: str


class PaperMetadata(TypedDict, total=False):
    subject: str
    subject_code: str
    exam_board: str


class ParsedPaperDocument(TypedDict, total=False):
    subject: str
    subject_code: str
    exam_board: str
    board: str
    qualification: str
    paper_metadata: PaperMetadata
    metadata: PaperMetadata
    questions: List[QuestionNode]
