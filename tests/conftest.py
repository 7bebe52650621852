import json
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import qbank_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Common test fixtures
@pytest.fixture
def cambridge_mcq_document() -> dict:
    """Single Cambridge MCQ question with slash alternatives."""
    return {
        "exam_board": "Cambridge",
        "qualification": "IGCSE",
        "questions": [
            {
                "type": "mcq",
                "options": [{"is_correct": True}],
                "correct_answers": [
                    {"answer": "A / B", "marks": 2, "answer_requirement": "any_one_from"}
                ],
            }
        ],
    }


@pytest.fixture
def structured_document() -> dict:
    """Multi-part physics question with context, hints and mark schemes."""
    return {
        "exam_board": "Pearson Edexcel",
        "paper_metadata": {"subject": "Physics", "subject_code": "4PH1"},
        "questions": [
            {
                "question_number": "1",
                "question_text": "A ball is dropped from a tower.",
                "topic": "Forces",
                "marks": 5,
                "hint": "Think about energy transfer.",
                "figure": True,
                "parts": [
                    {
                        "part": "a",
                        "question_text": "Calculate the speed of the ball.",
                        "marks": 3,
                        "answer_format": "calculation",
                        "correct_answers": [
                            {"answer": "12 m/s", "marks": 2, "unit": "m/s"},
                            {"answer": "allow ecf from (a)", "marks": 1},
                        ],
                        "subparts": [
                            {
                                "subpart": "i",
                                "question_text": "Draw the velocity-time graph.",
                                "marks": 2,
                                "answer_format": "graph",
                                "mark_scheme": "correct axes\nstraight line",
                            }
                        ],
                    }
                ],
            }
        ],
    }


@pytest.fixture
def write_json(tmp_path: Path):
    """Write a JSON payload to a file under tmp_path and return its path."""
    def _write(data, name: str = "paper.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
