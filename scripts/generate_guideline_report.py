#!/usr/bin/env python3
"""Generate a guideline report for a directory of paper JSON files.

For every *.json paper the report lists:
- Question types and answer formats
- Marking conventions (abbreviations, variation signals)
- Manual marking / component marking flags
- Validation totals
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add src to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from qbank_toolkit.analysis import analyze_guidelines
from qbank_toolkit.common.sanitization import as_list
from qbank_toolkit.core.schemas import ValidationError
from qbank_toolkit.core.utils.serialization import load_document
from qbank_toolkit.validation import batch_validate_questions

logger = logging.getLogger("guideline_report")

PAPERS_ROOT = Path("workspace/papers")
REPORT_PATH = Path("workspace/reports/guideline_report.md")

TABLE_HEADER = (
    "| Paper | Questions | Types | Formats | Abbreviations | Manual | Valid |\n"
    "|---|---|---|---|---|---|---|"
)


def _join(values) -> str:
    return ", ".join(values) or "-"


def report_row(path: Path) -> Optional[str]:
    """One Markdown table row for a paper, or None if it cannot be read."""
    try:
        document = load_document(path)
    except (ValidationError, json.JSONDecodeError, OSError) as e:
        logger.warning(f"Skipping {path.name}: {e}")
        return None

    summary = analyze_guidelines(document)
    batch = batch_validate_questions(as_list(document.get("questions")))

    return (
        f"| {path.stem} | {batch.total_questions} | {_join(summary.question_types)} "
        f"| {_join(summary.answer_formats)} | {_join(summary.abbreviations_detected)} "
        f"| {'yes' if summary.requires_manual_marking else 'no'} "
        f"| {batch.valid_questions}/{batch.total_questions} |"
    )


def generate_report(papers_dir: Path, report_path: Path) -> int:
    """
    Write the report and return the number of papers included.
    """
    rows: List[str] = []
    for path in sorted(papers_dir.glob("*.json")):
        row = report_row(path)
        if row:
            rows.append(row)

    report_path.parent.mkdir(parents=True, exist_ok=True)
    lines = ["# Guideline Report", "", TABLE_HEADER, *rows, ""]
    report_path.write_text("\n".join(lines), encoding="utf-8")
    return len(rows)


def main():
    parser = argparse.ArgumentParser(description="Generate a guideline report for paper JSON files")
    parser.add_argument("--input", "-i", type=Path, default=PAPERS_ROOT,
                        help="Directory of paper JSON files")
    parser.add_argument("--output", "-o", type=Path, default=REPORT_PATH,
                        help="Report file (Markdown)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    if not args.input.exists():
        print(f"Error: Input directory {args.input} does not exist")
        return

    count = generate_report(args.input, args.output)
    print(f"Report: {args.output} ({count} papers)")


if __name__ == "__main__":
    main()
