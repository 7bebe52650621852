"""
Module: cli

Purpose:
    Command-line entry point.

        qbank-toolkit analyze PAPER.json [--rules RULES.json] [--strict] [--verbose]
        qbank-toolkit validate PAPER.json [--strict] [--verbose]
        qbank-toolkit inspect PAPER.json [--strict] [--verbose]

    ``analyze`` prints the guideline summary; with ``--rules`` it also
    reconciles the stored rules, saves them when they changed, and prints
    them with the requirement checklist. A rules file that fails to load
    is never overwritten. ``validate`` prints the batch validation report
    and exits 1 when any question is invalid. ``inspect`` prints
    per-question format and answer details.

    Exit codes: 0 success, 1 invalid questions, 2 unreadable document or
    unwritable rules file.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from qbank_toolkit import __version__
from qbank_toolkit.analysis import (
    AnalysisConfig,
    analyze_guidelines,
    evaluate_checklist,
    has_warnings,
)
from qbank_toolkit.answers import (
    analyze_answer_complexity,
    derive_answer_requirement,
    detect_answer_format,
    detect_blank_line_format,
    detect_figure_requirement,
    get_question_description,
)
from qbank_toolkit.common.sanitization import as_list
from qbank_toolkit.core.schemas import ValidationError
from qbank_toolkit.core.utils.rules_store import RulesStore
from qbank_toolkit.core.utils.serialization import load_document, summary_to_dict
from qbank_toolkit.validation import batch_validate_questions, get_validation_summary

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _load(path: Path, config: AnalysisConfig) -> Optional[Dict[str, Any]]:
    try:
        return load_document(path, strict=config.strict_schema)
    except ValidationError as e:
        logger.error(str(e))
        for error in e.errors:
            logger.error(f"  {error}")
    except json.JSONDecodeError as e:
        logger.error(f"{path} is not valid JSON: {e}")
    except OSError as e:
        logger.error(f"Failed to read {path}: {e}")
    return None


# ─────────────────────────────────────────────────────────────────────────────
# Commands
# ─────────────────────────────────────────────────────────────────────────────

def cmd_analyze(args: argparse.Namespace) -> int:
    config = AnalysisConfig(strict_schema=args.strict)
    document = _load(args.paper, config)
    if document is None:
        return EXIT_UNREADABLE

    summary = analyze_guidelines(document, config)
    output: Dict[str, Any] = {"summary": summary_to_dict(summary)}

    if args.rules:
        store = RulesStore(args.rules)
        try:
            changed = store.apply_summary(summary, config)
        except OSError as e:
            logger.error(f"Failed to save rules to {args.rules}: {e}")
            return EXIT_UNREADABLE

        saved = changed and store.load_error is None
        if saved:
            logger.info(f"Updated extraction rules in {args.rules}")
        elif not changed:
            logger.info("Extraction rules already match the document")

        checklist = evaluate_checklist(summary, store.rules)
        output["rules"] = store.rules.to_dict()
        output["rulesChanged"] = changed
        output["rulesSaved"] = saved
        output["checklist"] = {
            "ready": not has_warnings(checklist),
            "items": [item.to_dict() for item in checklist],
        }

    _print_json(output)
    return EXIT_OK


def cmd_validate(args: argparse.Namespace) -> int:
    config = AnalysisConfig(strict_schema=args.strict)
    document = _load(args.paper, config)
    if document is None:
        return EXIT_UNREADABLE

    batch = batch_validate_questions(as_list(document.get("questions")))
    report = batch.to_dict()
    report["summaries"] = {
        key: get_validation_summary(result) for key, result in batch.results.items()
    }
    _print_json(report)

    if batch.invalid_questions:
        logger.warning(f"{batch.invalid_questions} of {batch.total_questions} questions are invalid")
        return EXIT_INVALID
    return EXIT_OK


def _inspect_question(question: Mapping[str, Any]) -> Dict[str, Any]:
    requirement = derive_answer_requirement(question)
    complexity = analyze_answer_complexity(question)
    return {
        "questionNumber": question.get("question_number"),
        "description": get_question_description(question),
        "answerFormat": detect_answer_format(question),
        "blankLineFormat": detect_blank_line_format(question.get("question_text")),
        "figureRequired": detect_figure_requirement(question.get("question_text")),
        "expectation": requirement.expectation,
        "partialCredit": requirement.partial_credit,
        "strictMarking": requirement.strict_marking,
        "hasAlternatives": complexity.has_alternatives,
        "requiresAllComponents": complexity.requires_all_components,
        "alternativeCount": complexity.alternative_count,
    }


def cmd_inspect(args: argparse.Namespace) -> int:
    config = AnalysisConfig(strict_schema=args.strict)
    document = _load(args.paper, config)
    if document is None:
        return EXIT_UNREADABLE

    questions: List[Dict[str, Any]] = [
        _inspect_question(question)
        for question in as_list(document.get("questions"))
        if isinstance(question, Mapping)
    ]
    _print_json(questions)
    return EXIT_OK


# ─────────────────────────────────────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qbank-toolkit",
        description="Analyze and validate exam paper JSON before import",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("paper", type=Path, help="Paper document (JSON)")
    common.add_argument("--strict", action="store_true", help="Validate against the JSON Schema")
    common.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", parents=[common], help="Summarize marking guidelines")
    analyze.add_argument("--rules", type=Path, help="Extraction rules file to reconcile")
    analyze.set_defaults(handler=cmd_analyze)

    validate = subparsers.add_parser("validate", parents=[common], help="Validate questions")
    validate.set_defaults(handler=cmd_validate)

    inspect = subparsers.add_parser("inspect", parents=[common], help="Per-question answer details")
    inspect.set_defaults(handler=cmd_inspect)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s | %(message)s",
    )
    return args.handler(args)
