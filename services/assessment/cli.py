# services/assessment/cli.py
"""Command-line grading tool.

Reads a test definition and an attempt from JSON files and prints the result
as JSON. Nothing is written back anywhere.

CLI:
    python -m services.assessment.cli score --test test.json --attempt attempt.json --mode id
    python -m services.assessment.cli explain --test test.json --attempt attempt.json --mode text
    python -m services.assessment.cli migrate --test test.json --attempt attempt.json
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from packages.common.config import get_settings
from packages.common.logging import configure_logging
from packages.schemas.assessment import AnswerMode, Attempt, TestDefinition
from .errors import ScoringError
from .migration import rescore
from .scorer import explain, score_attempt

log = logging.getLogger("assessment.cli")


def _load(path: str) -> dict:
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="assessment", description="Grade a test attempt")
    ap.add_argument("command", choices=["score", "explain", "migrate"])
    ap.add_argument("--test", required=True, help="Path to the test definition JSON")
    ap.add_argument("--attempt", required=True, help="Path to the attempt JSON")
    ap.add_argument("--mode", choices=[m.value for m in AnswerMode], default=None,
                    help="Representation of submitted multiple-choice answers")
    ap.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.LOG_LEVEL, stream=sys.stderr)
    mode = AnswerMode(args.mode or settings.ANSWER_MODE)

    test = TestDefinition.model_validate(_load(args.test))
    attempt = Attempt.model_validate(_load(args.attempt))
    if attempt.test_id != test.id:
        log.warning("attempt test id %s does not match test %s", attempt.test_id, test.id)

    try:
        if args.command == "score":
            out = score_attempt(test, attempt, mode)
        elif args.command == "explain":
            out = explain(test.questions, attempt.answers, test.passing_score, mode)
        else:
            out = rescore(test, attempt, legacy_text=True)
    except ScoringError as e:
        log.error("scoring failed: %s", e)
        return 2

    sys.stdout.write(out.model_dump_json(by_alias=True, indent=2) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
