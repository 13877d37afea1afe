# Area: Shared
"""
live_engine.cli — Operator command-line interface
=================================================

Drives a persisted live session from the terminal: the operator drops,
locks and resolves questions; a tester can submit answers and inspect
scores.

Usage:
    live-engine status --quarter Q1
    live-engine drop q1-1 --quarter Q1
    live-engine submit q1-1 yes
    live-engine tick
    live-engine resolve q1-1 yes
    live-engine score

Settings come from (later wins):
    1. --config JSON file
    2. .env file in the working directory
    3. Environment variables (LIVE_STATE_PATH, LIVE_KICKOFF_AT, ...)
"""

import argparse
import json
import sys
import time
from typing import List, Optional

from dotenv import load_dotenv

from ._engine.enums import Quarter, TransitionOutcome
from ._engine.results import TransitionResult
from ._engine_config import build_engine, load_config, log_level, validate_config
from ._shared.formatting import format_countdown, format_time_until_game
from ._shared.logging_config import setup_logging
from .engine import LiveQuestionEngine
from .errors import LiveEngineError
from .types import QuarterScoreView, QuestionStatusView

EXIT_OK = 0
EXIT_REFUSED = 1
EXIT_CONFLICT = 2


def now_ms() -> int:
    return int(time.time() * 1000)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="live-engine",
        description="Live question engine - operator console",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  live-engine status
  live-engine drop q1-1 --quarter Q1
  live-engine resolve q1-1 yes
  LIVE_STATE_PATH=/tmp/live.json live-engine score
        """,
    )
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument(
        "--now", type=int,
        help="Override current time (epoch milliseconds)",
    )
    parser.add_argument("--json", action="store_true", help="Print machine-readable output")

    sub = parser.add_subparsers(dest="command", required=True)

    status = sub.add_parser("status", help="Show question states")
    status.add_argument("--quarter", choices=[q.value for q in Quarter])

    drop = sub.add_parser("drop", help="Open a question's answer window")
    drop.add_argument("question_id")
    drop.add_argument(
        "--quarter", choices=[q.value for q in Quarter],
        help="Quarter currently being played (checked before dropping)",
    )
    drop.add_argument(
        "--force", action="store_true",
        help="Drop even if the question is not in the live quarter",
    )

    lock = sub.add_parser("lock", help="Close a question's answer window")
    lock.add_argument("question_id")

    resolve = sub.add_parser("resolve", help="Reveal the correct answer")
    resolve.add_argument("question_id")
    resolve.add_argument("option_id")

    submit = sub.add_parser("submit", help="Submit an answer as the user")
    submit.add_argument("question_id")
    submit.add_argument("option_id")

    sub.add_parser("tick", help="Lock every question whose window has expired")
    sub.add_parser("score", help="Show quarter and total scores")

    reset = sub.add_parser("reset", help="Clear all answers and question states")
    reset.add_argument("--yes", action="store_true", help="Confirm the reset")

    return parser.parse_args(argv)


def _print(args: argparse.Namespace, data, text: str) -> None:
    if args.json:
        print(json.dumps(data, indent=2))
    else:
        print(text)


def _transition_exit(args: argparse.Namespace, verb: str, result: TransitionResult) -> int:
    state = result.state
    data = {
        "question_id": result.question_id,
        "outcome": result.outcome.value,
        "status": state.status.value if state else None,
    }
    _print(args, data, f"{verb} {result.question_id}: {result.outcome.value}"
           + (f" (now {state.status.value})" if state else ""))
    if result.outcome == TransitionOutcome.RESOLUTION_CONFLICT:
        return EXIT_CONFLICT
    return EXIT_OK if result.ok else EXIT_REFUSED


def cmd_status(engine: LiveQuestionEngine, args: argparse.Namespace, now: int) -> int:
    quarters = [Quarter(args.quarter)] if args.quarter else list(engine.catalog.quarters())
    rows: List[QuestionStatusView] = []
    for quarter in quarters:
        for question, state in engine.question_states_for_quarter(quarter):
            rows.append(QuestionStatusView(
                id=question.id,
                quarter=quarter.value,
                number=question.question_number,
                prompt=question.short_prompt or question.prompt,
                status=state.status.value,
                time_remaining_ms=engine.time_remaining(question.id, now),
                answered=engine.has_answered(question.id),
                correct_option_id=state.correct_option_id or "",
            ))

    lines = [
        f"Game: {engine.game_status(now).value} "
        f"(kickoff in {_kickoff_text(engine.time_until_kickoff(now))})",
    ]
    for row in rows:
        timer = format_countdown(row["time_remaining_ms"]) if row["status"] == "active" else ""
        lines.append(
            f"  {row['id']:<6} {row['status']:<9} {timer:>5} "
            f"{'*' if row['answered'] else ' '} {row['prompt']}"
            + (f" [{row['correct_option_id']}]" if row["correct_option_id"] else "")
        )
    _print(args, rows, "\n".join(lines))
    return EXIT_OK


def _kickoff_text(ms: int) -> str:
    parts = format_time_until_game(ms)
    return f"{parts['days']}d {parts['hours']:02d}:{parts['minutes']:02d}:{parts['seconds']:02d}"


def cmd_drop(engine: LiveQuestionEngine, args: argparse.Namespace, now: int) -> int:
    if args.quarter:
        engine.set_current_quarter(Quarter(args.quarter))
    if not args.force and not engine.may_drop(args.question_id, now):
        print(
            f"Refusing to drop {args.question_id}: game is "
            f"{engine.game_status(now).value}, live quarter is "
            f"{engine.clock.current_quarter.value} (use --force to override)",
            file=sys.stderr,
        )
        return EXIT_REFUSED
    return _transition_exit(args, "drop", engine.drop(args.question_id, now))


def cmd_lock(engine: LiveQuestionEngine, args: argparse.Namespace, now: int) -> int:
    return _transition_exit(args, "lock", engine.lock(args.question_id, now))


def cmd_resolve(engine: LiveQuestionEngine, args: argparse.Namespace, now: int) -> int:
    return _transition_exit(
        args, "resolve", engine.resolve(args.question_id, args.option_id, now)
    )


def cmd_submit(engine: LiveQuestionEngine, args: argparse.Namespace, now: int) -> int:
    result = engine.submit_answer(args.question_id, args.option_id, now)
    data = {"question_id": result.question_id, "outcome": result.outcome.value,
            "reason": result.reason}
    _print(args, data, f"submit {result.question_id}: {result.reason}")
    return EXIT_OK if result else EXIT_REFUSED


def cmd_tick(engine: LiveQuestionEngine, args: argparse.Namespace, now: int) -> int:
    locked = engine.lock_expired(now)
    _print(args, {"locked": locked},
           f"locked: {', '.join(locked)}" if locked else "nothing to lock")
    return EXIT_OK


def cmd_score(engine: LiveQuestionEngine, args: argparse.Namespace, now: int) -> int:
    quarters = {}
    lines = []
    for quarter in engine.catalog.quarters():
        score = engine.quarter_score(quarter)
        quarters[quarter.value] = QuarterScoreView(
            answered_count=score.answered_count,
            correct_count=score.correct_count,
            total_questions=score.total_questions,
            points=score.points,
        )
        lines.append(
            f"  {quarter.value:<3} {score.correct_count}/{score.answered_count} correct "
            f"of {score.total_questions}  {score.points:>3} pts"
        )
    total = engine.total_score()
    lines.append(f"  Total {total} pts")
    _print(args, {"quarters": quarters, "total": total}, "\n".join(lines))
    return EXIT_OK


def cmd_reset(engine: LiveQuestionEngine, args: argparse.Namespace, now: int) -> int:
    if not args.yes:
        print("Refusing to reset without --yes", file=sys.stderr)
        return EXIT_REFUSED
    ok = engine.reset()
    _print(args, {"reset": ok}, "session reset" if ok else "reset failed")
    return EXIT_OK if ok else EXIT_REFUSED


COMMANDS = {
    "status": cmd_status,
    "drop": cmd_drop,
    "lock": cmd_lock,
    "resolve": cmd_resolve,
    "submit": cmd_submit,
    "tick": cmd_tick,
    "score": cmd_score,
    "reset": cmd_reset,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    load_dotenv()
    args = parse_args(argv)

    try:
        config = load_config(args.config)
        validate_config(config)
        setup_logging(config.get("log_file"), level=log_level(config), stream=sys.stderr)
        engine = build_engine(config)
    except (LiveEngineError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_REFUSED

    now = args.now if args.now is not None else now_ms()
    return COMMANDS[args.command](engine, args, now)
