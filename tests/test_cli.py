# Area: Shared Tests
"""Tests for live_engine.cli — operator console."""

import json
import logging
import os
import tempfile

import pytest

from live_engine._engine_config import ENV_MAPPINGS
from live_engine.cli import EXIT_CONFLICT, EXIT_OK, EXIT_REFUSED, main, parse_args


@pytest.fixture
def state_path(monkeypatch):
    """Point the console at a fresh JSON state file with kickoff at 0."""
    for key in ENV_MAPPINGS:
        monkeypatch.delenv(key, raising=False)
    logger = logging.getLogger("live_engine")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "live.json")
        monkeypatch.setenv("LIVE_STATE_PATH", path)
        monkeypatch.setenv("LIVE_KICKOFF_AT", "0")
        monkeypatch.setenv("LIVE_LOG_LEVEL", "WARNING")
        yield path
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def _run(capsys, *argv):
    code = main(list(argv))
    return code, capsys.readouterr()


class TestParseArgs:
    """Tests for argument parsing."""

    def test_globals_and_command(self):
        args = parse_args(["--now", "5", "--json", "resolve", "q1-1", "yes"])
        assert args.now == 5
        assert args.json is True
        assert args.command == "resolve"
        assert (args.question_id, args.option_id) == ("q1-1", "yes")

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])

    def test_quarter_choices(self):
        with pytest.raises(SystemExit):
            parse_args(["status", "--quarter", "Q9"])


class TestCommands:
    """Tests for the console commands against a JSON state file."""

    def test_full_question_flow(self, state_path, capsys):
        code, out = _run(capsys, "--now", "0", "drop", "q1-1", "--quarter", "Q1")
        assert code == EXIT_OK
        assert "drop q1-1: applied (now active)" in out.out

        code, out = _run(capsys, "--now", "10000", "submit", "q1-1", "yes")
        assert code == EXIT_OK
        assert "answer locked in" in out.out

        code, out = _run(capsys, "--now", "60000", "--json", "tick")
        assert json.loads(out.out) == {"locked": ["q1-1"]}

        code, out = _run(capsys, "--now", "70000", "resolve", "q1-1", "yes")
        assert code == EXIT_OK

        code, out = _run(capsys, "--json", "score")
        data = json.loads(out.out)
        assert data["total"] == 10
        assert data["quarters"]["Q1"] == {
            "answered_count": 1, "correct_count": 1, "total_questions": 5, "points": 10,
        }

        with open(state_path, encoding="utf-8") as f:
            saved = json.load(f)
        assert saved["questionRuntimeState"]["q1-1"]["correctOptionId"] == "yes"

    def test_refused_submit(self, state_path, capsys):
        code, out = _run(capsys, "--now", "0", "submit", "q1-1", "yes")
        assert code == EXIT_REFUSED
        assert "question is not open" in out.out

    def test_conflict_exit_code(self, state_path, capsys):
        _run(capsys, "--now", "0", "drop", "q1-1")
        _run(capsys, "--now", "70000", "resolve", "q1-1", "yes")
        code, out = _run(capsys, "--now", "80000", "--json", "resolve", "q1-1", "no")
        assert code == EXIT_CONFLICT
        assert json.loads(out.out)["outcome"] == "resolution_conflict"
        assert "RESOLUTION_CONFLICT" in out.err

    def test_drop_outside_live_quarter_needs_force(self, state_path, capsys):
        code, out = _run(capsys, "--now", "0", "drop", "q2-1")
        assert code == EXIT_REFUSED
        assert "--force" in out.err

        code, _ = _run(capsys, "--now", "0", "drop", "q2-1", "--force")
        assert code == EXIT_OK

    def test_drop_before_kickoff_refused(self, state_path, monkeypatch, capsys):
        monkeypatch.setenv("LIVE_KICKOFF_AT", "1000000")
        code, out = _run(capsys, "--now", "0", "drop", "q1-1")
        assert code == EXIT_REFUSED
        assert "pre_game" in out.err

    def test_status_json(self, state_path, capsys):
        _run(capsys, "--now", "0", "drop", "q1-2")
        code, out = _run(capsys, "--now", "12000", "--json", "status", "--quarter", "Q1")
        assert code == EXIT_OK
        rows = json.loads(out.out)
        assert [r["id"] for r in rows] == ["q1-1", "q1-2", "q1-3", "q1-4", "q1-5"]
        assert rows[1]["status"] == "active"
        assert rows[1]["time_remaining_ms"] == 18_000
        assert rows[0]["status"] == "pending"

    def test_status_text(self, state_path, capsys):
        _run(capsys, "--now", "0", "drop", "q1-2")
        code, out = _run(capsys, "--now", "12000", "status", "--quarter", "Q1")
        assert code == EXIT_OK
        assert "Game: in_progress" in out.out
        assert "0:18" in out.out

    def test_reset_requires_yes(self, state_path, capsys):
        _run(capsys, "--now", "0", "drop", "q1-1")
        code, _ = _run(capsys, "reset")
        assert code == EXIT_REFUSED

        code, out = _run(capsys, "reset", "--yes")
        assert code == EXIT_OK
        assert "session reset" in out.out
        with open(state_path, encoding="utf-8") as f:
            assert json.load(f) == {"answers": [], "questionRuntimeState": {}}

    def test_bad_config_reports_error(self, state_path, monkeypatch, capsys):
        monkeypatch.setenv("LIVE_STATE_BACKEND", "redis")
        code, out = _run(capsys, "score")
        assert code == EXIT_REFUSED
        assert "Unknown state_backend" in out.err

    def test_bad_log_level_reports_error(self, state_path, monkeypatch, capsys):
        monkeypatch.setenv("LIVE_LOG_LEVEL", "LOUD")
        code, out = _run(capsys, "score")
        assert code == EXIT_REFUSED
        assert "Unknown log_level 'LOUD'" in out.err

    def test_corrupt_state_reports_error(self, state_path, capsys):
        with open(state_path, "w") as f:
            f.write("{broken")
        code, out = _run(capsys, "score")
        assert code == EXIT_REFUSED
        assert "Cannot read state file" in out.err
