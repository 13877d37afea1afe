"""
host_loop.py — Drive a live session from a host display loop
============================================================

Shows how a host application embeds the engine: it owns the clock,
re-evaluates ``now`` on every display tick, locks expired questions,
and renders countdowns. The operator's drop / resolve calls and the
user's answers are simulated on a compressed timeline.

    python host_loop.py

State is written to ./live_state.json so you can inspect it afterwards
or continue with the ``live-engine`` console.
"""

import logging

from live_engine import (
    JsonFilePersistence,
    LiveQuestionEngine,
    Quarter,
    SessionClock,
    format_countdown,
    setup_logging,
)

# ── Setup logging (so you can see what's happening) ──
setup_logging(None, level=logging.INFO)

# ── Engine with kickoff at t=0 on a simulated clock ──
engine = LiveQuestionEngine(
    persistence=JsonFilePersistence("live_state.json"),
    clock=SessionClock(kickoff_at=0),
)

# ── Scripted events: (time ms, action) ──
script = {
    0: lambda now: engine.drop("q1-1", now),
    5_000: lambda now: engine.drop("q1-2", now),
    12_000: lambda now: engine.submit_answer("q1-1", "yes", now),
    20_000: lambda now: engine.submit_answer("q1-2", "pass", now),
    40_000: lambda now: engine.submit_answer("q1-2", "run", now),   # too late
    70_000: lambda now: engine.resolve("q1-1", "yes", now),
    75_000: lambda now: engine.resolve("q1-2", "run", now),
}

# ── One display tick per second of game time ──
for now in range(0, 80_000, 1_000):
    action = script.get(now)
    if action is not None:
        result = action(now)
        print(f"[{now // 1000:>3}s] {result.question_id}: {result.outcome.value}")

    for question_id in engine.lock_expired(now):
        print(f"[{now // 1000:>3}s] {question_id}: window closed")

    if now % 10_000 == 0:
        timers = [
            f"{q.id} {format_countdown(engine.time_remaining(q.id, now))}"
            for q, state in engine.question_states_for_quarter(Quarter.Q1)
            if state.is_open
        ]
        if timers:
            print(f"[{now // 1000:>3}s] open: {', '.join(timers)}")

score = engine.quarter_score(Quarter.Q1)
print(f"Q1: {score.correct_count}/{score.answered_count} correct, {score.points} pts")
print(f"Total: {engine.total_score()} pts")
