# Area: Engine
"""
live_engine._engine.default_catalog — Bundled question set
==========================================================

Five questions per quarter (Q1-Q4) plus five overtime questions for the
Seattle vs. New England broadcast. Hosts with their own content load a
JSON file instead (see ``QuestionCatalog.from_json_file``).
"""

from typing import Any, Dict, List

from .catalog import QuestionCatalog

_YES = {"id": "yes", "label": "Yes"}
_NO = {"id": "no", "label": "No", "emoji": "❌"}
_SEATTLE = {"id": "seattle", "label": "Seattle", "emoji": "🦅"}
_PATRIOTS = {"id": "patriots", "label": "Patriots", "emoji": "🔵"}


def _yes(emoji: str) -> Dict[str, str]:
    return dict(_YES, emoji=emoji)


def _q(question_id: str, quarter: str, number: int, prompt: str, short: str,
       options: List[Dict[str, str]], points: int, time_limit: int = 60) -> Dict[str, Any]:
    return {
        "id": question_id,
        "quarter": quarter,
        "question_number": number,
        "prompt": prompt,
        "short_prompt": short,
        "options": options,
        "points": points,
        "time_limit": time_limit,
    }


LIVE_QUESTIONS: List[Dict[str, Any]] = [
    # Q1 - opening quarter
    _q("q1-1", "Q1", 1, "Will there be a touchdown in the first 5 minutes?",
       "TD in first 5 min?", [_yes("🏈"), _NO], 10),
    _q("q1-2", "Q1", 2, "Will the next play be a run or a pass?", "Run or Pass?",
       [{"id": "run", "label": "Run", "emoji": "🏃"},
        {"id": "pass", "label": "Pass", "emoji": "🎯"}], 5, time_limit=30),
    _q("q1-3", "Q1", 3, "Will there be a turnover before the end of Q1?",
       "Turnover in Q1?", [_yes("🔄"), _NO], 10),
    _q("q1-4", "Q1", 4, "Will the next drive result in points?",
       "Points on next drive?", [_yes("✅"), _NO], 10),
    _q("q1-5", "Q1", 5, "Which team will have more total yards at the end of Q1?",
       "More yards in Q1?", [_SEATTLE, _PATRIOTS], 15),

    # Q2
    _q("q2-1", "Q2", 1, "Will there be a scoring play in the next 3 minutes?",
       "Score in 3 min?", [_yes("🎯"), _NO], 10),
    _q("q2-2", "Q2", 2, "Will there be a sack on the next defensive series?",
       "Sack coming?", [_yes("💥"), _NO], 10, time_limit=45),
    _q("q2-3", "Q2", 3, "Will there be a penalty in the next 2 minutes?",
       "Penalty coming?", [_yes("🚩"), _NO], 5),
    _q("q2-4", "Q2", 4, "Will the team with the ball score before halftime?",
       "Score before half?", [_yes("✅"), _NO], 10),
    _q("q2-5", "Q2", 5, "Which team will be leading at halftime?", "Halftime leader?",
       [_SEATTLE, _PATRIOTS, {"id": "tie", "label": "Tied", "emoji": "🤝"}], 15),

    # Q3
    _q("q3-1", "Q3", 1, "Who will get the ball first in the second half?",
       "Second half kickoff?", [_SEATTLE, _PATRIOTS], 5),
    _q("q3-2", "Q3", 2, "Will the opening drive of Q3 result in points?",
       "Q3 opening points?", [_yes("✅"), _NO], 10),
    _q("q3-3", "Q3", 3, "Will there be a big play (20+ yards) in Q3?",
       "Big play in Q3?", [_yes("🚀"), _NO], 10),
    _q("q3-4", "Q3", 4, "Will there be a challenge or review in Q3?",
       "Review in Q3?", [_yes("📺"), _NO], 10),
    _q("q3-5", "Q3", 5, "Which team will score more points in Q3?", "Q3 scoring leader?",
       [_SEATTLE, _PATRIOTS, {"id": "tie", "label": "Same", "emoji": "🤝"}], 15),

    # Q4
    _q("q4-1", "Q4", 1, "Will the leading team extend their lead in Q4?",
       "Leader extends?", [_yes("📈"), {"id": "no", "label": "No", "emoji": "📉"}], 10),
    _q("q4-2", "Q4", 2, "Will there be a turnover in the final 10 minutes?",
       "Late turnover?", [_yes("🔄"), _NO], 10),
    _q("q4-3", "Q4", 3, "Will the trailing team score a touchdown?",
       "Comeback TD?", [_yes("🏈"), _NO], 10),
    _q("q4-4", "Q4", 4, "Will the game be decided by one score (8 pts or less)?",
       "Close game?", [_yes("😰"), {"id": "no", "label": "No", "emoji": "💪"}], 15),
    _q("q4-5", "Q4", 5, "Will the final 2 minutes include a timeout?",
       "Late timeout?", [_yes("⏱️"), _NO], 5),

    # Overtime
    _q("ot-1", "OT", 1, "Who will win the overtime coin toss?", "OT coin toss?",
       [_SEATTLE, _PATRIOTS], 5, time_limit=30),
    _q("ot-2", "OT", 2, "Will the coin toss winner choose to receive?",
       "Winner receives?", [_yes("🏈"), {"id": "no", "label": "No", "emoji": "🛡️"}], 5,
       time_limit=30),
    _q("ot-3", "OT", 3, "Will the first possession result in a touchdown?",
       "First OT TD?", [_yes("🏈"), _NO], 15),
    _q("ot-4", "OT", 4, "How will the game end?", "Game-ender?",
       [{"id": "td", "label": "Touchdown", "emoji": "🏈"},
        {"id": "fg", "label": "Field Goal", "emoji": "🥅"},
        {"id": "other", "label": "Defensive Score", "emoji": "🛡️"}], 15),
    _q("ot-5", "OT", 5, "Will overtime last more than one possession per team?",
       "Extended OT?", [_yes("⏰"), {"id": "no", "label": "No", "emoji": "⚡"}], 10),
]


def default_catalog() -> QuestionCatalog:
    """Build the bundled catalog."""
    return QuestionCatalog.from_dicts(LIVE_QUESTIONS)
