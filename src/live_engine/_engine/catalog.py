# Area: Engine
"""
live_engine._engine.catalog — Question Catalog
==============================================

Immutable, ordered question definitions and pure lookup helpers.

Content arrives from an external authoring tool, so every question is
validated with pydantic when the catalog is built. After that the
catalog never changes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .enums import QUARTER_ORDER, Quarter
from ..errors import CatalogValidationError

logger = logging.getLogger("live_engine.catalog")

DEFAULT_TIME_LIMIT_SECONDS = 60


class AnswerOption(BaseModel):
    """One selectable answer with a stable identifier."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    label: str = Field(min_length=1)
    emoji: Optional[str] = None


class Question(BaseModel):
    """
    A single timed question.

    Accepts either the Python field names or the camelCase names used
    by the authoring tool (``questionNumber``, ``question``,
    ``shortQuestion``, ``timeLimit``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    quarter: Quarter
    question_number: int = Field(ge=1, alias="questionNumber")
    prompt: str = Field(min_length=1, alias="question")
    short_prompt: Optional[str] = Field(default=None, alias="shortQuestion")
    options: Tuple[AnswerOption, ...] = Field(min_length=1)
    points: int = Field(gt=0)
    time_limit: int = Field(
        default=DEFAULT_TIME_LIMIT_SECONDS, gt=0, alias="timeLimit"
    )

    @field_validator("options")
    @classmethod
    def _unique_option_ids(cls, options: Tuple[AnswerOption, ...]):
        ids = [option.id for option in options]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"duplicate option ids: {duplicates}")
        return options

    @property
    def option_ids(self) -> Tuple[str, ...]:
        return tuple(option.id for option in self.options)

    @property
    def time_limit_ms(self) -> int:
        return self.time_limit * 1000

    def has_option(self, option_id: str) -> bool:
        return option_id in self.option_ids


class QuestionCatalog:
    """
    Ordered, read-only collection of questions.

    Lookups never raise: an unknown id yields None and an unknown
    quarter yields an empty tuple.
    """

    def __init__(self, questions: Iterable[Question]):
        self._questions: Tuple[Question, ...] = tuple(questions)
        _check_catalog(self._questions)

        self._by_id: Dict[str, Question] = {q.id: q for q in self._questions}
        self._by_quarter: Dict[Quarter, Tuple[Question, ...]] = {}
        for quarter in QUARTER_ORDER:
            in_quarter = [q for q in self._questions if q.quarter == quarter]
            in_quarter.sort(key=lambda q: q.question_number)
            self._by_quarter[quarter] = tuple(in_quarter)

    @classmethod
    def from_dicts(cls, items: Iterable[Dict[str, Any]]) -> "QuestionCatalog":
        """Validate raw question dicts and build a catalog."""
        questions: List[Question] = []
        problems: List[str] = []
        for index, item in enumerate(items):
            try:
                questions.append(Question.model_validate(item))
            except ValidationError as e:
                label = item.get("id", f"#{index}") if isinstance(item, dict) else f"#{index}"
                for err in e.errors():
                    loc = ".".join(str(part) for part in err["loc"])
                    problems.append(f"{label}: {loc}: {err['msg']}")
        if problems:
            raise CatalogValidationError(problems)
        return cls(questions)

    @classmethod
    def from_json_file(cls, path: str) -> "QuestionCatalog":
        """Load a catalog from a JSON array of question objects."""
        with open(Path(path), encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise CatalogValidationError([f"{path}: expected a JSON array of questions"])
        catalog = cls.from_dicts(data)
        logger.info("Loaded %d questions from %s", len(catalog), path)
        return catalog

    def questions_for_quarter(self, quarter: Quarter) -> Tuple[Question, ...]:
        """Questions of one quarter ordered by their number within it."""
        return self._by_quarter.get(quarter, ())

    def question_by_id(self, question_id: str) -> Optional[Question]:
        return self._by_id.get(question_id)

    def quarters(self) -> Tuple[Quarter, ...]:
        """Quarters that have at least one question, in game order."""
        return tuple(q for q in QUARTER_ORDER if self._by_quarter[q])

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __len__(self) -> int:
        return len(self._questions)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._by_id


def _check_catalog(questions: Tuple[Question, ...]) -> None:
    """Reject duplicate ids and duplicate (quarter, number) slots."""
    problems: List[str] = []
    seen_ids: Dict[str, int] = {}
    seen_slots: Dict[Tuple[Quarter, int], str] = {}
    for q in questions:
        seen_ids[q.id] = seen_ids.get(q.id, 0) + 1
        slot = (q.quarter, q.question_number)
        if slot in seen_slots:
            problems.append(
                f"{q.id}: {q.quarter.value} question {q.question_number} "
                f"already used by {seen_slots[slot]}"
            )
        else:
            seen_slots[slot] = q.id
    for question_id, count in seen_ids.items():
        if count > 1:
            problems.append(f"{question_id}: duplicate question id ({count} times)")
    if problems:
        raise CatalogValidationError(problems)
