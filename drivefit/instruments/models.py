"""Typed questionnaire inputs for the instrument scorers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from drivefit.drives.models import to_number

_ANSWER_KEY = re.compile(r"^q?(\d+)(?:_answer)?$", re.IGNORECASE)

# Answers are on a 1..5 scale; 0 marks an unanswered question.
MAX_ANSWER = 5
REVERSE_PIVOT = 6


class Instrument(str, Enum):
    """The three questionnaires a user completes."""

    INNATE = "innate"
    SURFACE = "surface"
    IMPOSED = "imposed"


class AnswerSet(BaseModel):
    """Answers to one questionnaire, keyed by 1-based question index."""

    model_config = ConfigDict(frozen=True)

    answers: dict[int, float] = Field(
        default_factory=dict, description="Question index -> answer (0 = unanswered)"
    )

    @classmethod
    def from_record(cls, record: AnswerSet | Mapping[Any, Any] | None) -> AnswerSet | None:
        """Convert a loosely-typed answer row into an AnswerSet.

        Accepts ``q{n}_answer``, ``q{n}``, ``"{n}"`` and integer keys. Other
        keys (ids, timestamps) are ignored and every value goes through
        :func:`~drivefit.drives.models.to_number`, so the conversion never
        fails on malformed data. Returns ``None`` only for ``None``.
        """
        if record is None:
            return None
        if isinstance(record, AnswerSet):
            return record
        return cls.from_dict(record)

    def get(self, index: int) -> float:
        """Answer to question ``index``, 0.0 when missing."""
        return self.answers.get(index, 0.0)

    def direct(self, index: int) -> float:
        return self.get(index)

    def reverse_keyed(self, index: int) -> float:
        """Reverse-keyed answer ``6 - q``; an unanswered question stays 0."""
        value = self.get(index)
        if value == 0:
            return 0.0
        return REVERSE_PIVOT - value

    def answered_count(self) -> int:
        return sum(1 for value in self.answers.values() if value != 0)

    def to_dict(self) -> dict[str, float]:
        """Serialize back to ``q{n}_answer`` keys."""
        return {f"q{i}_answer": v for i, v in sorted(self.answers.items())}

    @classmethod
    def from_dict(cls, data: Mapping[Any, Any]) -> AnswerSet:
        return cls(answers=_parse_answers(data))


class PersonaInputs(BaseModel):
    """One user's three answer sets. Any of them may be absent."""

    model_config = ConfigDict(frozen=True)

    innate: AnswerSet | None = Field(default=None, description="Innate persona answers")
    surface: AnswerSet | None = Field(
        default=None, description="Surface (private) persona answers"
    )
    imposed: AnswerSet | None = Field(
        default=None, description="Imposed (public) persona answers"
    )

    @classmethod
    def from_records(
        cls,
        innate: AnswerSet | Mapping[Any, Any] | None = None,
        surface: AnswerSet | Mapping[Any, Any] | None = None,
        imposed: AnswerSet | Mapping[Any, Any] | None = None,
    ) -> PersonaInputs:
        return cls(
            innate=AnswerSet.from_record(innate),
            surface=AnswerSet.from_record(surface),
            imposed=AnswerSet.from_record(imposed),
        )

    def missing_instruments(self) -> list[Instrument]:
        missing: list[Instrument] = []
        for instrument in Instrument:
            if getattr(self, instrument.value) is None:
                missing.append(instrument)
        return missing

    def to_dict(self) -> dict[str, dict[str, float] | None]:
        return {
            instrument.value: (
                answers.to_dict()
                if (answers := getattr(self, instrument.value)) is not None
                else None
            )
            for instrument in Instrument
        }


def _parse_answers(record: Mapping[Any, Any]) -> dict[int, float]:
    answers: dict[int, float] = {}
    for key, raw in record.items():
        if isinstance(key, int) and not isinstance(key, bool):
            index = key
        else:
            match = _ANSWER_KEY.match(str(key).strip())
            if match is None:
                continue
            index = int(match.group(1))
        if index < 1:
            continue
        answers[index] = to_number(raw)
    return answers
