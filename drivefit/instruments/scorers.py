"""Instrument scorers: answer sets to drive vectors.

All scorers are total over present input. Missing or malformed answers
count as unanswered and contribute 0; only an absent answer set yields
``None``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from drivefit.drives.models import DRIVES, DriveVector, clamp
from drivefit.instruments.layouts import (
    INNATE_LAYOUT,
    SURFACE_LAYOUT,
    InstrumentLayout,
    imposed_triplet,
)
from drivefit.instruments.models import MAX_ANSWER, AnswerSet

AnswerInput = AnswerSet | Mapping[Any, Any] | None


def _layout_scores(answers: AnswerSet, layout: InstrumentLayout) -> DriveVector:
    scores: dict = {}
    for drive in DRIVES:
        terms = layout.terms_for(drive)
        if not terms:
            scores[drive] = 0.0
            continue
        total = sum(
            answers.reverse_keyed(t.index) if t.reverse else answers.direct(t.index)
            for t in terms
        )
        scores[drive] = total / len(terms)
    return DriveVector(scores)


def score_innate(
    data: AnswerInput, layout: InstrumentLayout = INNATE_LAYOUT
) -> DriveVector | None:
    """Innate persona: mean of direct front / reverse-keyed back terms."""
    answers = AnswerSet.from_record(data)
    if answers is None:
        return None
    return _layout_scores(answers, layout)


def score_private(
    data: AnswerInput, layout: InstrumentLayout = SURFACE_LAYOUT
) -> DriveVector | None:
    """Surface (private) persona: the innate reading with reversal inverted."""
    answers = AnswerSet.from_record(data)
    if answers is None:
        return None
    return _layout_scores(answers, layout)


def imposed_raw_scores(answers: AnswerSet) -> DriveVector:
    """Un-normalized public score: ``scale * magnitude / 5 + self_drive``."""
    raw: dict = {}
    for drive in DRIVES:
        scale_q, magnitude_q, self_q = imposed_triplet(drive)
        env_total = answers.get(scale_q) * answers.get(magnitude_q) / MAX_ANSWER
        raw[drive] = env_total + answers.get(self_q)
    return DriveVector(raw)


def score_imposed(data: AnswerInput) -> DriveVector | None:
    """Imposed (public) persona, rescaled so the strongest drive reads 5.

    When every raw score is zero the result is the zero vector.
    """
    answers = AnswerSet.from_record(data)
    if answers is None:
        return None

    raw = imposed_raw_scores(answers)
    max_raw = max(raw.values())
    if max_raw <= 0:
        return DriveVector.zero()
    return raw.map(lambda v: v / max_raw * MAX_ANSWER)


def _triplet_component(data: AnswerInput, position: int) -> DriveVector:
    answers = AnswerSet.from_record(data) or AnswerSet()
    return DriveVector(
        {
            drive: clamp(answers.get(imposed_triplet(drive)[position]), 0, MAX_ANSWER)
            for drive in DRIVES
        }
    )


def extract_env_competence_self_interest(
    data: AnswerInput,
) -> tuple[DriveVector, DriveVector, DriveVector]:
    """Split imposed answers into (environment, competence, self-interest).

    Each component is clamped to [0, 5]. Absent input gives zero vectors.
    """
    return (
        _triplet_component(data, 0),
        _triplet_component(data, 1),
        _triplet_component(data, 2),
    )


def imposed_env_structure(data: AnswerInput) -> DriveVector | None:
    """How strongly the environment is structured around each drive (q1)."""
    if data is None:
        return None
    return _triplet_component(data, 0)


def environment_acceptance(data: AnswerInput) -> DriveVector | None:
    """How well the environment accepts the user's expression of each drive (q2)."""
    if data is None:
        return None
    return _triplet_component(data, 1)


def imposed_interest_gap(data: AnswerInput) -> DriveVector | None:
    """Reverse-keyed self-drive answer (``6 - q3``); high means little own pull."""
    answers = AnswerSet.from_record(data)
    if answers is None:
        return None
    return DriveVector(
        {drive: answers.reverse_keyed(imposed_triplet(drive)[2]) for drive in DRIVES}
    )


def simulate_imposed_from_profession(
    prof_demand: DriveVector, competence: DriveVector
) -> DriveVector:
    """Imposed persona the user would show under a profession's demand."""
    return DriveVector(
        {
            d: clamp(
                clamp(prof_demand[d], 0, MAX_ANSWER)
                * clamp(competence[d], 0, MAX_ANSWER)
                / MAX_ANSWER,
                0,
                MAX_ANSWER,
            )
            for d in DRIVES
        }
    )
