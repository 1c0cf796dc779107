"""Satisfaction and dissatisfaction of each drive under the current environment.

Both read the imposed questionnaire's triplets: environment demand (q1),
competence (q2) and self-interest (q3).
"""

from __future__ import annotations

from drivefit.drives.models import DRIVES, DriveVector, clamp
from drivefit.instruments.models import MAX_ANSWER
from drivefit.instruments.scorers import AnswerInput, extract_env_competence_self_interest

_FULL_MATCH = MAX_ANSWER * MAX_ANSWER


def calculate_satisfaction(
    env: DriveVector, competence: DriveVector, self_interest: DriveVector
) -> DriveVector:
    """``sat(d) = q3 * q1 * q2 / 25``, clamped to [0, 5]."""
    out: dict = {}
    for d in DRIVES:
        q1 = clamp(env[d], 0, MAX_ANSWER)
        q2 = clamp(competence[d], 0, MAX_ANSWER)
        q3 = clamp(self_interest[d], 0, MAX_ANSWER)
        out[d] = clamp(q3 * (q1 * q2) / _FULL_MATCH, 0, MAX_ANSWER)
    return DriveVector(out)


def calculate_dissatisfaction(
    env: DriveVector, competence: DriveVector, self_interest: DriveVector
) -> DriveVector:
    """``diss(d) = (q3 - 1) * 1.25 * (1 - q1 * q2 / 25)``, clamped to [0, 5].

    Self-interest is shifted onto 0..5 first so that a minimal interest
    answer (1) produces no dissatisfaction at all.
    """
    out: dict = {}
    for d in DRIVES:
        q1 = clamp(env[d], 0, MAX_ANSWER)
        q2 = clamp(competence[d], 0, MAX_ANSWER)
        q3 = clamp(self_interest[d], 0, MAX_ANSWER)
        diss = (q3 - 1) * 1.25 * (1 - (q1 * q2) / _FULL_MATCH)
        out[d] = clamp(diss, 0, MAX_ANSWER)
    return DriveVector(out)


def satisfaction_from_imposed(data: AnswerInput) -> DriveVector:
    return calculate_satisfaction(*extract_env_competence_self_interest(data))


def dissatisfaction_from_imposed(data: AnswerInput) -> DriveVector:
    return calculate_dissatisfaction(*extract_env_competence_self_interest(data))
