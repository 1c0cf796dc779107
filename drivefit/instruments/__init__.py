"""Questionnaire inputs and the three instrument scorers.

Public API:
    - AnswerSet / PersonaInputs: typed questionnaire answers
    - score_innate / score_private / score_imposed: answers -> DriveVector
    - AnswerFileService: load a user's answers from YAML or JSON
"""

from drivefit.instruments.layouts import (
    INNATE_LAYOUT,
    SURFACE_LAYOUT,
    InstrumentLayout,
    QuestionPair,
)
from drivefit.instruments.loader import AnswerFileService
from drivefit.instruments.models import AnswerSet, Instrument, PersonaInputs
from drivefit.instruments.scorers import (
    environment_acceptance,
    extract_env_competence_self_interest,
    imposed_env_structure,
    imposed_interest_gap,
    score_imposed,
    score_innate,
    score_private,
    simulate_imposed_from_profession,
)

__all__ = [
    "AnswerFileService",
    "AnswerSet",
    "INNATE_LAYOUT",
    "Instrument",
    "InstrumentLayout",
    "PersonaInputs",
    "QuestionPair",
    "SURFACE_LAYOUT",
    "environment_acceptance",
    "extract_env_competence_self_interest",
    "imposed_env_structure",
    "imposed_interest_gap",
    "score_imposed",
    "score_innate",
    "score_private",
    "simulate_imposed_from_profession",
]
