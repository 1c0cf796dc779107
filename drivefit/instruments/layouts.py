"""Question-pair layouts for the forced-choice instruments.

Each question in the innate and surface questionnaires weighs two drives
against each other. A layout records, per question, which drive sits at the
front and which at the back of the scale, and whether the front drive reads
the answer directly (innate orientation) or reverse-keyed (surface
orientation). Per-drive scores and instrumentation routes are both derived
from these tables.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from drivefit.drives.models import DRIVES, Drive

_CONTEXT_SUFFIX = re.compile(r"private|public", re.IGNORECASE)


@dataclass(frozen=True)
class QuestionPair:
    """One forced-choice question at 1-based ``index``."""

    index: int
    front: Drive
    back: Drive
    front_label: str
    back_label: str


@dataclass(frozen=True)
class Term:
    """One contribution of a question to a drive's mean."""

    index: int
    reverse: bool


@dataclass(frozen=True)
class InstrumentLayout:
    """Ordered question pairs plus the orientation they are read in."""

    name: str
    pairs: tuple[QuestionPair, ...]
    front_reversed: bool

    def terms_for(self, drive: Drive) -> list[Term]:
        """Questions feeding ``drive`` and whether each is reverse-keyed.

        A pair naming the same drive on both sides (a private/public
        context question) contributes once, read as its front.
        """
        terms: list[Term] = []
        for pair in self.pairs:
            if pair.front == drive:
                terms.append(Term(pair.index, reverse=self.front_reversed))
            elif pair.back == drive:
                terms.append(Term(pair.index, reverse=not self.front_reversed))
        return terms

    def find_pair(self, a: Drive, b: Drive) -> tuple[QuestionPair, bool] | None:
        """Locate the question comparing ``a`` with ``b`` in either order.

        Returns the pair and whether ``a`` sits at its front.
        """
        for pair in self.pairs:
            if pair.front == a and pair.back == b:
                return pair, True
            if pair.front == b and pair.back == a:
                return pair, False
        return None

    def mirrored(self) -> InstrumentLayout:
        """Same questions read in the opposite orientation."""
        return InstrumentLayout(
            name=f"{self.name}-mirrored",
            pairs=self.pairs,
            front_reversed=not self.front_reversed,
        )

    @property
    def question_count(self) -> int:
        return len(self.pairs)


def _drive_from_label(label: str) -> Drive:
    return Drive.parse(_CONTEXT_SUFFIX.sub("", label))


def build_layout(name: str, labels: list[str], *, front_reversed: bool) -> InstrumentLayout:
    """Build a layout from ``"front-back"`` labels in question order."""
    pairs: list[QuestionPair] = []
    for position, label in enumerate(labels, start=1):
        front_label, back_label = label.split("-")
        pairs.append(
            QuestionPair(
                index=position,
                front=_drive_from_label(front_label),
                back=_drive_from_label(back_label),
                front_label=front_label,
                back_label=back_label,
            )
        )
    return InstrumentLayout(name=name, pairs=tuple(pairs), front_reversed=front_reversed)


INNATE_PAIR_LABELS = [
    "exploration-achievement",
    "exploration-dominance",
    "exploration-pleasure",
    "exploration-affiliation",
    "exploration-care",
    "exploration-value",
    "affiliation-pleasure",
    "dominance-care",
    "achievement-care",
    "affiliation-achievement",
    "dominance-affiliation",
    "care-pleasure",
    "achievement-value",
    "dominance-value",
    "value-pleasure",
    "achievement-pleasure",
    "care-affiliation",
]

SURFACE_PAIR_LABELS = [
    "exploration-achievement",
    "exploration-dominance",
    "exploration-pleasure",
    "exploration-care",
    "exploration-affiliation",
    "exploration-value",
    "care-achievement",
    "care-dominance",
    "care-pleasure",
    "affiliation-achievement",
    "affiliation-dominance",
    "affiliation-pleasure",
    "value-achievement",
    "value-dominance",
    "value-pleasure",
    "pleasure-achievement",
    "care-affiliation",
    "dominancePrivate-dominancePublic",
    "affiliationPrivate-affiliationPublic",
    "pleasurePrivate-pleasurePublic",
]

INNATE_LAYOUT = build_layout("innate", INNATE_PAIR_LABELS, front_reversed=False)
SURFACE_LAYOUT = build_layout("surface", SURFACE_PAIR_LABELS, front_reversed=True)

# Imposed questionnaire: three consecutive questions per drive, in DRIVES order.
IMPOSED_QUESTIONS_PER_DRIVE = 3
IMPOSED_QUESTION_COUNT = IMPOSED_QUESTIONS_PER_DRIVE * len(DRIVES)


def imposed_triplet(drive: Drive) -> tuple[int, int, int]:
    """Question indices (environment scale, magnitude, self drive) for ``drive``."""
    start = DRIVES.index(drive) * IMPOSED_QUESTIONS_PER_DRIVE + 1
    return start, start + 1, start + 2
