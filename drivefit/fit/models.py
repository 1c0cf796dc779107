"""Data models for occupational-fit evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from drivefit.drives.models import DriveVector
from drivefit.routing.models import InstrumentRoute


class SortMode(str, Enum):
    """Orderings offered for a list of fit results."""

    MISMATCH = "mismatch"
    DRAIN = "drain"
    OVERALL = "overall"

    @classmethod
    def parse(cls, value: str | SortMode) -> SortMode:
        if isinstance(value, SortMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Invalid sort mode: {value}. Must be one of: {valid}") from None


@dataclass(frozen=True)
class OccupationSubtype:
    """Reference occupation with its drive-demand vector (0..5 per drive)."""

    major: str
    name: str
    drives: DriveVector

    def to_dict(self) -> dict:
        return {"major": self.major, "name": self.name, "drives": self.drives.to_dict()}


@dataclass(frozen=True)
class MismatchProfile:
    """Per-drive deficits against a demand vector and their weighted total."""

    mismatch: DriveVector
    weights: DriveVector
    total_deficit: float

    def __post_init__(self) -> None:
        if self.total_deficit < 0:
            raise ValueError(f"total_deficit must be non-negative (got {self.total_deficit})")

    def to_dict(self) -> dict:
        return {
            "mismatch": self.mismatch.to_dict(),
            "weights": self.weights.to_dict(),
            "total_deficit": self.total_deficit,
        }


@dataclass(frozen=True)
class FitResult:
    """Full evaluation of one user against one occupation."""

    major: str
    name: str

    innate_avg: DriveVector
    surface_avg: DriveVector
    imposed_avg: DriveVector

    prof_demand: DriveVector
    competence: DriveVector
    self_interest: DriveVector
    imposed_sim: DriveVector
    td_dissatisfaction: DriveVector

    routes: tuple[InstrumentRoute, ...]
    surface_drain: DriveVector
    surface_transfer: DriveVector
    surface_adjusted: DriveVector
    surface_adjusted_aspired: DriveVector

    mismatch_raw: MismatchProfile
    mismatch_adjusted: MismatchProfile
    total_drained_energy: float

    @property
    def total_mismatch_raw(self) -> float:
        return self.mismatch_raw.total_deficit

    @property
    def total_mismatch_adjusted(self) -> float:
        return self.mismatch_adjusted.total_deficit

    @property
    def overall_score(self) -> float:
        """Adjusted mismatch plus drained energy; lower is a better fit."""
        return self.total_mismatch_adjusted + self.total_drained_energy

    @property
    def used_routes(self) -> list[tuple[str, str]]:
        return [(r.source.value, r.target.value) for r in self.routes]

    def to_dict(self) -> dict:
        """Plain nested data (strings, floats, lists, dicts) for encoding."""
        return {
            "profession": {"major": self.major, "name": self.name},
            "innate_avg": self.innate_avg.to_dict(),
            "surface_avg": self.surface_avg.to_dict(),
            "imposed_avg": self.imposed_avg.to_dict(),
            "prof_demand": self.prof_demand.to_dict(),
            "competence": self.competence.to_dict(),
            "self_interest": self.self_interest.to_dict(),
            "imposed_sim": self.imposed_sim.to_dict(),
            "td_dissatisfaction": self.td_dissatisfaction.to_dict(),
            "routes": [r.to_dict() for r in self.routes],
            "surface_drain": self.surface_drain.to_dict(),
            "surface_transfer": self.surface_transfer.to_dict(),
            "surface_adjusted": self.surface_adjusted.to_dict(),
            "surface_adjusted_aspired": self.surface_adjusted_aspired.to_dict(),
            "mismatch_raw": self.mismatch_raw.to_dict(),
            "mismatch_adjusted": self.mismatch_adjusted.to_dict(),
            "total_mismatch_raw": self.total_mismatch_raw,
            "total_mismatch_adjusted": self.total_mismatch_adjusted,
            "total_drained_energy": self.total_drained_energy,
        }


@dataclass
class RankingResult:
    """Sorted fit results with best and worst slices."""

    results: list[FitResult] = field(default_factory=list)
    top: list[FitResult] = field(default_factory=list)
    bottom: list[FitResult] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "results": [r.to_dict() for r in self.results],
            "top": [r.name for r in self.top],
            "bottom": [r.name for r in self.bottom],
        }
