"""Data models for instrumentation routes."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum

from drivefit.drives.models import Drive


class RouteReason(str, Enum):
    """Why a drive's energy is being redirected."""

    SUPPRESSION = "suppression"
    PRIORITIZATION = "prioritization"


@dataclass(frozen=True)
class InstrumentRoute:
    """Directed redirection of energy from ``source`` into ``target``."""

    source: Drive
    target: Drive
    diversion_ratio: float
    loss_ratio: float
    target_weight: float = 0.0
    encounter_portion: float = 0.0
    path_drain: float = 0.0
    path_transfer: float = 0.0
    reason: RouteReason = RouteReason.PRIORITIZATION

    def __post_init__(self) -> None:
        if self.source == self.target:
            raise ValueError(f"Route source and target must differ (got {self.source.value})")
        for name in ("diversion_ratio", "loss_ratio", "target_weight", "encounter_portion"):
            value = getattr(self, name)
            if not (0.0 <= value <= 1.0):
                raise ValueError(f"{name} must be between 0.0 and 1.0 (got {value})")
        for name in ("path_drain", "path_transfer"):
            if getattr(self, name) < 0.0:
                raise ValueError(f"{name} must be non-negative (got {getattr(self, name)})")

    @property
    def effective_transfer(self) -> float:
        """Share of source energy that reaches the target intact."""
        return self.diversion_ratio * (1.0 - self.loss_ratio)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["source"] = self.source.value
        data["target"] = self.target.value
        data["reason"] = self.reason.value
        data["effective_transfer"] = self.effective_transfer
        return data
