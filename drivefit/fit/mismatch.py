"""Weighted deficit between an effective surface vector and a demand vector."""

from __future__ import annotations

from enum import Enum

from drivefit.drives.models import DRIVES, DriveVector, clamp
from drivefit.fit.models import MismatchProfile
from drivefit.instruments.models import MAX_ANSWER


class WeightMode(str, Enum):
    """How each drive's deficit is weighted in the total."""

    PROF_DEMAND = "profDemand"
    MIXED_MAX = "mixedMax"

    @classmethod
    def parse(cls, value: str | WeightMode) -> WeightMode:
        if isinstance(value, WeightMode):
            return value
        for mode in cls:
            if mode.value.lower() == str(value).strip().lower():
                return mode
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Invalid weight mode: {value}. Must be one of: {valid}")


def compute_mismatch(
    effective_surface: DriveVector,
    prof_demand: DriveVector,
    weight_mode: WeightMode | str = WeightMode.PROF_DEMAND,
) -> MismatchProfile:
    """Deficit of ``effective_surface`` against ``prof_demand``.

    Only shortfalls count: ``deficit(d) = max(0, demand(d) - surface(d))``.
    Weights are the demand itself (``profDemand``) or the larger of surface
    and demand (``mixedMax``). Both inputs are read clamped to [0, 5].
    """
    mode = WeightMode.parse(weight_mode)

    deficits: dict = {}
    weights: dict = {}
    total = 0.0
    for d in DRIVES:
        surface = clamp(effective_surface[d], 0, MAX_ANSWER)
        demand = clamp(prof_demand[d], 0, MAX_ANSWER)

        weight = max(surface, demand) if mode is WeightMode.MIXED_MAX else demand
        deficit = max(0.0, demand - surface)

        deficits[d] = deficit
        weights[d] = weight
        total += weight * deficit

    return MismatchProfile(
        mismatch=DriveVector(deficits),
        weights=DriveVector(weights),
        total_deficit=total,
    )
