"""Drive labels and the seven-dimensional drive vector."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator, Mapping
from enum import Enum
from typing import Any


class Drive(str, Enum):
    """One of the seven personality drives."""

    EXPLORATION = "Exploration"
    ACHIEVEMENT = "Achievement"
    DOMINANCE = "Dominance"
    PLEASURE = "Pleasure"
    CARE = "Care"
    AFFILIATION = "Affiliation"
    VALUE = "Value"

    @classmethod
    def parse(cls, value: str | Drive) -> Drive:
        """Resolve a drive from its name, case-insensitively."""
        if isinstance(value, Drive):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for drive in cls:
                if drive.value.lower() == key:
                    return drive
        raise ValueError(f"Unknown drive: {value!r}")


# Display order. Computations iterate in this order only for determinism.
DRIVES: tuple[Drive, ...] = tuple(Drive)


def to_number(value: Any) -> float:
    """Coerce any answer-like value to a finite float, or 0.0."""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def clamp01(x: float) -> float:
    return clamp(x, 0.0, 1.0)


class DriveVector(Mapping[Drive, float]):
    """Immutable mapping holding one float per :class:`Drive`.

    Every drive is always present. Keys may be given as :class:`Drive`
    members or drive names; missing or non-numeric values become 0.0.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[Drive | str, Any] | None = None) -> None:
        parsed: dict[Drive, float] = {drive: 0.0 for drive in DRIVES}
        for key, raw in (values or {}).items():
            parsed[Drive.parse(key)] = to_number(raw)
        self._values = parsed

    @classmethod
    def zero(cls, fill: float = 0.0) -> DriveVector:
        return cls({drive: fill for drive in DRIVES})

    @classmethod
    def from_mapping(
        cls, data: Mapping[Any, Any] | None, *, strict: bool = False
    ) -> DriveVector:
        """Build a vector from a loosely-typed mapping.

        Unknown keys are ignored unless ``strict`` is set, in which case
        they raise ``ValueError``.
        """
        values: dict[Drive, Any] = {}
        for key, raw in (data or {}).items():
            try:
                drive = Drive.parse(key)
            except ValueError:
                if strict:
                    raise
                continue
            values[drive] = raw
        return cls(values)

    def __getitem__(self, key: Drive | str) -> float:
        return self._values[Drive.parse(key)]

    def __contains__(self, key: object) -> bool:
        try:
            Drive.parse(key)  # type: ignore[arg-type]
        except ValueError:
            return False
        return True

    def __iter__(self) -> Iterator[Drive]:
        return iter(DRIVES)

    def __len__(self) -> int:
        return len(DRIVES)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DriveVector):
            return self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._values[d] for d in DRIVES))

    def __repr__(self) -> str:
        inner = ", ".join(f"{d.value}={self._values[d]:.3f}" for d in DRIVES)
        return f"DriveVector({inner})"

    def set(self, drive: Drive | str, value: float) -> DriveVector:
        """Return a copy with ``drive`` set to ``value``."""
        values = dict(self._values)
        values[Drive.parse(drive)] = to_number(value)
        return DriveVector(values)

    def map(self, fn: Callable[[float], float]) -> DriveVector:
        return DriveVector({d: fn(v) for d, v in self._values.items()})

    def clamped(self, lo: float = 0.0, hi: float = 5.0) -> DriveVector:
        return self.map(lambda v: clamp(v, lo, hi))

    def total(self) -> float:
        return sum(self._values[d] for d in DRIVES)

    def strongest(self) -> Drive:
        """Highest-valued drive; ties resolve to the earlier drive in order."""
        return max(DRIVES, key=lambda d: self._values[d])

    def to_dict(self) -> dict[str, float]:
        """Plain ``{"Exploration": 3.0, ...}`` form for serialization."""
        return {d.value: self._values[d] for d in DRIVES}
