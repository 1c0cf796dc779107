"""Drain, transfer and aspiration adjustments of the surface vector.

Route drains are weighted by the source drive's normalized innate strength
here and nowhere else, so totals and per-drive drains always agree.
"""

from __future__ import annotations

from collections.abc import Iterable

from drivefit.drives.models import DRIVES, Drive, DriveVector, clamp, clamp01
from drivefit.instruments.models import MAX_ANSWER
from drivefit.routing.models import InstrumentRoute


def innate_weight(innate_avg: DriveVector, drive: Drive) -> float:
    return clamp01(innate_avg[drive] / MAX_ANSWER)


def drained_energy(route: InstrumentRoute, innate_avg: DriveVector) -> float:
    """Energy ``route`` drains, weighted by its source's innate strength."""
    return clamp(route.path_drain, 0, MAX_ANSWER) * innate_weight(innate_avg, route.source)


def transferred_energy(route: InstrumentRoute, innate_avg: DriveVector) -> float:
    return clamp(route.path_transfer, 0, MAX_ANSWER) * innate_weight(
        innate_avg, route.source
    )


def surface_drain(innate_avg: DriveVector, routes: Iterable[InstrumentRoute]) -> DriveVector:
    """Energy removed from each drive's surface expression by its outgoing routes."""
    drained = {d: 0.0 for d in DRIVES}
    for route in routes:
        drained[route.source] += drained_energy(route, innate_avg)
    return DriveVector({d: clamp(v, 0, MAX_ANSWER) for d, v in drained.items()})


def surface_transfer(
    innate_avg: DriveVector, routes: Iterable[InstrumentRoute]
) -> DriveVector:
    """Energy arriving at each target drive through its incoming routes."""
    arrived = {d: 0.0 for d in DRIVES}
    for route in routes:
        arrived[route.target] += transferred_energy(route, innate_avg)
    return DriveVector({d: clamp(v, 0, MAX_ANSWER) for d, v in arrived.items()})


def total_drained_energy(innate_avg: DriveVector, routes: Iterable[InstrumentRoute]) -> float:
    return sum(drained_energy(route, innate_avg) for route in routes)


def surface_adjusted(surface_avg: DriveVector, drain: DriveVector) -> DriveVector:
    """Surface minus drain, floored at 0. The ceiling is left alone."""
    return DriveVector({d: max(0.0, surface_avg[d] - drain[d]) for d in DRIVES})


def surface_adjusted_aspired(
    adjusted: DriveVector,
    routes: Iterable[InstrumentRoute],
    value_drive: Drive = Drive.VALUE,
) -> DriveVector:
    """Second pass redirecting aspiration along routes that touch ``value_drive``.

    A route leaving the value drive carries its whole redirected energy
    (drain and transfer) into its target; a route entering the value drive
    lifts the value drive by what it transfers. Other routes are ignored.
    Result is clamped to [0, 5].
    """
    lift = {d: 0.0 for d in DRIVES}
    for route in routes:
        if route.source == value_drive:
            lift[route.target] += route.path_transfer + route.path_drain
        elif route.target == value_drive:
            lift[value_drive] += route.path_transfer

    return DriveVector({d: clamp(adjusted[d] + lift[d], 0, MAX_ANSWER) for d in DRIVES})
