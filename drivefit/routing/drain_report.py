"""Drain analysis: where redirected energy lands and how much of it is lost.

Rows are keyed by the drive receiving a route (the surface drive doing the
work) and read each route's rescaled ``path_drain`` / ``path_transfer``
directly, without innate weighting.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from drivefit.drives.models import DRIVES, Drive, DriveVector, clamp, clamp01
from drivefit.instruments.models import MAX_ANSWER, PersonaInputs
from drivefit.instruments.scorers import score_private
from drivefit.routing.builder import RouteBuilder, build_user_routes
from drivefit.routing.models import InstrumentRoute
from drivefit.routing.satisfaction import dissatisfaction_from_imposed


@dataclass(frozen=True)
class DrainSignificance:
    """Thresholds above which a drive or a single path is worth reporting."""

    drive_drain_min: float = 0.25
    drive_transfer_min: float = 0.25
    path_drain_min: float = 0.1
    path_transfer_min: float = 0.1


@dataclass(frozen=True)
class DrainTarget:
    """One incoming route of a row, named by its source drive."""

    source: Drive
    diversion_ratio: float
    loss_ratio: float
    drained_energy: float
    transferred_energy: float
    show_as_drain: bool
    show_as_transfer: bool

    @property
    def displayed_energy(self) -> float:
        if self.show_as_drain:
            return self.drained_energy
        if self.show_as_transfer:
            return self.transferred_energy
        return 0.0

    def to_dict(self) -> dict:
        return {
            "source": self.source.value,
            "diversion_ratio": self.diversion_ratio,
            "loss_ratio": self.loss_ratio,
            "drained_energy": self.drained_energy,
            "transferred_energy": self.transferred_energy,
            "show_as_drain": self.show_as_drain,
            "show_as_transfer": self.show_as_transfer,
        }


@dataclass
class DrainRow:
    """Drain and transfer totals for one receiving drive."""

    drive: Drive
    surface_energy: float
    rank: int
    drain_total: float
    transfer_total: float
    energy_diversion_ratio: float
    drain_ratio: float
    significant_drain: bool
    significant_transfer: bool
    targets: list[DrainTarget] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "drive": self.drive.value,
            "surface_energy": self.surface_energy,
            "rank": self.rank,
            "drain_total": self.drain_total,
            "transfer_total": self.transfer_total,
            "energy_diversion_ratio": self.energy_diversion_ratio,
            "drain_ratio": self.drain_ratio,
            "significant_drain": self.significant_drain,
            "significant_transfer": self.significant_transfer,
            "targets": [t.to_dict() for t in self.targets],
        }


@dataclass(frozen=True)
class DrainBar:
    drive: Drive
    drained_pct_of_energy: float
    significant: bool


@dataclass(frozen=True)
class DrainPair:
    """A reported draining path: ``source`` drained through ``drive``."""

    drive: Drive
    source: Drive
    draining_pct: float


@dataclass
class DrainSummary:
    total: float
    significant: int
    top: DrainRow | None = None


@dataclass
class DrainReport:
    rows: list[DrainRow]
    bars: list[DrainBar]
    draining_pairs: list[DrainPair]
    summary: DrainSummary
    routes: list[InstrumentRoute]
    td_dissatisfaction: DriveVector
    surface_drain: DriveVector
    surface_transfer: DriveVector

    def to_dict(self) -> dict:
        top = self.summary.top
        return {
            "rows": [row.to_dict() for row in self.rows],
            "bars": [
                {
                    "drive": bar.drive.value,
                    "drained_pct_of_energy": bar.drained_pct_of_energy,
                    "significant": bar.significant,
                }
                for bar in self.bars
            ],
            "draining_pairs": [
                {
                    "drive": pair.drive.value,
                    "source": pair.source.value,
                    "draining_pct": pair.draining_pct,
                }
                for pair in self.draining_pairs
            ],
            "summary": {
                "total": self.summary.total,
                "significant": self.summary.significant,
                "top": top.drive.value if top is not None else None,
            },
            "td_dissatisfaction": self.td_dissatisfaction.to_dict(),
            "surface_drain": self.surface_drain.to_dict(),
            "surface_transfer": self.surface_transfer.to_dict(),
        }


def _per_target(routes: list[InstrumentRoute], attr: str) -> DriveVector:
    totals = {d: 0.0 for d in DRIVES}
    for route in routes:
        totals[route.target] += getattr(route, attr)
    return DriveVector({d: clamp(v, 0, MAX_ANSWER) for d, v in totals.items()})


def _build_row(
    drive: Drive,
    rank: int,
    surface_energy: float,
    drain_total: float,
    transfer_total: float,
    incoming: list[InstrumentRoute],
    sig: DrainSignificance,
) -> DrainRow:
    targets = []
    for route in incoming:
        drained = clamp(route.path_drain, 0, MAX_ANSWER)
        transferred = clamp(route.path_transfer, 0, MAX_ANSWER)
        targets.append(
            DrainTarget(
                source=route.source,
                diversion_ratio=clamp01(route.diversion_ratio),
                loss_ratio=clamp01(route.loss_ratio),
                drained_energy=drained,
                transferred_energy=transferred,
                show_as_drain=drained > sig.path_drain_min,
                show_as_transfer=transferred > sig.path_transfer_min,
            )
        )
    targets.sort(key=lambda t: t.displayed_energy, reverse=True)

    # Ratios come from the drain paths that are shown only.
    shown = [t for t in targets if t.show_as_drain]
    diversion = clamp01(sum(t.diversion_ratio for t in shown))
    drained_portion = clamp01(sum(clamp01(t.diversion_ratio * t.loss_ratio) for t in shown))
    drain_ratio = clamp01(drained_portion / diversion) if diversion > 0 else 0.0

    return DrainRow(
        drive=drive,
        surface_energy=surface_energy,
        rank=rank,
        drain_total=drain_total,
        transfer_total=transfer_total,
        energy_diversion_ratio=diversion,
        drain_ratio=drain_ratio,
        significant_drain=drain_total > sig.drive_drain_min,
        significant_transfer=transfer_total > sig.drive_transfer_min,
        targets=targets,
    )


def build_drain_report(
    user: PersonaInputs,
    routes: list[InstrumentRoute] | None = None,
    significance: DrainSignificance | None = None,
    builder: RouteBuilder | None = None,
) -> DrainReport:
    """Summarize drained and transferred energy per receiving drive.

    Rows follow surface rank (1 = strongest surface drive, ties in drive
    order). Bars list drain-significant drives first, then by drained share
    of surface energy. ``summary.top`` is the drain-significant row with the
    largest drain, or failing that any row with a drain.
    """
    sig = significance or DrainSignificance()
    if routes is None:
        routes = build_user_routes(user, builder)

    surface_avg = (score_private(user.surface) or DriveVector.zero()).clamped(0, MAX_ANSWER)
    drain = _per_target(routes, "path_drain")
    transfer = _per_target(routes, "path_transfer")

    ranked = sorted(DRIVES, key=lambda d: surface_avg[d], reverse=True)
    rows = [
        _build_row(
            drive,
            position,
            surface_avg[drive],
            drain[drive],
            transfer[drive],
            [r for r in routes if r.target == drive],
            sig,
        )
        for position, drive in enumerate(ranked, start=1)
    ]

    bars = [
        DrainBar(
            drive=row.drive,
            drained_pct_of_energy=(
                clamp01(row.drain_total / row.surface_energy) if row.surface_energy > 0 else 0.0
            ),
            significant=row.significant_drain,
        )
        for row in rows
    ]
    bars.sort(key=lambda b: (not b.significant, -b.drained_pct_of_energy))

    pairs = [
        DrainPair(
            drive=row.drive,
            source=target.source,
            draining_pct=clamp01(target.diversion_ratio * target.loss_ratio) * 100,
        )
        for row in rows
        if row.significant_drain
        for target in row.targets
        if target.show_as_drain
    ]
    pairs.sort(key=lambda p: p.draining_pct, reverse=True)

    significant_rows = [row for row in rows if row.significant_drain]
    draining_rows = [row for row in rows if row.drain_total > 0]
    candidates = significant_rows or draining_rows
    top = max(candidates, key=lambda row: row.drain_total) if candidates else None

    return DrainReport(
        rows=rows,
        bars=bars,
        draining_pairs=pairs,
        summary=DrainSummary(
            total=sum(row.drain_total for row in rows),
            significant=len(significant_rows),
            top=top,
        ),
        routes=list(routes),
        td_dissatisfaction=dissatisfaction_from_imposed(user.imposed),
        surface_drain=drain,
        surface_transfer=transfer,
    )
