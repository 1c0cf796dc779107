"""Instrumentation report: per-drive view of a user's routes."""

from __future__ import annotations

from dataclasses import dataclass, field

from drivefit.drives.models import DRIVES, Drive, DriveVector
from drivefit.instruments.models import PersonaInputs
from drivefit.instruments.scorers import score_innate
from drivefit.routing.builder import NEUTRAL_ANSWER, RouteBuilder, build_user_routes
from drivefit.routing.models import InstrumentRoute, RouteReason
from drivefit.routing.satisfaction import satisfaction_from_imposed


@dataclass(frozen=True)
class RouteReversal:
    reason: RouteReason
    source: Drive
    target: Drive


@dataclass
class DriveReportItem:
    """One drive's entry, ranked by innate strength."""

    drive: Drive
    rank: int
    innate_score: float
    satisfaction: float
    reversals: list[RouteReversal] = field(default_factory=list)

    @property
    def genuine_passion(self) -> bool:
        """Undersatisfied, yet not redirected into any other drive."""
        return self.satisfaction < NEUTRAL_ANSWER and not self.reversals


@dataclass
class InstrumentationReport:
    items: list[DriveReportItem]
    suppression_count: int = 0
    prioritization_count: int = 0

    def to_dict(self) -> dict:
        return {
            "items": [
                {
                    "drive": item.drive.value,
                    "rank": item.rank,
                    "innate_score": item.innate_score,
                    "satisfaction": item.satisfaction,
                    "genuine_passion": item.genuine_passion,
                    "reversals": [
                        {
                            "reason": r.reason.value,
                            "source": r.source.value,
                            "target": r.target.value,
                        }
                        for r in item.reversals
                    ],
                }
                for item in self.items
            ],
            "summary": {
                "suppression": self.suppression_count,
                "prioritization": self.prioritization_count,
            },
        }


def build_instrumentation_report(
    user: PersonaInputs,
    routes: list[InstrumentRoute] | None = None,
    builder: RouteBuilder | None = None,
) -> InstrumentationReport:
    """Rank drives by innate score and attach each drive's outgoing routes."""
    if routes is None:
        routes = build_user_routes(user, builder)

    innate_avg = (score_innate(user.innate) or DriveVector.zero()).clamped()
    satisfaction = satisfaction_from_imposed(user.imposed)

    # sorted() is stable, so equal scores keep drive order.
    ranked = sorted(DRIVES, key=lambda d: innate_avg[d], reverse=True)

    items: list[DriveReportItem] = []
    suppression = 0
    prioritization = 0
    for position, drive in enumerate(ranked, start=1):
        reversals = [
            RouteReversal(reason=r.reason, source=r.source, target=r.target)
            for r in routes
            if r.source == drive
        ]
        for reversal in reversals:
            if reversal.reason is RouteReason.SUPPRESSION:
                suppression += 1
            else:
                prioritization += 1
        items.append(
            DriveReportItem(
                drive=drive,
                rank=position,
                innate_score=innate_avg[drive],
                satisfaction=satisfaction[drive],
                reversals=reversals,
            )
        )

    return InstrumentationReport(
        items=items,
        suppression_count=suppression,
        prioritization_count=prioritization,
    )
