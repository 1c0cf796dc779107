"""Instrumentation routing: how demoted drives redirect their energy.

Public API:
    - InstrumentRoute / RouteReason: route records
    - RouteBuilder / DemotionRouteBuilder / build_user_routes: route policy
    - calculate_satisfaction / calculate_dissatisfaction: per-drive fit of
      the environment to competence and self-interest
    - build_instrumentation_report: per-drive report of routes
    - build_drain_report: drained and transferred energy per receiving drive
"""

from drivefit.routing.builder import (
    DemotionRouteBuilder,
    RouteBuilder,
    build_user_routes,
    directional_score,
)
from drivefit.routing.drain_report import (
    DrainReport,
    DrainSignificance,
    build_drain_report,
)
from drivefit.routing.models import InstrumentRoute, RouteReason
from drivefit.routing.report import (
    DriveReportItem,
    InstrumentationReport,
    build_instrumentation_report,
)
from drivefit.routing.satisfaction import (
    calculate_dissatisfaction,
    calculate_satisfaction,
    dissatisfaction_from_imposed,
    satisfaction_from_imposed,
)

__all__ = [
    "DemotionRouteBuilder",
    "DrainReport",
    "DrainSignificance",
    "DriveReportItem",
    "InstrumentRoute",
    "InstrumentationReport",
    "RouteBuilder",
    "RouteReason",
    "build_drain_report",
    "build_instrumentation_report",
    "build_user_routes",
    "calculate_dissatisfaction",
    "calculate_satisfaction",
    "directional_score",
    "dissatisfaction_from_imposed",
    "satisfaction_from_imposed",
]
