"""Instrumentation route derivation.

A route ``sd -> td`` models a drive ``sd`` that the user ranks above ``td``
innately but no longer ranks above it in their surface expression: the
energy of ``sd`` is being redirected into ``td``. Which pairs qualify and
how much energy flows is a replaceable policy: anything matching
:class:`RouteBuilder` can be handed to :func:`build_user_routes` or to the
fit service.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol

from drivefit.drives.models import DRIVES, Drive, DriveVector, clamp, clamp01
from drivefit.instruments.layouts import INNATE_LAYOUT, SURFACE_LAYOUT, InstrumentLayout
from drivefit.instruments.models import MAX_ANSWER, REVERSE_PIVOT, AnswerSet, PersonaInputs
from drivefit.instruments.scorers import score_innate, score_private
from drivefit.routing.models import InstrumentRoute, RouteReason
from drivefit.routing.satisfaction import (
    dissatisfaction_from_imposed,
    satisfaction_from_imposed,
)
from drivefit.utils.logging import get_logger

logger = get_logger("routing.builder")

NEUTRAL_ANSWER = 3.0


class RouteBuilder(Protocol):
    """Policy deriving a user's instrumentation routes."""

    def __call__(self, user: PersonaInputs) -> list[InstrumentRoute]: ...


def directional_score(
    layout: InstrumentLayout, answers: AnswerSet | None, sd: Drive, td: Drive
) -> float | None:
    """How strongly ``sd`` is preferred over ``td`` on a 1..5 scale.

    Above 3 means ``sd`` wins. ``None`` when the layout has no question
    comparing the two drives or the question was left unanswered.
    """
    if answers is None:
        return None
    found = layout.find_pair(sd, td)
    if found is None:
        return None
    pair, sd_is_front = found

    raw = answers.get(pair.index)
    if not raw:
        return None
    if sd_is_front == layout.front_reversed:
        return REVERSE_PIVOT - raw
    return raw


@dataclass(frozen=True)
class DemotionRouteBuilder:
    """Default route policy: innate demotion.

    ``sd -> td`` exists when the innate questionnaire says ``sd`` beats
    ``td`` and the surface questionnaire says it does not. Diversion is the
    innate margin shared across the candidate targets by their innate
    strength; loss comes from the target's dissatisfaction. Per target, the
    drained plus transferred energy is rescaled to the target's surface
    surplus over its innate level.
    """

    innate_layout: InstrumentLayout = INNATE_LAYOUT
    surface_layout: InstrumentLayout = SURFACE_LAYOUT
    suppression_threshold: float = NEUTRAL_ANSWER

    def __call__(self, user: PersonaInputs) -> list[InstrumentRoute]:
        innate_avg = self._average(score_innate(user.innate, self.innate_layout))
        surface_avg = self._average(score_private(user.surface, self.surface_layout))
        dissatisfaction = dissatisfaction_from_imposed(user.imposed)
        satisfaction = satisfaction_from_imposed(user.imposed)

        innate_total = innate_avg.total()
        routes: list[InstrumentRoute] = []

        for sd in DRIVES:
            candidates = self.candidates(user, sd)
            if not candidates:
                continue

            candidate_sum = sum(innate_avg[td] for td in candidates)
            reason = (
                RouteReason.SUPPRESSION
                if satisfaction[sd] < self.suppression_threshold
                else RouteReason.PRIORITIZATION
            )

            for td in candidates:
                if candidate_sum > 0:
                    target_weight = clamp01(innate_avg[td] / candidate_sum)
                else:
                    target_weight = 1 / len(candidates)

                sd_over_td = directional_score(self.innate_layout, user.innate, sd, td)
                encounter_portion = clamp01((sd_over_td or NEUTRAL_ANSWER) / MAX_ANSWER)
                diversion = clamp01(encounter_portion * target_weight)
                loss = clamp01(dissatisfaction[td] / MAX_ANSWER)

                if innate_total > 0:
                    innate_share = clamp01(innate_avg[td] / innate_total)
                else:
                    innate_share = 1 / len(candidates)
                source_energy = innate_avg[sd] * innate_share

                routes.append(
                    InstrumentRoute(
                        source=sd,
                        target=td,
                        diversion_ratio=diversion,
                        loss_ratio=loss,
                        target_weight=target_weight,
                        encounter_portion=encounter_portion,
                        path_drain=clamp01(diversion * loss) * source_energy,
                        path_transfer=clamp01(diversion * (1 - loss)) * source_energy,
                        reason=reason,
                    )
                )

        routes = self._rescale_to_surface_surplus(routes, innate_avg, surface_avg)
        logger.debug("Built %d instrumentation route(s)", len(routes))
        return routes

    def candidates(self, user: PersonaInputs, sd: Drive) -> list[Drive]:
        """Targets ``sd`` is demoted into, in drive order."""
        found: list[Drive] = []
        for td in DRIVES:
            if td == sd:
                continue
            innate = directional_score(self.innate_layout, user.innate, sd, td)
            surface = directional_score(self.surface_layout, user.surface, sd, td)
            if innate is None or surface is None:
                continue
            if innate > NEUTRAL_ANSWER and surface <= NEUTRAL_ANSWER:
                found.append(td)
        return found

    @staticmethod
    def _average(vector: DriveVector | None) -> DriveVector:
        return (vector or DriveVector.zero()).clamped(0, MAX_ANSWER)

    @staticmethod
    def _rescale_to_surface_surplus(
        routes: list[InstrumentRoute], innate_avg: DriveVector, surface_avg: DriveVector
    ) -> list[InstrumentRoute]:
        totals = {d: 0.0 for d in DRIVES}
        for route in routes:
            totals[route.target] += route.path_drain + route.path_transfer

        scale: dict[Drive, float] = {}
        for td in DRIVES:
            surplus = clamp(surface_avg[td] - innate_avg[td], 0, MAX_ANSWER)
            scale[td] = surplus / totals[td] if totals[td] > 0 else 0.0

        return [
            replace(
                route,
                path_drain=route.path_drain * scale[route.target],
                path_transfer=route.path_transfer * scale[route.target],
            )
            for route in routes
        ]


def build_user_routes(
    user: PersonaInputs, builder: RouteBuilder | None = None
) -> list[InstrumentRoute]:
    """Derive a user's routes with ``builder`` (demotion policy by default)."""
    return (builder or DemotionRouteBuilder())(user)
