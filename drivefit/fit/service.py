"""Profession fit simulation and ranking."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from drivefit.drives.models import DRIVES, Drive, DriveVector, clamp, to_number
from drivefit.fit.adjust import (
    surface_adjusted,
    surface_adjusted_aspired,
    surface_drain,
    surface_transfer,
    total_drained_energy,
)
from drivefit.fit.config import FitConfig, get_fit_config
from drivefit.fit.mismatch import compute_mismatch
from drivefit.fit.models import (
    FitResult,
    OccupationSubtype,
    RankingResult,
    SortMode,
)
from drivefit.instruments.models import MAX_ANSWER, PersonaInputs
from drivefit.instruments.scorers import (
    extract_env_competence_self_interest,
    score_imposed,
    score_innate,
    score_private,
    simulate_imposed_from_profession,
)
from drivefit.routing.builder import DemotionRouteBuilder, RouteBuilder
from drivefit.routing.models import InstrumentRoute
from drivefit.routing.satisfaction import calculate_dissatisfaction
from drivefit.utils.logging import get_logger

logger = get_logger("fit.service")


class ProfessionFitService:
    """Evaluates and ranks occupations for one user's drive profile."""

    def __init__(
        self,
        config: FitConfig | None = None,
        route_builder: RouteBuilder | None = None,
    ) -> None:
        self.config = config or get_fit_config()
        self.route_builder = route_builder or DemotionRouteBuilder(
            suppression_threshold=self.config.suppression_threshold
        )

    def build_routes(self, user: PersonaInputs) -> list[InstrumentRoute]:
        missing = user.missing_instruments()
        if missing:
            logger.warning(
                "Missing %s answers; those instruments score as zero",
                ", ".join(m.value for m in missing),
            )
        return self.route_builder(user)

    def simulate_profession_fit(
        self,
        user: PersonaInputs,
        subtype: OccupationSubtype,
        user_routes: list[InstrumentRoute] | None = None,
    ) -> FitResult:
        """Evaluate one occupation.

        Pass ``user_routes`` when evaluating many occupations for the same
        user; routes depend only on the user's answers.
        """
        routes = user_routes if user_routes is not None else self.build_routes(user)

        innate_avg = _average(score_innate(user.innate))
        surface_avg = _average(score_private(user.surface))
        imposed_avg = score_imposed(user.imposed) or DriveVector.zero()
        env, competence, self_interest = extract_env_competence_self_interest(user.imposed)

        prof_demand = subtype.drives
        drain = surface_drain(innate_avg, routes)
        adjusted = surface_adjusted(surface_avg, drain)
        aspired = surface_adjusted_aspired(
            adjusted, routes, value_drive=self.config.value_drive
        )

        return FitResult(
            major=subtype.major,
            name=subtype.name,
            innate_avg=innate_avg,
            surface_avg=surface_avg,
            imposed_avg=imposed_avg,
            prof_demand=prof_demand,
            competence=competence,
            self_interest=self_interest,
            imposed_sim=simulate_imposed_from_profession(prof_demand, competence),
            td_dissatisfaction=calculate_dissatisfaction(env, competence, self_interest),
            routes=tuple(routes),
            surface_drain=drain,
            surface_transfer=surface_transfer(innate_avg, routes),
            surface_adjusted=adjusted,
            surface_adjusted_aspired=aspired,
            mismatch_raw=compute_mismatch(
                adjusted, prof_demand, self.config.raw_weight_mode
            ),
            mismatch_adjusted=compute_mismatch(
                aspired, prof_demand, self.config.adjusted_weight_mode
            ),
            total_drained_energy=total_drained_energy(innate_avg, routes),
        )

    def rank_profession_subtypes(
        self, user: PersonaInputs, subtypes: Iterable[OccupationSubtype]
    ) -> RankingResult:
        """Evaluate every subtype and order best fit first.

        Order: adjusted mismatch, then drained energy, then name.
        """
        routes = self.build_routes(user)
        results = [
            self.simulate_profession_fit(user, subtype, user_routes=routes)
            for subtype in subtypes
        ]
        results.sort(key=lambda r: (r.total_mismatch_adjusted, r.total_drained_energy, r.name))

        n = self.config.top_n
        logger.debug("Ranked %d occupation(s) against %d route(s)", len(results), len(routes))
        return RankingResult(
            results=results,
            top=results[:n],
            bottom=list(reversed(results[-n:])) if results else [],
        )

    def simulate_custom_job_fit(
        self,
        user: PersonaInputs,
        job_name: str,
        job_demand: Mapping[Drive | str, float],
        major: str = "Custom",
    ) -> FitResult:
        """Evaluate an ad-hoc job from a partial demand map.

        Missing drives default to 0 and each value is clamped to [0, 5].
        Stricter than a lenient lookup: unknown drive names raise
        ``ValueError`` rather than being dropped.
        """
        parsed = DriveVector.from_mapping(job_demand, strict=True)
        drives = DriveVector(
            {d: clamp(to_number(parsed[d]), 0, MAX_ANSWER) for d in DRIVES}
        )
        return self.simulate_profession_fit(
            user, OccupationSubtype(major=major, name=job_name, drives=drives)
        )

    def sort_fit_results(
        self, results: Iterable[FitResult], mode: SortMode | str | None = None
    ) -> list[FitResult]:
        return sort_fit_results(results, mode or self.config.default_sort_mode)

    def format_result(self, result: FitResult) -> str:
        """Format a FitResult for CLI output."""
        lines: list[str] = []
        lines.append(f"{result.major} / {result.name}")
        lines.append(
            "Mismatch: "
            f"adjusted={result.total_mismatch_adjusted:.2f} "
            f"raw={result.total_mismatch_raw:.2f} "
            f"drained={result.total_drained_energy:.2f} "
            f"overall={result.overall_score:.2f}"
        )
        lines.append(
            "Drive       demand  surface  adjusted  aspired  deficit"
        )
        for d in DRIVES:
            lines.append(
                f"{d.value:<11} "
                f"{result.prof_demand[d]:>6.2f}  "
                f"{result.surface_avg[d]:>7.2f}  "
                f"{result.surface_adjusted[d]:>8.2f}  "
                f"{result.surface_adjusted_aspired[d]:>7.2f}  "
                f"{result.mismatch_adjusted.mismatch[d]:>7.2f}"
            )
        if result.routes:
            routes = ", ".join(
                f"{r.source.value}->{r.target.value} ({r.reason.value})"
                for r in result.routes
            )
            lines.append(f"Routes: {routes}")
        else:
            lines.append("Routes: none")
        return "\n".join(lines)


def sort_fit_results(
    results: Iterable[FitResult], mode: SortMode | str = SortMode.MISMATCH
) -> list[FitResult]:
    """Return a new list ordered by ``mode``; lower is better in every mode.

    - ``mismatch``: adjusted mismatch, drained energy, name
    - ``drain``: drained energy, adjusted mismatch, name
    - ``overall``: mismatch + drained energy, mismatch, drained energy, name
    """
    sort_mode = SortMode.parse(mode)

    if sort_mode is SortMode.MISMATCH:
        key = lambda r: (r.total_mismatch_adjusted, r.total_drained_energy, r.name)  # noqa: E731
    elif sort_mode is SortMode.DRAIN:
        key = lambda r: (r.total_drained_energy, r.total_mismatch_adjusted, r.name)  # noqa: E731
    else:
        key = lambda r: (  # noqa: E731
            r.overall_score,
            r.total_mismatch_adjusted,
            r.total_drained_energy,
            r.name,
        )
    return sorted(results, key=key)


def _average(vector: DriveVector | None) -> DriveVector:
    return (vector or DriveVector.zero()).clamped(0, MAX_ANSWER)
