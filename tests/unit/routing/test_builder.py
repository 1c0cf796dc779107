"""Tests for instrumentation route derivation."""

from __future__ import annotations

import pytest


class TestDirectionalScore:
    """Test directional_score orientation handling."""

    def test_innate_front_reads_direct(self):
        from drivefit.drives.models import Drive
        from drivefit.instruments.layouts import INNATE_LAYOUT
        from drivefit.instruments.models import AnswerSet
        from drivefit.routing.builder import directional_score

        answers = AnswerSet(answers={1: 5.0})

        assert directional_score(INNATE_LAYOUT, answers, Drive.EXPLORATION, Drive.ACHIEVEMENT) == 5.0
        assert directional_score(INNATE_LAYOUT, answers, Drive.ACHIEVEMENT, Drive.EXPLORATION) == 1.0

    def test_surface_front_reads_reversed(self):
        from drivefit.drives.models import Drive
        from drivefit.instruments.layouts import SURFACE_LAYOUT
        from drivefit.instruments.models import AnswerSet
        from drivefit.routing.builder import directional_score

        answers = AnswerSet(answers={1: 4.0})

        assert directional_score(SURFACE_LAYOUT, answers, Drive.EXPLORATION, Drive.ACHIEVEMENT) == 2.0

    def test_unanswered_or_unpaired_is_none(self):
        from drivefit.drives.models import Drive
        from drivefit.instruments.layouts import INNATE_LAYOUT
        from drivefit.instruments.models import AnswerSet
        from drivefit.routing.builder import directional_score

        answers = AnswerSet(answers={1: 0.0})

        assert directional_score(INNATE_LAYOUT, answers, Drive.EXPLORATION, Drive.ACHIEVEMENT) is None
        assert directional_score(INNATE_LAYOUT, answers, Drive.CARE, Drive.CARE) is None
        assert directional_score(INNATE_LAYOUT, None, Drive.CARE, Drive.VALUE) is None


class TestDemotionRouteBuilder:
    """Test the default route policy."""

    def test_neutral_user_has_no_routes(self, neutral_innate, neutral_surface):
        from drivefit.instruments.models import PersonaInputs
        from drivefit.routing.builder import build_user_routes

        user = PersonaInputs.from_records(innate=neutral_innate, surface=neutral_surface)

        assert build_user_routes(user) == []

    def test_absent_instruments_have_no_routes(self):
        from drivefit.instruments.models import PersonaInputs
        from drivefit.routing.builder import build_user_routes

        assert build_user_routes(PersonaInputs()) == []

    def test_demotion_creates_single_route(self, demoted_user):
        """Exploration beats Achievement innately but not on the surface."""
        from drivefit.drives.models import Drive
        from drivefit.routing.builder import build_user_routes
        from drivefit.routing.models import RouteReason

        routes = build_user_routes(demoted_user)

        assert len(routes) == 1
        route = routes[0]
        assert route.source is Drive.EXPLORATION
        assert route.target is Drive.ACHIEVEMENT
        assert route.reason is RouteReason.SUPPRESSION
        assert route.target_weight == pytest.approx(1.0)
        assert route.encounter_portion == pytest.approx(1.0)
        assert route.diversion_ratio == pytest.approx(1.0)
        assert route.loss_ratio == pytest.approx(0.96)

    def test_paths_rescaled_to_surface_surplus(self, demoted_user):
        """Drain plus transfer into Achievement equals surface - innate (3.0 - 2.6)."""
        from drivefit.routing.builder import build_user_routes

        route = build_user_routes(demoted_user)[0]

        assert route.path_drain + route.path_transfer == pytest.approx(0.4)
        assert route.path_drain == pytest.approx(0.384)
        assert route.path_transfer == pytest.approx(0.016)

    def test_satisfied_source_is_prioritization(self, make_record):
        """A well-satisfied source drive labels its routes prioritization."""
        from drivefit.instruments.models import PersonaInputs
        from drivefit.routing.builder import build_user_routes
        from drivefit.routing.models import RouteReason

        user = PersonaInputs.from_records(
            innate=make_record(17, 3, q1=5),
            surface=make_record(20, 3),
            imposed=make_record(21, 0, q1=5, q2=5, q3=5),
        )

        routes = build_user_routes(user)

        assert [r.reason for r in routes] == [RouteReason.PRIORITIZATION]

    def test_threshold_is_configurable(self, make_record):
        from drivefit.instruments.models import PersonaInputs
        from drivefit.routing.builder import DemotionRouteBuilder
        from drivefit.routing.models import RouteReason

        user = PersonaInputs.from_records(
            innate=make_record(17, 3, q1=5),
            surface=make_record(20, 3),
            imposed=make_record(21, 0, q1=5, q2=5, q3=2),
        )

        assert DemotionRouteBuilder()(user)[0].reason is RouteReason.SUPPRESSION
        relaxed = DemotionRouteBuilder(suppression_threshold=1.0)(user)
        assert relaxed[0].reason is RouteReason.PRIORITIZATION

    def test_candidates(self, demoted_user):
        from drivefit.drives.models import Drive
        from drivefit.routing.builder import DemotionRouteBuilder

        builder = DemotionRouteBuilder()

        assert builder.candidates(demoted_user, Drive.EXPLORATION) == [Drive.ACHIEVEMENT]
        assert builder.candidates(demoted_user, Drive.ACHIEVEMENT) == []

    def test_custom_builder_is_used(self, demoted_user):
        from drivefit.routing.builder import build_user_routes

        assert build_user_routes(demoted_user, builder=lambda user: []) == []

    def test_routes_are_deterministic(self):
        from drivefit.instruments.models import PersonaInputs
        from drivefit.routing.builder import build_user_routes

        user = PersonaInputs.from_records(
            innate={f"q{i}_answer": (i % 5) + 1 for i in range(1, 18)},
            surface={f"q{i}_answer": ((i + 2) % 5) + 1 for i in range(1, 21)},
            imposed={f"q{i}_answer": ((i * 2) % 5) + 1 for i in range(1, 22)},
        )

        first = build_user_routes(user)
        second = build_user_routes(user)

        assert first == second


class TestInstrumentRoute:
    """Test InstrumentRoute validation."""

    def test_rejects_self_route(self):
        from drivefit.drives.models import Drive
        from drivefit.routing.models import InstrumentRoute

        with pytest.raises(ValueError, match="differ"):
            InstrumentRoute(Drive.CARE, Drive.CARE, diversion_ratio=0.5, loss_ratio=0.5)

    @pytest.mark.parametrize("field", ["diversion_ratio", "loss_ratio"])
    def test_rejects_ratio_out_of_range(self, field):
        from drivefit.drives.models import Drive
        from drivefit.routing.models import InstrumentRoute

        kwargs = {"diversion_ratio": 0.5, "loss_ratio": 0.5, field: 1.5}
        with pytest.raises(ValueError, match=field):
            InstrumentRoute(Drive.CARE, Drive.VALUE, **kwargs)

    def test_rejects_negative_path(self):
        from drivefit.drives.models import Drive
        from drivefit.routing.models import InstrumentRoute

        with pytest.raises(ValueError, match="path_drain"):
            InstrumentRoute(
                Drive.CARE, Drive.VALUE, diversion_ratio=0.5, loss_ratio=0.5, path_drain=-1
            )

    def test_effective_transfer_and_to_dict(self):
        from drivefit.drives.models import Drive
        from drivefit.routing.models import InstrumentRoute

        route = InstrumentRoute(Drive.CARE, Drive.VALUE, diversion_ratio=0.5, loss_ratio=0.2)

        assert route.effective_transfer == pytest.approx(0.4)
        data = route.to_dict()
        assert data["source"] == "Care"
        assert data["target"] == "Value"
        assert data["reason"] == "prioritization"
