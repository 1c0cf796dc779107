"""Tests for satisfaction and dissatisfaction."""

from __future__ import annotations

import pytest


def _vectors(env: float, competence: float, self_interest: float):
    from drivefit.drives.models import DriveVector

    return (
        DriveVector.zero(env),
        DriveVector.zero(competence),
        DriveVector.zero(self_interest),
    )


class TestSatisfaction:
    """Test calculate_satisfaction."""

    def test_full_match_is_five(self):
        from drivefit.routing.satisfaction import calculate_satisfaction

        result = calculate_satisfaction(*_vectors(5, 5, 5))

        assert all(v == pytest.approx(5.0) for v in result.values())

    def test_scales_with_environment_and_competence(self):
        from drivefit.routing.satisfaction import calculate_satisfaction

        result = calculate_satisfaction(*_vectors(5, 1, 5))

        assert result["Care"] == pytest.approx(1.0)

    def test_inputs_are_clamped(self):
        from drivefit.routing.satisfaction import calculate_satisfaction

        result = calculate_satisfaction(*_vectors(9, 9, 9))

        assert result["Value"] == pytest.approx(5.0)


class TestDissatisfaction:
    """Test calculate_dissatisfaction."""

    def test_unmet_strong_interest(self):
        from drivefit.routing.satisfaction import calculate_dissatisfaction

        result = calculate_dissatisfaction(*_vectors(1, 1, 5))

        assert result["Care"] == pytest.approx(4.8)

    def test_fully_met_interest_is_zero(self):
        from drivefit.routing.satisfaction import calculate_dissatisfaction

        result = calculate_dissatisfaction(*_vectors(5, 5, 5))

        assert result["Care"] == pytest.approx(0.0)

    @pytest.mark.parametrize("self_interest", [0, 1])
    def test_no_interest_is_zero(self, self_interest):
        """Minimal or unanswered interest never yields dissatisfaction."""
        from drivefit.routing.satisfaction import calculate_dissatisfaction

        result = calculate_dissatisfaction(*_vectors(0, 0, self_interest))

        assert result["Care"] == 0.0

    def test_from_imposed_answers(self, make_record):
        from drivefit.routing.satisfaction import (
            dissatisfaction_from_imposed,
            satisfaction_from_imposed,
        )

        record = make_record(21, 0, q4=1, q5=1, q6=5)

        assert dissatisfaction_from_imposed(record)["Achievement"] == pytest.approx(4.8)
        assert satisfaction_from_imposed(record)["Achievement"] == pytest.approx(0.2)
        assert satisfaction_from_imposed(None)["Achievement"] == 0.0
