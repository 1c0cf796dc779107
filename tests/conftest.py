"""Pytest configuration and shared fixtures."""

import pytest

INNATE_QUESTIONS = 17
SURFACE_QUESTIONS = 20
IMPOSED_QUESTIONS = 21


def _record(count: int, value: float, **overrides: float) -> dict:
    record = {f"q{i}_answer": value for i in range(1, count + 1)}
    record.update({f"{key}_answer": v for key, v in overrides.items()})
    return record


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Keep logging and settings state from leaking between tests."""
    yield
    from drivefit.config.settings import reset_settings
    from drivefit.fit.config import reset_fit_config
    from drivefit.utils.logging import reset_logging

    reset_settings()
    reset_fit_config()
    reset_logging()


@pytest.fixture
def make_record():
    """Build a ``q{n}_answer`` record filled with one value plus overrides."""
    return _record


@pytest.fixture
def neutral_innate() -> dict:
    return _record(INNATE_QUESTIONS, 3)


@pytest.fixture
def neutral_surface() -> dict:
    return _record(SURFACE_QUESTIONS, 3)


@pytest.fixture
def demoted_user():
    """User whose Exploration beats Achievement innately but not on the surface.

    Innate q1 (Exploration vs Achievement) is 5, everything else neutral, so
    exactly one route Exploration -> Achievement exists. Achievement's
    imposed triplet (q4, q5, q6) = (1, 1, 5) gives it dissatisfaction 4.8.
    """
    from drivefit.instruments.models import PersonaInputs

    return PersonaInputs.from_records(
        innate=_record(INNATE_QUESTIONS, 3, q1=5),
        surface=_record(SURFACE_QUESTIONS, 3),
        imposed=_record(IMPOSED_QUESTIONS, 0, q4=1, q5=1, q6=5),
    )


@pytest.fixture
def fit_config():
    from drivefit.fit.config import FitConfig

    return FitConfig(_env_file=None)


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "catalog.yaml"
    path.write_text(
        """
majors:
  - major: Management
    subtypes:
      - name: Executive / General Management
        drives: {Exploration: 3, Achievement: 5, Dominance: 5, Pleasure: 2, Care: 2, Affiliation: 4, Value: 3}
      - name: Team Lead
        drives: {Exploration: 2, Achievement: 4, Dominance: 4, Care: 3, Affiliation: 4, Value: 3}
  - major: Arts and Design
    subtypes:
      - name: Illustrator
        drives: {Exploration: 5, Achievement: 3, Pleasure: 4, Value: 2}
""".lstrip(),
        encoding="utf-8",
    )
    return path
