"""Integration tests: answers file -> shipped catalog -> ranking."""

from __future__ import annotations

from pathlib import Path

import pytest

CATALOG_PATH = Path(__file__).resolve().parents[3] / "catalogs" / "occupations.yaml"


@pytest.fixture
def user(tmp_path):
    from drivefit.instruments.loader import AnswerFileService

    innate = {f"q{i}_answer": (i % 5) + 1 for i in range(1, 18)}
    surface = {f"q{i}_answer": ((i + 2) % 5) + 1 for i in range(1, 21)}
    imposed = {f"q{i}_answer": ((i * 2) % 5) + 1 for i in range(1, 22)}

    path = tmp_path / "answers.yaml"
    lines = []
    for section, record in (("innate", innate), ("surface", surface), ("imposed", imposed)):
        lines.append(f"{section}:")
        lines.extend(f"  {key}: {value}" for key, value in record.items())
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    return AnswerFileService().load_answers(path)


@pytest.fixture
def service():
    from drivefit.fit.config import FitConfig
    from drivefit.fit.service import ProfessionFitService

    return ProfessionFitService(FitConfig(_env_file=None, catalog_path=CATALOG_PATH))


@pytest.fixture
def catalog(service):
    from drivefit.fit.catalog import CatalogService

    return CatalogService(service.config).load_catalog()


class TestRankingIntegration:
    """Rank every shipped occupation for one user."""

    def test_ranks_every_subtype(self, user, service, catalog):
        ranking = service.rank_profession_subtypes(user, catalog.subtypes)

        assert len(ranking.results) == len(catalog)
        assert len(ranking.top) == 3
        assert len(ranking.bottom) == 3
        assert ranking.bottom[0] is ranking.results[-1]

    def test_ranking_is_sorted(self, user, service, catalog):
        ranking = service.rank_profession_subtypes(user, catalog.subtypes)

        keys = [
            (r.total_mismatch_adjusted, r.total_drained_energy, r.name)
            for r in ranking.results
        ]
        assert keys == sorted(keys)

    def test_ranking_is_deterministic(self, user, service, catalog):
        def snapshot():
            ranking = service.rank_profession_subtypes(user, catalog.subtypes)
            return [
                (r.name, r.total_mismatch_adjusted, r.total_drained_energy)
                for r in ranking.results
            ]

        assert snapshot() == snapshot()

    def test_invariants_hold_for_every_occupation(self, user, service, catalog):
        ranking = service.rank_profession_subtypes(user, catalog.subtypes)

        for result in ranking.results:
            assert all(v >= 0 for v in result.surface_adjusted.values())
            assert all(0 <= v <= 5 for v in result.surface_adjusted_aspired.values())
            assert all(v >= 0 for v in result.mismatch_adjusted.mismatch.values())
            assert result.total_mismatch_adjusted >= 0
            assert result.total_drained_energy >= 0

    def test_routes_shared_across_occupations(self, user, service, catalog):
        ranking = service.rank_profession_subtypes(user, catalog.subtypes)

        routes = {r.routes for r in ranking.results}
        drains = {r.total_drained_energy for r in ranking.results}
        assert len(routes) == 1
        assert len(drains) == 1

    def test_sorting_modes_are_permutations(self, user, service, catalog):
        from drivefit.fit.service import sort_fit_results

        ranking = service.rank_profession_subtypes(user, catalog.subtypes)

        for mode in ("mismatch", "drain", "overall"):
            ordered = sort_fit_results(ranking.results, mode)
            assert sorted(r.name for r in ordered) == sorted(r.name for r in ranking.results)

    def test_to_dict_is_plain_data(self, user, service, catalog):
        import json

        ranking = service.rank_profession_subtypes(user, catalog.subtypes[:5])

        encoded = json.dumps(ranking.to_dict())

        assert catalog.subtypes[0].name in encoded
