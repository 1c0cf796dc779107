from __future__ import annotations

import json

import pytest


@pytest.fixture
def answers_file(tmp_path, make_record):
    path = tmp_path / "answers.json"
    path.write_text(
        json.dumps(
            {
                "innate": make_record(17, 3, q1=5),
                "surface": make_record(20, 3),
                "imposed": make_record(21, 0, q4=1, q5=1, q6=5),
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_cli_without_mode_prints_help(capsys) -> None:
    from drivefit.__main__ import main

    assert main([]) == 0
    assert "usage: drivefit" in capsys.readouterr().out


def test_cli_version(capsys) -> None:
    from drivefit import __version__
    from drivefit.__main__ import main

    with pytest.raises(SystemExit) as exc:
        main(["--version"])

    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_cli_score_writes_scores(answers_file, tmp_path, capsys) -> None:
    from drivefit.__main__ import main

    run_dir = tmp_path / "run"
    exit_code = main(["score", "--answers", str(answers_file), "--out-run-dir", str(run_dir)])

    assert exit_code == 0
    payload = json.loads((run_dir / "scores.json").read_text(encoding="utf-8"))
    assert payload["innate"]["Exploration"] == pytest.approx(20 / 6)
    assert payload["imposed"]["Achievement"] == pytest.approx(5.0)
    assert payload["dissatisfaction"]["Achievement"] == pytest.approx(4.8)
    assert "innate: Exploration=3.33" in capsys.readouterr().out


def test_cli_score_default_run_dir(answers_file, tmp_path) -> None:
    from drivefit.__main__ import main

    assert main(["score", "--answers", str(answers_file)]) == 0

    written = list((tmp_path / "artifacts" / "runs").glob("score_*/scores.json"))
    assert len(written) == 1


def test_cli_routes_writes_routes_and_report(answers_file, tmp_path, capsys) -> None:
    from drivefit.__main__ import main

    run_dir = tmp_path / "run"
    exit_code = main(["routes", "--answers", str(answers_file), "--out-run-dir", str(run_dir)])

    assert exit_code == 0
    payload = json.loads((run_dir / "routes.json").read_text(encoding="utf-8"))
    assert [(r["source"], r["target"]) for r in payload["routes"]] == [
        ("Exploration", "Achievement")
    ]
    assert payload["report"]["summary"]["suppression"] == 1
    assert "Exploration -> Achievement [suppression]" in capsys.readouterr().out


def test_cli_rank_with_catalog(answers_file, catalog_file, tmp_path, capsys) -> None:
    from drivefit.__main__ import main

    run_dir = tmp_path / "run"
    exit_code = main(
        [
            "rank",
            "--answers",
            str(answers_file),
            "--catalog",
            str(catalog_file),
            "--sort",
            "overall",
            "--limit",
            "2",
            "--out-run-dir",
            str(run_dir),
        ]
    )

    assert exit_code == 0
    payload = json.loads((run_dir / "ranking.json").read_text(encoding="utf-8"))
    assert len(payload["results"]) == 3
    assert len(payload["top"]) == 3
    out = capsys.readouterr().out
    assert "  1. " in out
    assert "  3. " not in out


def test_cli_custom_job(answers_file, tmp_path, capsys) -> None:
    from drivefit.__main__ import main

    run_dir = tmp_path / "run"
    exit_code = main(
        [
            "custom",
            "--answers",
            str(answers_file),
            "--name",
            "Founder",
            "--demand",
            "Exploration=4",
            "--out-run-dir",
            str(run_dir),
        ]
    )

    assert exit_code == 0
    payload = json.loads((run_dir / "fit_result.json").read_text(encoding="utf-8"))
    assert payload["profession"] == {"major": "Custom", "name": "Founder"}
    assert payload["total_mismatch_adjusted"] == pytest.approx(4 * 1.256)
    assert "Custom / Founder" in capsys.readouterr().out


def test_cli_custom_unknown_drive_errors_cleanly(answers_file, capsys) -> None:
    from drivefit.__main__ import main

    exit_code = main(
        ["custom", "--answers", str(answers_file), "--name", "X", "--demand", "Curiosity=3"]
    )

    assert exit_code == 1
    assert "Unknown drive" in capsys.readouterr().err


def test_cli_missing_answers_file_errors_cleanly(tmp_path, capsys) -> None:
    from drivefit.__main__ import main

    exit_code = main(["score", "--answers", str(tmp_path / "missing.yaml")])

    assert exit_code == 1
    assert "not found" in capsys.readouterr().err


def test_cli_missing_catalog_errors_cleanly(answers_file, tmp_path) -> None:
    from drivefit.__main__ import main

    exit_code = main(
        ["rank", "--answers", str(answers_file), "--catalog", str(tmp_path / "none.yaml")]
    )

    assert exit_code == 1


def test_cli_bad_demand_argument_exits() -> None:
    from drivefit.__main__ import main

    with pytest.raises(SystemExit):
        main(["custom", "--answers", "a.yaml", "--name", "X", "--demand", "Care"])


def test_cli_drains_writes_report(answers_file, tmp_path, capsys) -> None:
    from drivefit.__main__ import main

    run_dir = tmp_path / "run"
    exit_code = main(["drains", "--answers", str(answers_file), "--out-run-dir", str(run_dir)])

    assert exit_code == 0
    payload = json.loads((run_dir / "drains.json").read_text(encoding="utf-8"))
    assert payload["summary"]["top"] == "Achievement"
    assert payload["summary"]["significant"] == 1
    out = capsys.readouterr().out
    assert "Exploration drained through Achievement: 96%" in out
    assert "Total drain: 0.38" in out
