"""Main entry point for drivefit."""

import argparse
import json
import sys
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from drivefit import __version__
from drivefit.config.settings import Settings
from drivefit.utils.logging import configure_logging


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("--limit must be a positive integer")
    return number


def _demand_pair(value: str) -> tuple[str, float]:
    drive, sep, score = value.partition("=")
    if not sep or not drive.strip():
        raise argparse.ArgumentTypeError(f"Expected DRIVE=VALUE, got: {value}")
    try:
        return drive.strip(), float(score)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Demand value must be a number: {value}") from e


def _timestamp_run_id(prefix: str) -> str:
    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}"


def _resolve_run_dir(
    settings: Settings, *, prefix: str, out_run_dir: Path | None
) -> Path:
    if out_run_dir is not None:
        run_dir = out_run_dir
    else:
        run_dir = settings.output_dir / "runs" / _timestamp_run_id(prefix)
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def _write_json(path: Path, payload: object) -> None:
    def _default(value: object):
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        model_dump = getattr(value, "model_dump", None)
        if callable(model_dump):
            return model_dump(mode="json")
        return str(value)

    path.write_text(
        json.dumps(payload, indent=2, default=_default),
        encoding="utf-8",
    )


def _add_answers_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--answers",
        type=Path,
        required=True,
        help="Path to an answer file (YAML or JSON) with innate/surface/imposed sections",
    )
    parser.add_argument(
        "--out-run-dir",
        type=Path,
        default=None,
        help="Write outputs into this run directory (default: artifacts/runs/<timestamp>)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="drivefit",
        description="drivefit: drive profiles and occupational fit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m drivefit score --answers answers.yaml
  python -m drivefit rank --answers answers.yaml --sort overall --limit 10
  python -m drivefit custom --answers answers.yaml --name "Founder" \\
      --demand Exploration=5 --demand Value=4
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available commands",
    )

    score_parser = subparsers.add_parser(
        "score",
        help="Score the three instruments and write the drive vectors",
    )
    _add_answers_argument(score_parser)

    routes_parser = subparsers.add_parser(
        "routes",
        help="Build instrumentation routes and the per-drive report",
    )
    _add_answers_argument(routes_parser)

    drains_parser = subparsers.add_parser(
        "drains",
        help="Report drained and transferred energy per receiving drive",
    )
    _add_answers_argument(drains_parser)

    rank_parser = subparsers.add_parser(
        "rank",
        help="Rank every catalog occupation against the answers",
    )
    _add_answers_argument(rank_parser)
    rank_parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="Path to an occupation catalog (default: FIT_CATALOG_PATH)",
    )
    rank_parser.add_argument(
        "--sort",
        choices=["mismatch", "drain", "overall"],
        default=None,
        help="Ordering of the printed ranking (default: FIT_DEFAULT_SORT_MODE)",
    )
    rank_parser.add_argument(
        "--limit",
        type=_positive_int,
        default=None,
        help="Only print the first N occupations",
    )

    custom_parser = subparsers.add_parser(
        "custom",
        help="Evaluate an ad-hoc job from a demand map",
    )
    _add_answers_argument(custom_parser)
    custom_parser.add_argument("--name", required=True, help="Job name")
    custom_parser.add_argument("--major", default="Custom", help="Major group label")
    custom_parser.add_argument(
        "--demand",
        type=_demand_pair,
        action="append",
        default=[],
        metavar="DRIVE=VALUE",
        help="Demand for one drive (repeatable; missing drives are 0)",
    )

    return parser


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    # Load settings
    try:
        settings = Settings()
    except ValidationError as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Configure logging
    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)

    # If no mode specified, show help
    if parsed.mode is None:
        parser.print_help()
        return 0

    logger.info(f"drivefit v{__version__} running {parsed.mode}")

    try:
        return _dispatch(parsed, settings)
    except (FileNotFoundError, ValueError) as e:
        # pydantic's ValidationError is a ValueError
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _dispatch(parsed: argparse.Namespace, settings: Settings) -> int:
    from drivefit.instruments.loader import AnswerFileService

    user = AnswerFileService().load_answers(parsed.answers)

    if parsed.mode == "score":
        from drivefit.instruments.scorers import (
            score_imposed,
            score_innate,
            score_private,
        )
        from drivefit.routing.satisfaction import (
            dissatisfaction_from_imposed,
            satisfaction_from_imposed,
        )

        payload = {
            "innate": score_innate(user.innate),
            "surface": score_private(user.surface),
            "imposed": score_imposed(user.imposed),
            "satisfaction": satisfaction_from_imposed(user.imposed),
            "dissatisfaction": dissatisfaction_from_imposed(user.imposed),
        }
        run_dir = _resolve_run_dir(settings, prefix="score", out_run_dir=parsed.out_run_dir)
        _write_json(run_dir / "scores.json", payload)
        for name in ("innate", "surface", "imposed"):
            vector = payload[name]
            if vector is None:
                print(f"{name}: (no answers)")
            else:
                values = " ".join(f"{d.value}={v:.2f}" for d, v in vector.items())
                print(f"{name}: {values}")
        print(f"Wrote: {run_dir / 'scores.json'}")
        return 0

    if parsed.mode == "routes":
        from drivefit.fit.config import get_fit_config
        from drivefit.routing.builder import DemotionRouteBuilder
        from drivefit.routing.report import build_instrumentation_report

        builder = DemotionRouteBuilder(
            suppression_threshold=get_fit_config().suppression_threshold
        )
        routes = builder(user)
        report = build_instrumentation_report(user, routes=routes)

        run_dir = _resolve_run_dir(settings, prefix="routes", out_run_dir=parsed.out_run_dir)
        _write_json(run_dir / "routes.json", {"routes": routes, "report": report})
        if not routes:
            print("No instrumentation routes")
        for route in routes:
            print(
                f"{route.source.value} -> {route.target.value} "
                f"[{route.reason.value}] "
                f"drain={route.path_drain:.2f} transfer={route.path_transfer:.2f}"
            )
        print(
            f"Suppression: {report.suppression_count} "
            f"Prioritization: {report.prioritization_count}"
        )
        print(f"Wrote: {run_dir / 'routes.json'}")
        return 0

    if parsed.mode == "drains":
        from drivefit.fit.config import get_fit_config
        from drivefit.routing.builder import DemotionRouteBuilder
        from drivefit.routing.drain_report import build_drain_report

        builder = DemotionRouteBuilder(
            suppression_threshold=get_fit_config().suppression_threshold
        )
        drains = build_drain_report(user, builder=builder)

        run_dir = _resolve_run_dir(settings, prefix="drains", out_run_dir=parsed.out_run_dir)
        _write_json(run_dir / "drains.json", drains)
        for row in drains.rows:
            marker = "*" if row.significant_drain else " "
            print(
                f"{marker} {row.rank}. {row.drive.value} "
                f"drain={row.drain_total:.2f} transfer={row.transfer_total:.2f}"
            )
        for pair in drains.draining_pairs:
            print(
                f"  {pair.source.value} drained through {pair.drive.value}: "
                f"{pair.draining_pct:.0f}%"
            )
        top = drains.summary.top
        print(
            f"Total drain: {drains.summary.total:.2f} "
            f"Significant: {drains.summary.significant} "
            f"Top: {top.drive.value if top is not None else '-'}"
        )
        print(f"Wrote: {run_dir / 'drains.json'}")
        return 0

    from drivefit.fit.service import ProfessionFitService

    service = ProfessionFitService()

    if parsed.mode == "rank":
        from drivefit.fit.catalog import CatalogService

        catalog = CatalogService(service.config).load_catalog(parsed.catalog)
        ranking = service.rank_profession_subtypes(user, catalog.subtypes)
        ordered = service.sort_fit_results(ranking.results, parsed.sort)
        if parsed.limit is not None:
            ordered = ordered[: parsed.limit]

        run_dir = _resolve_run_dir(settings, prefix="rank", out_run_dir=parsed.out_run_dir)
        _write_json(run_dir / "ranking.json", ranking)
        for position, result in enumerate(ordered, start=1):
            print(
                f"{position:>3}. {result.major} / {result.name}: "
                f"mismatch={result.total_mismatch_adjusted:.2f} "
                f"drained={result.total_drained_energy:.2f}"
            )
        print(f"Wrote: {run_dir / 'ranking.json'}")
        return 0

    if parsed.mode == "custom":
        demand = dict(parsed.demand)
        result = service.simulate_custom_job_fit(
            user, parsed.name, demand, major=parsed.major
        )
        run_dir = _resolve_run_dir(settings, prefix="custom", out_run_dir=parsed.out_run_dir)
        _write_json(run_dir / "fit_result.json", result)
        print(service.format_result(result))
        print(f"Wrote: {run_dir / 'fit_result.json'}")
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
