from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .errors import WaitTimeError
from .merging import MERGE_STRATEGIES
from .metrics import analyze_jobs, summarize_results
from .models import AnalysisConfig, AnalysisResult
from .timeline import build_busy_timeline, render_busy_listing
from .workload_io import load_jobs

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="waittime-cli",
        description=(
            "Calculates the perceived wait time for a set of jobs, where the time is "
            "taken only as the time between submitting a job and having something "
            "running on the machine. Also reports total run time and busy time."
        ),
        epilog="Each input line holds three fields: submitTime startTime stopTime",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Job log(s) to analyze (.json, .csv, or whitespace-separated text).",
    )
    parser.add_argument(
        "--merge",
        choices=sorted(MERGE_STRATEGIES.keys()),
        default="sweep",
        help="Strategy used to merge overlapping job spans (default: sweep).",
    )
    parser.add_argument(
        "--unit",
        default="seconds",
        help="Label for durations in the report (default: seconds).",
    )
    parser.add_argument(
        "--show-busy",
        action="store_true",
        help="List the merged busy periods.",
    )
    parser.add_argument(
        "--timeline",
        action="store_true",
        help="Draw a scaled timeline of the busy periods.",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Print plain 'Total ... time' lines instead of a table.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_plain(result: AnalysisResult, unit: str, console: Console) -> None:
    console.print(f"Total wait time: {result.wait_time} {unit}", highlight=False)
    console.print(f"Total run time:  {result.run_time} {unit}", highlight=False)
    console.print(f"Total busy time: {result.busy_time} {unit}", highlight=False)


def _print_details(result: AnalysisResult, args: argparse.Namespace, console: Console) -> None:
    if args.show_busy:
        console.print(render_busy_listing(result.busy_periods), highlight=False)
    if args.timeline:
        panel, time_marks = build_busy_timeline(result.busy_periods)
        console.print(panel)
        if time_marks:
            console.print(time_marks, highlight=False)


def _print_table(results: List[AnalysisResult], unit: str, console: Console) -> None:
    table = Table(title="Job log analysis", box=box.SIMPLE_HEAVY)
    table.add_column("File")
    table.add_column("Jobs", justify="right")
    table.add_column(f"Wait ({unit})", justify="right")
    table.add_column(f"Run ({unit})", justify="right")
    table.add_column(f"Busy ({unit})", justify="right")
    table.add_column("Utilization", justify="right")

    for r in results:
        table.add_row(
            r.source,
            str(r.job_count),
            str(r.wait_time),
            str(r.run_time),
            str(r.busy_time),
            f"{r.utilization*100:.1f}%",
        )

    if len(results) > 1:
        totals = summarize_results(results)
        table.add_row(
            "[bold]Total[/bold]",
            str(totals["jobs"]),
            str(totals["wait_time"]),
            str(totals["run_time"]),
            str(totals["busy_time"]),
            "",
        )

    console.print(table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()

    if not args.files:
        parser.print_help()
        return 0

    _configure_logging(args.verbose)
    config = AnalysisConfig(merge_strategy=args.merge, time_unit=args.unit)

    results: List[AnalysisResult] = []
    for name in args.files:
        path = Path(name)
        try:
            jobs = load_jobs(path)
            result = analyze_jobs(jobs, config, source=str(path))
        except OSError as exc:
            logger.error("Unable to open file (%s): %s", path, exc.strerror or exc)
            return 1
        except (ValueError, WaitTimeError) as exc:
            logger.error("%s", exc)
            return 1
        except MemoryError:
            logger.error("No memory while analyzing %s", path)
            return 1

        _print_details(result, args, console)
        if args.plain:
            _print_plain(result, config.time_unit, console)
        results.append(result)

    if not args.plain:
        _print_table(results, config.time_unit, console)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
