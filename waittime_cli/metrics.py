from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from .merging import merge_busy_periods
from .models import AnalysisConfig, AnalysisResult, BusyInterval, Job
from .wait_time import compute_wait_time

logger = logging.getLogger(__name__)


def compute_run_time(jobs: Iterable[Job]) -> int:
    """
    Sum of every job's own running time, ignoring overlap between jobs.
    """
    return sum(j.stop_time - j.start_time for j in jobs)


def compute_busy_time(busy: Iterable[BusyInterval]) -> int:
    """
    Wall-clock time covered by busy periods. Only meaningful on a merged set.
    """
    return sum(b.stop_time - b.start_time for b in busy)


def analyze_jobs(
    jobs: Sequence[Job],
    config: Optional[AnalysisConfig] = None,
    source: str = "",
) -> AnalysisResult:
    """
    Run the full pipeline on one job log: merge busy periods, total the run
    and busy time, then attribute wait time.
    """
    config = config or AnalysisConfig()

    busy = merge_busy_periods(jobs, strategy=config.merge_strategy)

    # Wait-time attribution widens busy periods, so snapshot and total first.
    snapshot = [replace(b) for b in busy]
    busy_time = compute_busy_time(busy)
    run_time = compute_run_time(jobs)

    wait_time = compute_wait_time(jobs, busy)

    logger.info(
        "%s: %d jobs, %d busy periods, wait=%d run=%d busy=%d",
        source or "<jobs>",
        len(jobs),
        len(snapshot),
        wait_time,
        run_time,
        busy_time,
    )

    return AnalysisResult(
        source=source,
        wait_time=wait_time,
        run_time=run_time,
        busy_time=busy_time,
        job_count=len(jobs),
        busy_periods=sorted(snapshot, key=lambda b: b.start_time),
    )


def summarize_results(results: List[AnalysisResult]) -> dict:
    """
    Totals across independently analyzed logs, for the CLI summary row.
    """
    if not results:
        return {"jobs": 0, "wait_time": 0, "run_time": 0, "busy_time": 0}

    return {
        "jobs": sum(r.job_count for r in results),
        "wait_time": sum(r.wait_time for r in results),
        "run_time": sum(r.run_time for r in results),
        "busy_time": sum(r.busy_time for r in results),
    }
