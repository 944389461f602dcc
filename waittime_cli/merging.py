from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

from .models import BusyInterval, Job

logger = logging.getLogger(__name__)


def _seed_intervals(jobs: Iterable[Job]) -> List[BusyInterval]:
    return [BusyInterval(start_time=j.start_time, stop_time=j.stop_time) for j in jobs]


def merge_busy_periods_sweep(jobs: Iterable[Job]) -> List[BusyInterval]:
    """
    Merge job spans into busy periods by sorting on start time and sweeping once.

    Intervals that merely touch (next start == current stop) are merged, so
    the result is the same partition the pairwise fixpoint produces.
    """
    intervals = sorted(_seed_intervals(jobs), key=lambda b: (b.start_time, b.stop_time))
    if not intervals:
        return []

    merged: List[BusyInterval] = [intervals[0]]
    for b in intervals[1:]:
        last = merged[-1]
        if b.start_time <= last.stop_time:
            last.stop_time = max(last.stop_time, b.stop_time)
        else:
            merged.append(b)

    logger.debug("Sweep merge: %d job spans -> %d busy periods", len(intervals), len(merged))
    return merged


def _merge_pair(busy: List[BusyInterval], i: int, k: int) -> bool:
    """
    Try to merge busy[k] into busy[i] (or drop busy[i] if it is covered).

    Returns True if the list was changed.
    """
    a = busy[i]
    b = busy[k]

    # aaaaaaaa
    #     bbbbbbbb
    if a.start_time <= b.start_time <= a.stop_time and b.stop_time >= a.stop_time:
        a.stop_time = b.stop_time
        del busy[k]
        return True

    #     aaaaaaaa
    # bbbbbbbb
    if b.start_time <= a.start_time and a.start_time <= b.stop_time <= a.stop_time:
        a.start_time = b.start_time
        del busy[k]
        return True

    # aaaaaaaaaaa
    #   bbbbbbb
    if b.start_time >= a.start_time and b.stop_time <= a.stop_time:
        del busy[k]
        return True

    #   aaaaaaa
    # bbbbbbbbbbb
    if a.start_time >= b.start_time and a.stop_time <= b.stop_time:
        del busy[i]
        return True

    return False


def merge_busy_periods_pairwise(jobs: Iterable[Job]) -> List[BusyInterval]:
    """
    Merge job spans into busy periods by repeated pairwise comparison.

    Each pass looks for the first pair that overlaps, merges it and starts
    again; the loop stops once a full scan changes nothing. Every merge
    removes one interval, so at most n - 1 merges happen.
    """
    busy = _seed_intervals(jobs)
    seeded = len(busy)
    passes = 0

    changed = True
    while changed:
        changed = False
        passes += 1
        for i in range(len(busy)):
            for k in range(i + 1, len(busy)):
                if _merge_pair(busy, i, k):
                    changed = True
                    break
            if changed:
                break

    logger.debug(
        "Pairwise merge: %d job spans -> %d busy periods in %d passes",
        seeded,
        len(busy),
        passes,
    )
    return busy


MergeFn = Callable[[Iterable[Job]], List[BusyInterval]]

MERGE_STRATEGIES: Dict[str, MergeFn] = {
    "sweep": merge_busy_periods_sweep,
    "pairwise": merge_busy_periods_pairwise,
}


def merge_busy_periods(jobs: Iterable[Job], strategy: Optional[str] = None) -> List[BusyInterval]:
    """
    Dispatch helper used by the analysis pipeline and the CLI.
    """
    name = (strategy or "sweep").lower()
    if name not in MERGE_STRATEGIES:
        valid = ", ".join(sorted(MERGE_STRATEGIES.keys()))
        raise ValueError(f"Unknown merge strategy '{strategy}'. Valid options: {valid}")
    return MERGE_STRATEGIES[name](jobs)
