from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .errors import InconsistentStateError
from .models import BusyInterval, Job

logger = logging.getLogger(__name__)


def _covering_period(busy: List[BusyInterval], t: int) -> Optional[BusyInterval]:
    """First busy period containing t, preferring one that runs on past t."""
    found: Optional[BusyInterval] = None
    for b in busy:
        if b.contains(t):
            if b.stop_time > t:
                return b
            if found is None:
                found = b
    return found


def compute_wait_time(jobs: Iterable[Job], busy: List[BusyInterval]) -> int:
    """
    Total perceived wait: time between each submission and the machine next
    having something running.

    Jobs are processed in input order. When a submission lands in an idle
    gap, the next busy period is widened back to the submit time, so jobs
    submitted later into the same gap are not charged for it again. A job
    submitted while the machine is busy only waits if it starts after that
    busy period has ended.

    NOTE: ``busy`` is modified in place and must not be reused afterwards.
    Take any totals you need from it (e.g. busy time) before calling this.
    """
    total_wait = 0

    for job in jobs:
        submit_time = job.submit_time

        # Submitted while the machine was already busy: the effective
        # submission is the end of that busy period. Periods widened by an
        # earlier job can touch the next one, so follow them until the end.
        covering = _covering_period(busy, submit_time)
        while covering is not None and covering.stop_time > submit_time:
            submit_time = covering.stop_time
            covering = _covering_period(busy, submit_time)

        # Submitted and started within the same busy window.
        if covering is not None and job.start_time <= submit_time:
            continue

        best: Optional[BusyInterval] = None
        min_diff = 0
        for b in busy:
            if b.start_time > submit_time:
                diff = b.start_time - submit_time
                if best is None or diff < min_diff:
                    min_diff = diff
                    best = b

        if best is None:
            raise InconsistentStateError(submit_time, job)

        logger.debug(
            "Job %s submitted at %d waits %d until busy period starting %d",
            job.job_id or "?",
            submit_time,
            min_diff,
            best.start_time,
        )

        best.start_time = submit_time
        total_wait += min_diff

    return total_wait
