from __future__ import annotations

from typing import Optional

from .models import Job


class WaitTimeError(Exception):
    """Base class for errors raised while analyzing a job log."""


class InconsistentStateError(WaitTimeError):
    """
    Raised when a submission is not covered by any busy period and no busy
    period starts after it.
    """

    def __init__(self, submit_time: int, job: Optional[Job] = None) -> None:
        self.submit_time = submit_time
        self.job = job
        where = f" (job {job.job_id})" if job is not None and job.job_id else ""
        super().__init__(
            f"No busy period starts after submit time {submit_time}{where}; "
            "the job log violates submit <= start <= stop"
        )


class WorkloadFormatError(ValueError):
    """Raised when a job log entry cannot be turned into a Job."""
