from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List

from .errors import WorkloadFormatError
from .models import Job

logger = logging.getLogger(__name__)


def load_jobs(path: str | Path) -> List[Job]:
    """
    Load a job log into a list of Job objects.

    ``.json`` and ``.csv`` files hold records with ``submit_time``,
    ``start_time`` and ``stop_time`` fields; anything else is read as plain
    text with three whitespace-separated integers per line.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        jobs = _load_json(path)
    elif suffix == ".csv":
        jobs = _load_csv(path)
    else:
        jobs = _load_text(path)

    logger.info("Loaded %d jobs from %s", len(jobs), path)
    return jobs


def _load_text(path: Path) -> List[Job]:
    jobs: List[Job] = []
    with path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            fields = stripped.split()
            if len(fields) < 3:
                raise WorkloadFormatError(
                    f"{path}:{lineno}: expected 'submit start stop', got {stripped!r}"
                )
            try:
                submit, start, stop = (int(v) for v in fields[:3])
            except ValueError as exc:
                raise WorkloadFormatError(
                    f"{path}:{lineno}: timestamps must be integers, got {stripped!r}"
                ) from exc
            jobs.append(_make_job(submit, start, stop, str(lineno), f"{path}:{lineno}"))
    return jobs


def _load_json(path: Path) -> List[Job]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise WorkloadFormatError("JSON job log must be a list of job objects")

    return [_job_from_mapping(entry, idx) for idx, entry in enumerate(raw, start=1)]


def _load_csv(path: Path) -> List[Job]:
    jobs: List[Job] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for idx, row in enumerate(reader, start=1):
            jobs.append(_job_from_mapping(row, idx))
    return jobs


def _job_from_mapping(mapping, index: int) -> Job:
    try:
        submit = int(mapping["submit_time"])
        start = int(mapping["start_time"])
        stop = int(mapping["stop_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise WorkloadFormatError(f"Invalid job entry: {mapping!r}") from exc

    job_id = mapping.get("job_id")
    job_id = str(job_id) if job_id not in (None, "") else str(index)
    return _make_job(submit, start, stop, job_id, f"job {job_id}")


def _make_job(submit: int, start: int, stop: int, job_id: str, where: str) -> Job:
    if min(submit, start, stop) < 0:
        raise WorkloadFormatError(f"{where}: timestamps must be non-negative")
    if start > stop:
        raise WorkloadFormatError(f"{where}: start time {start} is after stop time {stop}")
    if submit > start:
        logger.warning("%s: submitted at %d, after its start time %d", where, submit, start)
    return Job(submit_time=submit, start_time=start, stop_time=stop, job_id=job_id)

