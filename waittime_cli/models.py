from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Job:
    """
    One job execution record read from a log.
    """

    submit_time: int
    start_time: int
    stop_time: int
    job_id: Optional[str] = None

    @property
    def run_time(self) -> int:
        return self.stop_time - self.start_time


@dataclass
class BusyInterval:
    """
    A contiguous period during which at least one job was running.
    """

    start_time: int
    stop_time: int

    @property
    def duration(self) -> int:
        return self.stop_time - self.start_time

    def contains(self, t: int) -> bool:
        return self.start_time <= t <= self.stop_time

    def as_tuple(self) -> Tuple[int, int]:
        return (self.start_time, self.stop_time)


@dataclass
class AnalysisConfig:
    merge_strategy: str = "sweep"
    time_unit: str = "seconds"


@dataclass
class AnalysisResult:
    source: str
    wait_time: int
    run_time: int
    busy_time: int
    job_count: int
    busy_periods: List[BusyInterval] = field(default_factory=list)

    @property
    def span(self) -> int:
        if not self.busy_periods:
            return 0
        first = min(b.start_time for b in self.busy_periods)
        last = max(b.stop_time for b in self.busy_periods)
        return last - first

    @property
    def utilization(self) -> float:
        span = self.span
        return self.busy_time / span if span > 0 else 0.0

    @property
    def parallelism(self) -> float:
        return self.run_time / self.busy_time if self.busy_time > 0 else 1.0
