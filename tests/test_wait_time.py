import random

import pytest

from waittime_cli.errors import InconsistentStateError
from waittime_cli.merging import merge_busy_periods_pairwise, merge_busy_periods_sweep
from waittime_cli.models import BusyInterval, Job
from waittime_cli.wait_time import compute_wait_time


def _wait(jobs, merge=merge_busy_periods_sweep):
    return compute_wait_time(jobs, merge(jobs))


def test_no_jobs_no_wait():
    assert compute_wait_time([], []) == 0


def test_single_job_waits_until_start():
    assert _wait([Job(0, 10, 20)]) == 10


def test_second_job_submitted_while_busy_waits_nothing():
    jobs = [Job(0, 10, 30), Job(5, 15, 20)]
    assert _wait(jobs) == 10


def test_submission_in_gap_between_busy_periods():
    jobs = [Job(0, 10, 20), Job(12, 30, 40)]
    assert _wait(jobs) == 20


def test_same_gap_is_charged_once():
    jobs = [Job(0, 10, 20), Job(0, 10, 15)]
    assert _wait(jobs) == 10


def test_later_submission_into_claimed_gap_is_free():
    # First job claims the gap from 0; the second, submitted at 4, now
    # falls inside the widened busy period.
    jobs = [Job(0, 10, 20), Job(4, 12, 18)]
    assert _wait(jobs) == 10


def test_processing_order_matters_for_gap_attribution():
    # Submitted at 4 first: charged 6 and the period widens to 4. The job
    # submitted at 0 is then charged the remaining 4.
    jobs = [Job(4, 12, 18), Job(0, 10, 20)]
    assert _wait(jobs) == 10


def test_submit_at_busy_start_waits_nothing():
    assert _wait([Job(10, 10, 20)]) == 0


def test_busy_periods_are_widened_in_place():
    jobs = [Job(0, 10, 20), Job(12, 30, 40)]
    busy = merge_busy_periods_sweep(jobs)
    compute_wait_time(jobs, busy)
    assert [b.as_tuple() for b in busy] == [(0, 20), (20, 40)]


def test_submitted_while_busy_but_started_after_it_waits_for_next_period():
    # Submitted at 12 during (10, 20), but nothing runs again until 30:
    # charged 10. The job submitted at 0 then waits 10 for the first period.
    jobs = [Job(12, 30, 40), Job(0, 10, 20)]
    assert _wait(jobs) == 20


def test_gap_after_busy_period_is_charged_once():
    # The second and third jobs both wait out the 20..30 gap; only the
    # first of them is charged for it.
    jobs = [Job(0, 10, 20), Job(12, 30, 40), Job(15, 35, 40)]
    assert _wait(jobs) == 20


def test_submission_after_all_busy_periods_raises():
    jobs = [Job(50, 10, 20)]
    busy = [BusyInterval(10, 20)]
    with pytest.raises(InconsistentStateError) as excinfo:
        compute_wait_time(jobs, busy)
    assert excinfo.value.submit_time == 50
    assert "50" in str(excinfo.value)


@pytest.mark.parametrize("seed", range(20))
def test_wait_is_non_negative_and_strategy_independent(seed):
    rng = random.Random(seed)
    jobs = []
    for _ in range(25):
        start = rng.randint(0, 300)
        jobs.append(Job(max(0, start - rng.randint(0, 40)), start, start + rng.randint(0, 30)))

    sweep = _wait(jobs, merge_busy_periods_sweep)
    assert sweep >= 0
    assert sweep == _wait(jobs, merge_busy_periods_pairwise)
