import logging
from pathlib import Path

import pytest

from waittime_cli.errors import WorkloadFormatError
from waittime_cli.models import Job
from waittime_cli.workload_io import load_jobs


def test_load_text(tmp_path: Path):
    p = tmp_path / "times.dat"
    p.write_text("# submit start stop\n0 10 20\n\n12   30\t40 extra\n")
    jobs = load_jobs(p)
    assert jobs == [Job(0, 10, 20, job_id="2"), Job(12, 30, 40, job_id="4")]


def test_load_json(tmp_path: Path):
    p = tmp_path / "jobs.json"
    p.write_text('[{"job_id":"A","submit_time":0,"start_time":10,"stop_time":20},'
                 '{"submit_time":"5","start_time":15,"stop_time":20}]')
    jobs = load_jobs(p)
    assert isinstance(jobs[0], Job)
    assert jobs[0].job_id == "A"
    assert jobs[1].job_id == "2"
    assert jobs[1].submit_time == 5


def test_load_csv(tmp_path: Path):
    p = tmp_path / "jobs.csv"
    p.write_text("job_id,submit_time,start_time,stop_time\nA,0,10,20\n,5,15,20\n")
    jobs = load_jobs(p)
    assert jobs[0].job_id == "A"
    assert jobs[1].job_id == "2"
    assert jobs[1].run_time == 5


@pytest.mark.parametrize(
    "line, message",
    [
        ("1 2\n", "expected"),
        ("1 two 3\n", "integers"),
        ("-1 2 3\n", "non-negative"),
        ("0 20 10\n", "after stop time"),
    ],
)
def test_text_rejects_bad_lines(tmp_path: Path, line, message):
    p = tmp_path / "bad.dat"
    p.write_text("0 1 2\n" + line)
    with pytest.raises(WorkloadFormatError, match=message) as excinfo:
        load_jobs(p)
    assert ":2:" in str(excinfo.value)


def test_json_must_be_list(tmp_path: Path):
    p = tmp_path / "jobs.json"
    p.write_text('{"submit_time": 0}')
    with pytest.raises(WorkloadFormatError):
        load_jobs(p)


def test_csv_missing_column(tmp_path: Path):
    p = tmp_path / "jobs.csv"
    p.write_text("submit_time,start_time\n0,10\n")
    with pytest.raises(WorkloadFormatError, match="Invalid job entry"):
        load_jobs(p)


def test_submit_after_start_is_kept_with_warning(tmp_path: Path, caplog):
    p = tmp_path / "times.dat"
    p.write_text("15 10 20\n")
    with caplog.at_level(logging.WARNING, logger="waittime_cli.workload_io"):
        jobs = load_jobs(p)
    assert jobs == [Job(15, 10, 20, job_id="1")]
    assert "after its start time" in caplog.text


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_jobs(tmp_path / "nope.dat")
