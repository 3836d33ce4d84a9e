"""Tests for the instance loaders.

Each malformed text must raise ``MalformedInput`` before any data is used.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from flowshop.errors import DimensionMismatch, MalformedInput
from flowshop.instance import (
    Instance,
    as_instance,
    attach_best_known,
    load_best_known,
    parse_instance,
    read_instances,
    read_text_instance,
    read_workbook,
    write_workbook,
)


def test_parse_row_major_by_job():
    inst = parse_instance("3 2\n2 3\n4 1\n3 5\n", name="abc")
    assert inst.name == "abc"
    assert (inst.n, inst.m) == (3, 2)
    assert inst.p_times.shape == (2, 3)
    assert inst.job(1) == (4, 1)
    assert inst.times == ((2, 3), (4, 1), (3, 5))


def test_tokens_may_span_lines_freely():
    inst = parse_instance("2\n2 1 2\n3 4")
    assert inst.times == ((1, 2), (3, 4))


def test_empty_job_set_keeps_machine_count(fixtures_dir: Path):
    inst = read_text_instance(fixtures_dir / "empty.txt")
    assert inst.n == 0
    assert inst.m == 2
    assert inst.name == "empty"


@pytest.mark.parametrize(
    "content",
    [
        "",  # no header
        "3",  # header without machine count
        "2 0",  # no machines
        "-1 2",  # negative job count
        "2 2\n1 2 3",  # truncated
        "1 2\n1 2 3",  # extra token
        "1 2\n1 x",  # non-integer
        "1 2\n1 -4",  # negative time
    ],
)
def test_parse_errors(content: str):
    with pytest.raises(MalformedInput):
        parse_instance(content)


def test_truncated_file_is_load_error(fixtures_dir: Path):
    with pytest.raises(MalformedInput):
        read_text_instance(fixtures_dir / "truncated.txt")


def test_from_jobs_rejects_ragged_rows():
    with pytest.raises(DimensionMismatch):
        Instance.from_jobs([[1, 2, 3], [4, 5]])


@pytest.mark.parametrize("rows", [[[2.9, 3], [4, 1]], [[2, 3], [4, float("nan")]]])
def test_non_integer_times_rejected(rows):
    with pytest.raises(MalformedInput):
        Instance.from_jobs(rows)
    with pytest.raises(MalformedInput):
        as_instance(rows)


def test_integral_float_times_accepted():
    inst = Instance.from_jobs([[2.0, 3.0], [4.0, 1.0]])
    assert inst.times == ((2, 3), (4, 1))
    assert inst.p_times.dtype == np.int64


def test_from_jobs_empty_needs_machine_count():
    with pytest.raises(DimensionMismatch):
        Instance.from_jobs([])
    assert Instance.from_jobs([], machines=3).m == 3


def test_processing_times_are_read_only():
    inst = Instance.from_jobs([[1, 2], [3, 4]])
    with pytest.raises(ValueError):
        inst.p_times[0, 0] = 99


def test_instance_copies_input_array():
    raw = np.array([[1, 2], [3, 4]])
    inst = Instance(name="x", p_times=raw)
    raw[0, 0] = 100
    assert inst.p_times[0, 0] == 1


def test_as_instance_passes_instances_through(three_jobs: Instance):
    assert as_instance(three_jobs) is three_jobs
    assert as_instance([[2, 3], [4, 1]]).n == 2


def test_read_instances_directory_sorted(tmp_path: Path):
    (tmp_path / "b.txt").write_text("1 1\n5\n")
    (tmp_path / "a.txt").write_text("2 1\n1 2\n")
    (tmp_path / "notes.md").write_text("ignored")
    insts = read_instances(tmp_path)
    assert list(insts) == ["a", "b"]
    assert insts["b"].times == ((5,),)


def test_best_known_attached(tmp_path: Path):
    csv = tmp_path / "bk.csv"
    csv.write_text("instance,best_makespan\nfoo,11\nbar,\n")
    best = load_best_known(csv)
    assert best == {"foo": 11}
    insts = {"foo": Instance.from_jobs([[1, 2]], name="foo")}
    attach_best_known(insts, best)
    assert insts["foo"].best_makespan == 11


def test_workbook_write_then_read(tmp_path: Path, three_jobs: Instance):
    path = tmp_path / "inst.xlsx"
    write_workbook({"three_jobs": three_jobs}, path)
    loaded = read_workbook(path)
    assert list(loaded) == ["three_jobs"]
    assert loaded["three_jobs"].times == three_jobs.times


def test_fixture_file_loads_by_stem(fixtures_dir: Path, three_jobs: Instance):
    inst = read_text_instance(fixtures_dir / "three_jobs.txt")
    assert inst.name == "three_jobs"
    assert inst.times == three_jobs.times
