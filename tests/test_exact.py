import itertools

import numpy as np
import pytest

from flowshop.errors import InvalidPermutation, TooManyJobs
from flowshop.evaluation import evaluate_cmax
from flowshop.exact import (
    MAX_EXACT_JOBS,
    branch_and_bound,
    brute_force,
    frame_for_prefix,
    prefix_lower_bound,
    root_frame,
)
from flowshop.instance import Instance

from conftest import random_instance


def test_brute_force_three_jobs(three_jobs: Instance):
    res = brute_force(three_jobs)
    assert res.permutation == [0, 2, 1]
    assert res.makespan == 11
    assert res.iterations == 6


def test_brute_force_first_minimum_wins():
    # every order has the same makespan on a single machine
    res = brute_force([[2], [1], [3]])
    assert res.permutation == [0, 1, 2]
    assert res.makespan == 6


@pytest.mark.parametrize("initial", ["neh", None])
def test_branch_and_bound_three_jobs(three_jobs: Instance, initial):
    res = branch_and_bound(three_jobs, initial=initial)
    assert res.permutation == [0, 2, 1]
    assert res.makespan == 11


@pytest.mark.parametrize("initial", ["neh", None])
def test_branch_and_bound_equals_brute_force(initial):
    rng = np.random.default_rng(42)
    for _ in range(12):
        inst = random_instance(rng, n=int(rng.integers(1, 8)), m=int(rng.integers(1, 5)))
        exact = brute_force(inst)
        res = branch_and_bound(inst, initial=initial)
        assert res.makespan == exact.makespan
        assert evaluate_cmax(inst, res.permutation) == res.makespan


def test_branch_and_bound_eight_jobs():
    rng = np.random.default_rng(8)
    inst = random_instance(rng, n=8, m=3)
    assert branch_and_bound(inst).makespan == brute_force(inst).makespan


def test_lower_bound_is_admissible():
    rng = np.random.default_rng(5)
    for _ in range(3):
        inst = random_instance(rng, n=5, m=3)
        for k in range(inst.n + 1):
            for prefix in itertools.permutations(range(inst.n), k):
                rest = [j for j in range(inst.n) if j not in prefix]
                best = min(
                    evaluate_cmax(inst, list(prefix) + list(tail))
                    for tail in itertools.permutations(rest)
                )
                assert prefix_lower_bound(inst, prefix) <= best


def test_bound_of_full_prefix_is_its_makespan(three_jobs: Instance):
    assert prefix_lower_bound(three_jobs, [1, 2, 0]) == 15


def test_child_frames_do_not_share_state(three_jobs: Instance):
    root = root_frame(three_jobs)
    left = root.child(0, three_jobs.times)
    right = root.child(1, three_jobs.times)
    assert root.row == (0, 0)
    assert root.tail == (9, 9)
    assert left.row == (2, 5) and right.row == (4, 5)
    assert left.prefix == (0,) and right.prefix == (1,)
    assert left.remaining == 0b110 and right.remaining == 0b101
    assert left.depth == 1


def test_frame_for_prefix_rejects_bad_prefix(three_jobs: Instance):
    with pytest.raises(InvalidPermutation):
        frame_for_prefix(three_jobs, [0, 0])
    with pytest.raises(InvalidPermutation):
        frame_for_prefix(three_jobs, [5])


@pytest.mark.parametrize("solver", [brute_force, branch_and_bound])
def test_too_many_jobs(solver):
    inst = Instance.from_jobs([[1, 1]] * (MAX_EXACT_JOBS + 1))
    with pytest.raises(TooManyJobs) as info:
        solver(inst)
    assert info.value.n == MAX_EXACT_JOBS + 1
    assert info.value.limit == MAX_EXACT_JOBS


@pytest.mark.parametrize("solver", [brute_force, branch_and_bound])
def test_custom_limit(solver, three_jobs: Instance):
    with pytest.raises(TooManyJobs):
        solver(three_jobs, max_jobs=2)
    assert solver(three_jobs, max_jobs=3).makespan == 11


@pytest.mark.parametrize("solver", [brute_force, branch_and_bound])
def test_boundaries(solver, empty_two_machines: Instance):
    res = solver(empty_two_machines)
    assert res.permutation == [] and res.makespan == 0
    single = solver([[3, 4, 5]])
    assert single.permutation == [0] and single.makespan == 12


def test_unknown_initial(three_jobs: Instance):
    with pytest.raises(ValueError):
        branch_and_bound(three_jobs, initial="random")
