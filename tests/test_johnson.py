import numpy as np
import pytest

from flowshop.errors import WrongMachineCount
from flowshop.evaluation import evaluate_cmax
from flowshop.exact import brute_force
from flowshop.instance import Instance
from flowshop.johnson import johnson

from conftest import random_instance


def test_three_job_example(three_jobs: Instance):
    res = johnson(three_jobs)
    assert res.permutation == [0, 2, 1]
    assert res.makespan == 11


@pytest.mark.parametrize(
    "jobs, expected",
    [
        ([[3, 3], [2, 5], [4, 2]], [1, 0, 2]),  # equal times -> front group
        ([[2, 4], [2, 4]], [0, 1]),  # equal front minima -> lower index first
        ([[5, 1], [6, 1]], [1, 0]),  # equal back minima -> lower index last
    ],
)
def test_tie_rule(jobs, expected):
    assert johnson(jobs).permutation == expected


def test_matches_brute_force_on_two_machines():
    rng = np.random.default_rng(2024)
    for _ in range(25):
        inst = random_instance(rng, n=int(rng.integers(1, 8)), m=2, high=9)
        res = johnson(inst)
        assert sorted(res.permutation) == list(range(inst.n))
        assert res.makespan == evaluate_cmax(inst, res.permutation)
        assert res.makespan == brute_force(inst).makespan


@pytest.mark.parametrize("m", [1, 3, 5])
def test_wrong_machine_count(m):
    with pytest.raises(WrongMachineCount):
        johnson(Instance.from_jobs([[1] * m, [2] * m]))


def test_wrong_machine_count_even_without_jobs():
    with pytest.raises(WrongMachineCount):
        johnson(Instance.from_jobs([], machines=3))


def test_empty_and_single(empty_two_machines: Instance):
    res = johnson(empty_two_machines)
    assert res.permutation == [] and res.makespan == 0
    assert johnson([[4, 6]]).makespan == 10


def test_bare_empty_list_is_two_machine():
    res = johnson([])
    assert res.permutation == [] and res.makespan == 0
