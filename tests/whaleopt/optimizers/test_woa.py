"""Tests for the WOA position-update rule."""

import math

import pytest
import torch

import whaleopt.math.random as r
import whaleopt.utils.exception as e
from whaleopt.core.device import DeviceManager
from whaleopt.core.optimizer import UpdateContext
from whaleopt.core.population import Population
from whaleopt.core.whale import Whale
from whaleopt.optimizers.swarm.woa import WOA


def _t(rows):
    return torch.tensor(rows, dtype=torch.float64)


def _make_pop(rows, lower_bound=-1.0, upper_bound=1.0):
    return Population([Whale(row) for row in _t(rows)], lower_bound, upper_bound)


def _make_ctx(pop, best, iteration=50, n_iterations=100, seed=0):
    return UpdateContext(
        population=pop,
        best_position=_t(best),
        iteration=iteration,
        n_iterations=n_iterations,
        device=DeviceManager("cpu", seed=seed),
    )


@pytest.fixture
def fixed_draws(monkeypatch):
    """Replaces the random draws of one update with fixed values (r, l, p, indices)."""

    def _fix(rv, l, p, idx):
        uniforms = iter([_t(rv), _t(l), _t(p)])
        monkeypatch.setattr(r, "generate_uniform_random_number", lambda *args: next(uniforms))
        monkeypatch.setattr(
            r, "generate_integer_random_number",
            lambda *args: torch.tensor(idx, dtype=torch.long),
        )

    return _fix


class TestWOAParams:
    def test_default_b(self):
        assert WOA().b == 1.0

    def test_override_b(self):
        woa = WOA(params={"b": 0.5})
        assert woa.b == 0.5
        assert woa.params == {"b": 0.5}

    def test_invalid_b(self):
        with pytest.raises(e.TypeError):
            WOA(params={"b": "spiral"})


class TestConvergenceFactor:
    def test_first_iteration(self):
        assert WOA.convergence_factor(0, 100) == 2.0

    def test_last_iteration(self):
        assert WOA.convergence_factor(99, 100) == pytest.approx(2.0 / 100)
        assert WOA.convergence_factor(49, 50) > 0.0

    def test_linear_decay(self):
        values = [WOA.convergence_factor(t, 10) for t in range(10)]
        diffs = [a - b for a, b in zip(values, values[1:])]
        assert all(d == pytest.approx(0.2) for d in diffs)


class TestWOAMoves:
    def test_encircling_prey(self, fixed_draws):
        # a = 1, A = a * r + a = 0.2 (norm < 1), C = 2 * r = -1.6
        fixed_draws(rv=[[-0.8, -0.8]], l=[[0.0]], p=[[0.2]], idx=[0])
        pop = _make_pop([[0.0, 0.0]])

        WOA().update(_make_ctx(pop, best=[1.0, 0.5]))

        assert torch.allclose(pop.positions, _t([[0.68, 0.34]]))

    def test_search_for_prey(self, fixed_draws):
        # a = 1, A = 1.5 (norm >= 1), C = 1, both whales move around whale 1
        fixed_draws(rv=[[0.5, 0.5], [0.5, 0.5]], l=[[0.0], [0.0]], p=[[0.2], [0.2]], idx=[1, 1])
        pop = _make_pop([[0.0, 0.0], [1.0, 2.0]])

        WOA().update(_make_ctx(pop, best=[0.0, 0.0]))

        assert torch.allclose(pop.positions, _t([[-0.5, -1.0], [1.0, 2.0]]))

    def test_search_reads_positions_before_update(self, fixed_draws):
        # Each whale searches around the other one and sees its position before the update
        fixed_draws(rv=[[0.5], [0.5]], l=[[0.0], [0.0]], p=[[0.2], [0.2]], idx=[1, 0])
        pop = _make_pop([[0.0], [1.0]])

        WOA().update(_make_ctx(pop, best=[0.0]))

        # whale 0: 1 - 1.5 * |1 - 0| = -0.5 ; whale 1: 0 - 1.5 * |0 - 1| = -1.5
        assert torch.allclose(pop.positions, _t([[-0.5], [-1.5]]))

    def test_spiral(self, fixed_draws):
        fixed_draws(rv=[[0.5, 0.5]], l=[[0.5]], p=[[0.7]], idx=[0])
        pop = _make_pop([[0.0, 0.0]])

        WOA().update(_make_ctx(pop, best=[1.0, 0.5]))

        factor = math.exp(0.5) * math.cos(math.pi)
        expected = _t([[1.0 + factor * 1.0, 0.5 + factor * 0.5]])
        assert torch.allclose(pop.positions, expected)

    def test_spiral_uses_b(self, fixed_draws):
        fixed_draws(rv=[[0.5]], l=[[1.0]], p=[[0.5]], idx=[0])
        pop = _make_pop([[0.0]])

        WOA(params={"b": 2.0}).update(_make_ctx(pop, best=[1.0]))

        expected = 1.0 + math.exp(2.0) * math.cos(2.0 * math.pi)
        assert pop.positions.item() == pytest.approx(expected)


class TestWOAUpdate:
    def test_shape_preserved(self):
        gen = torch.Generator().manual_seed(0)
        pop = Population.random(20, 3, -5.0, 5.0, generator=gen)

        WOA().update(_make_ctx(pop, best=[0.0, 0.0, 0.0]))

        assert pop.positions.shape == (20, 3)
        assert not pop.sorted

    def test_deterministic_given_stream(self):
        results = []
        for _ in range(2):
            gen = torch.Generator().manual_seed(4)
            pop = Population.random(10, 2, -5.0, 5.0, generator=gen)
            WOA().update(_make_ctx(pop, best=[0.1, -0.1], seed=9))
            results.append(pop.positions)

        assert torch.equal(results[0], results[1])

    def test_whale_at_best_stays_on_spiral(self, fixed_draws):
        fixed_draws(rv=[[0.3, 0.3]], l=[[0.4]], p=[[0.9]], idx=[0])
        pop = _make_pop([[0.25, -0.25]])

        WOA().update(_make_ctx(pop, best=[0.25, -0.25]))

        assert pop.positions.tolist() == [[0.25, -0.25]]
