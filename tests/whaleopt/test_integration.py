"""Integration tests: end-to-end optimization with Whaleopt."""

import os

import pytest
import torch

import whaleopt.utils.exception as e
from whaleopt import Whaleopt
from whaleopt.functions.benchmark import sphere
from whaleopt.optimizers.swarm import WOA
from whaleopt.utils.callback import Callback, CallbackVessel, CheckpointCallback
from whaleopt.utils.constant import Direction


def _negative_sphere(x):
    return -(x ** 2).sum()


def _make_opt(**kwargs):
    config = dict(
        n_variables=2,
        n_agents=10,
        bounds=(-5.12, 5.12),
        direction="minimize",
        n_iterations=50,
        function=sphere,
        seed=0,
    )
    config.update(kwargs)
    return Whaleopt(**config)


class PositionRecorder(Callback):
    def __init__(self):
        self.positions = []

    def on_population_ranked(self, population, direction):
        self.positions.append(population.positions)


class TestConfiguration:
    def test_direction_parsed(self):
        assert _make_opt(direction="maximize").direction is Direction.MAXIMIZE
        assert _make_opt(direction=Direction.MINIMIZE).direction is Direction.MINIMIZE

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"n_agents": 0},
            {"n_variables": 0},
            {"n_iterations": 0},
            {"bounds": (5, 1)},
            {"n_agents": -3},
            {"bounds": (float("-inf"), 1.0)},
        ],
    )
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(e.InvalidConfigurationError):
            _make_opt(**kwargs)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"n_agents": 2.5},
            {"bounds": (0.0,)},
            {"bounds": ("a", 1.0)},
            {"direction": "sideways"},
            {"function": "sphere"},
        ],
    )
    def test_invalid_types(self, kwargs):
        with pytest.raises(e.TypeError):
            _make_opt(**kwargs)

    def test_equal_bounds_allowed(self):
        history = _make_opt(bounds=(1.0, 1.0), n_iterations=3).run()
        assert all(position == [1.0, 1.0] for position, _ in history)

    def test_unbuilt_optimizer(self):
        woa = WOA()
        woa.built = False
        with pytest.raises(e.BuildError):
            _make_opt(optimizer=woa)


class TestRun:
    def test_history_length(self):
        opt = _make_opt(n_iterations=17)
        history = opt.run()
        assert len(history) == 17
        assert hasattr(history, "time")

    def test_history_entries(self):
        history = _make_opt(n_iterations=5).run()
        for position, fitness in history:
            assert isinstance(position, list)
            assert len(position) == 2
            assert isinstance(fitness, float)

    def test_minimization_is_monotonic(self):
        _, fitness = _make_opt(n_iterations=40).run().get_convergence("best_agent")
        assert all(b <= a for a, b in zip(fitness, fitness[1:]))

    def test_maximization_is_monotonic(self):
        opt = _make_opt(direction="maximize", function=_negative_sphere, n_iterations=40)
        _, fitness = opt.run().get_convergence("best_agent")
        assert all(b >= a for a, b in zip(fitness, fitness[1:]))
        assert fitness[-1] <= 0.0

    def test_positions_within_bounds(self):
        recorder = PositionRecorder()
        _make_opt(n_agents=15, n_iterations=30, bounds=(-1.0, 2.0)).run(callbacks=[recorder])

        # initial evaluation plus one per iteration
        assert len(recorder.positions) == 31
        for positions in recorder.positions:
            assert (positions >= -1.0).all()
            assert (positions <= 2.0).all()

    def test_same_seed_same_history(self):
        h1 = _make_opt(seed=7).run()
        h2 = _make_opt(seed=7).run()
        assert h1.best_agent == h2.best_agent

    def test_sphere_improves(self):
        class InitialBest(Callback):
            fitness = None

            def on_iteration_begin(self, iteration, opt_model):
                if iteration == 1:
                    InitialBest.fitness = opt_model.best_whale.fitness

        history = _make_opt().run(callbacks=[InitialBest()])

        assert len(history) == 50
        assert history[-1][1] < history[0][1]
        assert history[-1][1] < InitialBest.fitness
        assert history[-1][1] >= 0.0

    def test_best_whale_is_a_copy(self):
        opt = _make_opt(n_iterations=5)
        opt.run()

        best = opt.best_whale
        assert all(best is not w for w in opt.population)

        opt.population[0].position[0] = 123.0
        assert best.position[0].item() != 123.0

    def test_best_matches_history(self):
        opt = _make_opt(n_iterations=10)
        history = opt.run()
        position, fitness = history[-1]
        assert opt.best_whale.position.tolist() == position
        assert opt.best_whale.fitness == fitness
        assert sphere(torch.tensor(position, dtype=torch.float64)).item() == pytest.approx(fitness)

    def test_rerun_resets_history(self):
        opt = _make_opt(n_iterations=8)
        opt.run()
        history = opt.run()
        assert len(history) == 8

    def test_save_agents(self):
        history = _make_opt(n_agents=6, n_iterations=4, save_agents=True).run()
        assert len(history.positions) == 4
        assert len(history.positions[0]) == 6
        assert len(history.fitness[0]) == 6

    def test_no_agents_by_default(self):
        history = _make_opt(n_iterations=4).run()
        assert not hasattr(history, "positions")
        assert not hasattr(history, "fitness")

    def test_custom_optimizer(self):
        opt = _make_opt(optimizer=WOA(params={"b": 0.5}), n_iterations=5)
        assert opt.optimizer.b == 0.5
        assert len(opt.run()) == 5

    def test_iteration_callbacks(self):
        iterations = []

        class Tracker(Callback):
            def on_iteration_begin(self, iteration, opt_model):
                iterations.append(iteration)

        _make_opt(n_iterations=4).run(callbacks=[Tracker()])
        assert iterations == [1, 2, 3, 4]

    def test_best_improved_matches_history(self):
        improvements = []

        class Improvements(Callback):
            def on_best_improved(self, iteration, previous, current):
                assert current.fitness < previous.fitness
                improvements.append((iteration, current.fitness))

        opt = _make_opt(n_iterations=30)
        history = opt.run(callbacks=[Improvements()])

        assert improvements
        for iteration, fitness in improvements:
            assert history[iteration - 1][1] == fitness
        # iterations without a reported improvement repeat the previous entry
        reported = {iteration for iteration, _ in improvements}
        for t in range(2, 31):
            if t not in reported:
                assert history[t - 1] == history[t - 2]
        assert improvements[-1][1] == opt.best_whale.fitness

    def test_initialize_takes_best_known(self):
        opt = _make_opt()
        opt.initialize(CallbackVessel())

        assert opt.population.sorted
        assert opt.best_whale.fitness == opt.population[0].fitness
        assert opt.best_whale is not opt.population[0]

    def test_task_end_receives_history(self):
        received = []

        class End(Callback):
            def on_task_end(self, history, engine):
                received.append(history)

        history = _make_opt(n_iterations=3).run(callbacks=[End()])
        assert received == [history]
        assert hasattr(history, "time")

    def test_objective_errors_propagate(self):
        def broken(x):
            raise RuntimeError("objective failed")

        with pytest.raises(RuntimeError):
            _make_opt(function=broken).run()


class TestPersistence:
    def test_save_and_load(self, tmp_path):
        opt = _make_opt(n_iterations=5)
        opt.run()

        file_path = str(tmp_path / "model.pkl")
        opt.save(file_path)
        loaded = Whaleopt.load(file_path)

        assert loaded.n_variables == 2
        assert loaded.history.best_agent == opt.history.best_agent
        assert loaded.best_whale.fitness == opt.best_whale.fitness

    def test_checkpoint_callback(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        _make_opt(n_iterations=4).run(callbacks=[CheckpointCallback("ckpt.pkl", frequency=2)])

        assert os.path.exists("ckpt_2.pkl")
        assert os.path.exists("ckpt_4.pkl")
        assert not os.path.exists("ckpt_1.pkl")

        loaded = Whaleopt.load("ckpt_4.pkl")
        assert len(loaded.history) == 4
