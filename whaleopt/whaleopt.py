"""Whaleopt — main optimization entry point.

Orchestrates the full optimization loop:
initialize → [update → clip → evaluate → track best → record history] × N
"""

from __future__ import annotations

import math
import time
from typing import List, Optional, Tuple, Union

import dill
import torch
from tqdm import tqdm

import whaleopt.utils.exception as e
from whaleopt.core.device import DeviceManager
from whaleopt.core.function import Function
from whaleopt.core.optimizer import Optimizer, UpdateContext
from whaleopt.core.population import Population
from whaleopt.core.whale import Whale
from whaleopt.optimizers.swarm.woa import WOA
from whaleopt.utils import logging
from whaleopt.utils.callback import Callback, CallbackVessel
from whaleopt.utils.constant import Direction
from whaleopt.utils.history import History

logger = logging.get_logger(__name__)


class Whaleopt:
    """Holds all information needed to perform an optimization task.

    Owns the population, the best-known whale, the search bounds, the
    iteration budget and the random stream of a task. The run lasts
    exactly `n_iterations` iterations; there is no convergence check.

    The best-known whale is a value copy that only changes when the best
    whale of an iteration strictly improves on it, so the recorded history
    never gets worse.
    """

    def __init__(
        self,
        n_variables: int,
        n_agents: int,
        bounds: Tuple[float, float],
        direction: Union[str, Direction],
        n_iterations: int,
        function: callable,
        optimizer: Optional[Optimizer] = None,
        seed: Optional[int] = None,
        device: Union[str, torch.device] = "cpu",
        dtype: torch.dtype = torch.float64,
        save_agents: bool = False,
    ) -> None:
        """Initialization method.

        Args:
            n_variables: Dimensionality of the search space.
            n_agents: Number of whales.
            bounds: (lower_bound, upper_bound) applied to every coordinate.
            direction: "minimize" or "maximize" (or a Direction).
            n_iterations: Iteration budget.
            function: Objective callable or a built Function instance.
            optimizer: Position-update rule (a default WOA if None).
            seed: Seed of the task's random stream (non-deterministic if None).
            device: Device for tensor storage ("cpu", "auto", "cuda:0", etc.).
            dtype: Position dtype.
            save_agents: Whether to save all whales' positions per iteration.
        """

        logger.info("Creating class: Whaleopt.")

        self.n_variables = n_variables
        self.n_agents = n_agents
        self.n_iterations = n_iterations
        self.bounds = bounds
        self.direction = direction

        if not isinstance(function, Function):
            function = Function(function)
        self.function = function

        self.optimizer = optimizer or WOA()
        if not self.optimizer.built:
            raise e.BuildError("`optimizer` should be built before using Whaleopt")

        self.device = DeviceManager(device, dtype=dtype, seed=seed)

        self.population: Optional[Population] = None
        self.best_whale = Whale.zeros(n_variables, self.device.device, dtype)

        self.history = History(save_agents=save_agents)

        self.iteration = 0

        logger.debug(
            "Variables: %d | Agents: %d | Bounds: %s | Direction: %s | "
            "Iterations: %d | Optimizer: %s | Function: %s | Device: %s.",
            self.n_variables, self.n_agents, self.bounds, self.direction.value,
            self.n_iterations, self.optimizer, self.function, self.device,
        )
        logger.info("Class created.")

    @property
    def n_variables(self) -> int:
        return self._n_variables

    @n_variables.setter
    def n_variables(self, n_variables: int) -> None:
        if not isinstance(n_variables, int) or isinstance(n_variables, bool):
            raise e.TypeError("`n_variables` should be an integer")
        if n_variables <= 0:
            raise e.InvalidConfigurationError("`n_variables` should be > 0")
        self._n_variables = n_variables

    @property
    def n_agents(self) -> int:
        return self._n_agents

    @n_agents.setter
    def n_agents(self, n_agents: int) -> None:
        if not isinstance(n_agents, int) or isinstance(n_agents, bool):
            raise e.TypeError("`n_agents` should be an integer")
        if n_agents <= 0:
            raise e.InvalidConfigurationError("`n_agents` should be > 0")
        self._n_agents = n_agents

    @property
    def n_iterations(self) -> int:
        return self._n_iterations

    @n_iterations.setter
    def n_iterations(self, n_iterations: int) -> None:
        if not isinstance(n_iterations, int) or isinstance(n_iterations, bool):
            raise e.TypeError("`n_iterations` should be an integer")
        if n_iterations <= 0:
            raise e.InvalidConfigurationError("`n_iterations` should be > 0")
        self._n_iterations = n_iterations

    @property
    def bounds(self) -> Tuple[float, float]:
        return self._bounds

    @bounds.setter
    def bounds(self, bounds: Tuple[float, float]) -> None:
        if not isinstance(bounds, (tuple, list)) or len(bounds) != 2:
            raise e.TypeError("`bounds` should be a (lower_bound, upper_bound) pair")

        lb, ub = bounds
        if not all(isinstance(b, (int, float)) and not isinstance(b, bool) for b in (lb, ub)):
            raise e.TypeError("`bounds` should hold floats or integers")
        if not (math.isfinite(lb) and math.isfinite(ub)):
            raise e.InvalidConfigurationError("`bounds` should be finite")
        if lb > ub:
            raise e.InvalidConfigurationError(
                f"`lower_bound` ({lb}) should be <= `upper_bound` ({ub})"
            )
        self._bounds = (float(lb), float(ub))

    @property
    def direction(self) -> Direction:
        return self._direction

    @direction.setter
    def direction(self, direction: Union[str, Direction]) -> None:
        try:
            self._direction = Direction(direction)
        except ValueError as ex:
            raise e.TypeError("`direction` should be 'minimize' or 'maximize'") from ex

    @property
    def lower_bound(self) -> float:
        return self._bounds[0]

    @property
    def upper_bound(self) -> float:
        return self._bounds[1]

    def _make_context(self) -> UpdateContext:
        """Creates an UpdateContext for the current iteration."""

        return UpdateContext(
            population=self.population,
            best_position=self.best_whale.position.clone(),
            iteration=self.iteration,
            n_iterations=self.n_iterations,
            device=self.device,
        )

    def initialize(self, callbacks: CallbackVessel) -> None:
        """Draws, evaluates and ranks a random population, then takes its
        best whale as the best-known one.

        Args:
            callbacks: Callback vessel for lifecycle hooks.
        """

        self.population = Population.random(
            self.n_agents,
            self.n_variables,
            self.lower_bound,
            self.upper_bound,
            generator=self.device.generator,
            device=self.device.device,
            dtype=self.device.dtype,
        )

        self.evaluate(callbacks)
        self.best_whale = self.population.best().copy()

        logger.debug("Initial best fitness: %s.", self.best_whale.fitness)

    def evaluate(self, callbacks: CallbackVessel) -> None:
        """Evaluates and ranks the population.

        Args:
            callbacks: Callback vessel for lifecycle hooks.
        """

        self.optimizer.evaluate(self.population, self.function, self.direction)
        callbacks.on_population_ranked(self.population, self.direction)

    def update(self, callbacks: CallbackVessel) -> None:
        """Runs the update pipeline with callbacks and bound clipping.

        Args:
            callbacks: Callback vessel for lifecycle hooks.
        """

        ctx = self._make_context()

        callbacks.on_update_before(ctx)
        self.optimizer.update(ctx)
        callbacks.on_update_after(ctx)

        self.population.clip()

    def update_best(self, callbacks: CallbackVessel) -> bool:
        """Replaces the best-known whale if the current best strictly improves on it.

        Args:
            callbacks: Callback vessel, notified through `on_best_improved`.

        Returns:
            Whether the best-known whale changed.
        """

        current = self.population.best()
        if not self.direction.is_better(current.fitness, self.best_whale.fitness):
            return False

        previous, self.best_whale = self.best_whale, current.copy()
        callbacks.on_best_improved(self.iteration + 1, previous, self.best_whale)

        return True

    def run(self, callbacks: Optional[List[Callback]] = None) -> History:
        """Runs the optimization task.

        Args:
            callbacks: List of Callback instances.

        Returns:
            History holding one (best position, best fitness) pair per iteration.
        """

        logger.info("Starting optimization task.")

        vessel = CallbackVessel(callbacks)

        self.history = History(save_agents=self.history.save_agents)
        self.iteration = 0

        start_time = time.time()

        vessel.on_task_begin(self)

        self.initialize(vessel)

        with tqdm(total=self.n_iterations, ascii=True) as bar:
            for t in range(self.n_iterations):
                logger.to_file(f"Iteration {t + 1}/{self.n_iterations}")

                self.iteration = t

                vessel.on_iteration_begin(t + 1, self)

                self.update(vessel)
                self.evaluate(vessel)
                self.update_best(vessel)

                best_fit = self.best_whale.fitness
                bar.set_postfix(fitness=best_fit)
                bar.update()

                self.history.dump(
                    best_agent=self.best_whale.snapshot(),
                    positions=self.population.positions,
                    fitness=self.population.fitness,
                )

                vessel.on_iteration_end(t + 1, self.history[-1], self)

                logger.to_file(f"Fitness: {best_fit}")

        elapsed = time.time() - start_time
        self.history.dump(time=elapsed)

        vessel.on_task_end(self.history, self)

        logger.info("Optimization task ended.")
        logger.info("It took %s seconds.", elapsed)

        return self.history

    def save(self, file_path: str) -> None:
        """Saves the optimization model to a dill file.

        Args:
            file_path: Output file path.
        """

        with open(file_path, "wb") as f:
            dill.dump(self, f)

    @classmethod
    def load(cls, file_path: str) -> Whaleopt:
        """Loads an optimization model from a dill file.

        Args:
            file_path: Input file path.

        Returns:
            Loaded Whaleopt instance.
        """

        with open(file_path, "rb") as f:
            return dill.load(f)

    def __repr__(self) -> str:
        return (
            f"Whaleopt(n_variables={self.n_variables}, n_agents={self.n_agents}, "
            f"bounds={self.bounds}, direction={self.direction.value}, "
            f"n_iterations={self.n_iterations})"
        )
