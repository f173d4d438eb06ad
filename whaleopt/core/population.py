"""Population — ordered collection of whales sharing the same search bounds.

Whales are owned exclusively by the population and addressed by rank.
Position updates are applied to the stacked (n_agents, n_variables)
tensor and written back row by row.
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional

import torch

import whaleopt.utils.exception as e
from whaleopt.core.whale import Whale
from whaleopt.utils import logging
from whaleopt.utils.constant import Direction

logger = logging.get_logger(__name__)


class Population:
    """Stores the whales of an optimization task and their search bounds.

    The population tracks whether its current order reflects the current
    fitness values: `sort()` establishes the order and any rewrite of the
    positions invalidates it.
    """

    def __init__(self, whales: List[Whale], lower_bound: float, upper_bound: float) -> None:
        """Initialization method.

        Args:
            whales: Whales of the population, all with the same number of variables.
            lower_bound: Minimum value of every coordinate.
            upper_bound: Maximum value of every coordinate.
        """

        if not whales:
            raise e.InvalidConfigurationError("`whales` should hold at least one whale")
        if lower_bound > upper_bound:
            raise e.InvalidBoundsError(
                f"`lower_bound` ({lower_bound}) should be <= `upper_bound` ({upper_bound})"
            )

        n_variables = whales[0].n_variables
        if any(w.n_variables != n_variables for w in whales):
            raise e.SizeError("`whales` should all have the same number of variables")

        self.whales = list(whales)
        self.lb = lower_bound
        self.ub = upper_bound

        self.sorted = False

    @classmethod
    def random(
        cls,
        n_agents: int,
        n_variables: int,
        lower_bound: float,
        upper_bound: float,
        generator: Optional[torch.Generator] = None,
        device: torch.device = torch.device("cpu"),
        dtype: torch.dtype = torch.float64,
    ) -> Population:
        """Creates `n_agents` independent whales drawn uniformly within bounds.

        Args:
            n_agents: Number of whales.
            n_variables: Number of decision variables per whale.
            lower_bound: Minimum value of every coordinate.
            upper_bound: Maximum value of every coordinate.
            generator: Random stream to draw from.
            device: Target device.
            dtype: Position dtype.

        Returns:
            A new, unsorted population.
        """

        if n_agents < 1:
            raise e.InvalidConfigurationError("`n_agents` should be >= 1")
        if n_variables < 1:
            raise e.InvalidConfigurationError("`n_variables` should be >= 1")

        whales = [
            Whale.random(n_variables, lower_bound, upper_bound,
                         generator=generator, device=device, dtype=dtype)
            for _ in range(n_agents)
        ]

        return cls(whales, lower_bound, upper_bound)

    @property
    def n_agents(self) -> int:
        return len(self.whales)

    @property
    def n_variables(self) -> int:
        return self.whales[0].n_variables

    @property
    def positions(self) -> torch.Tensor:
        """Stacked copy of all positions, shape (n_agents, n_variables)."""

        return torch.stack([w.position for w in self.whales])

    @positions.setter
    def positions(self, positions: torch.Tensor) -> None:
        if positions.shape != (self.n_agents, self.n_variables):
            raise e.SizeError(
                f"`positions` should have shape {(self.n_agents, self.n_variables)}, "
                f"got {tuple(positions.shape)}"
            )

        for whale, position in zip(self.whales, positions):
            whale.position = position.clone()

        self.sorted = False

    @property
    def fitness(self) -> torch.Tensor:
        """Fitness of every whale in rank order, shape (n_agents,)."""

        return torch.tensor([w.fitness for w in self.whales], dtype=torch.float64)

    def evaluate_all(self, function: Callable[[torch.Tensor], float]) -> None:
        """Evaluates every whale with the objective function."""

        for whale in self.whales:
            whale.evaluate(function)

        self.sorted = False

    def sort(self, direction: Direction) -> None:
        """Stable in-place sort by fitness, best whale first.

        Args:
            direction: Ascending for minimization, descending for maximization.
        """

        idx = torch.argsort(self.fitness, stable=True, descending=direction.descending)
        self.whales = [self.whales[i] for i in idx.tolist()]

        self.sorted = True

    def best(self) -> Whale:
        """Returns the rank-0 whale of the last sort."""

        if not self.sorted:
            raise e.NotSortedError("`sort` should be called before reading the best whale")

        return self.whales[0]

    def clip(self) -> None:
        """Clamps every coordinate of every whale to the bounds."""

        for whale in self.whales:
            whale.position = whale.position.clamp(min=self.lb, max=self.ub)

        self.sorted = False

    def __len__(self) -> int:
        return len(self.whales)

    def __getitem__(self, index: int) -> Whale:
        return self.whales[index]

    def __iter__(self) -> Iterator[Whale]:
        return iter(self.whales)

    def __repr__(self) -> str:
        return (
            f"Population(n_agents={self.n_agents}, n_variables={self.n_variables}, "
            f"bounds=({self.lb}, {self.ub}), sorted={self.sorted})"
        )
