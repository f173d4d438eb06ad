"""Whale — a single candidate solution of the search space."""

from __future__ import annotations

from typing import Callable, Optional, Tuple

import torch

import whaleopt.math.random as r
import whaleopt.utils.exception as e


class Whale:
    """Holds a position vector and the fitness last computed for it.

    The position length is fixed at creation; assigning a position of
    another shape raises a SizeError.
    """

    def __init__(self, position: torch.Tensor, fitness: float = 0.0) -> None:
        """Initialization method.

        Args:
            position: 1-D tensor of shape (n_variables,).
            fitness: Initial fitness value.
        """

        if not isinstance(position, torch.Tensor):
            raise e.TypeError("`position` should be a tensor")
        if position.dim() != 1 or position.numel() == 0:
            raise e.SizeError("`position` should be a non-empty 1-D tensor")

        self._position = position
        self.fitness = fitness

    @classmethod
    def zeros(
        cls,
        n_variables: int,
        device: torch.device = torch.device("cpu"),
        dtype: torch.dtype = torch.float64,
    ) -> Whale:
        """Creates a whale at the origin with zero fitness."""

        return cls(torch.zeros(n_variables, device=device, dtype=dtype), 0.0)

    @classmethod
    def random(
        cls,
        n_variables: int,
        lower_bound: float,
        upper_bound: float,
        generator: Optional[torch.Generator] = None,
        device: torch.device = torch.device("cpu"),
        dtype: torch.dtype = torch.float64,
    ) -> Whale:
        """Creates a whale with coordinates drawn uniformly within bounds.

        Args:
            n_variables: Number of decision variables.
            lower_bound: Minimum value of every coordinate.
            upper_bound: Maximum value of every coordinate.
            generator: Random stream to draw from.
            device: Target device.
            dtype: Position dtype.

        Returns:
            A new whale with zero fitness.
        """

        if lower_bound > upper_bound:
            raise e.InvalidBoundsError(
                f"`lower_bound` ({lower_bound}) should be <= `upper_bound` ({upper_bound})"
            )

        position = r.generate_uniform_random_number(
            lower_bound, upper_bound, n_variables,
            generator=generator, device=device, dtype=dtype,
        )

        return cls(position, 0.0)

    @property
    def position(self) -> torch.Tensor:
        return self._position

    @position.setter
    def position(self, position: torch.Tensor) -> None:
        if not isinstance(position, torch.Tensor):
            raise e.TypeError("`position` should be a tensor")
        if position.shape != self._position.shape:
            raise e.SizeError(
                f"`position` should have shape {tuple(self._position.shape)}, "
                f"got {tuple(position.shape)}"
            )
        self._position = position

    @property
    def fitness(self) -> float:
        return self._fitness

    @fitness.setter
    def fitness(self, fitness: float) -> None:
        if not isinstance(fitness, (float, int)):
            raise e.TypeError("`fitness` should be a float or integer")
        self._fitness = float(fitness)

    @property
    def n_variables(self) -> int:
        return self._position.numel()

    def evaluate(self, function: Callable[[torch.Tensor], float]) -> None:
        """Computes the fitness of the current position.

        Args:
            function: Objective callable mapping a position to a real number.
        """

        fitness = function(self._position)
        if isinstance(fitness, torch.Tensor):
            fitness = fitness.item()
        self.fitness = float(fitness)

    def snapshot(self) -> Tuple[torch.Tensor, float]:
        """Returns an independent copy of (position, fitness)."""

        return self._position.clone(), self._fitness

    def copy(self) -> Whale:
        """Returns an independent whale with the same position and fitness."""

        position, fitness = self.snapshot()
        return Whale(position, fitness)

    def __repr__(self) -> str:
        return f"Whale(position={self._position.tolist()}, fitness={self._fitness})"
