"""Function wrapper for objective functions."""

from __future__ import annotations

import torch

import whaleopt.utils.exception as e
from whaleopt.utils import logging

logger = logging.get_logger(__name__)


class Function:
    """Wraps a user objective function.

    The pointer receives a single whale's position, a 1-D tensor of
    shape (n_variables,), and must return a real number (a Python number
    or a single-element tensor). It should be pure and total over the
    bounded search region: exceptions raised by it propagate unchanged and
    non-finite values are not guarded against, so a run that produces NaN
    fitness values ranks whales in an unspecified order.
    """

    def __init__(self, pointer: callable) -> None:
        """Initialization method.

        Args:
            pointer: Callable returning a fitness value.
        """

        logger.info("Creating class: Function.")

        if not callable(pointer):
            raise e.TypeError("`pointer` should be a callable")

        self.pointer = pointer

        if hasattr(pointer, "__name__"):
            self.name = pointer.__name__
        else:
            self.name = pointer.__class__.__name__

        self.built = True

        logger.debug("Function: %s | Built: %s.", self.name, self.built)
        logger.info("Class created.")

    def __call__(self, position: torch.Tensor) -> float:
        """Evaluates a position and returns its fitness.

        Args:
            position: Tensor of shape (n_variables,).

        Returns:
            Fitness value as a Python float.
        """

        fitness = self.pointer(position)

        if isinstance(fitness, torch.Tensor):
            return fitness.item()
        return float(fitness)

    def __repr__(self) -> str:
        return f"Function(name={self.name})"
