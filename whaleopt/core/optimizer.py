"""Optimizer base class and UpdateContext."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import torch

import whaleopt.utils.exception as e
from whaleopt.core.device import DeviceManager
from whaleopt.core.function import Function
from whaleopt.core.population import Population
from whaleopt.utils import logging
from whaleopt.utils.constant import Direction

logger = logging.get_logger(__name__)


@dataclass
class UpdateContext:
    """All information an optimizer might need during update().

    `best_position` is a snapshot of the best-known whale taken before
    the update, so moves within one pass never observe each other.
    """

    population: Population
    best_position: torch.Tensor
    iteration: int
    n_iterations: int
    device: DeviceManager


class Optimizer:
    """Base class for position-update rules.

    Subclasses MUST implement update(ctx: UpdateContext).
    Subclasses MAY override evaluate().
    """

    def __init__(self, params: Optional[Dict[str, Any]] = None) -> None:
        self.algorithm = self.__class__.__name__
        self.params = {}
        self.built = False

        self.build(params)

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @algorithm.setter
    def algorithm(self, algorithm: str) -> None:
        if not isinstance(algorithm, str):
            raise e.TypeError("`algorithm` should be a string")
        self._algorithm = algorithm

    @property
    def built(self) -> bool:
        return self._built

    @built.setter
    def built(self, built: bool) -> None:
        self._built = built

    @property
    def params(self) -> Dict[str, Any]:
        return self._params

    @params.setter
    def params(self, params: Dict[str, Any]) -> None:
        if not isinstance(params, dict):
            raise e.TypeError("`params` should be a dictionary")
        self._params = params

    def build(self, params: Optional[Dict[str, Any]] = None) -> None:
        """Builds the optimizer by applying parameter overrides.

        Args:
            params: Key-value parameters to override defaults.
        """

        if params:
            self.params.update(params)
            for k, v in params.items():
                setattr(self, k, v)

        self.built = True

        logger.debug(
            "Algorithm: %s | Custom Parameters: %s | Built: %s.",
            self.algorithm,
            str(params),
            self.built,
        )

    def evaluate(self, population: Population, function: Function, direction: Direction) -> None:
        """Evaluates all whales and ranks them, best first.

        Args:
            population: Population to evaluate.
            function: Objective function.
            direction: Optimization direction used for ranking.
        """

        population.evaluate_all(function)
        population.sort(direction)

    def update(self, ctx: UpdateContext) -> None:
        """Applies the algorithm's position-update rule.

        MUST be implemented by every optimizer subclass.

        Args:
            ctx: UpdateContext with all available optimization state.
        """

        raise NotImplementedError(
            f"{self.algorithm} must implement update(ctx: UpdateContext)"
        )

    def __repr__(self) -> str:
        return f"{self.algorithm}(params={self.params}, built={self.built})"
