"""Whale Optimization Algorithm — vectorized leader-follower pattern.

References:
    S. Mirjalili and A. Lewis.
    The Whale Optimization Algorithm.
    Advances in Engineering Software (2016).
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

import torch

import whaleopt.math.random as r
import whaleopt.utils.constant as c
import whaleopt.utils.exception as e
from whaleopt.core.optimizer import Optimizer, UpdateContext
from whaleopt.utils import logging

logger = logging.get_logger(__name__)


class WOA(Optimizer):
    """Whale Optimization Algorithm.

    Mimics the bubble-net feeding behavior of humpback whales. Every whale
    independently picks one of three moves: encircling the best-known
    whale, searching around a random whale, or a logarithmic spiral
    towards the best-known whale.

    The coefficient vector `r` is drawn within the search bounds rather
    than in [0, 1], which scales the step sizes with the search space.

    All moves of one iteration read the positions as they were before the
    iteration started, including the random whale of the search move,
    which may be the moving whale itself.
    """

    def __init__(self, params: Optional[Dict[str, Any]] = None) -> None:
        logger.info("Overriding class: Optimizer -> WOA.")

        # Logarithmic spiral shape constant
        self.b = 1.0

        super().__init__(params)

        logger.info("Class overrided.")

    @property
    def b(self) -> float:
        return self._b

    @b.setter
    def b(self, b: float) -> None:
        if not isinstance(b, (float, int)):
            raise e.TypeError("`b` should be a float or integer")
        self._b = b

    @staticmethod
    def convergence_factor(iteration: int, n_iterations: int) -> float:
        """Linearly decays from 2 at the first iteration towards 0.

        Args:
            iteration: Current iteration (0-indexed).
            n_iterations: Iteration budget.

        Returns:
            The convergence factor `a`.
        """

        return 2.0 - 2.0 * iteration / n_iterations

    def update(self, ctx: UpdateContext) -> None:
        """Moves every whale with one vectorized WOA step."""

        pop = ctx.population
        dm = ctx.device
        gen = dm.generator

        n, d = pop.n_agents, pop.n_variables

        a = self.convergence_factor(ctx.iteration, ctx.n_iterations)

        positions = pop.positions
        best = ctx.best_position.unsqueeze(0)  # (1, n_variables)

        rv = r.generate_uniform_random_number(pop.lb, pop.ub, (n, d), gen, dm.device, dm.dtype)
        A = a * rv + a
        C = 2.0 * rv

        l = r.generate_uniform_random_number(-1.0, 1.0, (n, 1), gen, dm.device, dm.dtype)
        p = r.generate_uniform_random_number(0.0, 1.0, (n, 1), gen, dm.device, dm.dtype)

        rand_idx = r.generate_integer_random_number(0, n, n, gen, dm.device)
        rand_pos = positions[rand_idx]

        # Encircling prey
        D = torch.abs(C * best - positions)
        encircle = best - A * D

        # Search for prey (exploration)
        D_rand = torch.abs(C * rand_pos - positions)
        explore = rand_pos - A * D_rand

        # Bubble-net attack, one spiral scalar per whale
        D_prime = torch.abs(best - positions)
        spiral = best + D_prime * torch.exp(self.b * l) * torch.cos(2.0 * math.pi * l)

        use_spiral = p >= c.SPIRAL_PROBABILITY
        use_explore = (torch.linalg.norm(A, dim=1, keepdim=True) >= 1.0) & ~use_spiral

        pop.positions = torch.where(use_spiral, spiral,
                        torch.where(use_explore, explore, encircle))
