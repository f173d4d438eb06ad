"""Scheduling objectives decoded from continuous positions."""

from __future__ import annotations

from typing import List

import torch

import whaleopt.utils.exception as e
from whaleopt.core.function import Function
from whaleopt.problems.jssp import JSSPInstance
from whaleopt.utils import logging

logger = logging.get_logger(__name__)


def random_key_to_schedule(position: torch.Tensor, n_jobs: int) -> List[int]:
    """Decodes a random-key position into an operation-based schedule.

    Coordinates are ranked in ascending order (ties keep their index
    order) and the coordinate at index `k` stands for an operation of job
    `k mod n_jobs`, so each job appears `len(position) / n_jobs` times.

    Args:
        position: 1-D tensor of length n_jobs * n_machines.
        n_jobs: Number of jobs.

    Returns:
        Job indices in processing order.
    """

    if position.numel() % n_jobs != 0:
        raise e.SizeError("`position` length should be a multiple of `n_jobs`")

    order = torch.argsort(position, stable=True)

    return (order % n_jobs).tolist()


class MakespanFunction(Function):
    """Scores a position by the makespan of its decoded schedule.

    Positions must have `instance.n_operations` variables; any search
    bounds work since only the ranking of the coordinates matters.
    """

    def __init__(self, instance: JSSPInstance) -> None:
        """Initialization method.

        Args:
            instance: JSSP instance to schedule.
        """

        logger.info("Overriding class: Function -> MakespanFunction.")

        if not isinstance(instance, JSSPInstance):
            raise e.TypeError("`instance` should be a JSSPInstance")

        self.instance = instance

        super().__init__(self.makespan)

        self.name = f"makespan_{instance.name}"

        logger.info("Class overrided.")

    @property
    def n_variables(self) -> int:
        return self.instance.n_operations

    def decode(self, position: torch.Tensor) -> List[int]:
        """Decodes a position into the schedule it stands for."""

        return random_key_to_schedule(position, self.instance.n_jobs)

    def makespan(self, position: torch.Tensor) -> int:
        """Makespan of the schedule decoded from a position."""

        if position.numel() != self.n_variables:
            raise e.SizeError(f"`position` should have {self.n_variables} variables")

        return self.instance.calculate_makespan(self.decode(position))
