"""Constants used across the Whaleopt package."""

from enum import Enum

# Probability threshold that splits the spiral move from the encircling/search moves
SPIRAL_PROBABILITY = 0.5


class Direction(Enum):
    """Optimization direction."""

    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"

    @property
    def descending(self) -> bool:
        """Whether the best fitness is the largest one."""

        return self is Direction.MAXIMIZE

    def is_better(self, fitness: float, reference: float) -> bool:
        """Checks whether `fitness` strictly improves on `reference`.

        Args:
            fitness: Candidate fitness value.
            reference: Fitness value to compare against.

        Returns:
            True if `fitness` is strictly better in this direction.
        """

        if self.descending:
            return fitness > reference
        return fitness < reference
