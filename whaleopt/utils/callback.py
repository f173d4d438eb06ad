"""Hooks into the lifecycle of a `Whaleopt` run.

A run emits, in order:

    on_task_begin(engine)
    on_population_ranked(population, direction)          initial ranking
    for t in 1..N:
        on_iteration_begin(t, engine)
        on_update_before(ctx), on_update_after(ctx)      positions moved, not clipped yet
        on_population_ranked(population, direction)      clipped, evaluated and sorted
        on_best_improved(t, previous, current)           strict improvements only
        on_iteration_end(t, entry, engine)               entry is the new history pair
    on_task_end(history, engine)
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

import whaleopt.utils.exception as e
from whaleopt.utils import logging

if TYPE_CHECKING:
    from whaleopt.core.optimizer import UpdateContext
    from whaleopt.core.population import Population
    from whaleopt.core.whale import Whale
    from whaleopt.utils.constant import Direction
    from whaleopt.utils.history import History

logger = logging.get_logger(__name__)

HistoryEntry = Tuple[List[float], float]


class Callback:
    """No-op base class. Subclasses override only the hooks they need."""

    def on_task_begin(self, engine) -> None:
        pass

    def on_task_end(self, history: "History", engine) -> None:
        pass

    def on_iteration_begin(self, iteration: int, engine) -> None:
        pass

    def on_iteration_end(self, iteration: int, entry: HistoryEntry, engine) -> None:
        pass

    def on_update_before(self, ctx: "UpdateContext") -> None:
        pass

    def on_update_after(self, ctx: "UpdateContext") -> None:
        pass

    def on_population_ranked(self, population: "Population", direction: "Direction") -> None:
        pass

    def on_best_improved(self, iteration: int, previous: "Whale", current: "Whale") -> None:
        """Called when the best-known whale is replaced.

        Args:
            iteration: Iteration (1-based) that produced the improvement.
            previous: Best-known whale before the replacement.
            current: New best-known whale, an independent copy.
        """

        pass


class CallbackVessel:
    """Forwards every hook to a sequence of callbacks, in order."""

    def __init__(self, callbacks: Optional[Sequence[Callback]] = None) -> None:
        self.callbacks = [] if callbacks is None else callbacks

    @property
    def callbacks(self) -> List[Callback]:
        return self._callbacks

    @callbacks.setter
    def callbacks(self, callbacks: Sequence[Callback]) -> None:
        if not isinstance(callbacks, (list, tuple)):
            raise e.TypeError("`callbacks` should be a list or tuple")
        if not all(isinstance(cb, Callback) for cb in callbacks):
            raise e.TypeError("`callbacks` should only hold Callback instances")

        self._callbacks = list(callbacks)

    def _dispatch(self, hook: str, *args) -> None:
        for cb in self._callbacks:
            getattr(cb, hook)(*args)

    def on_task_begin(self, engine) -> None:
        self._dispatch("on_task_begin", engine)

    def on_task_end(self, history: "History", engine) -> None:
        self._dispatch("on_task_end", history, engine)

    def on_iteration_begin(self, iteration: int, engine) -> None:
        self._dispatch("on_iteration_begin", iteration, engine)

    def on_iteration_end(self, iteration: int, entry: HistoryEntry, engine) -> None:
        self._dispatch("on_iteration_end", iteration, entry, engine)

    def on_update_before(self, ctx: "UpdateContext") -> None:
        self._dispatch("on_update_before", ctx)

    def on_update_after(self, ctx: "UpdateContext") -> None:
        self._dispatch("on_update_after", ctx)

    def on_population_ranked(self, population: "Population", direction: "Direction") -> None:
        self._dispatch("on_population_ranked", population, direction)

    def on_best_improved(self, iteration: int, previous: "Whale", current: "Whale") -> None:
        self._dispatch("on_best_improved", iteration, previous, current)


class CheckpointCallback(Callback):
    """Saves the engine with dill every `frequency` iterations.

    Files are named after `file_path` with the iteration appended to the
    stem, e.g. `run.pkl` becomes `run_10.pkl`. A frequency of 0 disables
    checkpointing.
    """

    def __init__(self, file_path: str = "whaleopt.pkl", frequency: int = 0) -> None:
        super().__init__()

        self.file_path = file_path
        self.frequency = frequency

    @property
    def frequency(self) -> int:
        return self._frequency

    @frequency.setter
    def frequency(self, frequency: int) -> None:
        if not isinstance(frequency, int) or isinstance(frequency, bool):
            raise e.TypeError("`frequency` should be an integer")
        if frequency < 0:
            raise e.ValueError("`frequency` should be >= 0")

        self._frequency = frequency

    def checkpoint_path(self, iteration: int) -> str:
        path = Path(self.file_path)
        return str(path.with_name(f"{path.stem}_{iteration}{path.suffix}"))

    def on_iteration_end(self, iteration: int, entry: HistoryEntry, engine) -> None:
        if self.frequency and iteration % self.frequency == 0:
            file_path = self.checkpoint_path(iteration)
            logger.to_file(f"Checkpoint at iteration {iteration}: {file_path} (fitness {entry[1]}).")
            engine.save(file_path)
