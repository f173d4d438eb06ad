"""History tracking for optimization runs."""

from __future__ import annotations

from typing import Any, Iterator, List, Tuple

import numpy as np
import torch

import whaleopt.utils.exception as e


class History:
    """Records per-iteration optimization data.

    Uses dump() to store arbitrary key-value pairs per iteration.
    Tensors are detached, moved to CPU and converted to Python types
    before storage, so recorded entries never alias live population state.

    The `best_agent` key is special: it holds one `(position, fitness)`
    pair per iteration and backs the sequence interface (len, indexing,
    iteration) of this class.
    """

    def __init__(self, save_agents: bool = False) -> None:
        """Initialization method.

        Args:
            save_agents: Whether to save all agent positions and fitness each iteration.
        """

        self.save_agents = save_agents

    @property
    def save_agents(self) -> bool:
        return self._save_agents

    @save_agents.setter
    def save_agents(self, save_agents: bool) -> None:
        if not isinstance(save_agents, bool):
            raise e.TypeError("`save_agents` should be a boolean")
        self._save_agents = save_agents

    @staticmethod
    def _to_python(value: Any) -> Any:
        """Converts tensors to Python-native types for storage."""

        if isinstance(value, torch.Tensor):
            return value.detach().cpu().tolist()
        return value

    def _parse(self, key: str, value: Any) -> Any:
        """Parses incoming values based on key.

        Args:
            key: Data key.
            value: Data value (may contain tensors).

        Returns:
            Parsed value safe for CPU storage.
        """

        if key == "best_agent":
            pos, fit = value
            return (self._to_python(pos), float(self._to_python(fit)))

        return self._to_python(value)

    def dump(self, **kwargs) -> None:
        """Dumps key-value pairs into the history.

        Each key becomes a list attribute, appended per iteration.
        """

        for key, value in kwargs.items():
            if key in ("positions", "fitness") and not self.save_agents:
                continue

            output = self._parse(key, value)

            if not hasattr(self, key):
                setattr(self, key, [output])
            else:
                getattr(self, key).append(output)

    def get_convergence(self, key: str, index: int = 0) -> Any:
        """Gets the convergence list of a specified key.

        Args:
            key: Key to retrieve.
            index: Agent index for per-agent keys (`positions` and `fitness`).

        Returns:
            Values as a numpy array, or a (positions, fitnesses) pair of
            numpy arrays for `best_agent`.
        """

        if not hasattr(self, key):
            raise e.ArgumentError(f"`{key}` has not been dumped into the history")

        attr = getattr(self, key)

        if key == "best_agent":
            positions = [a[0] for a in attr]
            fitnesses = [a[1] for a in attr]
            return np.array(positions), np.array(fitnesses)

        if key in ("positions", "fitness"):
            return np.array([a[index] for a in attr])

        return np.array(attr)

    def _best_agent(self) -> List[Tuple[List[float], float]]:
        return getattr(self, "best_agent", [])

    def __len__(self) -> int:
        return len(self._best_agent())

    def __getitem__(self, index: int) -> Tuple[List[float], float]:
        return self._best_agent()[index]

    def __iter__(self) -> Iterator[Tuple[List[float], float]]:
        return iter(self._best_agent())

    def __repr__(self) -> str:
        return f"History(n_iterations={len(self)}, save_agents={self.save_agents})"
