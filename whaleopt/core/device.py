"""Device and random-stream management for the Whaleopt package."""

from __future__ import annotations

from typing import Optional

import torch

import whaleopt.utils.exception as e


class DeviceManager:
    """Resolves the tensor device and owns the run's random stream.

    Supports "auto" (picks GPU if available), explicit device strings
    ("cpu", "cuda:0") and torch.device objects. Every random number of
    an optimization task is drawn from `generator`, which is seeded when
    a seed is given and otherwise seeded non-deterministically.
    """

    def __init__(
        self,
        device: str | torch.device = "cpu",
        dtype: torch.dtype = torch.float64,
        seed: Optional[int] = None,
    ) -> None:
        self.device = self._resolve(device)
        self.dtype = dtype
        self.seed = seed

        self.generator = torch.Generator(device=self.device)
        if seed is None:
            self.generator.seed()
        else:
            self.generator.manual_seed(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @seed.setter
    def seed(self, seed: Optional[int]) -> None:
        if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
            raise e.TypeError("`seed` should be an integer or None")
        self._seed = seed

    @staticmethod
    def _resolve(device: str | torch.device) -> torch.device:
        """Resolves a device specifier to a torch.device."""

        if isinstance(device, torch.device):
            return device

        if device == "auto":
            if torch.cuda.is_available():
                return torch.device("cuda:0")
            return torch.device("cpu")

        return torch.device(device)

    def __getstate__(self) -> dict:
        state = self.__dict__.copy()
        state["generator"] = self.generator.get_state()
        return state

    def __setstate__(self, state: dict) -> None:
        generator_state = state.pop("generator")
        self.__dict__.update(state)
        self.generator = torch.Generator(device=self.device)
        self.generator.set_state(generator_state)

    def __repr__(self) -> str:
        return f"DeviceManager(device={self.device}, dtype={self.dtype}, seed={self.seed})"
