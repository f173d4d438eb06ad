"""PyTorch-native random number generators.

Every generator accepts an optional `torch.Generator`, so a whole
optimization run can draw from a single seeded stream.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

import torch


def _size(size: Union[int, Tuple[int, ...]]) -> Tuple[int, ...]:
    if isinstance(size, int):
        return (size,)
    return tuple(size)


def generate_uniform_random_number(
    low: float = 0.0,
    high: float = 1.0,
    size: Union[int, Tuple[int, ...]] = 1,
    generator: Optional[torch.Generator] = None,
    device: torch.device = torch.device("cpu"),
    dtype: torch.dtype = torch.float64,
) -> torch.Tensor:
    """Generates random values from a uniform distribution in [low, high).

    Args:
        low: Lower bound.
        high: Upper bound.
        size: Shape of the output tensor.
        generator: Random stream to draw from (global stream if None).
        device: Target device.
        dtype: Output dtype.

    Returns:
        Uniformly distributed random tensor.
    """

    u = torch.rand(_size(size), generator=generator, device=device, dtype=dtype)
    return u * (high - low) + low


def generate_integer_random_number(
    low: int = 0,
    high: int = 1,
    size: Optional[Union[int, Tuple[int, ...]]] = None,
    generator: Optional[torch.Generator] = None,
    device: torch.device = torch.device("cpu"),
) -> Union[int, torch.Tensor]:
    """Generates random integers in [low, high).

    Args:
        low: Lower bound (inclusive).
        high: Upper bound (exclusive).
        size: Shape of output. If None, returns a Python int.
        generator: Random stream to draw from (global stream if None).
        device: Target device.

    Returns:
        Random integer or tensor of integers.
    """

    if size is None:
        return torch.randint(low, high, (1,), generator=generator, device=device).item()

    return torch.randint(low, high, _size(size), generator=generator, device=device)
