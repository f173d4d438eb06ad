"""Benchmark objective functions over a single position tensor.

All functions take a 1-D tensor of shape (n_variables,) and return a
0-d tensor.
"""

from __future__ import annotations

import math

import torch


def sphere(x: torch.Tensor) -> torch.Tensor:
    """Sphere function, minimum 0 at the origin."""

    return (x ** 2).sum()


def rastrigin(x: torch.Tensor) -> torch.Tensor:
    """Rastrigin function, minimum 0 at the origin."""

    return (x ** 2 - 10.0 * torch.cos(2.0 * math.pi * x) + 10.0).sum()


def schwefel(x: torch.Tensor) -> torch.Tensor:
    """Schwefel 2.26 function.

    Minimum of about -418.9829 per variable at x_i = 420.9687 within [-500, 500].
    """

    return (-x * torch.sin(torch.sqrt(torch.abs(x)))).sum()


BENCHMARKS = {
    "sphere": sphere,
    "rastrigin": rastrigin,
    "schwefel": schwefel,
}
