"""Whale Optimization Algorithm engine built on PyTorch tensors."""

from whaleopt.whaleopt import Whaleopt

__version__ = "1.0.0"
