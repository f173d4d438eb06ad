"""Swarm-based optimizers inspired by collective animal behavior."""

from whaleopt.optimizers.swarm.woa import WOA
