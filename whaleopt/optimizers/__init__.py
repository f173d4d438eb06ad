"""Optimizers package for position-update rules."""
