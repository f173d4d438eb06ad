"""Visualization package for convergence plots."""
