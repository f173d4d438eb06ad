"""Utilities package: callbacks, constants, exceptions, history and logging."""
