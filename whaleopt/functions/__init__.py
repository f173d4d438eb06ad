"""Functions package for benchmark and scheduling objectives."""
