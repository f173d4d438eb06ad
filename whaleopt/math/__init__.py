"""Math package for random number generation."""
