"""Threaded dining philosophers simulation: rules parsing, simulation and command line."""

__version__ = "1.0.0"
__all__ = ["cli", "rules", "simulation"]