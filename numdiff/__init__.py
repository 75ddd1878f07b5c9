"""Numerical comparison of two data files within a relative tolerance."""

__version__ = "1.0.0"