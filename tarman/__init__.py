"""A portable, simple package manager for applications shipped as tar archives."""

__version__ = "0.1.0"