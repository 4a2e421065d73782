"""Typo-tolerant multi-tier news search."""

__version__ = "1.0.0"
