"""Goldilocks field arithmetic and FRI query-evaluation helpers."""

__version__ = "0.1.0"