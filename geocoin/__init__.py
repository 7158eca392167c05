"""Deterministic location-based coin collecting world."""

__version__ = "0.1.0"
