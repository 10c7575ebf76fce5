"""Venture planning backend: projects, time tracking, trends and profit projections."""

__version__ = "0.1.0"
