"""Shortest road routes between two points, compared against a commercial directions provider."""

__version__ = "0.1.0"
