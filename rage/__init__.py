"""RAGE analytics backend: schema upgrader and access table."""

__version__ = "0.1.0"
