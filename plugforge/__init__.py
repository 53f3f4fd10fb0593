"""Plugforge -- a plugin-composition project scaffolder."""

__version__ = "0.1.0"
