"""Poised - record manager for construction projects and their parties."""

__version__ = "0.1.0"
