"""
Exohunt: exoplanet dataset upload and training pipeline.

This package maps arbitrary exoplanet CSV headers onto a canonical schema,
uploads the rows to a remote table, forwards the dataset to a remote
training API, and ships a small planet trivia game on the side.
"""

from importlib.metadata import version

__version__ = version("exohunt")

__all__ = ["__version__"]
