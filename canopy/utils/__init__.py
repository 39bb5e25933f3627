# This file makes the 'utils' directory a Python package.

"""Canopy utilities."""

from .templates import render

__all__ = [
    "render",
]
