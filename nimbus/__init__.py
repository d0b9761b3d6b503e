"""Procedurally baked volumetric cloud noise."""

__version__ = "0.1.0"
