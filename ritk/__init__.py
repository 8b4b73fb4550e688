"""Spatial transforms for image registration and NIfTI image input/output."""

__version__ = "0.1.0"