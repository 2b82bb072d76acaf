"""Loaders that populate a database with reference data."""

from .sample_data import import_sample_data

__all__ = ["import_sample_data"]
