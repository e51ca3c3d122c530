"""Datasets, meters, serialization and distributed helpers for training loops."""

__version__ = "0.1.0"