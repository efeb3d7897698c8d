"""Utility functions and helpers."""

from .arr import insert_after, insert_before
from .logging import setup_logging

__all__ = ["insert_after", "insert_before", "setup_logging"]
