"""Utility functions."""

from .validation import is_numeric_id

__all__ = ["is_numeric_id"]
