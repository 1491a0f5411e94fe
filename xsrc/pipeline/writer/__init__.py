"""Validated, atomic output writing."""

from __future__ import annotations

from .atomic_writer import AtomicWriter, validate_javascript, validate_python

__all__ = [
    "AtomicWriter",
    "validate_javascript",
    "validate_python",
]
