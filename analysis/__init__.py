"""Pure analysis package for areaStudio.

This package contains deterministic, testable computations that operate on
in-memory inputs and return DTOs. It must not import Django or perform any
database I/O.
"""

from .classifier import classify_records
from .label_format import format_tooltip

__all__ = ["classify_records", "format_tooltip"]
