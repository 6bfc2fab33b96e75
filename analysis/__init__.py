"""Pure analysis package for the FIR dashboard.

This package contains deterministic, testable computations that operate on
in-memory case records and return DTOs. It must not import Django or perform
any I/O.
"""

from .aggregations import summarize
from .engine import analyze_records

__all__ = ["analyze_records", "summarize"]
