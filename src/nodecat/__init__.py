from __future__ import annotations

"""
nodecat: concatenate named inputs into one output stream.

Public facade over the concatenation engine and its error types.
"""

from nodecat.core.engine import ConcatEngine, concatenate
from nodecat.domain.errors import AggregateError, ContractViolationError
from nodecat.domain.options import ConcatOptions

__version__ = "1.0.0"

__all__ = [
    "concatenate",
    "ConcatEngine",
    "ConcatOptions",
    "AggregateError",
    "ContractViolationError",
]
