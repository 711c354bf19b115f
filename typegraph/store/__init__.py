"""Type-definition stores."""

from .batch import BatchFailure, BatchPolicy, BatchResult
from .enum_def_store import EnumDefStore
from .filters import SearchFilter, predicate_from_filter

__all__ = [
    "BatchFailure",
    "BatchPolicy",
    "BatchResult",
    "EnumDefStore",
    "SearchFilter",
    "predicate_from_filter",
]
