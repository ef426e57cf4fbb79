"""
Lookahead combinators for async sequences.

Wrap a paginated or streamed async source so the next item is already
being requested while the current one is processed, without ever having
more than one request outstanding against the source.

Architecture:
- Generic combinator (fetch_nextM) works with any monad via extract + wrap pattern
- Sugar for AsyncIterable (fetch_next, fetch_next_results)
- Sugar for LazyCoroResult pulls (fetch_next_pull)
- Deeper lookahead by stacking layers (fetch_ahead, pipe)
"""

# Core types
from ._types import Pull, Stage

# Internal helpers (for custom sources)
from . import _helpers
from ._helpers import pipe

# Prefetch
from .prefetch import (
    PrefetchPolicy,
    FetchNext,
    # AsyncIterable
    fetch_next,
    fetch_next_results,
    fetch_ahead,
    fetch_ahead_results,
    # LazyCoroResult
    fetch_next_pull,
    # Generic
    fetch_nextM,
)

# Errors
from ._errors import ConcurrentPullError

__all__ = (
    # Types
    "Pull",
    "Stage",
    # Internal helpers (for custom sources)
    "_helpers",
    "pipe",
    # Prefetch - AsyncIterable
    "PrefetchPolicy",
    "FetchNext",
    "fetch_next",
    "fetch_next_results",
    "fetch_ahead",
    "fetch_ahead_results",
    # Prefetch - LazyCoroResult
    "fetch_next_pull",
    # Prefetch - Generic
    "fetch_nextM",
    # Errors
    "ConcurrentPullError",
)
