"""
Core type definitions for lookahead.

Aliases shared by the prefetch adapters.
"""

from __future__ import annotations

import typing
from collections.abc import AsyncIterable, Callable, Coroutine

# ============================================================================
# Type aliases
# ============================================================================

# Pull = zero-arg coroutine function, one call = one upstream request
type Pull[Raw] = Callable[[], Coroutine[typing.Any, typing.Any, Raw]]

# Stage = sequence transformer, composable with pipe()
type Stage[T] = Callable[[AsyncIterable[T]], AsyncIterable[T]]

__all__ = (
    "Pull",
    "Stage",
)
