"""
Depth combinators
=================

Deeper lookahead by chaining fetch_next layers. Each layer keeps exactly
one request in flight against its own upstream.
"""

from __future__ import annotations

from collections.abc import AsyncIterable
from dataclasses import dataclass

from kungfu import Result

from .._helpers import pipe
from .fetch_next import fetch_next, fetch_next_results


@dataclass(frozen=True, slots=True)
class PrefetchPolicy:
    """
    How many fetch_next layers to stack: depth N keeps up to N items ahead.
    """

    depth: int = 1

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError("PrefetchPolicy.depth must be >= 1")

    @classmethod
    def of(cls, depth: int) -> PrefetchPolicy:
        """Shortcut for PrefetchPolicy(depth=depth)."""
        return cls(depth=depth)


def fetch_ahead[T](
    items: AsyncIterable[T],
    *,
    policy: PrefetchPolicy = PrefetchPolicy(),
) -> AsyncIterable[T]:
    """Stack policy.depth fetch_next layers over items."""
    stack = pipe(*(fetch_next for _ in range(policy.depth)))
    return stack(items)


def fetch_ahead_results[T, E](
    items: AsyncIterable[Result[T, E]],
    *,
    policy: PrefetchPolicy = PrefetchPolicy(),
) -> AsyncIterable[Result[T, E]]:
    """
    fetch_ahead for Result-valued sources.

    The first Error item is passed through every layer and ends the sequence.
    """
    stack = pipe(*(fetch_next_results for _ in range(policy.depth)))
    return stack(items)


__all__ = ("PrefetchPolicy", "fetch_ahead", "fetch_ahead_results")
