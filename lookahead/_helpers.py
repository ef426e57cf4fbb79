"""Internal helpers for lookahead.

Outcome capture and composition functions shared by the prefetch adapters.
These are not part of the public API but can be used to build custom sources."""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator
from functools import reduce
from typing import assert_never

from kungfu import Error, Ok, Result

from ._types import Stage

# Identity function
def identity[T](x: T) -> T:
    """Identity function: returns its argument unchanged."""
    return x

# Outcome capture (request -> Result)
def end_of_sequence[T]() -> Result[T, Exception]:
    """Outcome that ends an async iteration."""
    return Error(StopAsyncIteration())

async def next_outcome[T](iterator: AsyncIterator[T]) -> Result[T, Exception]:
    """
    Request the next item and capture how the request settled.

    Ok(item) for an item, Error(StopAsyncIteration()) at the end,
    Error(exc) when the source raised. Cancellation is not captured.
    """
    try:
        return Ok(await anext(iterator))
    except Exception as exc:
        return Error(exc)

def flatten_outcome[T, E](outcome: Result[Result[T, E], Exception]) -> Result[T, E | Exception]:
    """
    Extract the item Result from a captured Result-valued request.

    Both a raised exception and an Error item terminate the sequence.
    """
    match outcome:
        case Ok(item):
            return item
        case Error(exc):
            return Error(exc)
        case _ as unreachable:
            assert_never(unreachable)

def raise_outcome[T](outcome: Result[T, Exception]) -> T:
    """Hand a captured outcome back to async-iteration land: value or raise."""
    match outcome:
        case Ok(value):
            return value
        case Error(exc):
            raise exc
        case _ as unreachable:
            assert_never(unreachable)

# Composition
def pipe[T](*stages: Stage[T]) -> Stage[T]:
    """
    Compose sequence stages left to right.

    Usage:
        fetch4 = pipe(fetch_next, fetch_next, fetch_next, fetch_next)
        async for page in fetch4(pages()): ...
    """

    def composed(items: AsyncIterable[T]) -> AsyncIterable[T]:
        return reduce(lambda acc, stage: stage(acc), stages, items)

    return composed

__all__ = (
    # Identity
    "identity",
    # Outcome capture
    "end_of_sequence",
    "next_outcome",
    "flatten_outcome",
    "raise_outcome",
    # Composition
    "pipe",
)
