"""
Fetch-next combinators
======================

Prefetch adapter with extract + wrap pattern. While the consumer works on
item k, the request for item k+1 is already in flight. Requests to the
source are strictly sequential: never more than one outstanding.
"""

from __future__ import annotations

import asyncio
import logging
import typing
from collections.abc import AsyncIterable, AsyncIterator, Callable
from typing import assert_never

from kungfu import Error, LazyCoroResult, Ok, Result

from .._errors import ConcurrentPullError
from .._helpers import end_of_sequence, flatten_outcome, identity, next_outcome, raise_outcome
from .._types import Pull

LOGGER = logging.getLogger(__name__)


class _Lookahead[T, E, Raw]:
    """
    One adapter instance: a single pending-request slot over one pull.

    The pending task waits for the previous request to settle and only then
    calls the source, so requests never overlap.
    """

    __slots__ = ("_pull", "_extract", "_exhausted", "_pending", "_pulling", "_finished")

    def __init__(
        self,
        pull: Pull[Raw],
        *,
        extract: Callable[[Raw], Result[T, E]],
        exhausted: Callable[[], Raw],
    ) -> None:
        self._pull = pull
        self._extract = extract
        self._exhausted = exhausted
        self._pending: asyncio.Task[Raw] | None = None
        self._pulling = False
        self._finished = False

    async def step(self) -> Raw:
        if self._pulling:
            raise ConcurrentPullError()
        self._pulling = True
        try:
            if self._finished:
                return self._exhausted()

            current = self._pending
            if current is None:
                current = asyncio.create_task(self._pull())

            # Lookahead is scheduled before awaiting current, not after.
            issued = asyncio.Event()
            self._pending = asyncio.create_task(self._follow(current, issued))

            try:
                raw = await current
                ends = self._ends(raw)
            except Exception:
                self._finished = True
                raise

            # Do not hand the item out until the next request has gone upstream.
            await issued.wait()

            if ends:
                self._finished = True
                LOGGER.debug("fetch_next: sequence terminated")
            return raw
        finally:
            self._pulling = False

    def _ends(self, raw: Raw) -> bool:
        match self._extract(raw):
            case Ok(_):
                return False
            case Error(_):
                return True
            case _ as unreachable:
                assert_never(unreachable)

    async def _follow(self, current: asyncio.Task[Raw], issued: asyncio.Event) -> Raw:
        try:
            await asyncio.wait((current,))
            if current.cancelled() or current.exception() is not None:
                LOGGER.debug("fetch_next: request failed, lookahead neutralized")
                return self._exhausted()
            try:
                ends = self._ends(current.result())
            except Exception:
                # step() raises the same failure on the pull that owns current
                LOGGER.debug("fetch_next: unreadable outcome, lookahead neutralized")
                return self._exhausted()
            if ends:
                return self._exhausted()
        finally:
            issued.set()

        LOGGER.debug("fetch_next: requesting next item")
        return await self._pull()


class _PullIterator[T](AsyncIterator[T]):
    """Async iterator over an outcome pull: Ok is yielded, Error is raised."""

    __slots__ = ("_pull",)

    def __init__(self, pull: Callable[[], LazyCoroResult[T, Exception]]) -> None:
        self._pull = pull

    async def __anext__(self) -> T:
        return raise_outcome(await self._pull())


class FetchNext[T](AsyncIterable[T]):
    """
    Async iterable that keeps one item of lookahead over `items`.

    Every `async for` over it opens a fresh iterator of `items` and a fresh
    adapter, so the wrapping itself is stateless and can be wrapped again.
    """

    __slots__ = ("_items", "_extract")

    def __init__(
        self,
        items: AsyncIterable[typing.Any],
        /,
        *,
        extract: Callable[[Result[typing.Any, Exception]], Result[typing.Any, typing.Any]] = identity,
    ) -> None:
        self._items = items
        self._extract = extract

    def __aiter__(self) -> AsyncIterator[T]:
        iterator = aiter(self._items)

        async def request() -> Result[T, Exception]:
            return await next_outcome(iterator)

        pull = fetch_nextM(
            request,
            extract=self._extract,
            exhausted=end_of_sequence,
            wrap=LazyCoroResult,
        )
        return _PullIterator(pull)

    def __repr__(self) -> str:
        return f"FetchNext({self._items!r})"


# ============================================================================
# Generic combinator (extract + wrap pattern)
# ============================================================================


def fetch_nextM[M, T, E, Raw](
    pull: Pull[Raw],
    *,
    extract: Callable[[Raw], Result[T, E]],
    exhausted: Callable[[], Raw],
    wrap: Callable[[Pull[Raw]], M],
) -> Callable[[], M]:
    """
    Generic fetch-next combinator.

    Returns a new pull that answers each call with the outcome of the
    matching upstream call, while the upstream call for the following item
    is already running.

    Args:
        pull: Upstream request, one call per item
        extract: Result view of a raw outcome; Error terminates the sequence
        exhausted: Raw outcome handed out after termination
        wrap: Constructor to wrap the adapter's pull into monad M

    Each call of fetch_nextM is an independent adapter with its own
    pending slot. The returned pull is for a single consumer: starting a
    pull before the previous one settled raises ConcurrentPullError.

    Example (LazyCoroResult):
        next_page = fetch_nextM(fetch_page, extract=identity,
                                exhausted=lambda: Error(NoMorePages()),
                                wrap=LazyCoroResult)
        page = await next_page()
    """
    state = _Lookahead(pull, extract=extract, exhausted=exhausted)

    def next_() -> M:
        return wrap(state.step)

    return next_


# ============================================================================
# Sugar for AsyncIterable
# ============================================================================


def fetch_next[T](items: AsyncIterable[T]) -> AsyncIterable[T]:
    """
    Request the next item as soon as the current one is handed out.

    Upstream exceptions are raised from the pull that corresponds to the
    failing item; iteration stops there.
    """
    return FetchNext(items)


def fetch_next_results[T, E](
    items: AsyncIterable[Result[T, E]],
) -> AsyncIterable[Result[T, E]]:
    """
    fetch_next for sources that report failures as Error items.

    The first Error item is yielded and ends the sequence; the source is
    not asked for anything after it.
    """
    return FetchNext(items, extract=flatten_outcome)


# ============================================================================
# Sugar for LazyCoroResult pulls
# ============================================================================


def fetch_next_pull[T, E](
    pull: Callable[[], LazyCoroResult[T, E]],
    *,
    end: E,
) -> Callable[[], LazyCoroResult[T, E]]:
    """
    Prefetch over a pull function (e.g. a page fetcher).

    The first Error terminates the sequence; every later pull resolves to
    Error(end) without calling `pull`.
    """

    async def request() -> Result[T, E]:
        return await pull()

    def exhausted() -> Result[T, E]:
        return Error(end)

    return fetch_nextM(request, extract=identity, exhausted=exhausted, wrap=LazyCoroResult)


__all__ = (
    "FetchNext",
    "fetch_next",
    "fetch_next_results",
    "fetch_next_pull",
    "fetch_nextM",
)
