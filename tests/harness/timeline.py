"""Producer/consumer timeline used to check request and consume interleaving.

Four events are recorded for each item:
    R - item requested from the producer
    P - producer handed the item out
    C - consumer received the item
    F - consumer finished its task on the item
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterable, AsyncIterator, Callable, Sequence
from dataclasses import dataclass
from time import perf_counter

from lookahead import fetch_next
from lookahead._types import Stage

type Delay = float | Sequence[float]


@dataclass(frozen=True, slots=True)
class Produced:
    index: int
    requested: float
    produced: float


@dataclass(frozen=True, slots=True)
class Consumed:
    item: Produced
    consumed: float
    finished: float


def _delay_for(delay: Delay, position: int) -> float:
    if isinstance(delay, Sequence):
        return delay[position % len(delay)]
    return delay


async def produce(count: int, delay_ms: Delay) -> AsyncIterator[Produced]:
    """Yield `count` items, each taking `delay_ms` to load."""
    for index in range(count):
        requested = perf_counter()
        await asyncio.sleep(_delay_for(delay_ms, index) / 1000)
        yield Produced(index, requested, perf_counter())


async def consume(delay_ms: Delay, items: AsyncIterable[Produced]) -> list[Consumed]:
    """Drain `items`, running a `delay_ms` task on each one."""
    results: list[Consumed] = []
    async for item in items:
        consumed = perf_counter()
        await asyncio.sleep(_delay_for(delay_ms, len(results)) / 1000)
        results.append(Consumed(item, consumed, perf_counter()))
    return results


def to_events(results: Sequence[Consumed]) -> list[str]:
    """Flatten timestamps into event labels ordered by when they happened."""
    stamped: list[tuple[float, str]] = []
    for result in results:
        i = result.item.index
        stamped.append((result.item.requested, f"R{i}"))
        stamped.append((result.item.produced, f"P{i}"))
        stamped.append((result.consumed, f"C{i}"))
        stamped.append((result.finished, f"F{i}"))
    return [label for _, label in sorted(stamped)]


def load(
    count: int,
    delay_produce: Delay,
    delay_consume: Delay,
    *,
    stage: Stage[Produced] = fetch_next,
) -> list[str]:
    async def run() -> list[Consumed]:
        return await consume(delay_consume, stage(produce(count, delay_produce)))

    return to_events(asyncio.run(run()))


def pattern(count: int, step: Callable[[int], list[str]]) -> list[str]:
    """
    Expected events for `count` items.

    Always starts with R0 P0 and ends with C/F of the last item; `step`
    gives the repeating middle part.
    """
    if count == 0:
        return []
    events = ["R0", "P0"]
    for i in range(1, count):
        events.extend(step(i))
    last = count - 1
    events.extend([f"C{last}", f"F{last}"])
    return events


def fast_producer(i: int) -> list[str]:
    return [f"R{i}", f"C{i - 1}", f"P{i}", f"F{i - 1}"]


def fast_consumer(i: int) -> list[str]:
    return [f"R{i}", f"C{i - 1}", f"F{i - 1}", f"P{i}"]
