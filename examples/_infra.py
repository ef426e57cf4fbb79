from __future__ import annotations

import asyncio
import sys
from collections.abc import AsyncIterator, Callable, Coroutine
from dataclasses import dataclass, field
from pathlib import Path

from kungfu import Error, Ok, Result

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@dataclass(frozen=True, slots=True)
class Failure(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover (examples only)
        return self.message


@dataclass(frozen=True, slots=True)
class Page:
    number: int
    rows: tuple[str, ...]


@dataclass(slots=True)
class FakeApi:
    name: str
    pages: int = 5
    rows_per_page: int = 3
    delay_seconds: float = 0.0
    fail_on_page: int | None = None

    async def fetch_page(self, number: int) -> Result[Page, Failure]:
        await asyncio.sleep(self.delay_seconds)
        if number == self.fail_on_page:
            return Error(Failure(f"{self.name}: page {number} unavailable"))
        rows = tuple(f"{self.name}:{number}:{i}" for i in range(self.rows_per_page))
        return Ok(Page(number=number, rows=rows))

    async def iter_pages(self) -> AsyncIterator[Page]:
        for number in range(self.pages):
            result = await self.fetch_page(number)
            yield result.unwrap()


def _empty_rows() -> list[str]:
    return []


@dataclass(slots=True)
class FakeDisk:
    rows: list[str] = field(default_factory=_empty_rows)
    delay_seconds: float = 0.0

    async def write(self, page: Page) -> None:
        await asyncio.sleep(self.delay_seconds)
        self.rows.extend(page.rows)


def banner(title: str) -> None:  # pragma: no cover (examples only)
    print(f"\n== {title} ==")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:  # pragma: no cover (examples only)
    asyncio.run(main())
