from __future__ import annotations

import time

from _infra import FakeApi, FakeDisk, banner, run

from lookahead import fetch_next


async def main() -> None:
    banner("01_page_then_write: fetch_next hides page latency behind writes")

    for label, wrap in (("plain", lambda pages: pages), ("fetch_next", fetch_next)):
        api = FakeApi(name="api", pages=5, delay_seconds=0.05)
        disk = FakeDisk(delay_seconds=0.05)

        started = time.perf_counter()
        async for page in wrap(api.iter_pages()):
            await disk.write(page)
        elapsed = time.perf_counter() - started

        print(f"{label:>10}: {len(disk.rows)} rows in {elapsed:.2f}s")


if __name__ == "__main__":
    run(main)
