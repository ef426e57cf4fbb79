from __future__ import annotations

from _infra import FakeApi, FakeDisk, banner, run

from lookahead import PrefetchPolicy, fetch_ahead_results
from kungfu import Error, Ok


async def main() -> None:
    banner("02_result_pages: Error pages end the stream, in order")

    api = FakeApi(name="api", pages=6, delay_seconds=0.01, fail_on_page=3)
    disk = FakeDisk(delay_seconds=0.02)

    async def pages():
        for number in range(api.pages):
            yield await api.fetch_page(number)

    stream = fetch_ahead_results(pages(), policy=PrefetchPolicy.of(2))
    async for result in stream:
        match result:
            case Ok(page):
                await disk.write(page)
                print(f"wrote page {page.number}")
            case Error(err):
                print(f"stopped: {err}")

    print(f"rows on disk: {len(disk.rows)}")


if __name__ == "__main__":
    run(main)
