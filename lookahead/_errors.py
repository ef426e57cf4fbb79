from __future__ import annotations

class ConcurrentPullError(RuntimeError):
    """A pull was started while the previous pull on the same adapter was unsettled."""

    def __init__(self) -> None:
        super().__init__("fetch_next(): previous pull has not settled yet (single consumer only)")

__all__ = ("ConcurrentPullError",)
