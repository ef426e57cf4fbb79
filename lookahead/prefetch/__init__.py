from .fetch_next import FetchNext, fetch_next, fetch_next_results, fetch_next_pull, fetch_nextM
from .depth import PrefetchPolicy, fetch_ahead, fetch_ahead_results

__all__ = (
    # Policies
    "PrefetchPolicy",
    # Fetch next
    "FetchNext",
    "fetch_next",
    "fetch_next_results",
    "fetch_next_pull",
    "fetch_nextM",
    # Depth
    "fetch_ahead",
    "fetch_ahead_results",
)
