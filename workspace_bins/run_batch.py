"""Run independent filesystem tasks on a bounded thread pool."""

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


def run_batch(func: Callable[[T], R], items: Sequence[T], max_workers: int) -> list[R]:
    """Apply ``func`` to every item with at most ``max_workers`` in flight.

    Results come back in input order. If any call raises, the remaining
    submitted calls still finish and the first failure (in input order) is
    re-raised.
    """
    if not items:
        return []
    if max_workers <= 1 or len(items) == 1:
        return [func(item) for item in items]

    with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
        futures = [executor.submit(func, item) for item in items]
    # Leaving the context waits for every future
    return [future.result() for future in futures]
