"""Run independent blocking calls on a thread pool and join on all of them."""

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

T = TypeVar("T")


def run_concurrently(
    calls: Sequence[Callable[[], T]],
    fallback: Callable[[int, Exception], T],
    max_workers: int | None = None,
    thread_name_prefix: str = "review",
) -> list[T]:
    """
    Execute blocking callables concurrently and wait for every one of them.

    A failing call never cancels the others; its slot is filled with
    ``fallback(index, exception)`` instead.

    Args:
        calls: Zero-argument callables, one task each
        fallback: Produces the substitute result for a failed call
        max_workers: Pool size (default: one thread per call)
        thread_name_prefix: Prefix for worker thread names

    Returns:
        Results in the same order as ``calls``, independent of completion order
    """
    if not calls:
        return []

    workers = max_workers or len(calls)
    with ThreadPoolExecutor(
        max_workers=workers, thread_name_prefix=thread_name_prefix
    ) as executor:
        futures = [executor.submit(call) for call in calls]

        results: list[T] = []
        for index, future in enumerate(futures):
            try:
                results.append(future.result())
            except Exception as e:
                results.append(fallback(index, e))

    return results
