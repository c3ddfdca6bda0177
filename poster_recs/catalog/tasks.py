"""Index-preserving fan-out of independent blocking tasks."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Any, Callable, Generic, TypeVar

from tqdm import tqdm

T = TypeVar("T")


class FetchGroup(Generic[T]):
    """Run submitted callables on a bounded thread pool and collect results by slot.

    Results from :meth:`join` line up with submission order no matter which
    task finishes first. Use as a context manager; leaving the block with an
    exception cancels tasks that have not started yet.
    """

    def __init__(
        self,
        max_workers: int,
        show_progress: bool = False,
        desc: str = "Fetching posters",
    ) -> None:
        self.max_workers = max_workers
        self.show_progress = show_progress
        self.desc = desc
        self._executor: ThreadPoolExecutor | None = None
        self._futures: list[Future[T]] = []

    def __enter__(self) -> FetchGroup[T]:
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="poster-fetch"
        )
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._executor is None:
            return
        failed = exc_type is not None
        self._executor.shutdown(wait=not failed, cancel_futures=failed)
        self._executor = None

    def __len__(self) -> int:
        return len(self._futures)

    def submit(self, fn: Callable[..., T], *args: Any) -> int:
        """Schedule ``fn(*args)`` and return the slot its result will occupy."""
        if self._executor is None:
            raise RuntimeError("FetchGroup must be entered before submitting tasks")
        self._futures.append(self._executor.submit(fn, *args))
        return len(self._futures) - 1

    def join(
        self, on_error: Callable[[int, Exception], T] | None = None
    ) -> list[T]:
        """Wait for every task and return results in submission order.

        When *on_error* is given, a task that raised is replaced by
        ``on_error(slot, exc)`` and its siblings are unaffected; otherwise the
        first exception collected is re-raised.
        """
        slots = {future: slot for slot, future in enumerate(self._futures)}
        results: list[T | None] = [None] * len(self._futures)
        for future in tqdm(
            as_completed(slots),
            total=len(slots),
            desc=self.desc,
            unit="poster",
            leave=False,
            disable=not self.show_progress,
        ):
            slot = slots[future]
            try:
                results[slot] = future.result()
            except Exception as exc:
                if on_error is None:
                    raise
                results[slot] = on_error(slot, exc)
        return results  # type: ignore[return-value]
