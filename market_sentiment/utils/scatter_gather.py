# market_sentiment/utils/scatter_gather.py

from __future__ import annotations

import concurrent.futures
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Optional, Sequence, TypeVar

from market_sentiment.domain.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class TaskOutcome(Generic[T]):
    key: Hashable
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


class _StartStamp:
    """Records when a task actually starts on a worker thread."""

    def __init__(self, fn: Callable[[], T]) -> None:
        self.fn = fn
        self.started = threading.Event()
        self.started_at = 0.0

    def __call__(self) -> T:
        self.started_at = time.monotonic()
        self.started.set()
        return self.fn()


def gather(
    tasks: Sequence[tuple[Hashable, Callable[[], T]]],
    *,
    timeout: float,
    max_workers: Optional[int] = None,
) -> list[TaskOutcome[T]]:
    """
    Run independent callables concurrently and join their outcomes.

    - Each task gets its own deadline: `timeout` seconds after it starts
      running, so time spent queued behind busy workers does not count.
    - A queued task that never gets a worker within `timeout` per wave of
      `max_workers` tasks is reported as timed out without running.
    - A task that raises or misses its deadline yields a failed TaskOutcome;
      timeouts are reported as UpstreamUnavailable.
    - Outcomes are returned in input order, whatever the completion order.

    Tasks must not share mutable state; the caller merges outcomes.
    """
    if not tasks:
        return []

    size = max(1, min(max_workers or len(tasks), len(tasks)))
    waves = -(-len(tasks) // size)
    pool = concurrent.futures.ThreadPoolExecutor(max_workers=size, thread_name_prefix="gather")
    outcomes: list[TaskOutcome[T]] = []
    try:
        submitted = []
        for key, fn in tasks:
            stamp = _StartStamp(fn)
            submitted.append((key, pool.submit(stamp), stamp))
        # Hung tasks keep their worker; queued tasks must not wait on them forever
        queue_deadline = time.monotonic() + timeout * waves

        for key, future, stamp in submitted:
            try:
                if not stamp.started.wait(max(0.0, queue_deadline - time.monotonic())):
                    raise concurrent.futures.TimeoutError
                remaining = max(0.0, stamp.started_at + timeout - time.monotonic())
                outcomes.append(TaskOutcome(key=key, value=future.result(timeout=remaining)))
            except concurrent.futures.TimeoutError:
                future.cancel()
                logger.warning(
                    "Task timed out",
                    extra={"task": str(key), "timeout_seconds": timeout, "started": stamp.started.is_set()},
                )
                outcomes.append(
                    TaskOutcome(
                        key=key,
                        error=UpstreamUnavailable(f"{key} timed out after {timeout:.1f}s"),
                    )
                )
            except Exception as e:
                outcomes.append(TaskOutcome(key=key, error=e))
    finally:
        # Timed-out calls keep running in their threads; their results are discarded.
        pool.shutdown(wait=False, cancel_futures=True)

    return outcomes
