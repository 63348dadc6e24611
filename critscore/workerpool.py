"""Run a fixed number of worker threads and wait for them to finish."""

from __future__ import annotations

import threading
from typing import Callable, List


def worker_pool(n: int, worker: Callable[[int], None]) -> Callable[[], None]:
    """Start ``n`` threads, each calling ``worker`` with its index from 0.

    Returns a function that waits for every worker to finish. If any worker
    raised, the first exception recorded is raised again from that function.
    """
    if n < 0:
        raise ValueError("number of workers must not be negative")

    errors: List[BaseException] = []
    lock = threading.Lock()

    def run(index: int) -> None:
        try:
            worker(index)
        except BaseException as exc:  # noqa: BLE001 - reported by wait()
            with lock:
                errors.append(exc)

    threads = [
        threading.Thread(target=run, args=(index,), daemon=True)
        for index in range(n)
    ]
    for thread in threads:
        thread.start()

    def wait() -> None:
        for thread in threads:
            thread.join()
        if errors:
            raise errors[0]

    return wait