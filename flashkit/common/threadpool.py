"""A fixed-size pool of worker threads fed from a shared task queue."""

from __future__ import annotations

import threading
from collections import deque
from concurrent.futures import Future
from typing import Any, Callable, Optional


class ThreadPool:
    """Runs submitted callables on a fixed number of worker threads.

    Each worker first calls ``init_fn(thread_id)`` if given. Tasks still
    queued when the pool shuts down are run before the workers exit.
    """

    def __init__(self, threads: int, init_fn: Optional[Callable[[int], Any]] = None):
        self._tasks: deque = deque()
        self._condition = threading.Condition()
        self._stop = False
        self._workers = [
            threading.Thread(target=self._worker, args=(thread_id, init_fn), daemon=True)
            for thread_id in range(threads)
        ]
        for worker in self._workers:
            worker.start()

    def _worker(self, thread_id: int, init_fn: Optional[Callable[[int], Any]]) -> None:
        if init_fn is not None:
            init_fn(thread_id)
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._stop or self._tasks)
                if self._stop and not self._tasks:
                    return
                future, fn, args, kwargs = self._tasks.popleft()
            if not future.set_running_or_notify_cancel():
                continue
            try:
                result = fn(*args, **kwargs)
            except BaseException as exc:  # delivered through the future
                future.set_exception(exc)
            else:
                future.set_result(result)

    def enqueue(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Queue ``fn(*args, **kwargs)`` and return a future for its result."""
        future: Future = Future()
        with self._condition:
            if self._stop:
                raise RuntimeError("enqueue on stopped ThreadPool")
            self._tasks.append((future, fn, args, kwargs))
            self._condition.notify()
        return future

    def shutdown(self) -> None:
        """Stop accepting work, finish queued tasks and join all workers."""
        with self._condition:
            self._stop = True
            self._condition.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()