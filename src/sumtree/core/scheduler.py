"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scheduler.py
Sliding-window scheduler: runs up to N hash jobs at once and emits results in submission order.

ORDERED MODE (default)
----------------------
1. Prime: admit up to N paths, one job each. Fewer than N paths means the source is
   already exhausted and step 2 is skipped.
2. Steady state: take the next path, await the OLDEST job, emit it, admit the new path
   at the tail of the window.
3. Drain: await and emit what is left, oldest first.

The head of the window is always awaited before admitting past it, so output order equals
discovery order no matter which jobs finish first, and at most N files are open at a time.

UNORDERED MODE
--------------
Keeps up to N jobs in flight and emits whichever completes first. Faster when file sizes
vary a lot, but output order is not reproducible.

FAILURE
-------
The first failed job aborts the run: jobs that have not started are cancelled and the error
propagates to the caller. Results emitted before the failure stay emitted.
"""

import logging
from collections import deque
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Deque, Iterable, Optional, Set

from sumtree.core.hasher import HashJob
from sumtree.core.interfaces import HashAlgorithm, ResultSink
from sumtree.core.models import HashResult, default_concurrency

logger = logging.getLogger(__name__)

JobFactory = Callable[[str], Callable[[], HashResult]]


class SlidingWindowScheduler:
    """
    Drives hash jobs for a stream of paths and hands results to a sink.

    Attributes:
        algorithm: Hash algorithm; each job gets a fresh instance
        threads: Window size N (number of concurrent jobs)
        digest_length: Optional truncation of the hex digest
        ordered: Emit in submission order (default) or completion order
        job_factory: Builds the callable run for one path (defaults to HashJob)
    """

    def __init__(
        self,
        algorithm: HashAlgorithm,
        threads: Optional[int] = None,
        digest_length: Optional[int] = None,
        ordered: bool = True,
        job_factory: Optional[JobFactory] = None,
    ):
        self.algorithm = algorithm
        self.threads = threads if threads is not None else default_concurrency()
        self.digest_length = digest_length
        self.ordered = ordered
        self.job_factory = job_factory or self._default_job
        if self.threads < 1:
            raise ValueError("Hashing threads must be at least 1")

    def _default_job(self, path: str) -> Callable[[], HashResult]:
        return HashJob(path, self.algorithm, self.digest_length)

    def run(self, paths: Iterable[str], sink: ResultSink) -> int:
        """
        Hash every path and emit each result to `sink.handle`.

        Returns:
            Number of results emitted

        Raises:
            HashJobError: On the first job failure
            Exception: Whatever the path stream raises
        """
        mode = "ordered" if self.ordered else "unordered"
        logger.debug(f"Scheduler starting ({mode}, window={self.threads}, algorithm={self.algorithm.name})")
        pool = ThreadPoolExecutor(max_workers=self.threads, thread_name_prefix="sumtree-hash")
        try:
            if self.ordered:
                emitted = self._run_ordered(pool, iter(paths), sink)
            else:
                emitted = self._run_unordered(pool, iter(paths), sink)
        except BaseException:
            logger.debug("Scheduler aborting, cancelling pending jobs")
            pool.shutdown(wait=True, cancel_futures=True)
            raise
        pool.shutdown(wait=True)
        logger.debug(f"Scheduler finished, {emitted} result(s) emitted")
        return emitted

    def _submit(self, pool: ThreadPoolExecutor, path: str) -> "Future[HashResult]":
        return pool.submit(self.job_factory(path))

    def _run_ordered(self, pool: ThreadPoolExecutor, paths, sink: ResultSink) -> int:
        window: Deque["Future[HashResult]"] = deque()
        emitted = 0

        # make sure there are N jobs running before looking at results
        exhausted = False
        for _ in range(self.threads):
            path = next(paths, None)
            if path is None:
                exhausted = True
                break
            window.append(self._submit(pool, path))

        if not exhausted:
            for path in paths:
                sink.handle(window.popleft().result())
                emitted += 1
                window.append(self._submit(pool, path))

        while window:
            sink.handle(window.popleft().result())
            emitted += 1
        return emitted

    def _run_unordered(self, pool: ThreadPoolExecutor, paths, sink: ResultSink) -> int:
        pending: Set["Future[HashResult]"] = set()
        emitted = 0

        for path in paths:
            if len(pending) >= self.threads:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                emitted += self._emit_done(done, sink)
            pending.add(self._submit(pool, path))

        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            emitted += self._emit_done(done, sink)
        return emitted

    @staticmethod
    def _emit_done(done: Set["Future[HashResult]"], sink: ResultSink) -> int:
        for future in done:
            sink.handle(future.result())
        return len(done)
