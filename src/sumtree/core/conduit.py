"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/conduit.py
Bounded FIFO between a path source and the scheduler.

A single feeder thread pulls paths from the source and puts them on a bounded queue.
A full queue suspends the feeder; an empty, still-open queue suspends the consumer.
A source error travels through the queue and is re-raised on the consumer side.
"""

import logging
import queue
import threading
from typing import Iterator, Optional, Union

from sumtree.core.interfaces import PathSource

logger = logging.getLogger(__name__)

_PUT_POLL_SECONDS = 0.1
_JOIN_TIMEOUT_SECONDS = 1.0


class _EndOfSource:
    """Sentinel put on the queue once the source is exhausted."""


class _SourceFailure:
    """Carries a source error across the queue."""

    def __init__(self, error: Exception):
        self.error = error


_Item = Union[str, _EndOfSource, _SourceFailure]


class BoundedConduit:
    """
    Adapts any PathSource into a blocking, capacity-limited stream of paths.

    Usage:
        with BoundedConduit(source, capacity=12) as conduit:
            for path in conduit:
                ...
    """

    def __init__(self, source: PathSource, capacity: int):
        if capacity < 1:
            raise ValueError("Conduit capacity must be at least 1")
        self.source = source
        self.capacity = capacity
        self._q: "queue.Queue[_Item]" = queue.Queue(capacity)
        self._stop = threading.Event()
        self._exhausted = False
        self._thread: Optional[threading.Thread] = None

    def start(self) -> "BoundedConduit":
        if self._thread is not None:
            raise RuntimeError("Conduit already started")
        self._thread = threading.Thread(target=self._producer, name="sumtree-feeder", daemon=True)
        self._thread.start()
        logger.debug(f"Conduit started (capacity={self.capacity})")
        return self

    def qsize(self) -> int:
        return self._q.qsize()

    @property
    def is_closed(self) -> bool:
        return self._stop.is_set()

    def _producer(self) -> None:
        paths = self.source.iter_paths()
        sent = 0
        try:
            for path in paths:
                if not self._put(path):
                    logger.debug(f"Conduit closed by consumer after {sent} path(s)")
                    return
                sent += 1
        except Exception as e:
            logger.debug(f"Path source failed after {sent} path(s): {e}")
            self._put(_SourceFailure(e))
            return
        finally:
            close = getattr(paths, "close", None)
            if close is not None:
                close()
        logger.debug(f"Path source exhausted after {sent} path(s)")
        self._put(_EndOfSource())

    def _put(self, item: _Item) -> bool:
        """Blocking put that gives up once the conduit is closed."""
        while not self._stop.is_set():
            try:
                self._q.put(item, timeout=_PUT_POLL_SECONDS)
                return True
            except queue.Full:
                continue
        return False

    def receive(self) -> Optional[str]:
        """
        Next path, blocking while the conduit is empty and the source still open.
        Returns None once the source is exhausted.

        Raises:
            Exception: Whatever the path source raised, re-raised here
        """
        if self._exhausted:
            return None
        if self._thread is None:
            self.start()
        item = self._q.get()
        if isinstance(item, _EndOfSource):
            self._exhausted = True
            return None
        if isinstance(item, _SourceFailure):
            self._exhausted = True
            raise item.error
        return item

    def __iter__(self) -> Iterator[str]:
        while True:
            path = self.receive()
            if path is None:
                return
            yield path

    def close(self) -> None:
        """Stop the feeder and drop anything still buffered."""
        self._stop.set()
        while True:
            try:
                self._q.get_nowait()
            except queue.Empty:
                break
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=_JOIN_TIMEOUT_SECONDS)
        self._exhausted = True

    def __enter__(self) -> "BoundedConduit":
        if self._thread is None:
            self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
