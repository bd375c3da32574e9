"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sources.py
Path sources that need no traversal: an explicit list and a line-delimited stream.
The directory variant lives in core/scanner.py.
"""

import os
import sys
import logging
from typing import BinaryIO, Iterable, Iterator, Optional, Union

from sumtree.core.errors import InputResolutionError
from sumtree.core.interfaces import PathSource

logger = logging.getLogger(__name__)


class ListSource(PathSource):
    """Paths known upfront, yielded in the given order."""

    def __init__(self, paths: Iterable[Union[str, os.PathLike]]):
        self.paths = [os.fspath(p) for p in paths]

    def iter_paths(self) -> Iterator[str]:
        logger.debug(f"Yielding {len(self.paths)} listed path(s)")
        yield from self.paths


class LineReaderSource(PathSource):
    """
    One path per line from a byte stream (stdin by default), in input order.

    Each line is taken verbatim apart from its terminator ('\\n' or '\\r\\n');
    nothing is validated here, a bad path fails when its hash job opens it.
    """

    def __init__(self, stream: Optional[BinaryIO] = None):
        self.stream = stream

    def iter_paths(self) -> Iterator[str]:
        stream = self.stream if self.stream is not None else sys.stdin.buffer
        count = 0
        try:
            for raw in stream:
                yield self._line_to_path(raw)
                count += 1
        except OSError as e:
            raise InputResolutionError(f"Failed to read path list: {e}") from e
        logger.debug(f"Path list exhausted after {count} line(s)")

    @staticmethod
    def _line_to_path(raw: Union[bytes, str]) -> str:
        if isinstance(raw, str):
            raw = os.fsencode(raw)
        if raw.endswith(b"\n"):
            raw = raw[:-1]
            if raw.endswith(b"\r"):
                raw = raw[:-1]
        return os.fsdecode(raw)
