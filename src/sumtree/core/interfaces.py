"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the hashing pipeline.
These protocols enforce structural typing using Python's `typing.Protocol` so the
scheduler never depends on a concrete digest algorithm or path source.

Key Components:
---------------
- HashFunction: Stateful, incremental digest accumulator (hashlib / xxhash objects fit as-is).
- HashAlgorithm: Named factory for fresh HashFunction instances.
- PathSource: Lazy, finite, non-restartable producer of file paths.
- ResultSink: Consumer of completed hash results in emission order.
"""

from typing import Protocol, Iterator
from sumtree.core.models import HashResult


class HashFunction(Protocol):
    """Incremental digest accumulator."""

    def update(self, data: bytes) -> None: ...

    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256, MD5, or xxHash
    without affecting the scheduler or the hash job.
    """

    name: str

    @property
    def digest_size(self) -> int:
        """Size of a finalized digest in bytes."""
        ...

    def new(self) -> HashFunction:
        """Returns a fresh accumulator."""
        ...


class PathSource(Protocol):
    """
    Interface for anything that discovers file paths.

    Methods:
        iter_paths: Yields paths in discovery order, raising on the first unrecoverable error.
    """

    def iter_paths(self) -> Iterator[str]:
        ...


class ResultSink(Protocol):
    """
    Interface for consumers of completed hash jobs.

    The scheduler calls `handle` once per result, in emission order. The caller that owns the
    run calls `finish` exactly once after the last result of a successful run.
    """

    def handle(self, result: HashResult) -> None:
        ...

    def finish(self) -> None:
        ...
