"""
Core hashing engine: path sources, bounded conduit, sliding-window scheduler and hash jobs.

This package contains the performance-critical foundation of sumtree:
- DirectoryWalker: concurrent recursive traversal, depth first, sorted per directory
- ListSource / LineReaderSource: explicit paths and line-delimited path lists
- BoundedConduit: capacity-limited queue between discovery and hashing
- SlidingWindowScheduler: N concurrent jobs, results emitted in submission order
- HashJob + algorithms: chunked streaming through xxHash or hashlib digests
- Models: HashResult, RunStatistics, HashingParams

All components are pure Python with no terminal dependencies, suitable for library usage.
"""

from .errors import SumtreeError, InputResolutionError, TraversalError, HashJobError
from .models import HashingParams, HashResult, RunStatistics, InputKind, ResolvedInput
from .hasher import (
    HashJob, XXHashAlgorithmImpl, HashlibAlgorithmImpl,
    get_algorithm, available_algorithms, hash_file, truncate_digest,
)
from .sources import ListSource, LineReaderSource
from .scanner import DirectoryWalker
from .conduit import BoundedConduit
from .scheduler import SlidingWindowScheduler

__all__ = [
    "SumtreeError",
    "InputResolutionError",
    "TraversalError",
    "HashJobError",
    "HashingParams",
    "HashResult",
    "RunStatistics",
    "InputKind",
    "ResolvedInput",
    "HashJob",
    "XXHashAlgorithmImpl",
    "HashlibAlgorithmImpl",
    "get_algorithm",
    "available_algorithms",
    "hash_file",
    "truncate_digest",
    "ListSource",
    "LineReaderSource",
    "DirectoryWalker",
    "BoundedConduit",
    "SlidingWindowScheduler",
]
