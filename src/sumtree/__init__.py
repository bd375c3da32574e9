"""
sumtree — hash lots of files fast, in parallel.

Core features:
- Bounded pipeline: path source → bounded conduit → sliding window of N hash jobs → result sink
- Output always in discovery order (argument order, depth-first directory order, or stdin line order)
- At most N files open at a time, no unbounded buffering between discovery and hashing
- Pluggable digest algorithms: xxHash family (default xxh64) and hashlib (md5, sha1, sha2, blake2)
- md5sum-compatible output mode
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("sumtree")
except PackageNotFoundError:
    import tomllib
    from pathlib import Path

    _pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        with open(_pyproject, "rb") as f:
            __version__ = tomllib.load(f)["project"]["version"]
    except OSError:
        __version__ = "0.0.0"

# Public API: only what users should import directly
from sumtree.commands import HashCommand
from sumtree.core import (
    HashingParams, HashResult, RunStatistics, InputKind,
    SlidingWindowScheduler, BoundedConduit, DirectoryWalker, ListSource, LineReaderSource,
    get_algorithm, available_algorithms,
)
from sumtree.services import ResultSink

__all__ = [
    "HashCommand",
    "HashingParams",
    "HashResult",
    "RunStatistics",
    "InputKind",
    "SlidingWindowScheduler",
    "BoundedConduit",
    "DirectoryWalker",
    "ListSource",
    "LineReaderSource",
    "ResultSink",
    "get_algorithm",
    "available_algorithms",
    "__version__",
]
