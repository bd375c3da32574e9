"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for hashing runs: job results, run statistics, input classification and parameters.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum
import math
import os
import time


DEFAULT_SEPARATOR = "\t"
COMPATIBLE_SEPARATOR = "  "
DEFAULT_BUFFER_FACTOR = 3.0
STDIN_MARKER = "-"

SEPARATOR_ESCAPES = {
    "\\t": "\t",
    "\\0": "\0",
}


def default_concurrency() -> int:
    """Available CPU count, never less than one."""
    return os.cpu_count() or 1


def conduit_capacity(n_jobs: int, buffer_factor: float = DEFAULT_BUFFER_FACTOR) -> int:
    """Capacity of the path conduit for `n_jobs` hashing workers."""
    return int(math.ceil(n_jobs * buffer_factor))


# =============================
# Enums
# =============================

class InputKind(Enum):
    """
    How the requested input is turned into paths.
    """
    STDIN = "stdin"
    DIRECTORY = "directory"
    SINGLE_FILE = "single-file"
    FILE_LIST = "file-list"

    @property
    def display_name(self) -> str:
        """Human-readable name for log messages."""
        mapping = {
            InputKind.STDIN: "Paths from stdin",
            InputKind.DIRECTORY: "Directory walk",
            InputKind.SINGLE_FILE: "Single file",
            InputKind.FILE_LIST: "File list",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class HashResult:
    """
    Outcome of one hash job: the path, the (possibly truncated) hex digest and the bytes read.
    """
    path: str
    digest: str
    size: int

    def __repr__(self):
        return f"<HashResult path={self.path}, size={self.size}>"


@dataclass
class RunStatistics:
    """
    Running totals for a hashing run. Mutated by the result sink only.
    """
    started_at: float = field(default_factory=time.monotonic)
    total_files: int = 0
    total_bytes: int = 0

    def record(self, size: int) -> None:
        self.total_files += 1
        self.total_bytes += size

    def elapsed(self, now: Optional[float] = None) -> float:
        """Seconds since the run started."""
        now = time.monotonic() if now is None else now
        return max(0.0, now - self.started_at)

    def throughput(self, elapsed: Optional[float] = None) -> int:
        """Average bytes per second, floored. Zero when no time has passed."""
        elapsed = self.elapsed() if elapsed is None else elapsed
        if elapsed <= 0:
            return 0
        return int(math.floor(self.total_bytes / elapsed))


@dataclass
class ResolvedInput:
    """
    Classified input: what kind of path source to build and the paths it starts from.
    """
    kind: InputKind
    paths: List[str] = field(default_factory=list)

    @property
    def root(self) -> str:
        """The single path for DIRECTORY and SINGLE_FILE inputs."""
        if len(self.paths) != 1:
            raise ValueError(f"{self.kind.value} input has {len(self.paths)} paths, expected one")
        return self.paths[0]


"""
DTO for hashing parameters with built-in validation.
Interface-agnostic: used by the CLI and by library callers.
"""

@dataclass(frozen=True)
class HashingParams:
    """Parameters for a hashing run, validated once and immutable afterwards."""
    threads: int = field(default_factory=default_concurrency)
    walkers: int = field(default_factory=default_concurrency)
    digest_length: Optional[int] = None
    quiet: bool = False
    separator: Optional[str] = None
    compatible: bool = False
    algorithm: str = "xxh64"
    buffer_factor: float = DEFAULT_BUFFER_FACTOR
    ordered: bool = True
    strict_walk: bool = True

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if self.threads < 1:
            raise ValueError("Hashing threads must be at least 1")

        if self.walkers < 1:
            raise ValueError("Walker threads must be at least 1")

        if self.digest_length is not None and self.digest_length < 1:
            raise ValueError("Digest length must be a positive integer")

        if self.buffer_factor < 1:
            raise ValueError("Buffer factor cannot be less than 1")

        if not self.algorithm:
            raise ValueError("Algorithm name cannot be empty")

        if self.separator is None:
            separator = COMPATIBLE_SEPARATOR if self.compatible else DEFAULT_SEPARATOR
        else:
            separator = self.unescape_separator(self.separator)
        object.__setattr__(self, "separator", separator)

    @property
    def hash_first(self) -> bool:
        """Compatible mode prints the digest before the path."""
        return self.compatible

    @property
    def queue_length(self) -> int:
        return conduit_capacity(self.threads, self.buffer_factor)

    @staticmethod
    def unescape_separator(separator: str) -> str:
        """
        Map the literal escapes '\\t' and '\\0' to TAB and NUL.
        Escapes cannot be mixed with other characters; anything else is used verbatim.
        """
        return SEPARATOR_ESCAPES.get(separator, separator)
