"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file hashing using pluggable hash algorithms.

A HashJob opens one file, streams it through a fresh HashFunction in fixed-size chunks,
finalizes the digest and hex-encodes it. Truncation is a display-only prefix cut of the
hex string, never a re-derivation of the digest bytes.
"""

import hashlib
import logging
from typing import BinaryIO, Callable, Dict, List, Optional, Tuple

import xxhash

from sumtree.core.errors import HashJobError
from sumtree.core.interfaces import HashAlgorithm, HashFunction
from sumtree.core.models import HashResult

logger = logging.getLogger(__name__)

READ_BUFFER_SIZE = 8 * 1024  # buffered reader read-ahead
HASH_CHUNK_SIZE = 1024  # bytes fed to update() per call


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    """xxHash family (xxh64, xxh3_64, xxh128) from the `xxhash` library."""

    _CONSTRUCTORS: Dict[str, Callable[[], HashFunction]] = {
        "xxh64": xxhash.xxh64,
        "xxh3_64": xxhash.xxh3_64,
        "xxh128": xxhash.xxh128,
    }

    def __init__(self, name: str = "xxh64"):
        if name not in self._CONSTRUCTORS:
            raise ValueError(f"Unknown xxhash variant: '{name}'")
        self.name = name
        self._constructor = self._CONSTRUCTORS[name]

    @property
    def digest_size(self) -> int:
        return self._constructor().digest_size

    def new(self) -> HashFunction:
        return self._constructor()

    def __repr__(self):
        return f"<XXHashAlgorithmImpl {self.name}>"


class HashlibAlgorithmImpl(HashAlgorithm):
    """Any fixed-size algorithm from `hashlib` (md5, sha1, sha256, sha512, blake2b, blake2s)."""

    SUPPORTED = ("md5", "sha1", "sha256", "sha512", "blake2b", "blake2s")

    def __init__(self, name: str = "sha256"):
        if name not in self.SUPPORTED:
            raise ValueError(f"Unknown hashlib algorithm: '{name}'")
        self.name = name

    @property
    def digest_size(self) -> int:
        return hashlib.new(self.name).digest_size

    def new(self) -> HashFunction:
        return hashlib.new(self.name)

    def __repr__(self):
        return f"<HashlibAlgorithmImpl {self.name}>"


def available_algorithms() -> List[str]:
    """Names accepted by `get_algorithm`, default first."""
    return list(XXHashAlgorithmImpl._CONSTRUCTORS) + list(HashlibAlgorithmImpl.SUPPORTED)


def get_algorithm(name: str) -> HashAlgorithm:
    """
    Build the named algorithm.

    Raises:
        ValueError: If the name is not one of `available_algorithms()`
    """
    key = name.strip().lower()
    if key in XXHashAlgorithmImpl._CONSTRUCTORS:
        return XXHashAlgorithmImpl(key)
    if key in HashlibAlgorithmImpl.SUPPORTED:
        return HashlibAlgorithmImpl(key)
    raise ValueError(
        f"Unknown hash algorithm: '{name}'. "
        f"Valid options: {', '.join(available_algorithms())}"
    )


def truncate_digest(hex_digest: str, digest_length: Optional[int] = None) -> str:
    """
    Cut a hex digest down to at most `digest_length` characters.
    None leaves the digest untouched.
    """
    if digest_length is None:
        return hex_digest
    if digest_length < 1:
        raise ValueError("Digest length must be a positive integer")
    return hex_digest[:digest_length]


def hash_reader(reader: BinaryIO, hasher: HashFunction,
                chunk_size: int = HASH_CHUNK_SIZE) -> Tuple[bytes, int]:
    """
    Feed everything left in `reader` to `hasher`, chunk by chunk.

    Returns:
        (digest bytes, number of bytes read)
    """
    size = 0
    while True:
        chunk = reader.read(chunk_size)
        if not chunk:
            # EOF
            break
        hasher.update(chunk)
        size += len(chunk)
    return hasher.digest(), size


def _open_file(path: str) -> BinaryIO:
    return open(path, "rb", buffering=READ_BUFFER_SIZE)


def hash_file(path: str, hasher: HashFunction, digest_length: Optional[int] = None,
              chunk_size: int = HASH_CHUNK_SIZE) -> Tuple[str, int]:
    """
    Hash one file with a fresh accumulator.

    Returns:
        (lowercase hex digest, possibly truncated; total bytes read)

    Raises:
        HashJobError: If the file cannot be opened or a read fails mid-stream
    """
    try:
        with _open_file(path) as f:
            digest, size = hash_reader(f, hasher, chunk_size)
    except OSError as e:
        raise HashJobError(path, e.strerror or str(e), cause=e) from e
    return truncate_digest(digest.hex(), digest_length), size


class HashJob:
    """
    Unit of work for the scheduler: one path, one fresh capability instance.
    Callable so it can be submitted straight to an executor.
    """

    def __init__(self, path: str, algorithm: HashAlgorithm, digest_length: Optional[int] = None,
                 chunk_size: int = HASH_CHUNK_SIZE):
        self.path = path
        self.algorithm = algorithm
        self.digest_length = digest_length
        self.chunk_size = chunk_size

    def run(self) -> HashResult:
        digest, size = hash_file(self.path, self.algorithm.new(), self.digest_length, self.chunk_size)
        logger.debug(f"Hashed {self.path} ({size} bytes)")
        return HashResult(path=self.path, digest=digest, size=size)

    __call__ = run

    def __repr__(self):
        return f"<HashJob path={self.path}>"
