"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exception hierarchy for hashing runs. Every error here is fatal to the run.
"""
from typing import Optional


class SumtreeError(RuntimeError):
    """Base class for all fatal run errors."""


class InputResolutionError(SumtreeError):
    """The given input is neither a readable file, a directory, nor the stdin marker."""


class TraversalError(SumtreeError):
    """A directory entry could not be inspected during a walk."""

    def __init__(self, path: str, message: str):
        super().__init__(f"Cannot walk {path}: {message}")
        self.path = path


class HashJobError(SumtreeError):
    """A file could not be opened, or a read failed partway through hashing."""

    def __init__(self, path: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"Failed to hash {path}: {message}")
        self.path = path
        self.cause = cause
