"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements recursive directory traversal for the hashing pipeline.
Features:
- Uses os.scandir for fast listings, read ahead on a pool of walker threads
- Yields regular files only, depth first, entries sorted by name within each directory
- Never follows symbolic links
- Fails fast on the first unreadable entry unless running non-strict
"""

import os
import logging
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Deque, Iterator, List, Optional, Tuple

from sumtree.core.errors import TraversalError
from sumtree.core.interfaces import PathSource
from sumtree.core.models import default_concurrency

logger = logging.getLogger(__name__)

# (path, is_dir) pairs for one directory, sorted by entry name
Listing = List[Tuple[str, bool]]


class DirectoryWalker(PathSource):
    """
    Walks a directory tree with up to `walkers` concurrent directory listings.

    Output order does not depend on the number of walkers: subdirectory listings are
    fetched ahead of time, but paths are yielded strictly depth first.

    Attributes:
        root: Root directory to walk
        walkers: Number of listing threads
        strict: Raise TraversalError on unreadable entries (default) instead of skipping them
    """

    def __init__(self, root: str, walkers: Optional[int] = None, strict: bool = True):
        self.root = os.fspath(root)
        self.walkers = walkers if walkers is not None else default_concurrency()
        self.strict = strict
        if self.walkers < 1:
            raise ValueError("Walker threads must be at least 1")

    def iter_paths(self) -> Iterator[str]:
        if not os.path.isdir(self.root):
            raise TraversalError(self.root, "not a directory")

        logger.debug(f"Walking {self.root} with {self.walkers} walker(s), strict={self.strict}")
        pool = ThreadPoolExecutor(max_workers=self.walkers, thread_name_prefix="sumtree-walk")
        try:
            stack = [self._expand(pool, pool.submit(self._list_dir, self.root))]
            while stack:
                item = next(stack[-1], None)
                if item is None:
                    stack.pop()
                    continue
                path, listing = item
                if listing is None:
                    yield path
                else:
                    stack.append(self._expand(pool, listing))
        finally:
            pool.shutdown(wait=True, cancel_futures=True)

    def _expand(self, pool: ThreadPoolExecutor,
                listing: "Future[Listing]") -> Iterator[Tuple[str, Optional["Future[Listing]"]]]:
        """
        Wait for one directory listing and yield its entries in order.
        Files map to None, subdirectories to the future of their own listing. At most
        `walkers` sibling listings are in flight ahead of the walk at this level.
        """
        entries = listing.result()
        subdirs = iter([path for path, is_dir in entries if is_dir])
        ahead: Deque["Future[Listing]"] = deque()

        def read_ahead() -> None:
            while len(ahead) < self.walkers:
                subdir = next(subdirs, None)
                if subdir is None:
                    return
                ahead.append(pool.submit(self._list_dir, subdir))

        read_ahead()
        for path, is_dir in entries:
            if not is_dir:
                yield path, None
                continue
            future = ahead.popleft()
            # next siblings are listed while this subtree is walked
            read_ahead()
            yield path, future

    def _list_dir(self, directory: str) -> Listing:
        """
        List one directory: regular files and real (non-symlink) subdirectories, sorted by name.
        """
        entries: Listing = []
        try:
            with os.scandir(directory) as it:
                for entry in sorted(it, key=lambda e: e.name):
                    if entry.is_symlink():
                        logger.debug(f"Skipping symbolic link: {entry.path}")
                        continue
                    if entry.is_dir(follow_symlinks=False):
                        entries.append((entry.path, True))
                    elif entry.is_file(follow_symlinks=False):
                        entries.append((entry.path, False))
                    else:
                        logger.debug(f"Skipping special file: {entry.path}")
        except OSError as e:
            if self.strict:
                raise TraversalError(directory, e.strerror or str(e)) from e
            logger.warning(f"Skipping unreadable directory {directory}: {e}")
            return []
        return entries
