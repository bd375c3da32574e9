"""
Unified command orchestrator for hashing runs.
This is the SINGLE source of truth for run logic, used by the CLI and by library callers.

Resolves the requested input into a path source, then either runs the bounded pipeline
(source → conduit → sliding-window scheduler → result sink) or, for exactly one plain file,
hashes it directly without any concurrent machinery.
"""
import os
import logging
from typing import BinaryIO, Optional, Sequence, TextIO

from sumtree.core.conduit import BoundedConduit
from sumtree.core.errors import InputResolutionError
from sumtree.core.hasher import get_algorithm, hash_file
from sumtree.core.interfaces import PathSource
from sumtree.core.models import HashingParams, HashResult, InputKind, ResolvedInput, RunStatistics, STDIN_MARKER
from sumtree.core.scanner import DirectoryWalker
from sumtree.core.scheduler import SlidingWindowScheduler
from sumtree.core.sources import LineReaderSource, ListSource
from sumtree.services.output_service import ResultSink

logger = logging.getLogger(__name__)


class HashCommand:
    """
    Orchestrates a whole hashing run.

    Usage:
        params = HashingParams(threads=8, compatible=True)
        command = HashCommand(params)
        stats = command.execute(["/data/photos"])
    """

    def __init__(
        self,
        params: HashingParams,
        output: Optional[TextIO] = None,
        diagnostics: Optional[TextIO] = None,
        stdin: Optional[BinaryIO] = None,
        show_progress: bool = True,
    ):
        self.params = params
        self.algorithm = get_algorithm(params.algorithm)
        self.output = output
        self.diagnostics = diagnostics
        self.stdin = stdin
        self.show_progress = show_progress

    @staticmethod
    def resolve_input(inputs: Sequence[str]) -> ResolvedInput:
        """
        Classify the input arguments.

        Raises:
            InputResolutionError: If nothing was given, or a single input is neither
                                  the stdin marker, a directory nor a file
        """
        paths = [os.fspath(p) for p in inputs]
        if not paths:
            raise InputResolutionError("No input given")

        if len(paths) > 1:
            return ResolvedInput(InputKind.FILE_LIST, paths)

        single = paths[0]
        if single == STDIN_MARKER:
            return ResolvedInput(InputKind.STDIN)
        if os.path.isdir(single):
            return ResolvedInput(InputKind.DIRECTORY, paths)
        if os.path.isfile(single):
            return ResolvedInput(InputKind.SINGLE_FILE, paths)
        raise InputResolutionError(f"Given input is not a directory, file, or - for stdin: {single}")

    def build_source(self, resolved: ResolvedInput) -> PathSource:
        """Path source for a pipeline run. SINGLE_FILE inputs never reach the pipeline."""
        if resolved.kind is InputKind.STDIN:
            return LineReaderSource(self.stdin)
        if resolved.kind is InputKind.DIRECTORY:
            return DirectoryWalker(resolved.root, walkers=self.params.walkers, strict=self.params.strict_walk)
        if resolved.kind is InputKind.FILE_LIST:
            return ListSource(resolved.paths)
        raise ValueError(f"No path source for {resolved.kind.value} input")

    def create_sink(self, show_progress: Optional[bool] = None) -> ResultSink:
        if show_progress is None:
            show_progress = self.show_progress
        return ResultSink.from_params(
            self.params,
            output=self.output,
            diagnostics=self.diagnostics,
            show_progress=show_progress,
        )

    def execute(self, inputs: Sequence[str]) -> RunStatistics:
        """
        Resolve `inputs` and hash everything they name.

        Returns:
            Statistics of the run (left at zero in quiet mode)

        Raises:
            InputResolutionError, TraversalError, HashJobError: On the first fatal error
        """
        resolved = self.resolve_input(inputs)
        logger.debug(f"Input resolved: {resolved.kind.display_name}")

        if resolved.kind is InputKind.SINGLE_FILE:
            return self.hash_single_file(resolved.root)
        return self.hash_from_source(self.build_source(resolved))

    def hash_single_file(self, path: str) -> RunStatistics:
        """Hash one file synchronously: no conduit, no window, no worker threads."""
        sink = self.create_sink(show_progress=False)
        sink.start()
        digest, size = hash_file(path, self.algorithm.new(), self.params.digest_length)
        sink.handle(HashResult(path=path, digest=digest, size=size))
        sink.finish()
        return sink.stats

    def hash_from_source(self, source: PathSource) -> RunStatistics:
        """Run the bounded pipeline over any path source."""
        sink = self.create_sink()
        scheduler = SlidingWindowScheduler(
            self.algorithm,
            threads=self.params.threads,
            digest_length=self.params.digest_length,
            ordered=self.params.ordered,
        )

        sink.start()
        try:
            with BoundedConduit(source, self.params.queue_length) as conduit:
                scheduler.run(conduit, sink)
        except BaseException:
            sink.abort()
            raise
        sink.finish()
        return sink.stats
