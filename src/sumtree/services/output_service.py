"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/output_service.py
Result sink: one output line per hashed file, running totals, final summary and live progress.
"""
import sys
import logging
from typing import Optional, TextIO

from rich.console import Console
from rich.progress import (
    FileSizeColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TransferSpeedColumn,
)

from sumtree.core.interfaces import ResultSink as ResultSinkProtocol
from sumtree.core.models import DEFAULT_SEPARATOR, HashingParams, HashResult, RunStatistics
from sumtree.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


def format_summary(total_files: int, total_bytes: int, elapsed: float, rate: int) -> str:
    """One-line run summary written to the diagnostic stream."""
    return (
        f"{total_files} files ({ConvertUtils.bytes_to_human(total_bytes)}) "
        f"hashed in {ConvertUtils.duration_to_human(elapsed)} "
        f"({ConvertUtils.rate_to_human(rate)})"
    )


class ProgressDisplay:
    """
    Live spinner on the diagnostic stream: bytes so far, elapsed time, throughput and the
    most recently completed path. Cleared when stopped.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(),
            FileSizeColumn(),
            TextColumn("|"),
            TimeElapsedColumn(),
            TextColumn("|"),
            TransferSpeedColumn(),
            TextColumn("|"),
            TextColumn("{task.description}", markup=False),
            console=self.console,
            transient=True,
            redirect_stdout=False,
            redirect_stderr=False,
        )
        self._task_id = None

    def start(self) -> None:
        if self._task_id is None:
            self._task_id = self._progress.add_task("", total=None)
        self._progress.start()

    def update(self, result: HashResult) -> None:
        if self._task_id is None:
            return
        self._progress.update(
            self._task_id,
            advance=result.size,
            description=f"{ConvertUtils.bytes_to_human(result.size)} {result.path!r}",
        )

    def stop(self) -> None:
        self._progress.stop()


class ResultSink(ResultSinkProtocol):
    """
    Writes `path<sep>digest` lines (or `digest<sep>path` when hash_first) in emission order.
    Keeps run statistics unless quiet; prints the summary on finish unless quiet.
    """

    def __init__(
        self,
        separator: str = DEFAULT_SEPARATOR,
        hash_first: bool = False,
        quiet: bool = False,
        output: Optional[TextIO] = None,
        diagnostics: Optional[TextIO] = None,
        progress: Optional[ProgressDisplay] = None,
    ):
        self.separator = separator
        self.hash_first = hash_first
        self.quiet = quiet
        self.output = output if output is not None else sys.stdout
        self.diagnostics = diagnostics if diagnostics is not None else sys.stderr
        self.progress = progress
        self.stats = RunStatistics()

    @classmethod
    def from_params(
        cls,
        params: HashingParams,
        output: Optional[TextIO] = None,
        diagnostics: Optional[TextIO] = None,
        show_progress: bool = True,
    ) -> "ResultSink":
        progress = None
        if show_progress and not params.quiet:
            console = Console(file=diagnostics or sys.stderr)
            # a live display only makes sense on a terminal
            if console.is_terminal:
                progress = ProgressDisplay(console)
        return cls(
            separator=params.separator,
            hash_first=params.hash_first,
            quiet=params.quiet,
            output=output,
            diagnostics=diagnostics,
            progress=progress,
        )

    def format_line(self, path: str, digest: str) -> str:
        if self.hash_first:
            return f"{digest}{self.separator}{path}"
        return f"{path}{self.separator}{digest}"

    def start(self) -> None:
        """Restart the clock and show the progress display, if any."""
        self.stats = RunStatistics()
        if self.progress is not None:
            self.progress.start()

    def handle(self, result: HashResult) -> None:
        self.output.write(self.format_line(result.path, result.digest) + "\n")

        if self.progress is not None:
            self.progress.update(result)

        if not self.quiet:
            self.stats.record(result.size)

    def summary(self, elapsed: Optional[float] = None) -> str:
        elapsed = self.stats.elapsed() if elapsed is None else elapsed
        return format_summary(
            self.stats.total_files,
            self.stats.total_bytes,
            elapsed,
            self.stats.throughput(elapsed),
        )

    def abort(self) -> None:
        """Tear down the progress display after a failed run; no summary."""
        if self.progress is not None:
            self.progress.stop()
        self.output.flush()

    def finish(self) -> None:
        if self.progress is not None:
            self.progress.stop()
        self.output.flush()

        if not self.quiet:
            elapsed = self.stats.elapsed()
            logger.debug(f"Run finished in {elapsed:.3f}s")
            print(self.summary(elapsed), file=self.diagnostics)
