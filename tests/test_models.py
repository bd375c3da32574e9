"""
Tests for hashing parameters, run statistics and input models.
"""
import dataclasses

import pytest

from sumtree.core.models import (
    COMPATIBLE_SEPARATOR,
    DEFAULT_SEPARATOR,
    HashingParams,
    InputKind,
    ResolvedInput,
    RunStatistics,
    conduit_capacity,
    default_concurrency,
)


class TestHashingParamsValidation:
    """Invalid parameters are rejected at construction."""

    def test_defaults(self):
        params = HashingParams()
        assert params.threads == default_concurrency()
        assert params.walkers == default_concurrency()
        assert params.digest_length is None
        assert params.algorithm == "xxh64"
        assert params.ordered is True
        assert params.strict_walk is True
        assert params.separator == DEFAULT_SEPARATOR
        assert params.hash_first is False

    @pytest.mark.parametrize("kwargs, message", [
        ({"threads": 0}, "Hashing threads"),
        ({"walkers": 0}, "Walker threads"),
        ({"digest_length": 0}, "Digest length"),
        ({"buffer_factor": 0.5}, "Buffer factor"),
        ({"algorithm": ""}, "Algorithm"),
    ])
    def test_rejects_invalid(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            HashingParams(**kwargs)

    def test_frozen_after_validation(self):
        params = HashingParams(threads=2, separator="\\t")
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.threads = 0
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.separator = ","
        assert params.threads == 2
        assert params.separator == "\t"

    def test_queue_length_follows_threads_and_factor(self):
        assert HashingParams(threads=4).queue_length == 12
        assert HashingParams(threads=3, buffer_factor=1.5).queue_length == 5
        assert HashingParams(threads=1, buffer_factor=1.0).queue_length == 1


class TestSeparator:
    """Separator defaults and escape handling."""

    def test_compatible_mode_defaults(self):
        params = HashingParams(compatible=True)
        assert params.separator == COMPATIBLE_SEPARATOR
        assert params.hash_first is True

    def test_explicit_separator_wins_in_compatible_mode(self):
        assert HashingParams(compatible=True, separator=",").separator == ","

    @pytest.mark.parametrize("raw, expected", [
        ("\\t", "\t"),
        ("\\0", "\0"),
        (",", ","),
        (" | ", " | "),
        ("\\t,", "\\t,"),  # escapes cannot be mixed with other characters
    ])
    def test_unescape(self, raw, expected):
        assert HashingParams(separator=raw).separator == expected


class TestRunStatistics:
    def test_record(self):
        stats = RunStatistics()
        stats.record(10)
        stats.record(0)
        assert stats.total_files == 2
        assert stats.total_bytes == 10

    def test_throughput_is_floored(self):
        stats = RunStatistics(total_files=1, total_bytes=10)
        assert stats.throughput(0.5) == 20
        assert stats.throughput(3.0) == 3

    def test_throughput_zero_elapsed(self):
        stats = RunStatistics(total_files=1, total_bytes=10)
        assert stats.throughput(0.0) == 0

    def test_elapsed_never_negative(self):
        stats = RunStatistics(started_at=100.0)
        assert stats.elapsed(now=101.5) == 1.5
        assert stats.elapsed(now=99.0) == 0.0


class TestCapacity:
    def test_ceil(self):
        assert conduit_capacity(4) == 12
        assert conduit_capacity(7, 1.0) == 7
        assert conduit_capacity(3, 1.1) == 4


class TestResolvedInput:
    def test_root_single_path(self):
        assert ResolvedInput(InputKind.DIRECTORY, ["/data"]).root == "/data"

    def test_root_requires_one_path(self):
        with pytest.raises(ValueError):
            ResolvedInput(InputKind.FILE_LIST, ["a", "b"]).root
        with pytest.raises(ValueError):
            ResolvedInput(InputKind.STDIN).root

    def test_display_names(self):
        assert InputKind.STDIN.display_name == "Paths from stdin"
        assert InputKind.DIRECTORY.display_name == "Directory walk"
