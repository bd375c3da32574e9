"""Result output and progress display services."""

from .output_service import ResultSink, ProgressDisplay, format_summary

__all__ = ["ResultSink", "ProgressDisplay", "format_summary"]
