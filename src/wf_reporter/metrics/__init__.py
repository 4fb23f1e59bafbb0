"""Metrics module - point construction and submission."""

from __future__ import annotations

from wf_reporter.metrics.transform import Point, flatten
from wf_reporter.metrics.writer import (
    PointWriter,
    RecordingWriter,
    WavefrontProxyWriter,
    format_point,
)

__all__ = [
    "Point",
    "PointWriter",
    "RecordingWriter",
    "WavefrontProxyWriter",
    "flatten",
    "format_point",
]
