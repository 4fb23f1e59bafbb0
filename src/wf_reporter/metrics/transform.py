"""Flattening of nested run metrics into Wavefront points."""

from __future__ import annotations

import math
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from wf_reporter.core.errors import MalformedMetricsError


def is_number(value: Any) -> bool:
    """True for finite ints and floats, but not bools."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


@dataclass(slots=True, frozen=True)
class Point:
    """A single timestamped, tagged observation."""

    path: str  # Dot-delimited metric name
    value: float
    timestamp: int  # Unix seconds
    tags: dict[str, str] = field(default_factory=dict)

    def with_tags(self, tags: Mapping[str, str]) -> Point:
        return Point(self.path, self.value, self.timestamp, {**self.tags, **tags})


def flatten(
    metrics: Mapping[str, Mapping[str, Sequence[Any]]],
    path_prefix: str,
    ts: int | None = None,
) -> list[Point]:
    """Turn ``category -> metric -> (label, description, value)`` into points.

    Each entry becomes one point at ``<path_prefix>.<category>.<label>``.
    Categories and metrics are emitted in insertion order, and every
    point carries the same capture timestamp.

    Example:
        >>> flatten({"resources": {"total": ("applied", "desc", 5)}}, "puppet", 100)
        [Point(path='puppet.resources.applied', value=5, timestamp=100, tags={})]

    Args:
        metrics: Nested metrics as reported by the agent
        path_prefix: Base path for every point
        ts: Capture timestamp, defaults to now

    Returns:
        One point per metric entry

    Raises:
        MalformedMetricsError: If an entry is not a (label, description, number) triple
    """
    if ts is None:
        ts = int(time.time())

    points: list[Point] = []
    for category, entries in metrics.items():
        if not isinstance(entries, Mapping):
            raise MalformedMetricsError(f"Metric category {category!r} is not a mapping")

        for name, entry in entries.items():
            is_triple = isinstance(entry, Sequence) and not isinstance(entry, (str, bytes))
            if not is_triple or len(entry) != 3:
                raise MalformedMetricsError(
                    f"Metric {category}.{name} is not a (label, description, value) triple"
                )
            label, _, value = entry
            if not is_number(value):
                raise MalformedMetricsError(
                    f"Metric {category}.{name} has non-numeric value {value!r}"
                )
            path = ".".join([path_prefix, str(category), str(label)])
            points.append(Point(path=path, value=value, timestamp=ts))

    return points
