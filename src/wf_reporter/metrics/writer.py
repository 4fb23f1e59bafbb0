"""Point writers: where a finished batch is sent.

The Wavefront proxy accepts one point per line over plain TCP:

    "<path>" <value> <timestamp> source="<source>" "<tag>"="<value>" ...
"""

from __future__ import annotations

import logging
import socket
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from wf_reporter.core.constants import DEFAULT_PROXY_PORT
from wf_reporter.core.errors import SubmissionError
from wf_reporter.metrics.transform import Point

logger = logging.getLogger(__name__)


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def format_point(point: Point, source: str) -> str:
    """Render a point, including its own tags, as one proxy protocol line."""
    parts = [
        _quote(point.path),
        repr(point.value) if isinstance(point.value, float) else str(point.value),
        str(point.timestamp),
        f"source={_quote(source)}",
    ]
    parts.extend(f"{_quote(k)}={_quote(v)}" for k, v in point.tags.items())
    return " ".join(parts)


class PointWriter(ABC):
    """Sends a batch of points with a tag set applied to each of them."""

    @abstractmethod
    def write(self, points: Sequence[Point], tags: Mapping[str, str]) -> None:
        """Submit the batch.

        Raises:
            SubmissionError: If the batch could not be delivered
        """
        pass


class WavefrontProxyWriter(PointWriter):
    """Writes points to a Wavefront proxy over a single TCP connection."""

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PROXY_PORT,
        source: str | None = None,
        timeout: float | None = 10.0,
    ) -> None:
        self.host = host
        self.port = port
        self.source = source or socket.gethostname()
        self.timeout = timeout

    def render(self, points: Sequence[Point], tags: Mapping[str, str]) -> str:
        lines = [format_point(p.with_tags(tags), self.source) for p in points]
        return "".join(f"{line}\n" for line in lines)

    def write(self, points: Sequence[Point], tags: Mapping[str, str]) -> None:
        payload = self.render(points, tags).encode("utf-8")
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout) as sock:
                sock.sendall(payload)
        except OSError as e:
            raise SubmissionError(
                f"Failed to write {len(points)} points to {self.host}:{self.port}: {e}"
            ) from e
        logger.info(f"Wrote {len(points)} points to {self.host}:{self.port}")


class RecordingWriter(PointWriter):
    """Keeps every batch in memory instead of sending it."""

    def __init__(self) -> None:
        self.batches: list[list[Point]] = []

    def write(self, points: Sequence[Point], tags: Mapping[str, str]) -> None:
        self.batches.append([p.with_tags(tags) for p in points])

    @property
    def points(self) -> list[Point]:
        return [p for batch in self.batches for p in batch]
