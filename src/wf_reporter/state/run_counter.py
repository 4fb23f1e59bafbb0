"""Durable run counter kept in the scoreboard file."""

from __future__ import annotations

import logging
from pathlib import Path

from wf_reporter.core.errors import StateReadError

logger = logging.getLogger(__name__)


class RunCounter:
    """Counts completed runs on this host.

    The scoreboard file holds a single decimal integer. When it is absent
    the current run is number 1. The counter is advanced only after a
    batch has been submitted, so a failed submission is counted again on
    the next run.

    The file is not locked and is overwritten in place. Callers must not
    run two reports at once on the same host: both would read the same
    number and write the same successor.
    """

    def __init__(self, path: Path) -> None:
        """Initialize with the scoreboard path; nothing is read yet."""
        self.path = Path(path)

    def current(self) -> int:
        """Return the current run number without side effects.

        Raises:
            StateReadError: If the scoreboard exists but is unreadable or not a number
        """
        if not self.path.exists():
            return 1

        try:
            text = self.path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as e:
            raise StateReadError(f"Cannot read scoreboard {self.path}: {e}") from e

        try:
            count = int(text)
        except ValueError as e:
            raise StateReadError(f"Scoreboard {self.path} does not hold a number: {text!r}") from e

        if count < 0:
            raise StateReadError(f"Scoreboard {self.path} holds a negative count: {count}")
        return count

    def advance(self) -> int:
        """Write back the current run number plus one and return it."""
        next_count = self.current() + 1
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(str(next_count))
        logger.debug(f"Advanced scoreboard {self.path} to {next_count}")
        return next_count
