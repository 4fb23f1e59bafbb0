"""Bounded climb up the process ancestry."""

from __future__ import annotations

import logging

from wf_reporter.core.constants import MAX_LINEAGE_HOPS
from wf_reporter.core.errors import MaxDepthExceededError
from wf_reporter.lineage.base import ProcessRecord, ProcessTableInspector

logger = logging.getLogger(__name__)


class LineageWalker:
    """Climbs from a process to the ancestor directly below init.

    Every hop queries the process table afresh. The climb stops when a
    record's parent is the root PID; after ``max_hops`` records without
    reaching it the walk fails, which also catches cycles.

    Example:
        ```python
        walker = LineageWalker(inspector, root_pid=resolver.resolve())
        print(walker.climb(os.getpid()).command)  # e.g. /usr/sbin/cron
        ```
    """

    def __init__(
        self,
        inspector: ProcessTableInspector,
        root_pid: int,
        max_hops: int = MAX_LINEAGE_HOPS,
    ) -> None:
        if max_hops < 1:
            raise ValueError(f"max_hops must be at least 1, got {max_hops}")
        self._inspector = inspector
        self.root_pid = root_pid
        self.max_hops = max_hops

    def walk(self, start_pid: int) -> list[ProcessRecord]:
        """Return the ancestry chain from ``start_pid`` up to, not including, the root.

        Raises:
            MaxDepthExceededError: If the root is not reached within ``max_hops``
            ProcessNotFoundError: If a process disappears during the climb
            UnknownPlatformError: If the process table cannot be queried
        """
        chain: list[ProcessRecord] = []
        pid = start_pid

        for _ in range(self.max_hops):
            record = self._inspector.lookup(pid)
            chain.append(record)
            if record.parent_pid == self.root_pid:
                logger.debug(
                    f"Reached root {self.root_pid} after {len(chain)} hops: {record.command}"
                )
                return chain
            pid = record.parent_pid

        raise MaxDepthExceededError(
            f"No ancestor of {start_pid} below root PID {self.root_pid} "
            f"within {self.max_hops} hops",
            pid=start_pid,
        )

    def climb(self, start_pid: int) -> ProcessRecord:
        """Return the terminal ancestor, the one whose parent is the root."""
        return self.walk(start_pid)[-1]
