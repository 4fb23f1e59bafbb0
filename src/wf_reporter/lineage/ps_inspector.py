"""Process table inspection by shelling out to ``ps`` and ``pgrep``."""

from __future__ import annotations

import logging

from wf_reporter.core.errors import ProcessNotFoundError
from wf_reporter.lineage.base import (
    CommandRunner,
    Platform,
    ProcessRecord,
    ProcessTableInspector,
    detect_platform,
    run_command,
)

logger = logging.getLogger(__name__)


class PsProcessTableInspector(ProcessTableInspector):
    """ProcessTableInspector backed by the system ``ps`` command.

    Solaris and the BSDs only report the command name through ``comm``;
    Linux reports the full command line through ``cmd``, of which the
    first word is kept. Both are asked for the parent PID first so that
    spaces in the command cannot shift the columns.

    Example:
        ```python
        inspector = PsProcessTableInspector()
        record = inspector.lookup(os.getpid())
        print(record.command, record.parent_pid)
        ```
    """

    def __init__(
        self,
        platform: Platform | None = None,
        runner: CommandRunner = run_command,
    ) -> None:
        """Initialize the inspector.

        Args:
            platform: Platform family; detected from ``sys.platform`` if omitted
            runner: Command runner, replaced in tests
        """
        self.platform = platform if platform is not None else detect_platform()
        self._runner = runner

    def _ps_argv(self, pid: int) -> list[str]:
        if self.platform is Platform.LINUX:
            return ["ps", "-o", "ppid,cmd", "-p", str(pid)]
        return ["ps", "-o", "ppid,comm", "-p", str(pid)]

    def lookup(self, pid: int) -> ProcessRecord:
        output = self._runner(self._ps_argv(pid))

        # First line is the column header
        rows = [line for line in output.splitlines()[1:] if line.strip()]
        if not rows:
            raise ProcessNotFoundError(f"Process {pid} not found in process table", pid=pid)

        fields = rows[-1].split()
        if len(fields) < 2:
            raise ProcessNotFoundError(
                f"Unreadable process table row for {pid}: {rows[-1]!r}", pid=pid
            )

        try:
            parent_pid = int(fields[0])
        except ValueError as e:
            raise ProcessNotFoundError(
                f"Unreadable parent PID for {pid}: {fields[0]!r}", pid=pid
            ) from e

        record = ProcessRecord(pid=pid, command=fields[1], parent_pid=parent_pid)
        logger.debug(f"Process {pid}: {record.command} (parent {parent_pid})")
        return record

    def find_pids(self, command: str) -> list[int]:
        output = self._runner(["pgrep", "-fx", command])
        return [int(token) for token in output.split() if token.isdigit()]
