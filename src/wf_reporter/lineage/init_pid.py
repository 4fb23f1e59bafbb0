"""Resolution of the init-equivalent PID that ends an ancestry chain."""

from __future__ import annotations

import logging

from wf_reporter.core.constants import GLOBAL_ZONE_INIT_COMMAND, ZONE_SCHEDULER_COMMAND
from wf_reporter.core.errors import ProcessNotFoundError
from wf_reporter.lineage.base import CommandRunner, Platform, ProcessTableInspector, run_command

logger = logging.getLogger(__name__)

DEFAULT_INIT_PID = 1


class InitPidResolver:
    """Finds the PID that the lineage walker climbs towards.

    This is 1 everywhere except Solaris and SmartOS. There, the global zone
    climbs to the real ``/sbin/init`` and a non-global zone climbs to its
    own ``zsched`` process, whose PID is arbitrary.
    """

    def __init__(
        self,
        inspector: ProcessTableInspector,
        platform: Platform,
        runner: CommandRunner = run_command,
    ) -> None:
        self._inspector = inspector
        self._platform = platform
        self._runner = runner

    def in_global_zone(self) -> bool:
        """True if ``zoneadm`` can see the global zone, i.e. we are in it."""
        output = self._runner(["zoneadm", "list", "-c"])
        return any(line.strip() == "global" for line in output.splitlines())

    def resolve(self) -> int:
        """Return the root PID for this invocation.

        Raises:
            ProcessNotFoundError: If the zone's init process cannot be found
        """
        if self._platform is not Platform.SOLARIS:
            return DEFAULT_INIT_PID

        if self.in_global_zone():
            command = GLOBAL_ZONE_INIT_COMMAND
        else:
            command = ZONE_SCHEDULER_COMMAND

        pids = self._inspector.find_pids(command)
        if not pids:
            raise ProcessNotFoundError(f"No {command} process found to act as init")

        logger.debug(f"Resolved init PID {pids[0]} from {command}")
        return pids[0]
