"""Shared constants for the Wavefront reporter.

Centralized constants to avoid duplication and ensure consistency across modules.
"""

from __future__ import annotations

from pathlib import Path

# Maximum number of process records inspected while climbing the ancestry
# chain: the starting process plus eight parents.
MAX_LINEAGE_HOPS = 9

# Default Wavefront proxy port for the native line protocol.
DEFAULT_PROXY_PORT = 2878

# Directory holding the scoreboard and the skip marker.
DEFAULT_STATE_DIR = Path("/etc/puppet/report/wavefront")
SCOREBOARD_FILENAME = "scoreboard"
SKIP_FILENAME = "no_report"

# Commands which, found directly below init, mean the run was started by
# a bootstrap stage rather than a person or a scheduler.
BOOTSTRAP_COMMANDS = ("sshd:", "/usr/bin/python", "/lib/svc/bin/svc.startd")

# Solaris zone scheduler, the init-equivalent inside a non-global zone.
ZONE_SCHEDULER_COMMAND = "zsched"
GLOBAL_ZONE_INIT_COMMAND = "/sbin/init"
