"""Process table abstractions used by the lineage walker.

All process introspection goes through a ProcessTableInspector so the
walker and the init resolver can run against a scripted table in tests.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from wf_reporter.core.errors import ConfigurationError, UnknownPlatformError

logger = logging.getLogger(__name__)

# Runs an argv and returns its stdout. Empty output means "nothing found".
CommandRunner = Callable[[Sequence[str]], str]


class Platform(str, Enum):
    """Platform families with distinct process-table query syntax."""

    LINUX = "linux"
    SOLARIS = "solaris"  # Solaris, illumos, SmartOS
    BSD = "bsd"  # FreeBSD, OpenBSD, NetBSD, macOS


_PLATFORM_PREFIXES: tuple[tuple[str, Platform], ...] = (
    ("linux", Platform.LINUX),
    ("sunos", Platform.SOLARIS),
    ("freebsd", Platform.BSD),
    ("openbsd", Platform.BSD),
    ("netbsd", Platform.BSD),
    ("darwin", Platform.BSD),
)


def detect_platform(identifier: str | None = None) -> Platform:
    """Map a ``sys.platform`` style identifier to a Platform.

    Args:
        identifier: Platform identifier, defaults to ``sys.platform``

    Raises:
        UnknownPlatformError: If the identifier is not recognized
    """
    identifier = (identifier or sys.platform).lower()
    for prefix, platform in _PLATFORM_PREFIXES:
        if identifier.startswith(prefix):
            return platform
    raise UnknownPlatformError(f"Cannot inspect the process table on platform {identifier!r}")


def run_command(argv: Sequence[str]) -> str:
    """Run a command and return its stdout.

    A non-zero exit status is not an error here: ``ps`` and ``pgrep``
    exit non-zero when nothing matches, and callers treat empty output
    as "not found".

    Raises:
        ConfigurationError: If the command is not installed
    """
    try:
        result = subprocess.run(list(argv), capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Required command not found: {argv[0]}") from e

    if result.returncode != 0:
        logger.debug(f"{' '.join(argv)} exited {result.returncode}: {result.stderr.strip()}")
    return result.stdout


@dataclass(slots=True, frozen=True)
class ProcessRecord:
    """One row of the process table, fetched fresh for every lookup."""

    pid: int
    command: str
    parent_pid: int


class ProcessTableInspector(ABC):
    """Looks up a single process in the live process table."""

    @abstractmethod
    def lookup(self, pid: int) -> ProcessRecord:
        """Return the command name and parent PID of ``pid``.

        Raises:
            UnknownPlatformError: If the platform cannot be queried
            ProcessNotFoundError: If the process no longer exists
        """
        pass

    @abstractmethod
    def find_pids(self, command: str) -> list[int]:
        """Return PIDs whose full command line is exactly ``command``."""
        pass
