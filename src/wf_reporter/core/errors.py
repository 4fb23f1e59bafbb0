"""Exception hierarchy for the reporter.

Every failure aborts the whole run. Nothing here is retried or defaulted.
"""

from __future__ import annotations


class ReporterError(Exception):
    """Base class for all reporter failures."""


class ConfigurationError(ReporterError):
    """A required external tool, fact or setting is missing."""


class StateReadError(ReporterError):
    """The scoreboard file exists but does not hold a run counter."""


class SubmissionError(ReporterError):
    """The point batch could not be written to the proxy."""


class MalformedMetricsError(ReporterError):
    """A metric entry is not a (label, description, number) triple."""


class LineageError(ReporterError):
    """Base class for failures while walking the process ancestry."""

    def __init__(self, message: str, pid: int | None = None) -> None:
        super().__init__(message)
        self.pid = pid


class UnknownPlatformError(LineageError):
    """The process table cannot be queried on this platform."""


class ProcessNotFoundError(LineageError):
    """A process vanished from the process table mid-walk."""


class MaxDepthExceededError(LineageError):
    """No ancestor below init was found within the hop limit."""
