"""Core module - configuration, schemas and errors."""

from __future__ import annotations

from wf_reporter.core.config import load_config, load_run_report
from wf_reporter.core.constants import (
    BOOTSTRAP_COMMANDS,
    DEFAULT_PROXY_PORT,
    DEFAULT_STATE_DIR,
    MAX_LINEAGE_HOPS,
)
from wf_reporter.core.errors import (
    ConfigurationError,
    LineageError,
    MalformedMetricsError,
    MaxDepthExceededError,
    ProcessNotFoundError,
    ReporterError,
    StateReadError,
    SubmissionError,
    UnknownPlatformError,
)
from wf_reporter.core.schemas import ReporterConfig, RunReport, TagName

__all__ = [
    "BOOTSTRAP_COMMANDS",
    "ConfigurationError",
    "DEFAULT_PROXY_PORT",
    "DEFAULT_STATE_DIR",
    "LineageError",
    "load_config",
    "load_run_report",
    "MalformedMetricsError",
    "MAX_LINEAGE_HOPS",
    "MaxDepthExceededError",
    "ProcessNotFoundError",
    "ReporterConfig",
    "ReporterError",
    "RunReport",
    "StateReadError",
    "SubmissionError",
    "TagName",
    "UnknownPlatformError",
]
