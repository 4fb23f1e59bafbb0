"""Lineage module - process ancestry walking and run context classification.

Components:
- PsProcessTableInspector: ``ps``/``pgrep`` backed process table access
- InitPidResolver: init-equivalent PID, zone aware on Solaris
- LineageWalker: bounded climb to the ancestor directly below init
- RunContextClassifier: ordered first-match run context rules
"""

from __future__ import annotations

from wf_reporter.lineage.base import (
    CommandRunner,
    Platform,
    ProcessRecord,
    ProcessTableInspector,
    detect_platform,
    run_command,
)
from wf_reporter.lineage.classifier import (
    DEFAULT_RULES,
    ClassificationRule,
    RunContext,
    RunContextClassifier,
    RunContextKind,
)
from wf_reporter.lineage.init_pid import DEFAULT_INIT_PID, InitPidResolver
from wf_reporter.lineage.ps_inspector import PsProcessTableInspector
from wf_reporter.lineage.walker import LineageWalker

__all__ = [
    "ClassificationRule",
    "CommandRunner",
    "DEFAULT_INIT_PID",
    "DEFAULT_RULES",
    "InitPidResolver",
    "LineageWalker",
    "Platform",
    "ProcessRecord",
    "ProcessTableInspector",
    "PsProcessTableInspector",
    "RunContext",
    "RunContextClassifier",
    "RunContextKind",
    "detect_platform",
    "run_command",
]
