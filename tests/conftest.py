"""Shared fixtures: a scripted process table and command runner."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from wf_reporter.core.errors import ProcessNotFoundError
from wf_reporter.core.schemas import ReporterConfig, TagName
from wf_reporter.lineage.base import Platform, ProcessRecord, ProcessTableInspector


class InMemoryProcessTable(ProcessTableInspector):
    """ProcessTableInspector over a fixed ``pid -> (command, parent_pid)`` map."""

    def __init__(
        self,
        processes: dict[int, tuple[str, int]] | None = None,
        named: dict[str, list[int]] | None = None,
        platform: Platform = Platform.LINUX,
    ) -> None:
        self.processes = processes or {}
        self.named = named or {}
        self.platform = platform
        self.lookups: list[int] = []

    def lookup(self, pid: int) -> ProcessRecord:
        self.lookups.append(pid)
        if pid not in self.processes:
            raise ProcessNotFoundError(f"Process {pid} not found", pid=pid)
        command, parent_pid = self.processes[pid]
        return ProcessRecord(pid=pid, command=command, parent_pid=parent_pid)

    def find_pids(self, command: str) -> list[int]:
        return list(self.named.get(command, []))


class ScriptedRunner:
    """Command runner returning canned stdout keyed by argv."""

    def __init__(self, outputs: dict[tuple[str, ...], str] | None = None) -> None:
        self.outputs = outputs or {}
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, argv: Sequence[str]) -> str:
        key = tuple(argv)
        self.calls.append(key)
        return self.outputs.get(key, "")


def linear_table(length: int, terminal: str = "/usr/sbin/cron", root_pid: int = 1):
    """Build a chain of ``length`` processes starting at PID 100.

    Returns the table and the starting PID. The last process is
    ``terminal`` and its parent is ``root_pid``.
    """
    processes: dict[int, tuple[str, int]] = {}
    for i in range(length):
        pid = 100 + i
        last = i == length - 1
        processes[pid] = (terminal if last else f"/bin/proc{i}", root_pid if last else pid + 1)
    return InMemoryProcessTable(processes), 100


@pytest.fixture
def runner() -> ScriptedRunner:
    return ScriptedRunner()


@pytest.fixture
def config(tmp_path: Path) -> ReporterConfig:
    return ReporterConfig(state_dir=tmp_path / "state", tags=[TagName.RUN_BY])
