"""Computation of the point tags applied to every point in a batch."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from wf_reporter.core.errors import ConfigurationError
from wf_reporter.core.schemas import RunReport, TagName
from wf_reporter.lineage.base import CommandRunner, run_command
from wf_reporter.lineage.classifier import RunContext
from wf_reporter.state.run_counter import RunCounter

logger = logging.getLogger(__name__)


def git_revision(cwd: Path | None = None, runner: CommandRunner = run_command) -> str:
    """Return the short revision of the repository at ``cwd``.

    Raises:
        ConfigurationError: If git is missing or ``cwd`` is not a repository
    """
    argv = ["git", "rev-parse", "--short", "HEAD"]
    if cwd is not None:
        argv[1:1] = ["-C", str(cwd)]
    revision = runner(argv).strip()
    if not revision:
        raise ConfigurationError(f"No git revision available in {cwd or Path.cwd()}")
    return revision


class TagBuilder:
    """Evaluates enabled tag names against one run.

    Tags are evaluated in the configured order and any failure aborts the
    whole set; there is no partial tagging.
    """

    def __init__(
        self,
        report: RunReport,
        run_context: Callable[[], RunContext],
        counter: RunCounter,
        git_dir: Path | None = None,
        runner: CommandRunner = run_command,
    ) -> None:
        self._report = report
        self._run_context = run_context
        self._counter = counter
        self._git_dir = git_dir
        self._runner = runner

    def _fact(self, name: TagName) -> str:
        value = getattr(self._report, name.value)
        if value is None:
            raise ConfigurationError(
                f"Tag {name.value!r} is enabled but the run report has no {name.value}"
            )
        return str(value)

    def value_of(self, name: TagName) -> str:
        if name is TagName.RUN_BY:
            return self._run_context().value
        if name is TagName.GIT_REV:
            return git_revision(self._git_dir, self._runner)
        if name is TagName.RUN_NO:
            return str(self._counter.current())
        return self._fact(name)

    def build(self, names: list[TagName]) -> dict[str, str]:
        tags = {name.value: self.value_of(name) for name in names}
        logger.debug(f"Point tags: {tags}")
        return tags
