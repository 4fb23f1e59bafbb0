"""Report pipeline orchestrating one agent run's submission.

For each run the pipeline:
- Honours the skip marker in the state directory
- Computes point tags, walking the process ancestry if ``run_by`` is enabled
- Flattens the run metrics into points sharing one timestamp
- Hands the batch to a point writer
- Advances the run counter once the writer reports success

Any failure before submission aborts the run without a network write, and a
failed submission leaves the counter where it was.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from wf_reporter.core.errors import MalformedMetricsError, ReporterError
from wf_reporter.core.schemas import ReporterConfig, RunReport
from wf_reporter.lineage.base import (
    CommandRunner,
    Platform,
    ProcessTableInspector,
    detect_platform,
    run_command,
)
from wf_reporter.lineage.classifier import RunContext, RunContextClassifier
from wf_reporter.lineage.init_pid import InitPidResolver
from wf_reporter.lineage.ps_inspector import PsProcessTableInspector
from wf_reporter.lineage.walker import LineageWalker
from wf_reporter.metrics.transform import Point, flatten
from wf_reporter.metrics.writer import PointWriter
from wf_reporter.state.run_counter import RunCounter
from wf_reporter.tags import TagBuilder

logger = logging.getLogger(__name__)


@dataclass
class ReportOutcome:
    """What a pipeline run did."""

    submitted: bool
    points: list[Point] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    run_number: int | None = None  # Scoreboard number this run was counted as


class ReportPipeline:
    """Turns a run report into a submitted, tagged point batch.

    Example:
        ```python
        config = load_config("reporter.yaml")
        writer = WavefrontProxyWriter(config.endpoint, config.port)
        outcome = ReportPipeline(config, writer).run(load_run_report("report.yaml"))
        ```
    """

    def __init__(
        self,
        config: ReporterConfig,
        writer: PointWriter,
        counter: RunCounter | None = None,
        inspector: ProcessTableInspector | None = None,
        platform: Platform | None = None,
        classifier: RunContextClassifier | None = None,
        runner: CommandRunner = run_command,
        clock: Callable[[], float] = time.time,
        start_pid: int | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Reporter configuration
            writer: Destination for the point batch
            counter: Run counter, defaults to the scoreboard in ``config.state_dir``
            inspector: Process table access, defaults to ``ps`` for the platform
            platform: Platform family, detected lazily when needed
            classifier: Run context rules
            runner: Command runner for ``zoneadm`` and ``git``
            clock: Source of the capture timestamp
            start_pid: Process whose ancestry is classified, defaults to this one
        """
        self.config = config
        self.writer = writer
        self.counter = counter if counter is not None else RunCounter(config.scoreboard_path)
        self.classifier = classifier or RunContextClassifier()
        self._inspector = inspector
        self._platform = platform
        self._runner = runner
        self._clock = clock
        self._start_pid = start_pid

    @property
    def platform(self) -> Platform:
        if self._platform is None:
            self._platform = detect_platform()
        return self._platform

    @property
    def inspector(self) -> ProcessTableInspector:
        if self._inspector is None:
            self._inspector = PsProcessTableInspector(self.platform, self._runner)
        return self._inspector

    def build_walker(self) -> LineageWalker:
        """Create a walker rooted at this invocation's init PID."""
        root_pid = InitPidResolver(self.inspector, self.platform, self._runner).resolve()
        return LineageWalker(self.inspector, root_pid, self.config.max_lineage_hops)

    def run_context(self) -> RunContext:
        """Classify what launched the starting process."""
        start_pid = self._start_pid if self._start_pid is not None else os.getpid()
        terminal = self.build_walker().climb(start_pid)
        context = self.classifier.classify(terminal.command)
        logger.info(f"Run launched from {terminal.command} ({context.kind.value})")
        return context

    def prepare(self, report: RunReport) -> tuple[dict[str, str], list[Point]]:
        """Compute the tag set and the untagged points for a run.

        Raises:
            ReporterError: If a tag cannot be computed or the metrics are malformed
        """
        try:
            tags = TagBuilder(
                report,
                self.run_context,
                self.counter,
                git_dir=self.config.git_dir,
                runner=self._runner,
            ).build(self.config.tags)
            points = flatten(report.metrics, self.config.path_prefix, int(self._clock()))
        except ReporterError as e:
            logger.error(f"Not reporting: {e}")
            raise
        return tags, points

    def run(self, report: RunReport | Mapping[str, Any]) -> ReportOutcome:
        """Submit one run's metrics.

        Args:
            report: Run report, or a bare category -> metric -> triple mapping

        Returns:
            ReportOutcome describing the submitted batch

        Raises:
            ReporterError: If any step fails; the counter is then unchanged
        """
        if self.config.skip_path.exists():
            logger.info(f"Skip marker {self.config.skip_path} present, not reporting")
            return ReportOutcome(submitted=False)

        if not isinstance(report, RunReport):
            try:
                report = RunReport.model_validate({"metrics": report})
            except ValidationError as e:
                raise MalformedMetricsError(f"Metrics are not a category mapping: {e}") from e

        tags, points = self.prepare(report)

        logger.info(f"Submitting {len(points)} points under {self.config.path_prefix}")
        try:
            self.writer.write(points, tags)
        except ReporterError as e:
            logger.error(f"Submission failed, run counter left unchanged: {e}")
            raise

        run_number = self.counter.advance() - 1
        return ReportOutcome(
            submitted=True,
            points=[p.with_tags(tags) for p in points],
            tags=tags,
            run_number=run_number,
        )
