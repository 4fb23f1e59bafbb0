"""CLI for the Wavefront reporter.

Provides a command-line interface using Typer for:
- Reporting a run's metrics to a Wavefront proxy
- Inspecting the process ancestry and run context
- Showing the scoreboard run number
- Generating a sample configuration
"""

from __future__ import annotations

import os
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.table import Table

from wf_reporter.core.config import load_config, load_run_report
from wf_reporter.core.constants import MAX_LINEAGE_HOPS
from wf_reporter.core.errors import ReporterError
from wf_reporter.core.schemas import ReporterConfig
from wf_reporter.lineage.classifier import RunContextClassifier
from wf_reporter.lineage.init_pid import InitPidResolver
from wf_reporter.lineage.ps_inspector import PsProcessTableInspector
from wf_reporter.lineage.walker import LineageWalker
from wf_reporter.metrics.transform import Point
from wf_reporter.metrics.writer import WavefrontProxyWriter
from wf_reporter.pipeline import ReportPipeline
from wf_reporter.state.run_counter import RunCounter
from wf_reporter.utils.logging import get_logger, setup_logging

app = typer.Typer(
    name="wf-reporter",
    help="Report agent run metrics to Wavefront",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def _load_reporter_config(config: Path | None, state_dir: Path | None = None) -> ReporterConfig:
    try:
        reporter_config = load_config(config) if config is not None else ReporterConfig()
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[bold red]Error loading config: {e}[/]")
        raise typer.Exit(1) from e

    if state_dir is not None:
        reporter_config.state_dir = state_dir
    return reporter_config


@app.command()
def report(
    metrics: Path = typer.Option(
        ..., "--metrics", "-m", help="Run report with metrics and run facts (YAML/JSON)"
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Reporter configuration file (YAML/JSON)"
    ),
    state_dir: Path | None = typer.Option(
        None, "--state-dir", help="Directory for the scoreboard (overrides config)"
    ),
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="Logging level"),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file in addition to console"
    ),
    json_logs: bool = typer.Option(
        False, "--json-logs", help="Output logs in JSON format (for programmatic parsing)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show the point batch without sending it"
    ),
) -> None:
    """Send a run's metrics to the Wavefront proxy."""
    setup_logging(
        level=log_level, log_file=log_file, json_format=json_logs, rich_console=not json_logs
    )
    reporter_config = _load_reporter_config(config, state_dir)

    try:
        run_report = load_run_report(metrics)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[bold red]Error loading run report: {e}[/]")
        raise typer.Exit(1) from e

    writer = WavefrontProxyWriter(
        reporter_config.endpoint, reporter_config.port, source=reporter_config.source
    )
    pipeline = ReportPipeline(reporter_config, writer)

    try:
        if dry_run:
            tags, points = pipeline.prepare(run_report)
            _show_points_table([p.with_tags(tags) for p in points])
            console.print("[bold green]Dry run, nothing sent[/]")
            return

        outcome = pipeline.run(run_report)
    except ReporterError as e:
        console.print(f"[bold red]Report failed: {e}[/]")
        raise typer.Exit(1) from e

    if outcome.submitted:
        console.print(
            f"[bold green]Sent {len(outcome.points)} points, "
            f"this was run {outcome.run_number}[/]"
        )
    else:
        console.print(f"[bold yellow]Reporting disabled by {reporter_config.skip_path}[/]")


@app.command()
def lineage(
    pid: int | None = typer.Option(None, "--pid", "-p", help="Process to inspect (default: self)"),
    max_hops: int = typer.Option(MAX_LINEAGE_HOPS, "--max-hops", min=1, help="Hop limit"),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Logging level"),
) -> None:
    """Show the ancestry chain of a process and what launched it."""
    setup_logging(level=log_level)
    start_pid = pid if pid is not None else os.getpid()

    try:
        inspector = PsProcessTableInspector()
        root_pid = InitPidResolver(inspector, inspector.platform).resolve()
        walker = LineageWalker(inspector, root_pid, max_hops)
        chain = walker.walk(start_pid)
    except ReporterError as e:
        console.print(f"[bold red]Cannot walk ancestry of {start_pid}: {e}[/]")
        raise typer.Exit(1) from e

    table = Table(title=f"Ancestry of {start_pid} (root PID {root_pid})")
    table.add_column("PID", style="cyan", justify="right")
    table.add_column("Parent", style="dim", justify="right")
    table.add_column("Command", style="white")
    for record in chain:
        table.add_row(str(record.pid), str(record.parent_pid), record.command)
    console.print(table)

    context = RunContextClassifier().classify(chain[-1].command)
    console.print(f"run_by: [bold green]{context.value}[/]")


@app.command()
def run_number(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Reporter configuration file (YAML/JSON)"
    ),
    state_dir: Path | None = typer.Option(
        None, "--state-dir", help="Directory for the scoreboard (overrides config)"
    ),
) -> None:
    """Print the run number the next report will carry."""
    reporter_config = _load_reporter_config(config, state_dir)

    try:
        number = RunCounter(reporter_config.scoreboard_path).current()
    except ReporterError as e:
        console.print(f"[bold red]{e}[/]")
        raise typer.Exit(1) from e

    console.print(str(number))


@app.command()
def init_config(
    output: Path = typer.Option(
        Path("wavefront.yaml"), "--output", "-o", help="Output configuration file"
    ),
) -> None:
    """Generate a sample configuration file."""
    sample_config = """\
# Wavefront reporter configuration

# IP or DNS name of a Wavefront proxy, and its line protocol port
wavefront_endpoint: wf
port: 2878

# Tags applied to every point. Any of:
#   run_by, git_rev, puppet_version, status, environment, run_no
wf_report_tags:
  - run_by
  - status

# Base path for metrics; each report value is dot-appended
wf_report_path: puppet

# Holds the scoreboard. Create a file called no_report here to stop reporting.
state_dir: /etc/puppet/report/wavefront
"""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(sample_config)
    console.print(f"[bold green]Sample configuration written to {output}[/]")


def _show_points_table(points: list[Point]) -> None:
    """Display a point batch."""
    table = Table(title=f"{len(points)} points")
    table.add_column("Path", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Timestamp", style="dim")
    table.add_column("Tags", style="white")

    for p in points:
        tags = " ".join(f"{k}={v}" for k, v in p.tags.items())
        table.add_row(p.path, str(p.value), str(p.timestamp), tags)

    console.print(table)
    logger.debug(f"Displayed {len(points)} points")


if __name__ == "__main__":
    app()
