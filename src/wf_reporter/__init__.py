"""Wavefront reporter - run context classification and metric submission."""

from __future__ import annotations

from wf_reporter.core.errors import ReporterError
from wf_reporter.core.schemas import ReporterConfig, RunReport, TagName
from wf_reporter.pipeline import ReportOutcome, ReportPipeline

__version__ = "0.1.0"

__all__ = [
    "ReportOutcome",
    "ReportPipeline",
    "ReporterConfig",
    "ReporterError",
    "RunReport",
    "TagName",
    "__version__",
]
