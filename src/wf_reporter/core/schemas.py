"""Pydantic schemas for the Wavefront reporter.

This module defines the data contracts consumed by the reporter: the
reporter configuration, the closed set of point tags and the run report
handed over by the agent.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from wf_reporter.core.constants import (
    DEFAULT_PROXY_PORT,
    DEFAULT_STATE_DIR,
    MAX_LINEAGE_HOPS,
    SCOREBOARD_FILENAME,
    SKIP_FILENAME,
)


class TagName(str, Enum):
    """Point tags the reporter knows how to compute."""

    RUN_BY = "run_by"  # What triggered the run
    GIT_REV = "git_rev"  # Short revision of the deployed code
    PUPPET_VERSION = "puppet_version"  # Agent version
    STATUS = "status"  # failed, changed or unchanged
    ENVIRONMENT = "environment"  # Agent environment
    RUN_NO = "run_no"  # Scoreboard run number


class ReporterConfig(BaseModel):
    """Reporter configuration.

    Built by the caller and passed into the pipeline. Field aliases match
    the hierarchical lookup keys used by existing deployments, so their
    data files can be loaded unchanged.

    Attributes:
        endpoint: IP or DNS name of the Wavefront proxy
        port: Proxy port for the native line protocol
        tags: Tags applied to every point, in order
        path_prefix: Base path; each metric is dot-appended to it
        state_dir: Directory holding the scoreboard and skip marker
        source: Source name for points (defaults to the host name)
        git_dir: Working directory for the revision lookup
        max_lineage_hops: Process records inspected before giving up
    """

    model_config = {"populate_by_name": True, "extra": "forbid"}

    endpoint: str = Field(
        default="wf", min_length=1, alias="wavefront_endpoint", description="Proxy address"
    )
    port: int = Field(default=DEFAULT_PROXY_PORT, ge=1, le=65535)
    tags: list[TagName] = Field(
        default_factory=lambda: [TagName.RUN_BY, TagName.STATUS], alias="wf_report_tags"
    )
    path_prefix: str = Field(default="puppet", min_length=1, alias="wf_report_path")
    state_dir: Path = Field(default=DEFAULT_STATE_DIR)
    source: str | None = Field(default=None, description="Point source, defaults to hostname")
    git_dir: Path | None = Field(default=None, description="Where to run the revision lookup")
    max_lineage_hops: int = Field(default=MAX_LINEAGE_HOPS, ge=1)

    @field_validator("path_prefix")
    @classmethod
    def strip_path_dots(cls, v: str) -> str:
        """Drop leading/trailing dots so joined paths have no empty segments."""
        v = v.strip(".")
        if not v:
            raise ValueError("path_prefix must contain at least one non-dot character")
        return v

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[TagName]) -> list[TagName]:
        """Keep the first occurrence of each tag."""
        return list(dict.fromkeys(v))

    @property
    def scoreboard_path(self) -> Path:
        return self.state_dir / SCOREBOARD_FILENAME

    @property
    def skip_path(self) -> Path:
        return self.state_dir / SKIP_FILENAME


class RunReport(BaseModel):
    """Metrics and facts describing one agent run.

    ``metrics`` maps category to metric name to a (label, description,
    value) triple. Entries are checked when flattened, not here. The
    agent's native layout, where a category is
    ``{"values": [[name, label, value], ...]}``, is normalised on load.
    """

    metrics: dict[str, Any] = Field(default_factory=dict)
    status: str | None = None
    environment: str | None = None
    puppet_version: str | None = None

    @field_validator("metrics", mode="before")
    @classmethod
    def normalise_native_metrics(cls, v: Any) -> Any:
        """Convert ``{"values": [[name, label, value]]}`` categories."""
        if not isinstance(v, dict):
            return v

        normalised: dict[str, Any] = {}
        for category, body in v.items():
            values = body.get("values") if isinstance(body, dict) else None
            if isinstance(values, list) and all(isinstance(e, (list, tuple)) for e in values):
                entries: dict[str, Any] = {}
                for index, entry in enumerate(values):
                    entries[str(entry[0]) if entry else str(index)] = tuple(entry)
                normalised[category] = entries
            else:
                normalised[category] = body
        return normalised
