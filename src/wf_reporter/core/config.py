"""Configuration and run report loading utilities.

Supports YAML and JSON files with schema validation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from wf_reporter.core.schemas import ReporterConfig, RunReport


def _load_document(path: Path | str, kind: str) -> Any:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{kind} file not found: {path}")

    suffix = path.suffix.lower()
    with open(path, encoding="utf-8") as f:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ValueError(
                f"Unsupported {kind.lower()} format: {suffix}. Use .yaml, .yml, or .json"
            )

    return data if data is not None else {}


def load_config(path: Path | str) -> ReporterConfig:
    """Load and validate a reporter configuration file.

    Args:
        path: Path to YAML or JSON configuration file

    Returns:
        Validated ReporterConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is unsupported
        pydantic.ValidationError: If config is invalid
    """
    data = _load_document(path, "Configuration")
    return ReporterConfig.model_validate(data)


def load_run_report(path: Path | str) -> RunReport:
    """Load a run report holding metrics and run facts.

    Args:
        path: Path to YAML or JSON report file

    Returns:
        Validated RunReport object

    Raises:
        FileNotFoundError: If report file doesn't exist
        ValueError: If file format is unsupported
        pydantic.ValidationError: If the report is invalid
    """
    data = _load_document(path, "Report")
    return RunReport.model_validate(data)
