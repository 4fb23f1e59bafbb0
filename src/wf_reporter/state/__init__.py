"""State module - persisted run accounting."""

from __future__ import annotations

from wf_reporter.state.run_counter import RunCounter

__all__ = ["RunCounter"]
