"""Text rendering for listings and diagnoses."""

from __future__ import annotations

from dm_inspect.reporter.component_list import render_component_list, render_statistics
from dm_inspect.reporter.diagnosis import render_diagnosis

__all__ = ["render_component_list", "render_statistics", "render_diagnosis"]
