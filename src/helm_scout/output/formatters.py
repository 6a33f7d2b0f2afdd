"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json

import yaml
from rich.console import Console

from helm_scout.models import DriftStatus
from helm_scout.models.comparison import ComparisonResult, summarize
from helm_scout.output.themes import styled_drift

console = Console()


def output_results(results: list[ComparisonResult], fmt: str) -> None:
    if fmt == "json":
        data = [r.to_dict() for r in results]
        console.print_json(json.dumps(data, indent=2))
    elif fmt == "yaml":
        data = [r.to_dict() for r in results]
        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        from helm_scout.output.tables import drift_table
        console.print(drift_table(results))
        console.print(summary_line(results))


def summary_line(results: list[ComparisonResult]) -> str:
    """One-line status breakdown, e.g. ``3 release(s): 2 SYNC, 1 MAJOR_DRIFT``."""
    counts = summarize(results)
    parts = [
        f"{count} {styled_drift(DriftStatus(token))}"
        for token, count in counts.items()
        if count
    ]
    if not parts:
        return "[dim]No releases found.[/dim]"
    return f"\n{len(results)} release(s): " + ", ".join(parts)
