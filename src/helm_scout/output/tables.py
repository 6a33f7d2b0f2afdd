"""Rich table builders."""

from __future__ import annotations

from rich.table import Table

from helm_scout.models.comparison import ComparisonResult
from helm_scout.output.themes import styled_drift


def drift_table(results: list[ComparisonResult]) -> Table:
    table = Table(title="Chart Drift", expand=True, show_lines=False)
    table.add_column("Status", no_wrap=True)
    table.add_column("Namespace", style="blue", no_wrap=True)
    table.add_column("Release", style="bold white", no_wrap=True)
    table.add_column("Chart", style="magenta", no_wrap=True)
    table.add_column("Current", style="dim")
    table.add_column("Latest", style="bold")
    table.add_column("App Ver", style="cyan")
    table.add_column("Updated", style="dim", no_wrap=True)
    table.add_column("Upstream", style="dim", overflow="fold")

    for r in results:
        rel = r.release
        table.add_row(
            styled_drift(r.status),
            rel.namespace,
            rel.name,
            rel.chart_name,
            rel.chart_version,
            r.latest_version or "-",
            _app_version_cell(rel.app_version, r.latest_app_version),
            rel.updated_short or "-",
            r.upstream_url or "-",
        )
    return table


def _app_version_cell(current: str, latest: str) -> str:
    if latest and latest != current:
        return f"{current or '-'} -> {latest}"
    return current or "-"
