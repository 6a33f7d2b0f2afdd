"""hscout scan - Report chart drift against upstream."""

from __future__ import annotations

import re
from typing import Optional

import typer
from rich.console import Console

from helm_scout.cli.options import ContextOption, MaxWorkersOption, NamespaceOption, OutputOption
from helm_scout.core.drift_checker import scan as scan_releases
from helm_scout.core.k8s_client import K8sClient
from helm_scout.core.release_store import ReleaseStore
from helm_scout.core.upstream_resolver import build_resolver
from helm_scout.errors import ReleaseEnumerationError
from helm_scout.models import DriftStatus
from helm_scout.output.formatters import output_results

app = typer.Typer()
console = Console(stderr=True)

EXIT_DRIFT = 3


def _parse_threshold(value: Optional[str]) -> Optional[DriftStatus]:
    if value is None:
        return None
    try:
        status = DriftStatus.from_str(value)
    except ValueError:
        status = DriftStatus.UNKNOWN
    if not status.is_drift:
        raise typer.BadParameter("expected one of: major, minor, patch", param_hint="--fail-on")
    return status


def _check_filter(value: Optional[str]) -> None:
    if value is None:
        return
    try:
        re.compile(value)
    except re.error as e:
        raise typer.BadParameter(f"invalid regular expression: {e}", param_hint="--filter") from e


@app.callback(invoke_without_command=True)
def scan(
    output: str = OutputOption,
    namespace: Optional[str] = NamespaceOption,
    context: Optional[str] = ContextOption,
    filter: Optional[str] = typer.Option(None, "--filter", "-f", help="Regex filter on release/chart name"),
    max_workers: int = MaxWorkersOption,
    fail_on: Optional[str] = typer.Option(
        None, "--fail-on", help="Exit with code 3 if any release drifts at least this much: major, minor, patch",
    ),
) -> None:
    """Compare every deployed release with the latest chart published upstream."""
    threshold = _parse_threshold(fail_on)
    _check_filter(filter)
    resolver = build_resolver()

    with console.status("[bold cyan]Connecting to cluster…") as status:
        store = ReleaseStore(K8sClient(context=context))

        def on_progress(i: int, total: int, chart: str) -> None:
            status.update(f"[bold cyan]Checking upstream… [dim]({i}/{total})[/dim] {chart}")

        status.update("[bold cyan]Fetching releases…")
        try:
            results = scan_releases(
                store,
                resolver,
                namespace=namespace,
                filter_regex=filter,
                max_workers=max_workers or None,
                on_progress=on_progress,
            )
        except ReleaseEnumerationError as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(code=1)

    output_results(results, output)

    if threshold is not None and any(r.status >= threshold for r in results):
        raise typer.Exit(code=EXIT_DRIFT)
