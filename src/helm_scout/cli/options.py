"""Shared CLI options."""

from __future__ import annotations

import typer

from helm_scout.config.settings import settings

OutputOption = typer.Option("table", "--output", "-o", help="Output format: table, json, yaml")
NamespaceOption = typer.Option(None, "--namespace", "-n", help="Kubernetes namespace (default: all)")
ContextOption = typer.Option(None, "--context", help="Kubernetes context name")
MaxWorkersOption = typer.Option(
    settings.max_workers, "--max-workers", min=0, help="Cap on concurrent upstream lookups (0: one per release)",
)
