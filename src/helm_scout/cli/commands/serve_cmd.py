"""hscout serve - Serve the drift report over HTTP."""

from __future__ import annotations

from typing import Optional

import typer

from helm_scout.cli.options import ContextOption, MaxWorkersOption
from helm_scout.config.settings import settings
from helm_scout.core.k8s_client import K8sClient
from helm_scout.core.release_store import ReleaseStore
from helm_scout.core.upstream_resolver import build_resolver
from helm_scout.web.server import create_app

app = typer.Typer()


@app.callback(invoke_without_command=True)
def serve(
    host: str = typer.Option(settings.server_host, "--host", help="Bind address"),
    port: int = typer.Option(settings.server_port, "--port", "-p", help="Listen port"),
    context: Optional[str] = ContextOption,
    max_workers: int = MaxWorkersOption,
) -> None:
    """Run the HTTP API (GET /api/health, GET /api/v1/releases)."""
    store = ReleaseStore(K8sClient(context=context))
    flask_app = create_app(store, build_resolver(), max_workers=max_workers or None)
    flask_app.run(host=host, port=port, threaded=True)
