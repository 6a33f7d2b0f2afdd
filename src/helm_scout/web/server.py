"""HTTP API server - Flask app factory.

Routes:

- ``GET /api/health``       liveness/readiness probe
- ``GET /api/v1/releases``  drift report for every deployed release
"""

from __future__ import annotations

import logging

from flask import Blueprint, Flask, current_app, jsonify

from helm_scout.core.drift_checker import scan
from helm_scout.core.release_store import ReleaseStore
from helm_scout.core.upstream_resolver import UpstreamResolver
from helm_scout.errors import ReleaseEnumerationError

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.route("/health")
def health():  # type: ignore[no-untyped-def]
    return jsonify({"status": "ok"})


@api_bp.route("/v1/releases")
def releases():  # type: ignore[no-untyped-def]
    store: ReleaseStore = current_app.config["RELEASE_STORE"]
    resolver: UpstreamResolver = current_app.config["RESOLVER"]
    try:
        results = scan(store, resolver, max_workers=current_app.config["MAX_WORKERS"])
    except ReleaseEnumerationError as e:
        logger.error("Failed to list releases: %s", e)
        return jsonify({"error": str(e)}), 500
    return jsonify([r.to_dict() for r in results])


def create_app(
    store: ReleaseStore,
    resolver: UpstreamResolver,
    max_workers: int | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        store: Source of installed releases.
        resolver: Upstream resolver shared by all requests.
        max_workers: Fan-out cap per request (None = one per release).

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    app.config["RELEASE_STORE"] = store
    app.config["RESOLVER"] = resolver
    app.config["MAX_WORKERS"] = max_workers
    app.json.sort_keys = False

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
