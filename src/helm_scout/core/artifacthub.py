"""Artifact Hub HTTP client."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests

from helm_scout import __version__
from helm_scout.errors import UpstreamTransportError
from helm_scout.models.upstream import UpstreamCandidate

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": f"helm-scout/{__version__}",
    "Accept": "application/json",
}


class UpstreamTransport(Protocol):
    """Anything that can look up Helm packages in a registry."""

    def fetch_package_detail(self, repository: str, package: str) -> UpstreamCandidate: ...

    def search_packages(self, query: str) -> list[UpstreamCandidate]: ...


class ArtifactHubClient:
    """Thin wrapper around the Artifact Hub REST API.

    A single ``requests.Session`` is shared by all callers; every request
    carries its own timeout.  No retries are attempted.
    """

    def __init__(
        self,
        base_url: str = "https://artifacthub.io",
        timeout: float = 10.0,
        search_limit: int = 20,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.search_limit = search_limit
        self._session = session or requests.Session()
        self._session.headers.update(DEFAULT_HEADERS)

    @property
    def api_url(self) -> str:
        return f"{self.base_url}/api/v1"

    def fetch_package_detail(self, repository: str, package: str) -> UpstreamCandidate:
        """Fetch one Helm package by repository and package name."""
        url = f"{self.api_url}/packages/helm/{repository}/{package}"
        data = self._get_json(url, package)
        if not isinstance(data, dict):
            raise UpstreamTransportError(package, "detail response is not a JSON object")
        return self._decode(data, package)

    def search_packages(self, query: str) -> list[UpstreamCandidate]:
        """Search Helm packages (kind 0) matching *query*."""
        params = {"ts_query_web": query, "kind": 0, "limit": self.search_limit}
        data = self._get_json(f"{self.api_url}/packages/search", query, params=params)
        packages = data.get("packages") if isinstance(data, dict) else None
        if packages is None:
            return []
        if not isinstance(packages, list):
            raise UpstreamTransportError(query, "search response 'packages' is not a list")
        return [self._decode(p, query) for p in packages if isinstance(p, dict)]

    def _decode(self, data: dict[str, Any], chart_name: str) -> UpstreamCandidate:
        try:
            return UpstreamCandidate.from_dict(data, base_url=self.base_url)
        except (AttributeError, TypeError, ValueError) as e:
            raise UpstreamTransportError(chart_name, f"malformed package object: {e}") from e

    def _get_json(self, url: str, chart_name: str, params: dict[str, Any] | None = None) -> Any:
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self._session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamTransportError(chart_name, f"request to {url} failed: {e}") from e

        if resp.status_code != 200:
            raise UpstreamTransportError(chart_name, f"artifact hub returned HTTP {resp.status_code} for {url}")

        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamTransportError(chart_name, f"invalid JSON from {url}") from e
