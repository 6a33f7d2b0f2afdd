"""Shared fixtures and stubs."""

from __future__ import annotations

import base64
import gzip
import json
from types import SimpleNamespace
from typing import Any

import pytest

from helm_scout.errors import UpstreamTransportError
from helm_scout.models.release import Release
from helm_scout.models.upstream import UpstreamCandidate


def make_release(
    name: str = "web",
    chart_name: str = "nginx",
    chart_version: str = "1.0.0",
    namespace: str = "default",
    app_version: str = "1.25.0",
    revision: int = 1,
) -> Release:
    return Release(
        name=name,
        namespace=namespace,
        chart_name=chart_name,
        chart_version=chart_version,
        app_version=app_version,
        revision=revision,
    )


def make_candidate(
    name: str = "nginx",
    repository: str = "bitnami",
    version: str = "2.0.0",
    app_version: str = "",
    stars: int = 0,
    official: bool = False,
    verified_publisher: bool = False,
    deprecated: bool = False,
) -> UpstreamCandidate:
    return UpstreamCandidate(
        name=name,
        repository=repository,
        version=version,
        app_version=app_version,
        stars=stars,
        official=official,
        verified_publisher=verified_publisher,
        deprecated=deprecated,
        url=f"https://artifacthub.io/packages/helm/{repository}/{name}",
    )


class FakeTransport:
    """In-memory registry recording every call it receives.

    ``details`` maps (repository, package) and ``searches`` maps a query to
    a result or to an exception instance to raise.
    """

    def __init__(
        self,
        details: dict[tuple[str, str], Any] | None = None,
        searches: dict[str, Any] | None = None,
    ):
        self.details = details or {}
        self.searches = searches or {}
        self.calls: list[tuple[str, ...]] = []

    def fetch_package_detail(self, repository: str, package: str) -> UpstreamCandidate:
        self.calls.append(("detail", repository, package))
        result = self.details.get((repository, package))
        if result is None:
            raise UpstreamTransportError(package, "HTTP 404")
        if isinstance(result, Exception):
            raise result
        return result

    def search_packages(self, query: str) -> list[UpstreamCandidate]:
        self.calls.append(("search", query))
        result = self.searches.get(query, [])
        if isinstance(result, Exception):
            raise result
        return list(result)


def encode_release_payload(payload: dict, configmap: bool = False) -> str:
    """Encode a release dict the way Helm stores it."""
    encoded = base64.b64encode(gzip.compress(json.dumps(payload).encode("utf-8")))
    if configmap:
        encoded = base64.b64encode(encoded)
    return encoded.decode("ascii")


def helm_payload(
    name: str,
    namespace: str = "default",
    chart: str = "nginx",
    version: str = "1.0.0",
    app_version: str = "1.25.0",
    revision: int = 1,
    status: str = "deployed",
) -> dict:
    return {
        "name": name,
        "namespace": namespace,
        "version": revision,
        "info": {"status": status, "last_deployed": "2024-05-01T10:00:00Z"},
        "chart": {"metadata": {"name": chart, "version": version, "appVersion": app_version}},
    }


def storage_object(payload: dict, configmap: bool = False) -> SimpleNamespace:
    """Mimic a Kubernetes Secret/ConfigMap holding a Helm release."""
    return SimpleNamespace(
        metadata=SimpleNamespace(
            name=f"sh.helm.release.v1.{payload['name']}.v{payload['version']}",
            namespace=payload["namespace"],
            labels={
                "name": payload["name"],
                "owner": "helm",
                "status": payload["info"]["status"],
                "version": str(payload["version"]),
            },
        ),
        data={"release": encode_release_payload(payload, configmap=configmap)},
    )


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()
