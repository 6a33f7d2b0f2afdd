"""Upstream package models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class PackagePreset:
    repository: str
    package: str


@dataclass(frozen=True)
class UpstreamCandidate:
    """One published package as reported by the registry."""

    name: str
    repository: str
    version: str = ""
    app_version: str = ""
    stars: int = 0
    official: bool = False
    verified_publisher: bool = False
    deprecated: bool = False
    url: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any], base_url: str = "https://artifacthub.io") -> UpstreamCandidate:
        """Decode an Artifact Hub package summary or detail object."""
        repo = d.get("repository") or {}
        name = str(d.get("name") or "")
        repo_name = str(repo.get("name") or "")
        return cls(
            name=name,
            repository=repo_name,
            version=str(d.get("version") or ""),
            app_version=str(d.get("app_version") or ""),
            stars=int(d.get("stars") or 0),
            official=bool(repo.get("official", False)),
            verified_publisher=bool(repo.get("verified_publisher", False)),
            deprecated=bool(d.get("deprecated", False)),
            url=f"{base_url}/packages/helm/{repo_name}/{name}",
        )


@dataclass(frozen=True)
class ResolvedUpstream:
    latest_version: str
    latest_app_version: str
    url: str
    resolved_at: datetime
