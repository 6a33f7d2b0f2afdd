"""Helm release models."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Any


class ReleaseStatus(enum.Enum):
    DEPLOYED = "deployed"
    FAILED = "failed"
    SUPERSEDED = "superseded"
    PENDING_INSTALL = "pending-install"
    PENDING_UPGRADE = "pending-upgrade"
    PENDING_ROLLBACK = "pending-rollback"
    UNINSTALLING = "uninstalling"
    UNINSTALLED = "uninstalled"
    UNKNOWN = "unknown"

    @classmethod
    def from_str(cls, s: str) -> ReleaseStatus:
        for member in cls:
            if member.value == s:
                return member
        return cls.UNKNOWN


@dataclass(frozen=True)
class Release:
    """One deployed chart instance, as read from Helm's release storage."""

    name: str
    namespace: str
    chart_name: str
    chart_version: str
    app_version: str = ""
    revision: int = 0
    updated: str = ""
    icon: str = ""

    @property
    def updated_short(self) -> str:
        """Return a human-readable short timestamp."""
        raw = self.updated
        if not raw:
            return ""
        try:
            dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
            return dt.strftime("%Y-%m-%d %H:%M:%S")
        except (ValueError, AttributeError):
            return raw[:19] if len(raw) > 19 else raw

    @classmethod
    def from_helm_payload(cls, d: dict[str, Any], namespace: str = "") -> Release:
        """Build a Release from a decoded Helm v3 release object."""
        metadata = (d.get("chart") or {}).get("metadata") or {}
        info = d.get("info") or {}
        return cls(
            name=d.get("name", ""),
            namespace=d.get("namespace") or namespace,
            chart_name=metadata.get("name", ""),
            chart_version=metadata.get("version", ""),
            app_version=metadata.get("appVersion", ""),
            revision=int(d.get("version", 0) or 0),
            updated=info.get("last_deployed", ""),
            icon=metadata.get("icon", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "namespace": self.namespace,
            "chart_name": self.chart_name,
            "chart_version": self.chart_version,
            "app_version": self.app_version,
            "revision": self.revision,
            "updated": self.updated,
        }
        if self.icon:
            data["icon"] = self.icon
        return data
