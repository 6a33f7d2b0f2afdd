"""Drift comparison result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable

from helm_scout.models import DriftStatus
from helm_scout.models.release import Release


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ComparisonResult:
    release: Release
    latest_version: str = ""
    latest_app_version: str = ""
    status: DriftStatus = DriftStatus.UNKNOWN
    upstream_url: str = ""
    checked_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "release": self.release.to_dict(),
            "latest_version": self.latest_version,
            "latest_app_version": self.latest_app_version,
            "status": self.status.value,
            "upstream_url": self.upstream_url,
            "checked_at": self.checked_at.isoformat(),
        }


def summarize(results: Iterable[ComparisonResult]) -> dict[str, int]:
    """Count results per status token, in severity order."""
    counts = {status.value: 0 for status in sorted(DriftStatus)}
    for r in results:
        counts[r.status.value] += 1
    return counts
