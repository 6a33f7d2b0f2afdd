"""Semver comparison utilities."""

from __future__ import annotations

import semver

from helm_scout.models import DriftStatus


def parse_version(v: str) -> semver.Version | None:
    """Parse a version string, returning None on failure.

    A single leading ``v`` is ignored and missing minor/patch parts
    default to zero (``1.2`` -> ``1.2.0``).
    """
    if not v or not isinstance(v, str):
        return None
    raw = v[1:] if v.startswith("v") else v
    try:
        return semver.Version.parse(raw, optional_minor_and_patch=True)
    except (ValueError, TypeError):
        return None


def classify_drift(current: str, latest: str) -> DriftStatus:
    """Classify the drift between an installed and an upstream version.

    Build metadata is ignored.  An installed version newer than upstream
    is reported as SYNC.
    """
    cur = parse_version(current)
    lat = parse_version(latest)

    if cur is None or lat is None:
        return DriftStatus.UNKNOWN
    if lat <= cur:
        return DriftStatus.SYNC
    if lat.major != cur.major:
        return DriftStatus.MAJOR_DRIFT
    if lat.minor != cur.minor:
        return DriftStatus.MINOR_DRIFT
    return DriftStatus.PATCH_DRIFT
