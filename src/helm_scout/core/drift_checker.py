"""Compare deployed chart versions against the latest upstream versions."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Sequence

from helm_scout.core.release_store import ReleaseStore
from helm_scout.core.upstream_resolver import UpstreamResolver
from helm_scout.errors import ResolutionError
from helm_scout.models.comparison import ComparisonResult
from helm_scout.models.release import Release
from helm_scout.utils.version_compare import classify_drift

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


def _check_release(release: Release, resolver: UpstreamResolver) -> ComparisonResult:
    """Resolve and classify a single release. Never raises."""
    try:
        latest = resolver.resolve(release.chart_name)
        return ComparisonResult(
            release=release,
            latest_version=latest.latest_version,
            latest_app_version=latest.latest_app_version,
            upstream_url=latest.url,
            status=classify_drift(release.chart_version, latest.latest_version),
        )
    except ResolutionError as e:
        logger.warning(
            "Failed to check upstream for %s (release %s/%s): %s",
            release.chart_name, release.namespace, release.name, e,
        )
    except Exception:
        logger.exception(
            "Unexpected error checking upstream for %s (release %s/%s)",
            release.chart_name, release.namespace, release.name,
        )
    return ComparisonResult(release=release)


def compute_drift(
    releases: Sequence[Release],
    resolver: UpstreamResolver,
    max_workers: int | None = None,
    on_progress: ProgressCallback | None = None,
) -> list[ComparisonResult]:
    """Check every release against upstream concurrently.

    Returns one result per release, in input order.  A release whose
    upstream cannot be resolved gets an UNKNOWN result; it never affects
    the others.  *max_workers* caps the fan-out; None, 0 or a negative
    value means one worker per release.
    """
    total = len(releases)
    if total == 0:
        return []

    # Slot i belongs to release i and is written only by its own task
    results: list[ComparisonResult | None] = [None] * total

    def run(index: int, release: Release) -> str:
        results[index] = _check_release(release, resolver)
        return release.chart_name

    workers = min(max_workers, total) if max_workers and max_workers > 0 else total
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="hscout") as executor:
        futures = [executor.submit(run, i, r) for i, r in enumerate(releases)]
        for done, future in enumerate(as_completed(futures), 1):
            chart_name = future.result()
            if on_progress:
                on_progress(done, total, chart_name)

    return [r for r in results if r is not None]


def scan(
    store: ReleaseStore,
    resolver: UpstreamResolver,
    namespace: str | None = None,
    filter_regex: str | None = None,
    max_workers: int | None = None,
    on_progress: ProgressCallback | None = None,
) -> list[ComparisonResult]:
    """List releases from the cluster and compute their drift.

    A ReleaseEnumerationError from the store propagates to the caller.
    """
    releases = store.list_releases(namespace=namespace, filter_regex=filter_regex)
    logger.info("Found %d release(s)", len(releases))
    return compute_drift(releases, resolver, max_workers=max_workers, on_progress=on_progress)
