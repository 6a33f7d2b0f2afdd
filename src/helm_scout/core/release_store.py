"""List the releases installed in the cluster."""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from typing import Any

import urllib3
from kubernetes.client import ApiException
from kubernetes.config import ConfigException

from helm_scout.core.helm_decoder import decode_release, read_labels
from helm_scout.core.k8s_client import K8sClient
from helm_scout.errors import ReleaseEnumerationError
from helm_scout.models.release import Release, ReleaseStatus

logger = logging.getLogger(__name__)


class ReleaseStore:
    """Reads Helm releases from the cluster's release storage."""

    def __init__(self, k8s: K8sClient):
        self.k8s = k8s

    def list_releases(
        self,
        namespace: str | None = None,
        filter_regex: str | None = None,
        deployed_only: bool = True,
    ) -> list[Release]:
        """List the latest revision of each Helm release.

        Raises ReleaseEnumerationError if the cluster cannot be queried.
        """
        try:
            objects = self.k8s.list_release_objects(namespace=namespace)
        except (ApiException, ConfigException, urllib3.exceptions.HTTPError) as e:
            raise ReleaseEnumerationError(f"Failed to list Helm releases: {e}") from e

        # Group by (release_name, namespace) and keep only the latest revision
        grouped: dict[tuple[str, str], list[tuple[int, Any]]] = defaultdict(list)
        for obj in objects:
            labels = read_labels(obj)
            grouped[(labels.name, labels.namespace)].append((labels.revision, obj))

        releases: list[Release] = []
        for (name, ns), revisions in grouped.items():
            _, latest_obj = max(revisions, key=lambda x: x[0])
            payload = decode_release(latest_obj)
            if payload is None:
                logger.warning("Skipping release %s/%s: undecodable storage object", ns, name)
                continue
            status = ReleaseStatus.from_str((payload.get("info") or {}).get("status", ""))
            if deployed_only and status != ReleaseStatus.DEPLOYED:
                continue
            release = Release.from_helm_payload(payload, namespace=ns)
            if not release.chart_name:
                logger.warning("Skipping release %s/%s: no chart metadata", ns, name)
                continue
            releases.append(release)

        if filter_regex:
            pattern = re.compile(filter_regex, re.IGNORECASE)
            releases = [
                r for r in releases
                if pattern.search(r.name) or pattern.search(r.chart_name)
            ]

        # Sort by namespace, then name
        releases.sort(key=lambda r: (r.namespace, r.name))
        return releases
