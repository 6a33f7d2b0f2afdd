"""Resolve the latest upstream version of a chart.

Two tiers:

1. Preset - charts whose names collide across publishers are pinned to a
   known repository and fetched directly.  A preset is authoritative, so a
   failed fetch is final and never falls back to search.
2. Search - anything else is searched by name and the results are ranked
   by :func:`helm_scout.core.ranker.select_best`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml

from helm_scout.config.settings import Settings, settings
from helm_scout.core.artifacthub import ArtifactHubClient, UpstreamTransport
from helm_scout.core.ranker import select_best
from helm_scout.errors import PackageNotFoundError
from helm_scout.models.upstream import PackagePreset, ResolvedUpstream

logger = logging.getLogger(__name__)

DEFAULT_PRESETS: Mapping[str, PackagePreset] = MappingProxyType({
    "argo-cd": PackagePreset("argo", "argo-cd"),
    "aws-load-balancer-controller": PackagePreset("aws", "aws-load-balancer-controller"),
    "karpenter": PackagePreset("aws-karpenter", "karpenter"),
    "keda": PackagePreset("kedacore", "keda"),
    "cert-manager": PackagePreset("cert-manager", "cert-manager"),
    "ingress-nginx": PackagePreset("ingress-nginx", "ingress-nginx"),
    "prometheus": PackagePreset("prometheus-community", "prometheus"),
    "kube-prometheus-stack": PackagePreset("prometheus-community", "kube-prometheus-stack"),
    "external-dns": PackagePreset("external-dns", "external-dns"),
    "n8n": PackagePreset("community-charts", "n8n"),
})


def load_presets(path: Path | None = None) -> Mapping[str, PackagePreset]:
    """Return the default presets merged with entries from a YAML file.

    The file maps chart names to ``{repository, package}``; ``package``
    defaults to the chart name.  Malformed entries are skipped.
    """
    if path is None:
        return DEFAULT_PRESETS

    merged = dict(DEFAULT_PRESETS)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        logger.warning("Could not read presets file %s, using defaults", path, exc_info=True)
        return DEFAULT_PRESETS

    if not isinstance(data, dict):
        logger.warning("Presets file %s is not a mapping, using defaults", path)
        return DEFAULT_PRESETS

    for chart_name, entry in data.items():
        if not isinstance(entry, dict) or not entry.get("repository"):
            logger.warning("Skipping malformed preset %r in %s", chart_name, path)
            continue
        merged[str(chart_name)] = PackagePreset(
            repository=str(entry["repository"]),
            package=str(entry.get("package") or chart_name),
        )
    return MappingProxyType(merged)


class UpstreamResolver:
    """Stateless apart from the read-only preset table; safe to share across threads."""

    def __init__(
        self,
        transport: UpstreamTransport,
        presets: Mapping[str, PackagePreset] = DEFAULT_PRESETS,
    ):
        self.transport = transport
        self.presets = presets

    def resolve(self, chart_name: str) -> ResolvedUpstream:
        """Resolve *chart_name* to its latest upstream release.

        Raises ResolutionError (or a subclass) when no version can be found.
        """
        preset = self.presets.get(chart_name)
        if preset is not None:
            logger.debug("Resolving %s via preset %s/%s", chart_name, preset.repository, preset.package)
            pkg = self.transport.fetch_package_detail(preset.repository, preset.package)
        else:
            logger.debug("Resolving %s via search", chart_name)
            candidates = self.transport.search_packages(chart_name)
            pkg = select_best(chart_name, candidates)
            if pkg is None:
                raise PackageNotFoundError(
                    chart_name, f"no exact match among {len(candidates)} search result(s)",
                )

        return ResolvedUpstream(
            latest_version=pkg.version,
            latest_app_version=pkg.app_version,
            url=pkg.url,
            resolved_at=datetime.now(timezone.utc),
        )


def build_resolver(cfg: Settings = settings) -> UpstreamResolver:
    """Wire an Artifact Hub backed resolver from settings."""
    transport = ArtifactHubClient(
        base_url=cfg.artifacthub_url,
        timeout=cfg.request_timeout,
        search_limit=cfg.search_limit,
    )
    return UpstreamResolver(transport, presets=load_presets(cfg.presets_file))
