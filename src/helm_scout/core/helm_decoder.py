"""Decode Helm v3 release data from Kubernetes Secrets or ConfigMaps.

Secrets hold ``base64(gzip(json))``; the Kubernetes client already strips
the Secret's own base64 layer, but some client versions hand back the raw
value, so one extra base64 layer is tolerated.  ConfigMaps always carry
the additional layer.
"""

from __future__ import annotations

import base64
import binascii
import gzip
import json
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

_GZIP_MAGIC = b"\x1f\x8b"


@dataclass(frozen=True)
class StorageLabels:
    """Release identity read from storage object labels, without decoding."""

    name: str
    namespace: str
    revision: int


def read_labels(obj: Any) -> StorageLabels:
    labels: dict[str, str] = {}
    namespace = ""
    if getattr(obj, "metadata", None):
        labels = dict(obj.metadata.labels or {})
        namespace = obj.metadata.namespace or ""
    try:
        revision = int(labels.get("version", "0"))
    except ValueError:
        revision = 0
    return StorageLabels(
        name=labels.get("name", ""),
        namespace=namespace,
        revision=revision,
    )


def _unwrap(payload: bytes) -> dict:
    """Strip base64 layers until the gzip stream is reached, then load the JSON."""
    data = base64.b64decode(payload)
    if data[:2] != _GZIP_MAGIC:
        data = base64.b64decode(data)
    return json.loads(gzip.decompress(data).decode("utf-8"))


def decode_release(obj: Any) -> dict | None:
    """Decode the release payload of a Helm storage Secret or ConfigMap.

    Returns the release object as a dict, or None if it cannot be decoded.
    """
    data = getattr(obj, "data", None)
    if not data or "release" not in data:
        return None
    raw = data["release"]
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    try:
        return _unwrap(raw)
    except (binascii.Error, OSError, EOFError, ValueError):
        logger.debug("Failed to decode release object %s", _safe_name(obj), exc_info=True)
        return None


def _safe_name(obj: Any) -> str:
    if getattr(obj, "metadata", None):
        return obj.metadata.name or "<unknown>"
    return "<unknown>"
