"""Application configuration and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _env_int(name: str, default: int) -> int:
    """Read an integer env var, falling back to *default* when unset or invalid."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _default_presets_file() -> Path | None:
    raw = os.environ.get("HSCOUT_PRESETS_FILE", "").strip()
    return Path(raw).expanduser() if raw else None


def _default_storage_driver() -> str:
    # Same variable helm itself reads; empty means the secrets driver
    driver = os.environ.get("HELM_DRIVER", "").strip().lower()
    if driver in ("configmap", "configmaps"):
        return "configmaps"
    return "secrets"


@dataclass
class Settings:
    artifacthub_url: str = field(
        default_factory=lambda: os.environ.get("HSCOUT_ARTIFACTHUB_URL", "https://artifacthub.io").rstrip("/")
    )
    request_timeout: float = field(default_factory=lambda: _env_float("HSCOUT_REQUEST_TIMEOUT", 10.0))
    search_limit: int = field(default_factory=lambda: _env_int("HSCOUT_SEARCH_LIMIT", 20))
    max_workers: int = field(default_factory=lambda: _env_int("HSCOUT_MAX_WORKERS", 0))  # 0 = one per release
    presets_file: Path | None = field(default_factory=_default_presets_file)
    storage_driver: str = field(default_factory=_default_storage_driver)  # "secrets" or "configmaps"
    helm_label_selector: str = "owner=helm"
    secret_type: str = "helm.sh/release.v1"
    log_level: str = field(default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper())
    server_host: str = field(default_factory=lambda: os.environ.get("HSCOUT_HOST", "0.0.0.0"))
    server_port: int = field(default_factory=lambda: _env_int("PORT", 8080))


# Global singleton
settings = Settings()
