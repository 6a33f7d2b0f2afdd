"""Kubernetes API wrapper."""

from __future__ import annotations

from typing import Any

from kubernetes import client, config

from helm_scout.config.settings import settings

REQUEST_TIMEOUT = 30


class K8sClient:
    """Read-only access to Helm's release storage objects."""

    def __init__(self, context: str | None = None):
        self.context = context
        self._core_v1: client.CoreV1Api | None = None
        self._api_client: client.ApiClient | None = None

    def _load_config(self) -> client.ApiClient:
        if self._api_client is not None:
            return self._api_client
        try:
            cfg = client.Configuration()
            config.load_kube_config(
                context=self.context,
                client_configuration=cfg,
            )
            # Prevent indefinite hangs on unreachable clusters
            cfg.retries = 1
            self._api_client = client.ApiClient(configuration=cfg)
        except config.ConfigException:
            config.load_incluster_config()
            self._api_client = client.ApiClient()
        return self._api_client

    @property
    def core_v1(self) -> client.CoreV1Api:
        if self._core_v1 is None:
            self._core_v1 = client.CoreV1Api(api_client=self._load_config())
        return self._core_v1

    def list_release_objects(self, namespace: str | None = None) -> list[Any]:
        """List Helm storage Secrets or ConfigMaps, depending on the storage driver."""
        if settings.storage_driver == "configmaps":
            return self._list_configmaps(namespace)
        return self._list_secrets(namespace)

    def _list_secrets(self, namespace: str | None) -> list[Any]:
        label = settings.helm_label_selector
        field_selector = f"type={settings.secret_type}"
        if namespace:
            result = self.core_v1.list_namespaced_secret(
                namespace=namespace,
                label_selector=label,
                field_selector=field_selector,
                _request_timeout=REQUEST_TIMEOUT,
            )
        else:
            result = self.core_v1.list_secret_for_all_namespaces(
                label_selector=label,
                field_selector=field_selector,
                _request_timeout=REQUEST_TIMEOUT,
            )
        return result.items

    def _list_configmaps(self, namespace: str | None) -> list[Any]:
        label = settings.helm_label_selector
        if namespace:
            result = self.core_v1.list_namespaced_config_map(
                namespace=namespace,
                label_selector=label,
                _request_timeout=REQUEST_TIMEOUT,
            )
        else:
            result = self.core_v1.list_config_map_for_all_namespaces(
                label_selector=label,
                _request_timeout=REQUEST_TIMEOUT,
            )
        return result.items
