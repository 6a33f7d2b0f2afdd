"""Tests for release enumeration from Helm storage objects."""

from types import SimpleNamespace

import pytest
from conftest import helm_payload, storage_object
from kubernetes.client import ApiException

from helm_scout.core.helm_decoder import decode_release, read_labels
from helm_scout.core.release_store import ReleaseStore
from helm_scout.errors import ReleaseEnumerationError


class FakeK8s:
    def __init__(self, objects=None, error=None):
        self.objects = objects or []
        self.error = error
        self.namespaces = []

    def list_release_objects(self, namespace=None):
        self.namespaces.append(namespace)
        if self.error:
            raise self.error
        return self.objects


class TestHelmDecoder:

    def test_decodes_secret_payload(self):
        payload = helm_payload("web", chart="nginx", version="15.1.0")
        assert decode_release(storage_object(payload)) == payload

    def test_decodes_configmap_payload(self):
        payload = helm_payload("web")
        assert decode_release(storage_object(payload, configmap=True)) == payload

    def test_garbage_returns_none(self):
        obj = SimpleNamespace(metadata=None, data={"release": "bm90LWd6aXA="})
        assert decode_release(obj) is None

    def test_missing_release_key_returns_none(self):
        assert decode_release(SimpleNamespace(metadata=None, data={})) is None

    def test_read_labels(self):
        labels = read_labels(storage_object(helm_payload("api", namespace="prod", revision=7)))
        assert (labels.name, labels.namespace, labels.revision) == ("api", "prod", 7)


class TestReleaseStore:

    def test_keeps_latest_revision_per_release(self):
        k8s = FakeK8s([
            storage_object(helm_payload("web", version="1.0.0", revision=1, status="superseded")),
            storage_object(helm_payload("web", version="1.2.0", revision=3)),
            storage_object(helm_payload("web", version="1.1.0", revision=2, status="superseded")),
        ])
        releases = ReleaseStore(k8s).list_releases()

        assert len(releases) == 1
        assert releases[0].chart_version == "1.2.0"
        assert releases[0].revision == 3
        assert releases[0].updated == "2024-05-01T10:00:00Z"

    def test_same_name_in_two_namespaces_are_distinct(self):
        k8s = FakeK8s([
            storage_object(helm_payload("web", namespace="b")),
            storage_object(helm_payload("web", namespace="a")),
        ])
        releases = ReleaseStore(k8s).list_releases()
        assert [(r.namespace, r.name) for r in releases] == [("a", "web"), ("b", "web")]

    def test_only_deployed_by_default(self):
        k8s = FakeK8s([
            storage_object(helm_payload("ok")),
            storage_object(helm_payload("broken", status="failed")),
        ])
        assert [r.name for r in ReleaseStore(k8s).list_releases()] == ["ok"]
        assert len(ReleaseStore(k8s).list_releases(deployed_only=False)) == 2

    def test_regex_filter_matches_release_or_chart(self):
        k8s = FakeK8s([
            storage_object(helm_payload("frontend", chart="nginx")),
            storage_object(helm_payload("cache", chart="redis")),
            storage_object(helm_payload("monitoring", chart="kube-prometheus-stack")),
        ])
        names = [r.name for r in ReleaseStore(k8s).list_releases(filter_regex="REDIS|front")]
        assert names == ["cache", "frontend"]

    def test_namespace_is_forwarded(self):
        k8s = FakeK8s([])
        ReleaseStore(k8s).list_releases(namespace="apps")
        assert k8s.namespaces == ["apps"]

    def test_undecodable_release_is_skipped(self):
        bad = storage_object(helm_payload("bad"))
        bad.data = {"release": "!!!"}
        k8s = FakeK8s([bad, storage_object(helm_payload("good"))])
        assert [r.name for r in ReleaseStore(k8s).list_releases()] == ["good"]

    def test_api_error_is_fatal(self):
        k8s = FakeK8s(error=ApiException(status=403, reason="Forbidden"))
        with pytest.raises(ReleaseEnumerationError, match="Forbidden"):
            ReleaseStore(k8s).list_releases()
