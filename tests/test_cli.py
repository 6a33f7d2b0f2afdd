"""Tests for the hscout CLI."""

import pytest
from conftest import FakeTransport, make_candidate, make_release
from typer.testing import CliRunner

from helm_scout import __version__
from helm_scout.cli import app as app_module
from helm_scout.cli.commands import scan_cmd
from helm_scout.core.upstream_resolver import UpstreamResolver
from helm_scout.errors import ReleaseEnumerationError

runner = CliRunner()


class StubStore:
    def __init__(self, releases=None, error=None):
        self.releases = releases or []
        self.error = error

    def list_releases(self, namespace=None, filter_regex=None):
        if self.error:
            raise self.error
        return self.releases


@pytest.fixture
def wire(monkeypatch):
    """Point the scan command at a stub store and an in-memory registry."""

    def _wire(releases=None, error=None, searches=None):
        store = StubStore(releases, error)
        resolver = UpstreamResolver(FakeTransport(searches=searches or {}))
        monkeypatch.setattr(scan_cmd, "ReleaseStore", lambda k8s: store)
        monkeypatch.setattr(scan_cmd, "build_resolver", lambda: resolver)
        return store

    return _wire


def test_version():
    result = runner.invoke(app_module.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_scan_json_output(wire):
    wire(
        releases=[make_release(name="web", chart_name="nginx", chart_version="1.0.0")],
        searches={"nginx": [make_candidate(name="nginx", version="2.0.0")]},
    )
    result = runner.invoke(app_module.app, ["scan", "-o", "json"])

    assert result.exit_code == 0, result.output
    assert '"status": "MAJOR_DRIFT"' in result.output
    assert '"latest_version": "2.0.0"' in result.output


def test_scan_table_output(wire):
    wire(
        releases=[make_release(name="web", chart_name="nginx", chart_version="1.0.0")],
        searches={"nginx": [make_candidate(name="nginx", version="1.0.0")]},
    )
    result = runner.invoke(app_module.app, ["scan"])

    assert result.exit_code == 0, result.output
    assert "SYNC" in result.output
    assert "1 release(s)" in result.output


def test_scan_enumeration_failure_exits_1(wire):
    wire(error=ReleaseEnumerationError("Failed to list Helm releases: forbidden"))
    result = runner.invoke(app_module.app, ["scan"])

    assert result.exit_code == 1
    assert "forbidden" in result.output


def test_fail_on_threshold_reached(wire):
    wire(
        releases=[make_release(chart_name="nginx", chart_version="1.0.0")],
        searches={"nginx": [make_candidate(name="nginx", version="1.1.0")]},
    )
    result = runner.invoke(app_module.app, ["scan", "-o", "json", "--fail-on", "minor"])
    assert result.exit_code == scan_cmd.EXIT_DRIFT


def test_fail_on_threshold_not_reached(wire):
    wire(
        releases=[make_release(chart_name="nginx", chart_version="1.0.0")],
        searches={"nginx": [make_candidate(name="nginx", version="1.0.1")]},
    )
    result = runner.invoke(app_module.app, ["scan", "-o", "json", "--fail-on", "minor"])
    assert result.exit_code == 0


def test_unknown_never_trips_fail_on(wire):
    wire(releases=[make_release(chart_name="mystery")])
    result = runner.invoke(app_module.app, ["scan", "-o", "json", "--fail-on", "patch"])
    assert result.exit_code == 0
    assert '"status": "UNKNOWN"' in result.output


def test_fail_on_rejects_non_drift_values(wire):
    wire()
    result = runner.invoke(app_module.app, ["scan", "--fail-on", "sync"])
    assert result.exit_code != 0
    assert result.exit_code != scan_cmd.EXIT_DRIFT


def test_invalid_filter_is_a_usage_error(wire):
    wire(releases=[make_release()])
    result = runner.invoke(app_module.app, ["scan", "--filter", "("])

    assert result.exit_code == 2
    assert "invalid regular expression" in result.output
    assert isinstance(result.exception, SystemExit)
