"""Exception hierarchy."""

from __future__ import annotations


class ScoutError(Exception):
    """Base class for all Helm Scout errors."""


class ReleaseEnumerationError(ScoutError):
    """Listing releases from the cluster failed. Fatal for an invocation."""


class ResolutionError(ScoutError):
    """The latest upstream version of a chart could not be determined."""

    def __init__(self, chart_name: str, message: str):
        super().__init__(f"{chart_name}: {message}")
        self.chart_name = chart_name


class UpstreamTransportError(ResolutionError):
    """Network failure, unexpected HTTP status or undecodable response."""


class PackageNotFoundError(ResolutionError):
    """No upstream package matched the chart name."""
