"""Data models for Helm Scout."""

from __future__ import annotations

import enum
import functools


@functools.total_ordering
class DriftStatus(enum.Enum):
    """Drift severity between an installed chart and its upstream.

    Members are ordered by severity: ``UNKNOWN < SYNC < PATCH_DRIFT <
    MINOR_DRIFT < MAJOR_DRIFT``.  ``UNKNOWN`` means drift could not be
    determined and ranks lowest so it never counts as an alarm.
    """

    SYNC = "SYNC"
    PATCH_DRIFT = "PATCH_DRIFT"
    MINOR_DRIFT = "MINOR_DRIFT"
    MAJOR_DRIFT = "MAJOR_DRIFT"
    UNKNOWN = "UNKNOWN"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    @property
    def is_drift(self) -> bool:
        return self.severity > _SEVERITY[DriftStatus.SYNC]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DriftStatus):
            return NotImplemented
        return self.severity < other.severity

    @classmethod
    def from_str(cls, s: str) -> DriftStatus:
        """Parse a wire token (``MINOR_DRIFT``) or short name (``minor``)."""
        key = s.strip().upper().replace("-", "_")
        for member in cls:
            if key in (member.value, member.value.split("_")[0]):
                return member
        raise ValueError(f"Unknown drift status: {s!r}")


_SEVERITY: dict[DriftStatus, int] = {
    DriftStatus.UNKNOWN: -1,
    DriftStatus.SYNC: 0,
    DriftStatus.PATCH_DRIFT: 1,
    DriftStatus.MINOR_DRIFT: 2,
    DriftStatus.MAJOR_DRIFT: 3,
}
