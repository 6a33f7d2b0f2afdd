"""Drift status color map."""

from helm_scout.models import DriftStatus

DRIFT_COLORS: dict[DriftStatus, str] = {
    DriftStatus.SYNC: "green",
    DriftStatus.PATCH_DRIFT: "cyan",
    DriftStatus.MINOR_DRIFT: "yellow",
    DriftStatus.MAJOR_DRIFT: "red bold",
    DriftStatus.UNKNOWN: "dim",
}


def styled_drift(status: DriftStatus) -> str:
    color = DRIFT_COLORS.get(status, "white")
    return f"[{color}]{status.value}[/{color}]"
