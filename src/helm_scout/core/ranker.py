"""Pick the authoritative upstream package among search results."""

from __future__ import annotations

from typing import Iterable

from helm_scout.models.upstream import UpstreamCandidate


def _outranks(challenger: UpstreamCandidate, best: UpstreamCandidate) -> bool:
    """True if *challenger* should replace the current *best*.

    Criteria in precedence order, each consulted only on a tie of the
    previous one: official repository, not deprecated, more stars,
    verified publisher.  A full tie keeps the earlier candidate.
    """
    if challenger.official != best.official:
        return challenger.official
    if challenger.deprecated != best.deprecated:
        return not challenger.deprecated
    if challenger.stars != best.stars:
        return challenger.stars > best.stars
    return challenger.verified_publisher and not best.verified_publisher


def select_best(chart_name: str, candidates: Iterable[UpstreamCandidate]) -> UpstreamCandidate | None:
    """Return the best candidate whose name equals *chart_name*, or None."""
    best: UpstreamCandidate | None = None
    for candidate in candidates:
        if candidate.name != chart_name:
            continue
        if best is None or _outranks(candidate, best):
            best = candidate
    return best
