"""Filter chain for trainer candidates.

Filters:
  1. AvailabilityFilter - drop trainers not accepting clients
  2. MaxRateFilter      - drop trainers whose known rate exceeds the budget
"""

import logging
from collections.abc import Callable, Sequence

from trainer_search.core.schemas import CandidateRecord

logger = logging.getLogger(__name__)

# A filter is a callable that takes candidates and returns a subset.
Filter = Callable[[Sequence[CandidateRecord]], list[CandidateRecord]]


class AvailabilityFilter:
    """Keep only candidates flagged as available."""

    def __call__(self, candidates: Sequence[CandidateRecord]) -> list[CandidateRecord]:
        result = [c for c in candidates if c.is_available]
        removed = len(candidates) - len(result)
        if removed:
            logger.debug("AvailabilityFilter: removed %d candidates", removed)
        return result


class MaxRateFilter:
    """Remove candidates whose hourly rate is strictly above max_rate.

    A candidate with no rate is kept, as is one priced exactly at max_rate.
    With max_rate None the filter passes everything through.
    """

    def __init__(self, max_rate: float | None) -> None:
        self._max_rate = max_rate

    def __call__(self, candidates: Sequence[CandidateRecord]) -> list[CandidateRecord]:
        if self._max_rate is None:
            return list(candidates)
        result = [c for c in candidates if self._within_budget(c)]
        removed = len(candidates) - len(result)
        if removed:
            logger.debug("MaxRateFilter: removed %d candidates", removed)
        return result

    def _within_budget(self, candidate: CandidateRecord) -> bool:
        return candidate.hourly_rate is None or candidate.hourly_rate <= self._max_rate


def run_filter_chain(
    candidates: Sequence[CandidateRecord],
    filters: Sequence[Filter],
) -> list[CandidateRecord]:
    """Apply filters in order, returning the surviving candidates."""
    result = list(candidates)
    for f in filters:
        result = f(result)
    return result
