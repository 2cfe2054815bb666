"""Rule-based relevance scoring for trainer candidates.

Score range: 0-100, the sum of four components:
  goal      0-40  share of requested goals the trainer specializes in
  style     20    fixed; trainer records carry no training style yet
  level     0-20  experience band fit for the requested fitness level
  location  0-20  city match 20, country match 10, otherwise 0

A facet missing from the intent scores full marks for its component.
Ranking: score desc, then experience_years desc, then display_name asc.
"""

import logging
import unicodedata
from collections.abc import Sequence

from trainer_search.core.schemas import (
    CandidateRecord,
    ScoreBreakdown,
    ScoredCandidate,
    SearchIntent,
)
from trainer_search.pipeline.matcher import MaxRateFilter

logger = logging.getLogger(__name__)

GOAL_WEIGHT = 40
STYLE_SCORE = 20
LEVEL_WEIGHT = 20
LOCATION_WEIGHT = 20
COUNTRY_MATCH_SCORE = 10

# (low, high, score) experience bands per level; high None means unbounded.
_LEVEL_BANDS: dict[str, tuple[tuple[int, int | None, int], ...]] = {
    "beginner": ((0, 5, 20), (6, 10, 15), (11, None, 10)),
    "intermediate": ((3, 10, 20), (11, None, 15), (0, 2, 10)),
    "advanced": ((8, None, 20), (4, 7, 15), (0, 3, 10)),
}


def score_candidate(intent: SearchIntent, candidate: CandidateRecord) -> ScoredCandidate:
    """Score a single candidate against the intent."""
    breakdown = ScoreBreakdown(
        goal_score=goal_score(intent, candidate),
        style_score=STYLE_SCORE,
        level_score=level_score(intent, candidate),
        location_score=location_score(intent, candidate),
    )
    return ScoredCandidate(candidate=candidate, breakdown=breakdown)


def score_and_rank(
    intent: SearchIntent,
    candidates: Sequence[CandidateRecord],
) -> list[ScoredCandidate]:
    """Filter by budget, score, and return candidates in rank order.

    The max-rate filter is always applied here, even if the caller already
    pre-filtered at the storage level.
    """
    eligible = MaxRateFilter(intent.max_rate)(candidates)
    scored = [score_candidate(intent, c) for c in eligible]
    scored.sort(key=rank_key)
    logger.debug("Ranked %d of %d candidates", len(scored), len(candidates))
    return scored


def rank_key(scored: ScoredCandidate) -> tuple[int, int, str, str]:
    """Sort key: score desc, experience desc, then display name asc."""
    name = scored.candidate.display_name
    return (-scored.score, -scored.candidate.experience_years, _collation_key(name), name)


def goal_score(intent: SearchIntent, candidate: CandidateRecord) -> int:
    """Matched share of intent goals scaled to 40, rounded half up."""
    total = len(intent.goals)
    if total == 0:
        return GOAL_WEIGHT
    specializations = set(candidate.specializations)
    matched = sum(1 for goal in intent.goals if goal in specializations)
    # Integer form of floor(matched / total * 40 + 0.5).
    return (2 * matched * GOAL_WEIGHT + total) // (2 * total)


def level_score(intent: SearchIntent, candidate: CandidateRecord) -> int:
    if intent.fitness_level is None:
        return LEVEL_WEIGHT
    years = candidate.experience_years
    for low, high, score in _LEVEL_BANDS[intent.fitness_level]:
        if years >= low and (high is None or years <= high):
            return score
    return LEVEL_WEIGHT


def location_score(intent: SearchIntent, candidate: CandidateRecord) -> int:
    if not intent.city and not intent.country:
        return LOCATION_WEIGHT
    if intent.city and candidate.city and intent.city.casefold() == candidate.city.casefold():
        return LOCATION_WEIGHT
    if (
        intent.country
        and candidate.country
        and intent.country.casefold() == candidate.country.casefold()
    ):
        return COUNTRY_MATCH_SCORE
    return 0


def _collation_key(name: str) -> str:
    """Accent- and case-insensitive form of a name for alphabetical ordering."""
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
