"""Core data models for the trainer search engine."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt
from pydantic.alias_generators import to_camel

FitnessLevel = Literal["beginner", "intermediate", "advanced"]


class SearchIntent(BaseModel):
    """Structured facets extracted from a free-text query.

    Frozen, and list facets are tuples, so an intent cannot change after
    construction. Serialized with camelCase names (trainingStyle, maxRate, ...).
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    goals: tuple[str, ...] = ()
    training_style: tuple[str, ...] = ()
    fitness_level: FitnessLevel | None = None
    city: str | None = None
    country: str | None = None
    # Whole-number budgets stay ints so they serialize as 50, not 50.0.
    max_rate: NonNegativeInt | NonNegativeFloat | None = None
    health_conditions: tuple[str, ...] = ()

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


EMPTY_INTENT = SearchIntent()


class CandidateRecord(BaseModel):
    """A trainer eligible for ranking, as supplied by the data layer."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    specializations: tuple[str, ...] = ()
    experience_years: int = Field(default=0, ge=0)
    city: str | None = None
    country: str | None = None
    hourly_rate: float | None = Field(default=None, ge=0)
    is_available: bool = True


class ScoreBreakdown(BaseModel):
    """The four sub-scores that make up a candidate's total."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    goal_score: int = Field(ge=0, le=40)
    style_score: int = Field(ge=0, le=20)
    level_score: int = Field(ge=0, le=20)
    location_score: int = Field(ge=0, le=20)

    @property
    def total(self) -> int:
        return self.goal_score + self.style_score + self.level_score + self.location_score


class ScoredCandidate(BaseModel):
    """Wrapper that pairs a frozen CandidateRecord with its score breakdown.

    ``score`` is derived from the breakdown, so the two can never disagree.
    """

    model_config = ConfigDict(frozen=True)

    candidate: CandidateRecord
    breakdown: ScoreBreakdown

    @property
    def score(self) -> int:
        return self.breakdown.total

    def to_response(self) -> dict[str, Any]:
        data = self.candidate.model_dump(mode="json")
        data["_score"] = self.score
        data["_breakdown"] = self.breakdown.model_dump(by_alias=True)
        return data


class SearchPage(BaseModel):
    """One page of ranked results plus the intent that produced them."""

    model_config = ConfigDict(frozen=True)

    intent: SearchIntent
    results: tuple[ScoredCandidate, ...] = ()
    count: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=12, ge=1)

    def to_response(self) -> dict[str, Any]:
        return {
            "data": [s.to_response() for s in self.results],
            "intent": self.intent.to_response(),
            "count": self.count,
            "page": self.page,
            "per_page": self.per_page,
        }
