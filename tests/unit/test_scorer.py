"""Tests for rule-based scorer and ranking."""

import pytest

from trainer_search.core.schemas import CandidateRecord, SearchIntent
from trainer_search.pipeline.scorer import (
    goal_score,
    level_score,
    location_score,
    score_and_rank,
    score_candidate,
)


def _trainer(
    *,
    id: str = "test-id",
    display_name: str = "Test Trainer",
    specializations: tuple[str, ...] = (),
    experience_years: int = 5,
    city: str | None = None,
    country: str | None = None,
    hourly_rate: float | None = 50,
) -> CandidateRecord:
    return CandidateRecord(
        id=id,
        display_name=display_name,
        specializations=specializations,
        experience_years=experience_years,
        city=city,
        country=country,
        hourly_rate=hourly_rate,
    )


# ---------------------------------------------------------------------------
# Goal score
# ---------------------------------------------------------------------------


class TestGoalScore:
    def test_full_match(self) -> None:
        intent = SearchIntent(goals=("weight_loss",))
        assert goal_score(intent, _trainer(specializations=("weight_loss", "hiit"))) == 40

    def test_partial_match(self) -> None:
        intent = SearchIntent(goals=("weight_loss", "nutrition"))
        assert goal_score(intent, _trainer(specializations=("weight_loss",))) == 20

    def test_no_match(self) -> None:
        intent = SearchIntent(goals=("weight_loss",))
        assert goal_score(intent, _trainer(specializations=("yoga",))) == 0

    def test_three_of_three(self) -> None:
        intent = SearchIntent(goals=("weight_loss", "yoga", "nutrition"))
        trainer = _trainer(specializations=("weight_loss", "yoga", "nutrition"))
        assert goal_score(intent, trainer) == 40

    def test_no_goals_no_penalty(self) -> None:
        assert goal_score(SearchIntent(), _trainer(specializations=("yoga",))) == 40

    def test_one_of_three_rounds_down(self) -> None:
        intent = SearchIntent(goals=("a", "b", "c"))
        assert goal_score(intent, _trainer(specializations=("a",))) == 13

    def test_two_of_three_rounds_up(self) -> None:
        intent = SearchIntent(goals=("a", "b", "c"))
        assert goal_score(intent, _trainer(specializations=("a", "b"))) == 27

    def test_half_rounds_up(self) -> None:
        # 1/16 * 40 == 2.5
        intent = SearchIntent(goals=tuple(f"g{i}" for i in range(16)))
        assert goal_score(intent, _trainer(specializations=("g0",))) == 3

    def test_duplicate_specializations_count_once(self) -> None:
        intent = SearchIntent(goals=("yoga", "pilates"))
        trainer = _trainer(specializations=("yoga", "yoga", "yoga"))
        assert goal_score(intent, trainer) == 20


# ---------------------------------------------------------------------------
# Level score
# ---------------------------------------------------------------------------


class TestLevelScore:
    @pytest.mark.parametrize(
        ("level", "years", "expected"),
        [
            ("beginner", 0, 20),
            ("beginner", 5, 20),
            ("beginner", 6, 15),
            ("beginner", 10, 15),
            ("beginner", 11, 10),
            ("intermediate", 2, 10),
            ("intermediate", 3, 20),
            ("intermediate", 10, 20),
            ("intermediate", 11, 15),
            ("advanced", 3, 10),
            ("advanced", 4, 15),
            ("advanced", 7, 15),
            ("advanced", 8, 20),
            ("advanced", 30, 20),
        ],
    )
    def test_bands(self, level: str, years: int, expected: int) -> None:
        intent = SearchIntent(fitness_level=level)
        assert level_score(intent, _trainer(experience_years=years)) == expected

    def test_no_level_no_penalty(self) -> None:
        assert level_score(SearchIntent(), _trainer(experience_years=8)) == 20


# ---------------------------------------------------------------------------
# Location score
# ---------------------------------------------------------------------------


class TestLocationScore:
    def test_exact_city(self) -> None:
        intent = SearchIntent(city="Dubai")
        assert location_score(intent, _trainer(city="Dubai", country="AE")) == 20

    def test_city_case_insensitive(self) -> None:
        intent = SearchIntent(city="dubai")
        assert location_score(intent, _trainer(city="Dubai", country="AE")) == 20

    def test_no_match(self) -> None:
        intent = SearchIntent(city="Dubai")
        assert location_score(intent, _trainer(city="London", country="GB")) == 0

    def test_country_only(self) -> None:
        intent = SearchIntent(country="US")
        assert location_score(intent, _trainer(city="Chicago", country="us")) == 10

    def test_city_beats_country(self) -> None:
        intent = SearchIntent(city="Chicago", country="US")
        assert location_score(intent, _trainer(city="Chicago", country="US")) == 20

    def test_city_miss_falls_back_to_country(self) -> None:
        intent = SearchIntent(city="Boston", country="US")
        assert location_score(intent, _trainer(city="Chicago", country="US")) == 10

    def test_trainer_without_location(self) -> None:
        intent = SearchIntent(city="Dubai")
        assert location_score(intent, _trainer(city=None, country=None)) == 0

    def test_no_location_no_penalty(self) -> None:
        assert location_score(SearchIntent(), _trainer(city="London", country="GB")) == 20


# ---------------------------------------------------------------------------
# Single candidate
# ---------------------------------------------------------------------------


class TestScoreCandidate:
    def test_empty_intent_scores_100(self) -> None:
        result = score_candidate(SearchIntent(), _trainer())
        assert result.score == 100

    def test_style_always_20(self) -> None:
        result = score_candidate(SearchIntent(training_style=("online",)), _trainer())
        assert result.breakdown.style_score == 20

    def test_total_equals_breakdown(self) -> None:
        intent = SearchIntent(goals=("weight_loss", "yoga"), city="Dubai", fitness_level="advanced")
        result = score_candidate(
            intent,
            _trainer(specializations=("weight_loss",), city="London", experience_years=5),
        )
        b = result.breakdown
        assert result.score == b.goal_score + b.style_score + b.level_score + b.location_score
        assert result.score == 20 + 20 + 15 + 0


# ---------------------------------------------------------------------------
# Filter + ranking
# ---------------------------------------------------------------------------


class TestScoreAndRank:
    def test_empty_input(self) -> None:
        assert score_and_rank(SearchIntent(), []) == []

    def test_single_candidate(self) -> None:
        results = score_and_rank(SearchIntent(), [_trainer()])
        assert len(results) == 1
        assert results[0].score == 100

    def test_sorted_by_score(self) -> None:
        intent = SearchIntent(goals=("weight_loss",), city="Dubai")
        perfect = _trainer(id="perfect", display_name="Perfect",
                           specializations=("weight_loss",), city="Dubai")
        partial = _trainer(id="partial", display_name="Partial",
                           specializations=("yoga",), city="London")
        results = score_and_rank(intent, [partial, perfect])
        assert [r.candidate.id for r in results] == ["perfect", "partial"]
        assert results[0].score > results[1].score

    def test_tie_break_experience(self) -> None:
        senior = _trainer(id="senior", display_name="Senior", experience_years=15)
        junior = _trainer(id="junior", display_name="Junior", experience_years=3)
        results = score_and_rank(SearchIntent(), [junior, senior])
        assert [r.candidate.id for r in results] == ["senior", "junior"]

    def test_tie_break_name(self) -> None:
        alice = _trainer(id="alice", display_name="Alice")
        bob = _trainer(id="bob", display_name="Bob")
        results = score_and_rank(SearchIntent(), [bob, alice])
        assert [r.candidate.id for r in results] == ["alice", "bob"]

    def test_name_order_ignores_case_and_accents(self) -> None:
        names = ["bob", "Émile", "Alice", "Zed"]
        results = score_and_rank(
            SearchIntent(),
            [_trainer(id=n, display_name=n) for n in names],
        )
        assert [r.candidate.display_name for r in results] == ["Alice", "bob", "Émile", "Zed"]

    def test_excludes_above_max_rate(self) -> None:
        intent = SearchIntent(max_rate=60)
        cheap = _trainer(id="cheap", hourly_rate=50)
        expensive = _trainer(id="expensive", hourly_rate=100)
        results = score_and_rank(intent, [cheap, expensive])
        assert [r.candidate.id for r in results] == ["cheap"]

    def test_keeps_null_rate(self) -> None:
        intent = SearchIntent(max_rate=60)
        results = score_and_rank(intent, [_trainer(id="no-rate", hourly_rate=None)])
        assert [r.candidate.id for r in results] == ["no-rate"]

    def test_keeps_exact_max_rate(self) -> None:
        intent = SearchIntent(max_rate=50)
        assert len(score_and_rank(intent, [_trainer(hourly_rate=50)])) == 1

    def test_no_max_rate_keeps_everything(self) -> None:
        results = score_and_rank(SearchIntent(), [_trainer(hourly_rate=1000)])
        assert len(results) == 1

    def test_does_not_mutate_input(self) -> None:
        trainers = [_trainer(id="b", display_name="B"), _trainer(id="a", display_name="A")]
        score_and_rank(SearchIntent(), trainers)
        assert [t.id for t in trainers] == ["b", "a"]

    def test_all_scores_in_range(self) -> None:
        intent = SearchIntent(goals=("yoga", "hiit"), fitness_level="beginner", city="Paris")
        trainers = [
            _trainer(id=str(i), experience_years=i, specializations=("yoga",) if i % 2 else ())
            for i in range(15)
        ]
        for r in score_and_rank(intent, trainers):
            assert 0 <= r.score <= 100
