"""Deterministic free-text → SearchIntent parser.

Extraction order:
  1. Budget      - ordered BUDGET_RULES on the lower-cased text, first match wins
  2. City        - preposition + Capitalized Words on the original text
  3. Goals       - longest phrase first, every hit contributes its tags
  4. Style       - longest phrase first, de-duplicated by tag
  5. Level       - longest phrase first, first hit wins
  6. Health      - longest phrase first, de-duplicated by condition

Country is never extracted from text; it stays None unless a caller sets it.
"""

import logging
import re
from collections.abc import Iterable, Mapping

from trainer_search.core.schemas import EMPTY_INTENT, SearchIntent
from trainer_search.pipeline.keywords import (
    BUDGET_RULES,
    GOAL_KEYWORDS,
    GOAL_PHRASES,
    HEALTH_KEYWORDS,
    HEALTH_PHRASES,
    LEVEL_KEYWORDS,
    LEVEL_PHRASES,
    STYLE_KEYWORDS,
    STYLE_PHRASES,
)

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")

# Capitalization is the signal, so these run case-sensitively on the original text.
_CITY_PATTERN = re.compile(r"\b(?:in|near|around)\s+([A-Z][a-zA-Z]*(?:\s+[A-Z][a-zA-Z]*)*)")
_ACRONYM_CITY_PATTERN = re.compile(r"\b(?:in|near|around)\s+([A-Z]{2,})")

# Capitalized fitness terms that follow "in"/"near" but are not places.
CITY_SKIP_WORDS = frozenset({"HIIT", "CrossFit", "Pilates", "Yoga", "Boxing", "MMA"})
ACRONYM_SKIP_WORDS = frozenset({"HIIT", "MMA", "TRX"})

_STYLE_TAGS = {phrase: (tag,) for phrase, tag in STYLE_KEYWORDS.items()}
_HEALTH_TAGS = {phrase: (tag,) for phrase, tag in HEALTH_KEYWORDS.items()}


def parse_intent(query: str) -> SearchIntent:
    """Parse a free-text query into structured search facets.

    Never raises: empty or unrecognised input yields the empty intent.
    """
    if not isinstance(query, str):
        return EMPTY_INTENT

    original = query.strip()
    if not original:
        return EMPTY_INTENT

    lower = _WHITESPACE.sub(" ", original.lower())

    level = None
    for phrase in LEVEL_PHRASES:
        if phrase in lower:
            level = LEVEL_KEYWORDS[phrase]
            break

    intent = SearchIntent(
        max_rate=extract_budget(lower),
        city=extract_city(original),
        goals=_collect(lower, GOAL_PHRASES, GOAL_KEYWORDS),
        training_style=_collect(lower, STYLE_PHRASES, _STYLE_TAGS),
        fitness_level=level,
        health_conditions=_collect(lower, HEALTH_PHRASES, _HEALTH_TAGS),
    )
    logger.debug("Parsed %r → %r", original, intent)
    return intent


def extract_budget(lower: str) -> int | None:
    """Return the max hourly rate named by the first usable budget rule."""
    for rule in BUDGET_RULES:
        match = rule.pattern.search(lower)
        if match:
            rate = rule.extract(match)
            if rate is not None:
                return rate
    return None


def extract_city(text: str) -> str | None:
    """Extract a city name from case-preserved text ("in Dubai", "near New York").

    The longest capitalized match wins (first one on ties); acronyms such as
    "NYC" are only tried when no capitalized name was found.
    """
    best: str | None = None
    for match in _CITY_PATTERN.finditer(text):
        candidate = match.group(1)
        if candidate in CITY_SKIP_WORDS:
            continue
        if best is None or len(candidate) > len(best):
            best = candidate
    if best is not None:
        return best

    for match in _ACRONYM_CITY_PATTERN.finditer(text):
        candidate = match.group(1)
        if candidate not in ACRONYM_SKIP_WORDS:
            return candidate
    return None


def _collect(
    lower: str,
    phrases: Iterable[str],
    table: Mapping[str, Iterable[str]],
) -> tuple[str, ...]:
    """Gather tags for every phrase found in the text, first-seen order, no repeats."""
    seen: dict[str, None] = {}
    for phrase in phrases:
        if phrase in lower:
            for tag in table[phrase]:
                seen.setdefault(tag, None)
    return tuple(seen)