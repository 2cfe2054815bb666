"""Keyword taxonomy: maps query phrases to canonical specialization tags.

All tables are read-only. Phrase tuples are pre-sorted by length descending
so scans see longer phrases first; phrases of equal length keep declaration
order.
"""

import re
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import NamedTuple

GOAL_KEYWORDS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    # Weight management
    "lose weight": ("weight_loss",),
    "weight loss": ("weight_loss",),
    "fat loss": ("weight_loss",),
    "slim down": ("weight_loss",),
    "burn fat": ("weight_loss",),
    "get lean": ("weight_loss",),
    "shed pounds": ("weight_loss",),
    "cut weight": ("weight_loss",),
    # Strength
    "build muscle": ("strength_training",),
    "muscle gain": ("strength_training",),
    "get strong": ("strength_training",),
    "strength": ("strength_training",),
    "bulk up": ("strength_training", "bodybuilding"),
    "powerlifting": ("powerlifting", "strength_training"),
    "strongman": ("strongman", "strength_training"),
    "kettlebell": ("kettlebell", "strength_training"),
    # Bodybuilding
    "bodybuilding": ("bodybuilding",),
    "body building": ("bodybuilding",),
    "physique": ("bodybuilding",),
    "contest prep": ("bodybuilding",),
    # Yoga / flexibility
    "yoga": ("yoga",),
    "flexibility": ("flexibility",),
    "stretch": ("flexibility",),
    "stretching": ("flexibility",),
    "meditation": ("meditation",),
    "mindfulness": ("meditation",),
    "breathwork": ("meditation",),
    "pilates": ("pilates",),
    # Rehab / recovery
    "rehabilitation": ("rehabilitation",),
    "rehab": ("rehabilitation",),
    "recovery": ("rehabilitation",),
    "injury": ("rehabilitation",),
    "post-injury": ("rehabilitation",),
    "posture": ("posture_correction",),
    # Prenatal / postnatal
    "pregnancy": ("prenatal",),
    "pregnant": ("prenatal",),
    "prenatal": ("prenatal",),
    "postnatal": ("postnatal",),
    "postpartum": ("postnatal",),
    "after pregnancy": ("postnatal",),
    # HIIT / cardio
    "hiit": ("hiit",),
    "high intensity": ("hiit",),
    "interval training": ("hiit",),
    "cardio": ("cardio",),
    "endurance": ("endurance",),
    "running": ("running", "endurance"),
    "marathon": ("running", "endurance"),
    "triathlon": ("triathlon", "endurance"),
    "crossfit": ("crossfit",),
    "cross fit": ("crossfit",),
    # Boxing / martial arts
    "boxing": ("boxing",),
    "kickboxing": ("boxing", "martial_arts"),
    "martial arts": ("martial_arts",),
    "mma": ("mma", "martial_arts"),
    "muay thai": ("martial_arts", "boxing"),
    "jiu jitsu": ("martial_arts",),
    "swimming": ("swimming",),
    "swim": ("swimming",),
    "dance": ("dance_fitness",),
    "zumba": ("dance_fitness",),
    # Sports performance
    "sports performance": ("sports_performance",),
    "athletic": ("sports_performance",),
    "speed": ("speed_agility",),
    "agility": ("speed_agility",),
    "calisthenics": ("calisthenics",),
    "bodyweight": ("calisthenics", "bodyweight"),
    # Senior fitness
    "senior": ("senior_fitness",),
    "elderly": ("senior_fitness",),
    "over 50": ("senior_fitness",),
    "over 55": ("senior_fitness",),
    "fall prevention": ("senior_fitness",),
    # Functional / misc
    "functional": ("functional_training",),
    "bootcamp": ("bootcamp",),
    "boot camp": ("bootcamp",),
    "nutrition": ("nutrition",),
    "diet": ("nutrition",),
    "meal plan": ("nutrition",),
    "home workout": ("home_workouts",),
    "at home": ("home_workouts",),
    "olympic lifting": ("olympic_lifting",),
    "parkour": ("parkour",),
    "climbing": ("climbing",),
    "core": ("core_training",),
    "abs": ("core_training",),
    "mobility": ("mobility",),
    "balance": ("balance",),
})

STYLE_KEYWORDS: Mapping[str, str] = MappingProxyType({
    "one on one": "one_on_one",
    "1 on 1": "one_on_one",
    "private": "one_on_one",
    "personal": "one_on_one",
    "group": "group",
    "class": "group",
    "classes": "group",
    "online": "online",
    "virtual": "online",
    "remote": "online",
    "video": "online",
})

LEVEL_KEYWORDS: Mapping[str, str] = MappingProxyType({
    "just starting": "beginner",
    "new to": "beginner",
    "never trained": "beginner",
    "first time": "beginner",
    "beginner": "beginner",
    "some experience": "intermediate",
    "intermediate": "intermediate",
    "experienced": "advanced",
    "competitive": "advanced",
    "advanced": "advanced",
    "pro": "advanced",
    "elite": "advanced",
})

HEALTH_KEYWORDS: Mapping[str, str] = MappingProxyType({
    "knee injury": "knee_injury",
    "bad knee": "knee_injury",
    "knee pain": "knee_injury",
    "back pain": "back_pain",
    "back injury": "back_pain",
    "bad back": "back_pain",
    "shoulder injury": "shoulder_injury",
    "shoulder pain": "shoulder_injury",
    "asthma": "asthma",
    "diabetes": "diabetes",
    "heart condition": "heart_condition",
    "arthritis": "arthritis",
    "high blood pressure": "hypertension",
    "hypertension": "hypertension",
    "obesity": "obesity",
    "overweight": "obesity",
})


class BudgetRule(NamedTuple):
    """A budget pattern and the function that turns its match into a max rate."""

    pattern: re.Pattern[str]
    extract: Callable[[re.Match[str]], int | None]


# Longer amounts are not a usable rate and fall through to the next rule.
MAX_BUDGET_DIGITS = 15


def _captured(match: re.Match[str]) -> int | None:
    digits = match.group(1)
    if len(digits) > MAX_BUDGET_DIGITS:
        return None
    return int(digits)


def _fixed(value: int) -> Callable[[re.Match[str]], int | None]:
    return lambda _match: value


# Evaluated in order, first usable match wins: literal amounts before heuristic words.
# (?<!\d) keeps a long digit run from being retried at every offset.
BUDGET_RULES: tuple[BudgetRule, ...] = (
    BudgetRule(re.compile(r"under\s*\$?\s*(\d+)", re.IGNORECASE), _captured),
    BudgetRule(re.compile(r"less than\s*\$?\s*(\d+)", re.IGNORECASE), _captured),
    BudgetRule(re.compile(r"below\s*\$?\s*(\d+)", re.IGNORECASE), _captured),
    BudgetRule(re.compile(r"max\s*\$?\s*(\d+)", re.IGNORECASE), _captured),
    BudgetRule(re.compile(r"budget\s*(?:of\s*)?\$?\s*(\d+)", re.IGNORECASE), _captured),
    BudgetRule(
        re.compile(r"\$(\d+)\s*(?:per hour|/hr|/hour|an hour)", re.IGNORECASE), _captured,
    ),
    BudgetRule(
        re.compile(r"(?<!\d)(\d+)\s*(?:dollars|usd)\s*(?:per hour|/hr|an hour)", re.IGNORECASE),
        _captured,
    ),
    BudgetRule(re.compile(r"\bcheap\b", re.IGNORECASE), _fixed(50)),
    BudgetRule(re.compile(r"\baffordable\b", re.IGNORECASE), _fixed(75)),
)


def by_length_desc(table: Mapping[str, object]) -> tuple[str, ...]:
    """Return the table's phrases, longest first (stable for equal lengths)."""
    return tuple(sorted(table, key=len, reverse=True))


GOAL_PHRASES = by_length_desc(GOAL_KEYWORDS)
STYLE_PHRASES = by_length_desc(STYLE_KEYWORDS)
LEVEL_PHRASES = by_length_desc(LEVEL_KEYWORDS)
HEALTH_PHRASES = by_length_desc(HEALTH_KEYWORDS)
