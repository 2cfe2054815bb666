"""Builds CandidateRecord objects from raw trainer rows.

Rules:
  - id and display_name are required; a row without them is rejected.
  - Missing or malformed optional fields fall back to neutral values
    (no specializations, 0 years, unknown rate, available).
"""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from trainer_search.core.schemas import CandidateRecord

logger = logging.getLogger(__name__)

_SQLITE_INT_MAX = 2**63 - 1


def build_candidate(row: Mapping[str, Any]) -> CandidateRecord:
    """Normalize a raw trainer row into a CandidateRecord.

    Raises ValueError if the row has no usable id or display_name.
    """
    trainer_id = _text(row.get("id"))
    if trainer_id is None:
        msg = "trainer row is missing 'id'"
        raise ValueError(msg)
    display_name = _text(row.get("display_name"))
    if display_name is None:
        msg = f"trainer {trainer_id} is missing 'display_name'"
        raise ValueError(msg)

    return CandidateRecord(
        id=trainer_id,
        display_name=display_name,
        specializations=_specializations(row.get("specializations")),
        experience_years=_experience(row.get("experience_years")),
        city=_text(row.get("city")),
        country=_text(row.get("country")),
        hourly_rate=_rate(row.get("hourly_rate")),
        is_available=_available(row.get("is_available", True)),
    )


def build_candidates(rows: Iterable[Mapping[str, Any]]) -> list[CandidateRecord]:
    """Build candidates from many rows, skipping any that cannot be adapted."""
    results: list[CandidateRecord] = []
    for row in rows:
        try:
            results.append(build_candidate(row))
        except ValueError as e:
            logger.warning("Skipping trainer row: %s", e)
    return results


# --- Private helpers ---


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _specializations(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, Iterable):
        return ()
    tags = (str(v).strip() for v in value if v is not None)
    return tuple(t for t in tags if t)


def _experience(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        years = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if years < 0 or years > _SQLITE_INT_MAX:
        return 0
    return years


def _rate(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        rate = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(rate) or rate < 0:
        return None
    return rate


def _available(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip().lower() not in ("false", "0", "no", "")
    return bool(value)
