"""Orchestrator: wires intent parsing, candidate fetch, ranking, and paging.

Data flow:
  1. Parse the free-text query into a SearchIntent
  2. Source fetch → candidate records (may be pre-filtered),
     then the availability filter when only_available is set
  3. score_and_rank → ranked candidates (budget filter reapplied)
  4. Paginate
  5. Record the run (optional)
"""

import json
import logging
import sqlite3
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from trainer_search.core.config import PaginationConfig, Settings
from trainer_search.core.db import insert_search_run
from trainer_search.core.schemas import ScoredCandidate, SearchPage
from trainer_search.pipeline.intent_parser import parse_intent
from trainer_search.pipeline.matcher import AvailabilityFilter, Filter, run_filter_chain
from trainer_search.pipeline.scorer import score_and_rank
from trainer_search.sources.base import TrainerSource

logger = logging.getLogger(__name__)


def run_deep_search(
    query: str,
    source: TrainerSource,
    settings: Settings,
    page: Any = None,
    per_page: Any = None,
    conn: sqlite3.Connection | None = None,
) -> SearchPage:
    """Run one query through the full search pipeline and return a page of results.

    If conn is given and run recording is enabled, the search is logged to search_runs.
    """
    started_at = datetime.now()
    page_num, page_size = normalize_paging(page, per_page, settings.pagination)

    intent = parse_intent(query)
    logger.info("Searching %s for %r", source.source_id, query)

    fetched = source.fetch(intent)
    logger.info("Fetched candidates: %d", len(fetched))

    filters: list[Filter] = []
    if settings.search.only_available:
        filters.append(AvailabilityFilter())
    candidates = run_filter_chain(fetched, filters)

    ranked = score_and_rank(intent, candidates)
    logger.info("Ranked candidates: %d", len(ranked))

    results = paginate(ranked, page_num, page_size)

    if conn is not None and settings.search.record_runs:
        insert_search_run(
            conn,
            query=query,
            intent_json=json.dumps(intent.to_response()),
            fetched_count=len(fetched),
            ranked_count=len(ranked),
            started_at=started_at,
            finished_at=datetime.now(),
        )

    return SearchPage(
        intent=intent,
        results=tuple(results),
        count=len(ranked),
        page=page_num,
        per_page=page_size,
    )


def normalize_paging(
    page: Any,
    per_page: Any,
    pagination: PaginationConfig,
) -> tuple[int, int]:
    """Clamp page to >= 1 and per_page to 1..max_per_page.

    Missing or non-numeric values fall back to page 1 and the default page size.
    """
    page_num = _to_int(page, 1)
    page_size = _to_int(per_page, pagination.default_per_page)
    return max(1, page_num), min(pagination.max_per_page, max(1, page_size))


def paginate(
    ranked: Sequence[ScoredCandidate],
    page: int,
    per_page: int,
) -> list[ScoredCandidate]:
    """Return the slice of ranked results for a 1-based page."""
    start = (page - 1) * per_page
    return list(ranked[start:start + per_page])


def export_results_json(result: SearchPage) -> str:
    """Export a search page as a JSON string."""
    return json.dumps(result.to_response(), indent=2)


def _to_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default
