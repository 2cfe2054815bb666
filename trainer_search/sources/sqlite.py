"""Trainer source backed by the local SQLite store."""

import logging
import sqlite3

from trainer_search.core.db import fetch_trainers
from trainer_search.core.schemas import CandidateRecord, SearchIntent
from trainer_search.sources.base import TrainerSource
from trainer_search.sources.records import build_candidates

logger = logging.getLogger(__name__)


class SqliteTrainerSource(TrainerSource):
    """Reads trainer_profiles, pushing availability and budget down to SQL."""

    def __init__(
        self,
        conn: sqlite3.Connection,
        only_available: bool = True,
        prefilter_max_rate: bool = True,
    ) -> None:
        self._conn = conn
        self._only_available = only_available
        self._prefilter_max_rate = prefilter_max_rate

    @property
    def source_id(self) -> str:
        return "sqlite"

    def fetch(self, intent: SearchIntent) -> list[CandidateRecord]:
        max_rate = intent.max_rate if self._prefilter_max_rate else None
        rows = fetch_trainers(
            self._conn, only_available=self._only_available, max_rate=max_rate,
        )
        candidates = build_candidates(rows)
        logger.debug("Fetched %d rows, %d usable candidates", len(rows), len(candidates))
        return candidates
