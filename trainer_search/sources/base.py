"""Abstract base class for trainer sources."""

from abc import ABC, abstractmethod

from trainer_search.core.schemas import CandidateRecord, SearchIntent


class TrainerSource(ABC):
    """Base class that every trainer data source must implement."""

    @property
    @abstractmethod
    def source_id(self) -> str:
        """Unique identifier for this source (e.g. 'sqlite')."""

    @abstractmethod
    def fetch(self, intent: SearchIntent) -> list[CandidateRecord]:
        """Return candidate trainers for the intent (unscored, possibly pre-filtered)."""
