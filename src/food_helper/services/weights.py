"""Body weight tracking service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from food_helper.domain.errors import EntityNotFoundError, InvalidDateRangeError
from food_helper.domain.weights import WeightEntry

_logger = logging.getLogger(__name__)


class WeightRepository(Protocol):
    """Persistence interface for weight entries."""

    def upsert_weight(self, entry: WeightEntry) -> None:
        """Insert or overwrite the entry for its date."""

    def list_weights(self, from_date: date, to_date: date) -> list[WeightEntry]:
        """Return entries dated within the inclusive range, oldest first."""

    def get_latest_weight(self) -> WeightEntry | None:
        """Return the most recent entry, if any."""


@dataclass
class WeightService:
    """Service for recording and querying body weight."""

    repository: WeightRepository

    def save(self, entry: WeightEntry) -> None:
        """Record a weight entry."""
        self.repository.upsert_weight(entry)
        _logger.info("Weight saved: date=%s", entry.entry_date.isoformat())

    def update(self, entry: WeightEntry) -> None:
        """Overwrite the weight for the entry date."""
        self.repository.upsert_weight(entry)
        _logger.info("Weight updated: date=%s", entry.entry_date.isoformat())

    def find_all_by_date_between(
        self, from_date: date, to_date: date
    ) -> list[WeightEntry]:
        """Return entries between two dates, both inclusive."""
        if from_date > to_date:
            raise InvalidDateRangeError(
                f"fromDate {from_date.isoformat()} is after toDate "
                f"{to_date.isoformat()}"
            )
        return self.repository.list_weights(from_date, to_date)

    def find_latest(self) -> WeightEntry:
        """Return the most recently dated entry."""
        entry = self.repository.get_latest_weight()
        if entry is None:
            raise EntityNotFoundError("No weight entries recorded")
        return entry
