"""Domain models for body weight tracking."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class WeightEntry:
    """Body weight recorded for a calendar date."""

    entry_date: date
    weight: Decimal
