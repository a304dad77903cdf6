"""Supabase repository for weight entries."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from supabase import Client

from food_helper.domain.weights import WeightEntry
from food_helper.services.weights import WeightRepository


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for weight entries keyed by date."""

    client: Client

    def upsert_weight(self, entry: WeightEntry) -> None:
        """Insert or overwrite the entry for its date."""
        self.client.table("weights").upsert(
            {
                "date": entry.entry_date.isoformat(),
                "weight": str(entry.weight),
            },
            on_conflict="date",
        ).execute()

    def list_weights(self, from_date: date, to_date: date) -> list[WeightEntry]:
        """Return entries within the inclusive date range."""
        response = (
            self.client.table("weights")
            .select("date, weight")
            .gte("date", from_date.isoformat())
            .lte("date", to_date.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_latest_weight(self) -> WeightEntry | None:
        """Return the most recently dated entry."""
        response = (
            self.client.table("weights")
            .select("date, weight")
            .order("date", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> WeightEntry:
    return WeightEntry(
        entry_date=date.fromisoformat(str(row["date"])),
        weight=Decimal(str(row.get("weight", 0))),
    )
