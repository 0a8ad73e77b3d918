"""Supabase repository for water intake records."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrisnap.adapters.supabase_rows import parse_timestamp
from nutrisnap.domain.records import WaterIntakeRecord
from nutrisnap.services.records import WaterRecordRepository


@dataclass
class SupabaseWaterRecordRepository(WaterRecordRepository):
    """Supabase implementation for water intake queries."""

    client: Client

    def list_water_records(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[WaterIntakeRecord]:
        """Return water records in the inclusive time range."""
        response = (
            self.client.table("water_records")
            .select("id, user_id, amount, notes, created_at")
            .eq("user_id", str(user_id))
            .gte("created_at", start.isoformat())
            .lte("created_at", end.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> WaterIntakeRecord:
    notes = row.get("notes")
    return WaterIntakeRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        created_at=parse_timestamp(row.get("created_at")),
        amount=float(row.get("amount") or 0.0),
        notes=str(notes) if notes else None,
    )
