"""Supabase repository for meal records."""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import ValidationError
from supabase import Client

from nutrisnap.adapters.supabase_rows import (
    error_details_payload,
    parse_error_details,
    parse_record_type,
    parse_status,
    parse_timestamp,
    parse_uuid,
)
from nutrisnap.domain.analysis import NutritionalReport
from nutrisnap.domain.records import (
    ErrorDetails,
    Failed,
    MealRecord,
    Processed,
    Processing,
    ProcessingStatus,
    RecordState,
    RecordType,
    Unprocessed,
)
from nutrisnap.services.records import MealRecordRepository

_COLUMNS = (
    "id, user_id, filename, type, status, nutritional_report, processed_at, "
    "error_details, created_at"
)

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseMealRecordRepository(MealRecordRepository):
    """Supabase implementation for meal records."""

    client: Client

    def create_meal_record(
        self, user_id: UUID, filename: str, created_at: datetime
    ) -> UUID:
        """Insert a to_be_processed meal record and return its id."""
        response = (
            self.client.table("meal_records")
            .insert(
                {
                    "user_id": str(user_id),
                    "filename": filename,
                    "type": RecordType.MEALS.value,
                    "status": ProcessingStatus.TO_BE_PROCESSED.value,
                    "nutritional_report": None,
                    "created_at": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal record")
        return UUID(response.data[0]["id"])

    def get_meal_record(self, record_id: UUID) -> MealRecord | None:
        """Return a meal record by id."""
        response = (
            self.client.table("meal_records")
            .select(_COLUMNS)
            .eq("id", str(record_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_record(response.data[0])

    def mark_processing(self, record_id: UUID) -> None:
        """Set the record status to processing."""
        self.client.table("meal_records").update(
            {"status": ProcessingStatus.PROCESSING.value}
        ).eq("id", str(record_id)).execute()

    def mark_processed(
        self, record_id: UUID, report: NutritionalReport, processed_at: datetime
    ) -> None:
        """Store the report together with the processed status."""
        self.client.table("meal_records").update(
            {
                "status": ProcessingStatus.PROCESSED.value,
                "nutritional_report": report.model_dump(mode="json"),
                "processed_at": processed_at.isoformat(),
                "error_details": None,
            }
        ).eq("id", str(record_id)).execute()

    def mark_failed(self, record_id: UUID, error: ErrorDetails) -> None:
        """Store the failed status with error details."""
        self.client.table("meal_records").update(
            {
                "status": ProcessingStatus.FAILED.value,
                "error_details": error_details_payload(error),
            }
        ).eq("id", str(record_id)).execute()

    def list_processed_meal_records(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return processed meal records in the inclusive time range.

        Rows whose stored report no longer validates are logged and skipped.
        """
        response = (
            self.client.table("meal_records")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("created_at", start.isoformat())
            .lte("created_at", end.isoformat())
            .eq("status", ProcessingStatus.PROCESSED.value)
            .order("created_at", desc=False)
            .execute()
        )
        records: list[MealRecord] = []
        for row in response.data or []:
            try:
                records.append(_parse_record(row))
            except ValidationError:
                _logger.warning(
                    "Skipping meal record with an invalid nutritional report",
                    extra={"record_id": row.get("id")},
                )
        return records


def _parse_record(row: dict[str, object]) -> MealRecord:
    created_at = parse_timestamp(row.get("created_at"))
    return MealRecord(
        id=UUID(str(row["id"])),
        user_id=parse_uuid(row.get("user_id")),
        created_at=created_at,
        state=_parse_state(row, created_at),
        filename=str(row["filename"]) if row.get("filename") else None,
        record_type=parse_record_type(row.get("type")),
    )


def _parse_state(
    row: dict[str, object], created_at: datetime
) -> RecordState[NutritionalReport]:
    status = parse_status(row.get("status"))
    if status == ProcessingStatus.PROCESSED:
        report = row.get("nutritional_report")
        if not report:
            raise ValueError(f"Processed meal record {row.get('id')} has no report")
        processed_at = row.get("processed_at")
        return Processed(
            result=NutritionalReport.model_validate(report),
            processed_at=parse_timestamp(processed_at) if processed_at else created_at,
        )
    if status == ProcessingStatus.FAILED:
        return Failed(error=parse_error_details(row.get("error_details")))
    if status == ProcessingStatus.PROCESSING:
        return Processing()
    return Unprocessed()
