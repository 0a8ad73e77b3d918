"""Supabase repository for digestion records."""

from dataclasses import asdict, dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrisnap.adapters.supabase_rows import (
    error_details_payload,
    parse_bool,
    parse_error_details,
    parse_record_type,
    parse_status,
    parse_string_list,
    parse_timestamp,
    parse_uuid,
)
from nutrisnap.domain.records import (
    DigestionAnalysis,
    DigestionInsights,
    DigestionRecord,
    DigestionSource,
    ErrorDetails,
    Failed,
    Processed,
    Processing,
    ProcessingStatus,
    RecordState,
    RecordType,
    Unprocessed,
)
from nutrisnap.services.records import DigestionRecordRepository

_COLUMNS = (
    "id, user_id, filename, type, status, analysis, ai_concerns, "
    "ai_recommendations, notes, processed_at, error_details, created_at"
)


@dataclass
class SupabaseDigestionRecordRepository(DigestionRecordRepository):
    """Supabase implementation for digestion records."""

    client: Client

    def create_digestion_record(
        self, user_id: UUID, filename: str, created_at: datetime
    ) -> UUID:
        """Insert a to_be_processed record for an uploaded stool photo."""
        response = (
            self.client.table("digestion_records")
            .insert(
                {
                    "user_id": str(user_id),
                    "filename": filename,
                    "type": RecordType.DIGESTIONS.value,
                    "status": ProcessingStatus.TO_BE_PROCESSED.value,
                    "analysis": {"source": DigestionSource.AI.value},
                    "created_at": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create digestion record")
        return UUID(response.data[0]["id"])

    def get_digestion_record(self, record_id: UUID) -> DigestionRecord | None:
        """Return a digestion record by id."""
        response = (
            self.client.table("digestion_records")
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
        self.client.table("digestion_records").update(
            {"status": ProcessingStatus.PROCESSING.value}
        ).eq("id", str(record_id)).execute()

    def mark_processed(
        self,
        record_id: UUID,
        insights: DigestionInsights,
        processed_at: datetime,
        analysis: DigestionAnalysis | None = None,
    ) -> None:
        """Store insights (and replacement analysis) with the processed status."""
        payload: dict[str, object] = {
            "status": ProcessingStatus.PROCESSED.value,
            "ai_concerns": list(insights.concerns),
            "ai_recommendations": list(insights.recommendations),
            "processed_at": processed_at.isoformat(),
            "error_details": None,
        }
        if analysis is not None:
            payload["analysis"] = _analysis_payload(analysis)
        self.client.table("digestion_records").update(payload).eq(
            "id", str(record_id)
        ).execute()

    def mark_failed(self, record_id: UUID, error: ErrorDetails) -> None:
        """Store the failed status with error details."""
        self.client.table("digestion_records").update(
            {
                "status": ProcessingStatus.FAILED.value,
                "error_details": error_details_payload(error),
            }
        ).eq("id", str(record_id)).execute()

    def list_digestion_records(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[DigestionRecord]:
        """Return digestion records of any status in the inclusive time range."""
        response = (
            self.client.table("digestion_records")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("created_at", start.isoformat())
            .lte("created_at", end.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_record(row) for row in response.data or []]


def _analysis_payload(analysis: DigestionAnalysis) -> dict[str, object]:
    payload = asdict(analysis)
    payload["source"] = analysis.source.value
    return payload


def _parse_analysis(value: object) -> DigestionAnalysis:
    data = value if isinstance(value, dict) else {}
    try:
        source = DigestionSource(str(data.get("source")))
    except ValueError:
        source = DigestionSource.AI
    return DigestionAnalysis(
        source=source,
        bristol_scale=_optional_text(data.get("bristol_scale")),
        color=_optional_text(data.get("color")),
        consistency=_optional_text(data.get("consistency")),
        shape=_optional_text(data.get("shape")),
        size=_optional_text(data.get("size")),
        has_blood=parse_bool(data.get("has_blood")),
        has_mucus=parse_bool(data.get("has_mucus")),
    )


def _optional_text(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _parse_record(row: dict[str, object]) -> DigestionRecord:
    created_at = parse_timestamp(row.get("created_at"))
    return DigestionRecord(
        id=UUID(str(row["id"])),
        user_id=parse_uuid(row.get("user_id")),
        created_at=created_at,
        analysis=_parse_analysis(row.get("analysis")),
        state=_parse_state(row, created_at),
        filename=str(row["filename"]) if row.get("filename") else None,
        record_type=parse_record_type(row.get("type")),
        notes=_optional_text(row.get("notes")),
    )


def _parse_state(
    row: dict[str, object], created_at: datetime
) -> RecordState[DigestionInsights]:
    status = parse_status(row.get("status"))
    if status == ProcessingStatus.PROCESSED:
        processed_at = row.get("processed_at")
        return Processed(
            result=DigestionInsights(
                concerns=parse_string_list(row.get("ai_concerns")),
                recommendations=parse_string_list(row.get("ai_recommendations")),
            ),
            processed_at=parse_timestamp(processed_at) if processed_at else created_at,
        )
    if status == ProcessingStatus.FAILED:
        return Failed(error=parse_error_details(row.get("error_details")))
    if status == ProcessingStatus.PROCESSING:
        return Processing()
    return Unprocessed()
