"""Row parsing helpers shared by the Supabase repositories."""

from datetime import datetime
from uuid import UUID

from nutrisnap.domain.records import ErrorDetails, ProcessingStatus, RecordType

# Status written by older deployments for failed meal records.
_LEGACY_FAILED_STATUS = "error"


def parse_uuid(value: object) -> UUID | None:
    if isinstance(value, UUID):
        return value
    if isinstance(value, str) and value:
        try:
            return UUID(value)
        except ValueError:
            return None
    return None


def parse_timestamp(value: object) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    raise ValueError(f"Invalid timestamp: {value!r}")


def parse_status(value: object) -> ProcessingStatus:
    if value == _LEGACY_FAILED_STATUS:
        return ProcessingStatus.FAILED
    try:
        return ProcessingStatus(str(value))
    except ValueError:
        return ProcessingStatus.TO_BE_PROCESSED


def parse_record_type(value: object) -> RecordType | None:
    try:
        return RecordType(str(value))
    except ValueError:
        return None


def parse_error_details(value: object) -> ErrorDetails:
    if not isinstance(value, dict):
        return ErrorDetails(message="Unknown error")
    preview = value.get("response_preview")
    return ErrorDetails(
        message=str(value.get("message") or "Unknown error"),
        response_preview=str(preview) if preview is not None else None,
    )


def error_details_payload(error: ErrorDetails) -> dict[str, object]:
    payload: dict[str, object] = {"message": error.message}
    if error.response_preview is not None:
        payload["response_preview"] = error.response_preview
    return payload


def parse_string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def parse_bool(value: object) -> bool:
    """Read a boolean column that older clients may have stored as text."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False
