"""Creates records for images uploaded to object storage."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from nutrisnap.domain.records import RecordType
from nutrisnap.services.records import DigestionRecordRepository, MealRecordRepository

_MIN_PATH_SEGMENTS = 3

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadPath:
    """Parsed ``<userID>/<type>/<filename>`` object path."""

    user_id: UUID
    record_type: RecordType
    filename: str


def storage_path(user_id: UUID, record_type: RecordType, filename: str) -> str:
    """Build the object path for a user's uploaded image."""
    return f"{user_id}/{record_type}/{filename}"


def parse_storage_path(path: str) -> UploadPath | None:
    """Parse an object path; return None for unexpected layouts or types."""
    segments = path.split("/")
    if len(segments) < _MIN_PATH_SEGMENTS:
        _logger.info("Unexpected file path structure: %s", path)
        return None
    raw_user_id, raw_type, filename = segments[:_MIN_PATH_SEGMENTS]
    try:
        user_id = UUID(raw_user_id)
        record_type = RecordType(raw_type)
    except ValueError:
        _logger.info("Invalid upload path: %s", path)
        return None
    if not filename:
        return None
    return UploadPath(user_id=user_id, record_type=record_type, filename=filename)


@dataclass
class UploadIntakeService:
    """Turns upload notifications into to_be_processed records."""

    meal_repository: MealRecordRepository
    digestion_repository: DigestionRecordRepository

    def handle_upload(self, path: str | None) -> UUID | None:
        """Create the record for an uploaded file and return its id."""
        if not path:
            _logger.info("No file path found")
            return None
        upload = parse_storage_path(path)
        if upload is None:
            return None

        created_at = datetime.now(tz=UTC)
        if upload.record_type == RecordType.MEALS:
            record_id = self.meal_repository.create_meal_record(
                upload.user_id, upload.filename, created_at
            )
        elif upload.record_type == RecordType.DIGESTIONS:
            record_id = self.digestion_repository.create_digestion_record(
                upload.user_id, upload.filename, created_at
            )
        else:
            _logger.info("Profile upload ignored: %s", path)
            return None

        _logger.info(
            "Created %s record",
            upload.record_type,
            extra={"record_id": record_id, "user_id": upload.user_id},
        )
        return record_id
