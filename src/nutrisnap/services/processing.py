"""State machine driving records from to_be_processed to processed or failed."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from nutrisnap.domain.records import (
    DigestionAnalysis,
    DigestionInsights,
    DigestionRecord,
    DigestionSource,
    ErrorDetails,
    ProcessingStatus,
    RecordType,
)
from nutrisnap.services.analysis import AnalysisParseError, AnalysisService
from nutrisnap.services.records import DigestionRecordRepository, MealRecordRepository
from nutrisnap.services.uploads import storage_path

FILE_MISSING_MESSAGE = "File does not exist"
RESPONSE_PREVIEW_LENGTH = 500

# Re-delivered events for these records are ignored; failed records may be retried.
_SKIP_STATUSES = {ProcessingStatus.PROCESSING, ProcessingStatus.PROCESSED}

_logger = logging.getLogger(__name__)


class ObjectStorage(Protocol):
    """Read-only access to uploaded images."""

    def exists(self, path: str) -> bool:
        """Return True when an object exists at the path."""

    def download(self, path: str) -> bytes:
        """Return the object's bytes."""


@dataclass
class RecordProcessor:
    """Runs AI analysis for newly created meal and digestion records.

    Processing is creation-triggered: the processor is the only writer of the
    ``processing`` status. Every terminal write (processed or failed) is a
    single update. A crash after the ``processing`` write and before the
    terminal write leaves the record in ``processing``; nothing recovers it.
    """

    meal_repository: MealRecordRepository
    digestion_repository: DigestionRecordRepository
    storage: ObjectStorage
    analysis_service: AnalysisService

    async def process_meal_record(self, record_id: UUID) -> ProcessingStatus | None:
        """Analyze a meal photo record; return the terminal status or None."""
        record = self.meal_repository.get_meal_record(record_id)
        if record is None:
            _logger.info("Meal record not found", extra={"record_id": record_id})
            return None
        if not record.filename or record.user_id is None or record.record_type is None:
            _logger.info(
                "Meal record missing required data", extra={"record_id": record_id}
            )
            return None
        if record.status in _SKIP_STATUSES:
            _logger.info(
                "Meal record already %s", record.status, extra={"record_id": record_id}
            )
            return None

        try:
            self.meal_repository.mark_processing(record.id)
            path = storage_path(record.user_id, record.record_type, record.filename)
            if not self.storage.exists(path):
                _logger.warning("File does not exist: %s", path)
                self.meal_repository.mark_failed(
                    record.id, ErrorDetails(message=FILE_MISSING_MESSAGE)
                )
                return ProcessingStatus.FAILED
            image_bytes = self.storage.download(path)
            report = await self.analysis_service.analyze_meal_image(image_bytes)
            self.meal_repository.mark_processed(
                record.id, report, processed_at=datetime.now(tz=UTC)
            )
        except Exception as exc:
            _logger.exception(
                "Failed to process meal record", extra={"record_id": record.id}
            )
            self.meal_repository.mark_failed(
                record.id,
                ErrorDetails(
                    message=_error_message(exc),
                    response_preview=_response_preview(exc),
                ),
            )
            return ProcessingStatus.FAILED
        return ProcessingStatus.PROCESSED

    async def process_digestion_record(
        self, record_id: UUID
    ) -> ProcessingStatus | None:
        """Analyze a manual or photo digestion record."""
        record = self.digestion_repository.get_digestion_record(record_id)
        if record is None:
            _logger.info("Digestion record not found", extra={"record_id": record_id})
            return None
        is_manual = record.analysis.source == DigestionSource.MANUAL
        if record.user_id is None or (not is_manual and not record.filename):
            _logger.info(
                "Digestion record missing required data",
                extra={"record_id": record_id},
            )
            return None
        if record.status in _SKIP_STATUSES:
            _logger.info(
                "Digestion record already %s",
                record.status,
                extra={"record_id": record_id},
            )
            return None

        try:
            self.digestion_repository.mark_processing(record.id)
            if is_manual:
                return await self._process_manual_digestion(record)
            return await self._process_digestion_image(record)
        except Exception as exc:
            _logger.exception(
                "Failed to process digestion record", extra={"record_id": record.id}
            )
            self.digestion_repository.mark_failed(
                record.id, ErrorDetails(message=_error_message(exc))
            )
            return ProcessingStatus.FAILED

    async def _process_manual_digestion(
        self, record: DigestionRecord
    ) -> ProcessingStatus:
        result = await self.analysis_service.analyze_digestion_data(record.analysis)
        self.digestion_repository.mark_processed(
            record.id,
            DigestionInsights(
                concerns=result.concerns, recommendations=result.recommendations
            ),
            processed_at=datetime.now(tz=UTC),
        )
        return ProcessingStatus.PROCESSED

    async def _process_digestion_image(
        self, record: DigestionRecord
    ) -> ProcessingStatus:
        path = storage_path(
            record.user_id, RecordType.DIGESTIONS, str(record.filename)
        )
        if not self.storage.exists(path):
            _logger.warning("File does not exist: %s", path)
            self.digestion_repository.mark_failed(
                record.id, ErrorDetails(message=FILE_MISSING_MESSAGE)
            )
            return ProcessingStatus.FAILED
        image_bytes = self.storage.download(path)
        result = await self.analysis_service.analyze_digestion_image(image_bytes)
        stool = result.analysis
        self.digestion_repository.mark_processed(
            record.id,
            DigestionInsights(
                concerns=result.concerns, recommendations=result.recommendations
            ),
            processed_at=datetime.now(tz=UTC),
            analysis=DigestionAnalysis(
                source=DigestionSource.AI,
                bristol_scale=str(stool.bristol_stool_scale),
                color=stool.color,
                consistency=stool.consistency,
                shape=stool.shape,
                size=stool.size,
                has_blood=stool.presence_of_blood,
                has_mucus=stool.presence_of_mucus,
            ),
        )
        return ProcessingStatus.PROCESSED


def _error_message(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def _response_preview(exc: Exception) -> str:
    """Return the raw model text for parse errors, else the exception repr."""
    if isinstance(exc, AnalysisParseError):
        return exc.response_text[:RESPONSE_PREVIEW_LENGTH]
    return repr(exc)[:RESPONSE_PREVIEW_LENGTH]
