"""Persistence interfaces for meal, digestion and water records."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from nutrisnap.domain.analysis import NutritionalReport
from nutrisnap.domain.records import (
    DigestionAnalysis,
    DigestionInsights,
    DigestionRecord,
    ErrorDetails,
    MealRecord,
    WaterIntakeRecord,
)


class MealRecordRepository(Protocol):
    """Persistence interface for meal records."""

    def create_meal_record(
        self, user_id: UUID, filename: str, created_at: datetime
    ) -> UUID:
        """Create a to_be_processed meal record and return its id."""

    def get_meal_record(self, record_id: UUID) -> MealRecord | None:
        """Return a meal record by id, if present."""

    def mark_processing(self, record_id: UUID) -> None:
        """Set the record status to processing."""

    def mark_processed(
        self, record_id: UUID, report: NutritionalReport, processed_at: datetime
    ) -> None:
        """Store the report and processed status in a single update."""

    def mark_failed(self, record_id: UUID, error: ErrorDetails) -> None:
        """Store the failed status and error details in a single update."""

    def list_processed_meal_records(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return processed meal records created within [start, end]."""


class DigestionRecordRepository(Protocol):
    """Persistence interface for digestion records."""

    def create_digestion_record(
        self, user_id: UUID, filename: str, created_at: datetime
    ) -> UUID:
        """Create a to_be_processed AI-sourced digestion record."""

    def get_digestion_record(self, record_id: UUID) -> DigestionRecord | None:
        """Return a digestion record by id, if present."""

    def mark_processing(self, record_id: UUID) -> None:
        """Set the record status to processing."""

    def mark_processed(
        self,
        record_id: UUID,
        insights: DigestionInsights,
        processed_at: datetime,
        analysis: DigestionAnalysis | None = None,
    ) -> None:
        """Store insights (and a replacement analysis, if given) as processed."""

    def mark_failed(self, record_id: UUID, error: ErrorDetails) -> None:
        """Store the failed status and error details in a single update."""

    def list_digestion_records(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[DigestionRecord]:
        """Return digestion records created within [start, end]."""


class WaterRecordRepository(Protocol):
    """Read interface for water intake records."""

    def list_water_records(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[WaterIntakeRecord]:
        """Return water records created within [start, end]."""
