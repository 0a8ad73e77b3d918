"""Domain models for user-submitted records and their processing state."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Generic, TypeVar
from uuid import UUID

from nutrisnap.domain.analysis import NutritionalReport

ResultT = TypeVar("ResultT")


class ProcessingStatus(StrEnum):
    """Lifecycle of an AI-processed record."""

    TO_BE_PROCESSED = "to_be_processed"
    PROCESSING = "processing"
    PROCESSED = "processed"
    FAILED = "failed"


class RecordType(StrEnum):
    """Upload categories, matching the middle segment of a storage path."""

    MEALS = "meals"
    DIGESTIONS = "digestions"
    PROFILE = "profile"


class DigestionSource(StrEnum):
    """Origin of a digestion record's characteristics."""

    MANUAL = "manual"
    AI = "ai"


@dataclass(frozen=True)
class ErrorDetails:
    """Diagnostics stored on a failed record."""

    message: str
    response_preview: str | None = None


@dataclass(frozen=True)
class Unprocessed:
    """Record waiting for its first processing attempt."""

    status = ProcessingStatus.TO_BE_PROCESSED


@dataclass(frozen=True)
class Processing:
    """Record claimed by an in-flight processing invocation."""

    status = ProcessingStatus.PROCESSING


@dataclass(frozen=True)
class Processed(Generic[ResultT]):
    """Record with its analysis result."""

    result: ResultT
    processed_at: datetime

    status = ProcessingStatus.PROCESSED


@dataclass(frozen=True)
class Failed:
    """Record whose processing ended in an error."""

    error: ErrorDetails

    status = ProcessingStatus.FAILED


RecordState = Unprocessed | Processing | Processed[ResultT] | Failed


@dataclass(frozen=True)
class MealRecord:
    """Meal photo record with its nutritional report once processed."""

    id: UUID
    user_id: UUID | None
    created_at: datetime
    state: RecordState[NutritionalReport]
    filename: str | None = None
    record_type: RecordType | None = None

    @property
    def status(self) -> ProcessingStatus:
        return self.state.status

    @property
    def nutritional_report(self) -> NutritionalReport | None:
        if isinstance(self.state, Processed):
            return self.state.result
        return None


@dataclass(frozen=True)
class DigestionAnalysis:
    """Stool characteristics, entered manually or filled in by the AI."""

    source: DigestionSource
    bristol_scale: str | None = None
    color: str | None = None
    consistency: str | None = None
    shape: str | None = None
    size: str | None = None
    has_blood: bool = False
    has_mucus: bool = False


@dataclass(frozen=True)
class DigestionInsights:
    """AI concerns and recommendations attached to a processed digestion."""

    concerns: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DigestionRecord:
    """Digestion record from a photo or a manual entry."""

    id: UUID
    user_id: UUID | None
    created_at: datetime
    analysis: DigestionAnalysis
    state: RecordState[DigestionInsights]
    filename: str | None = None
    record_type: RecordType | None = None
    notes: str | None = None

    @property
    def status(self) -> ProcessingStatus:
        return self.state.status

    @property
    def insights(self) -> DigestionInsights | None:
        if isinstance(self.state, Processed):
            return self.state.result
        return None


@dataclass(frozen=True)
class WaterIntakeRecord:
    """Manually logged water intake in millilitres."""

    id: UUID
    user_id: UUID
    created_at: datetime
    amount: float
    notes: str | None = None
