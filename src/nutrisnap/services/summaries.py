"""Weekly aggregation of a user's water, meal and digestion records."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from nutrisnap.domain.summaries import Correlations, WeeklySummary
from nutrisnap.services.analysis import AnalysisService
from nutrisnap.services.analyzers import (
    CaloriesSource,
    DayPolicy,
    analyze_digestion,
    analyze_nutrition,
    analyze_water,
)
from nutrisnap.services.goals import GoalsService
from nutrisnap.services.records import (
    DigestionRecordRepository,
    MealRecordRepository,
    WaterRecordRepository,
)

_logger = logging.getLogger(__name__)


class SummaryRepository(Protocol):
    """Append-only persistence for weekly summaries."""

    def create_summary(self, summary: WeeklySummary) -> UUID:
        """Insert a new summary and return its id."""


@dataclass
class WeeklySummaryService:
    """Builds and stores one weekly summary for a user."""

    goals_service: GoalsService
    water_repository: WaterRecordRepository
    meal_repository: MealRecordRepository
    digestion_repository: DigestionRecordRepository
    summary_repository: SummaryRepository
    analysis_service: AnalysisService
    day_policy: DayPolicy = field(default_factory=DayPolicy)
    calories_source: CaloriesSource = CaloriesSource.CALORIES

    async def generate(
        self, user_id: UUID, start: datetime, end: datetime | None = None
    ) -> WeeklySummary:
        """Aggregate records in [start, end] and persist a new summary.

        Only processed meals count towards nutrition; water and digestion
        records are taken regardless of status. Goal or storage failures
        propagate to the caller.
        """
        end = end or datetime.now(tz=UTC)
        goals, water_records, meal_records, digestion_records = await asyncio.gather(
            asyncio.to_thread(self.goals_service.get_goals, user_id),
            asyncio.to_thread(
                self.water_repository.list_water_records, user_id, start, end
            ),
            asyncio.to_thread(
                self.meal_repository.list_processed_meal_records, user_id, start, end
            ),
            asyncio.to_thread(
                self.digestion_repository.list_digestion_records, user_id, start, end
            ),
        )

        water_analysis = analyze_water(water_records, goals, self.day_policy)
        nutrition_analysis = analyze_nutrition(
            meal_records, goals, self.day_policy, self.calories_source
        )
        digestion_analysis = analyze_digestion(
            digestion_records, goals, self.day_policy
        )
        correlations = await self.analysis_service.generate_correlations(
            water_records, meal_records, digestion_records
        )

        summary = WeeklySummary(
            user_id=user_id,
            week_start_date=start,
            week_end_date=end,
            water_analysis=water_analysis,
            nutrition_analysis=nutrition_analysis,
            digestion_analysis=digestion_analysis,
            correlations=Correlations(
                water_and_digestion=correlations.water_and_digestion,
                diet_and_digestion=correlations.diet_and_digestion,
            ),
            created_at=datetime.now(tz=UTC),
        )
        summary_id = self.summary_repository.create_summary(summary)
        _logger.info(
            "Stored weekly summary",
            extra={
                "user_id": user_id,
                "summary_id": summary_id,
                "meals": nutrition_analysis.meals_count,
                "digestions": digestion_analysis.frequency,
            },
        )
        return summary
