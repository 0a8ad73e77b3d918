"""Supabase repository for weekly summaries."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrisnap.domain.summaries import (
    DigestionSummary,
    NutritionAnalysis,
    WaterAnalysis,
    WeeklySummary,
)
from nutrisnap.services.summaries import SummaryRepository


@dataclass
class SupabaseSummaryRepository(SummaryRepository):
    """Append-only Supabase storage for weekly summaries."""

    client: Client

    def create_summary(self, summary: WeeklySummary) -> UUID:
        """Insert a new summary row and return its id."""
        response = (
            self.client.table("weekly_summaries")
            .insert(summary_payload(summary))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create weekly summary")
        return UUID(response.data[0]["id"])


def summary_payload(summary: WeeklySummary) -> dict[str, object]:
    """Serialize a summary into its stored shape with camelCase JSON fields."""
    return {
        "user_id": str(summary.user_id),
        "week_start_date": summary.week_start_date.isoformat(),
        "week_end_date": summary.week_end_date.isoformat(),
        "water_analysis": _water_payload(summary.water_analysis),
        "nutrition_analysis": _nutrition_payload(summary.nutrition_analysis),
        "digestion_analysis": _digestion_payload(summary.digestion_analysis),
        "correlations": {
            "waterAndDigestion": list(summary.correlations.water_and_digestion),
            "dietAndDigestion": list(summary.correlations.diet_and_digestion),
        },
        "created_at": summary.created_at.isoformat(),
    }


def _water_payload(analysis: WaterAnalysis | None) -> dict[str, object] | None:
    if analysis is None:
        return None
    return {
        "totalIntake": analysis.total_intake,
        "dailyAverage": analysis.daily_average,
        "daysMetTarget": analysis.days_met_target,
    }


def _nutrition_payload(
    analysis: NutritionAnalysis | None,
) -> dict[str, object] | None:
    if analysis is None:
        return None
    return {
        "totalCalories": analysis.total_calories,
        "averageMacros": {
            "proteins": analysis.average_macros.proteins,
            "carbs": analysis.average_macros.carbs,
            "fats": analysis.average_macros.fats,
        },
        "commonIngredients": list(analysis.common_ingredients),
        "mealsCount": analysis.meals_count,
        "averageCaloriesPerMeal": analysis.average_calories_per_meal,
        "daysMetCalorieTarget": analysis.days_met_calorie_target,
        "daysMetProteinTarget": analysis.days_met_protein_target,
        "daysMetCarbsTarget": analysis.days_met_carbs_target,
        "daysMetFatTarget": analysis.days_met_fat_target,
    }


def _digestion_payload(analysis: DigestionSummary) -> dict[str, object]:
    return {
        "frequency": analysis.frequency,
        "bristolScaleDistribution": dict(analysis.bristol_scale_distribution),
        "commonCharacteristics": {
            "colors": list(analysis.common_characteristics.colors),
            "consistencies": list(analysis.common_characteristics.consistencies),
        },
        "concerns": list(analysis.concerns),
    }
