"""Domain models for weekly summaries."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class WaterAnalysis:
    """Hydration totals for a period."""

    total_intake: float
    daily_average: float
    days_met_target: int


@dataclass(frozen=True)
class AverageMacros:
    """Average daily macronutrient totals."""

    proteins: float
    carbs: float
    fats: float


@dataclass(frozen=True)
class NutritionAnalysis:
    """Meal totals, averages and target hits for a period."""

    total_calories: float
    average_macros: AverageMacros
    common_ingredients: list[str]
    meals_count: int
    average_calories_per_meal: float
    days_met_calorie_target: int
    days_met_protein_target: int
    days_met_carbs_target: int
    days_met_fat_target: int


@dataclass(frozen=True)
class CommonCharacteristics:
    """Most frequent stool colors and consistencies."""

    colors: list[str] = field(default_factory=list)
    consistencies: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DigestionSummary:
    """Digestion frequency, Bristol distribution and concerns for a period."""

    frequency: int
    bristol_scale_distribution: dict[str, int]
    common_characteristics: CommonCharacteristics
    concerns: list[str]


@dataclass(frozen=True)
class Correlations:
    """Cross-domain observations produced by the AI."""

    water_and_digestion: list[str]
    diet_and_digestion: list[str]


@dataclass(frozen=True)
class WeeklySummary:
    """Append-only aggregate of one user's week."""

    user_id: UUID
    week_start_date: datetime
    week_end_date: datetime
    digestion_analysis: DigestionSummary
    correlations: Correlations
    created_at: datetime
    water_analysis: WaterAnalysis | None = None
    nutrition_analysis: NutritionAnalysis | None = None
