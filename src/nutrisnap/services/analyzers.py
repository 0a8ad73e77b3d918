"""Pure weekly analyzers for water, nutrition and digestion records."""

from collections import Counter, defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from zoneinfo import ZoneInfo

from nutrisnap.domain.analysis import NutritionalReport
from nutrisnap.domain.goals import UserGoals
from nutrisnap.domain.records import DigestionRecord, MealRecord, WaterIntakeRecord
from nutrisnap.domain.summaries import (
    AverageMacros,
    CommonCharacteristics,
    DigestionSummary,
    NutritionAnalysis,
    WaterAnalysis,
)

COMMON_INGREDIENTS_LIMIT = 10


class CaloriesSource(StrEnum):
    """Which report field counts as a meal's calories."""

    CALORIES = "calories"
    # Sums caloric_breakdown.carbohydrates, as older summaries did.
    LEGACY_CARBOHYDRATES = "legacy_carbohydrates"


@dataclass(frozen=True)
class DayPolicy:
    """Maps record timestamps to calendar days in a fixed timezone."""

    timezone_name: str = "UTC"

    def day_of(self, moment: datetime) -> date:
        """Return the calendar day of a timestamp in the policy timezone."""
        return moment.astimezone(ZoneInfo(self.timezone_name)).date()


@dataclass
class _DailyNutrition:
    calories: float = 0.0
    proteins: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0


def analyze_water(
    records: list[WaterIntakeRecord],
    goals: UserGoals,
    day_policy: DayPolicy | None = None,
) -> WaterAnalysis:
    """Summarize total and daily water intake against the water goal."""
    policy = day_policy or DayPolicy()
    total_intake = sum(record.amount for record in records)
    daily: dict[date, float] = defaultdict(float)
    for record in records:
        daily[policy.day_of(record.created_at)] += record.amount

    days_with_records = len(daily)
    return WaterAnalysis(
        total_intake=total_intake,
        daily_average=total_intake / days_with_records if days_with_records else 0,
        days_met_target=sum(1 for amount in daily.values() if amount >= goals.water),
    )


def analyze_nutrition(
    records: list[MealRecord],
    goals: UserGoals,
    day_policy: DayPolicy | None = None,
    calories_source: CaloriesSource = CaloriesSource.CALORIES,
) -> NutritionAnalysis:
    """Summarize processed meals against calorie and macro goals.

    Protein, carbohydrate and fat figures come from the report's caloric
    breakdown. Records without a nutritional report are ignored.
    """
    policy = day_policy or DayPolicy()
    reports = [
        (record, record.nutritional_report)
        for record in records
        if record.nutritional_report is not None
    ]

    totals = _DailyNutrition()
    daily: dict[date, _DailyNutrition] = defaultdict(_DailyNutrition)
    for record, report in reports:
        calories = _meal_calories(report, calories_source)
        breakdown = report.caloric_breakdown
        day = daily[policy.day_of(record.created_at)]
        for bucket in (totals, day):
            bucket.calories += calories
            bucket.proteins += breakdown.proteins
            bucket.carbs += breakdown.carbohydrates
            bucket.fats += breakdown.fats

    meals_count = len(reports)
    days_with_records = len(daily)
    return NutritionAnalysis(
        total_calories=totals.calories,
        average_macros=AverageMacros(
            proteins=_safe_divide(totals.proteins, days_with_records),
            carbs=_safe_divide(totals.carbs, days_with_records),
            fats=_safe_divide(totals.fats, days_with_records),
        ),
        common_ingredients=_common_ingredients([report for _, report in reports]),
        meals_count=meals_count,
        average_calories_per_meal=_safe_divide(totals.calories, meals_count),
        days_met_calorie_target=sum(
            1 for day in daily.values() if day.calories >= goals.calories
        ),
        days_met_protein_target=sum(
            1 for day in daily.values() if day.proteins >= goals.macros.proteins
        ),
        days_met_carbs_target=sum(
            1 for day in daily.values() if day.carbs >= goals.macros.carbs
        ),
        days_met_fat_target=sum(
            1 for day in daily.values() if day.fats >= goals.macros.fats
        ),
    )


def analyze_digestion(
    records: list[DigestionRecord],
    goals: UserGoals,
    day_policy: DayPolicy | None = None,
) -> DigestionSummary:
    """Summarize Bristol scores and flag days outside goal +/- 1."""
    policy = day_policy or DayPolicy()
    distribution: Counter[str] = Counter()
    daily_scores: dict[date, list[float]] = defaultdict(list)
    for record in records:
        raw_scale = record.analysis.bristol_scale
        score = _bristol_value(raw_scale)
        if raw_scale is None or score is None:
            continue
        distribution[raw_scale.strip()] += 1
        daily_scores[policy.day_of(record.created_at)].append(score)

    low = goals.bristol_score - 1
    high = goals.bristol_score + 1
    concerns: list[str] = []
    for day in sorted(daily_scores):
        scores = daily_scores[day]
        average = sum(scores) / len(scores)
        if average < low:
            concerns.append(f"Low bristol score on {day.isoformat()}: {average:.1f}")
        elif average > high:
            concerns.append(f"High bristol score on {day.isoformat()}: {average:.1f}")

    return DigestionSummary(
        frequency=len(records),
        bristol_scale_distribution=dict(distribution),
        common_characteristics=CommonCharacteristics(
            colors=_most_common(record.analysis.color for record in records),
            consistencies=_most_common(
                record.analysis.consistency for record in records
            ),
        ),
        concerns=concerns,
    )


def _meal_calories(report: NutritionalReport, source: CaloriesSource) -> float:
    if source == CaloriesSource.LEGACY_CARBOHYDRATES:
        return report.caloric_breakdown.carbohydrates
    return report.nutritional_information.calories


def _common_ingredients(reports: list[NutritionalReport]) -> list[str]:
    """Top ingredients by frequency; ties keep first-seen order."""
    counts: Counter[str] = Counter()
    for report in reports:
        counts.update(report.ingredient_extraction)
    return [name for name, _ in counts.most_common(COMMON_INGREDIENTS_LIMIT)]


def _most_common(values: Iterable[str | None]) -> list[str]:
    counts: Counter[str] = Counter(value for value in values if value)
    return [value for value, _ in counts.most_common()]


def _bristol_value(raw: str | None) -> float | None:
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _safe_divide(total: float, count: int) -> float:
    return total / count if count else 0
