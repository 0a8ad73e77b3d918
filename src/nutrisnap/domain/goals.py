"""Per-user target configuration."""

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True)
class MacroGoals:
    """Macronutrient targets as percentages of total calories."""

    proteins: float
    carbs: float
    fats: float


@dataclass(frozen=True)
class UserGoals:
    """Daily targets used when grading a week of records."""

    calories: float
    water: float
    macros: MacroGoals
    bristol_score: float
    updated_at: datetime


def default_goals(now: datetime | None = None) -> UserGoals:
    """Return the goals assigned to users who never configured their own."""
    return UserGoals(
        calories=2200,
        water=2000,
        macros=MacroGoals(proteins=30, carbs=40, fats=30),
        bristol_score=4,
        updated_at=now or datetime.now(tz=UTC),
    )
