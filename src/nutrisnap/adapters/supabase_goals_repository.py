"""Supabase repository for user goals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrisnap.adapters.supabase_rows import parse_timestamp
from nutrisnap.domain.goals import MacroGoals, UserGoals
from nutrisnap.services.goals import GoalsRepository


@dataclass
class SupabaseGoalsRepository(GoalsRepository):
    """Supabase implementation for user goals."""

    client: Client

    def get_goals(self, user_id: UUID) -> UserGoals | None:
        """Return the stored goals for a user."""
        response = (
            self.client.table("user_goals")
            .select("calories, water, macros, bristol_score, updated_at")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def save_goals(self, user_id: UUID, goals: UserGoals) -> None:
        """Insert or replace the user's goals."""
        self.client.table("user_goals").upsert(
            {
                "user_id": str(user_id),
                "calories": goals.calories,
                "water": goals.water,
                "macros": {
                    "proteins": goals.macros.proteins,
                    "carbs": goals.macros.carbs,
                    "fats": goals.macros.fats,
                },
                "bristol_score": goals.bristol_score,
                "updated_at": goals.updated_at.isoformat(),
            }
        ).execute()


def _parse_row(row: dict[str, object]) -> UserGoals:
    macros = row.get("macros")
    macros = macros if isinstance(macros, dict) else {}
    return UserGoals(
        calories=float(row.get("calories") or 0.0),
        water=float(row.get("water") or 0.0),
        macros=MacroGoals(
            proteins=float(macros.get("proteins") or 0.0),
            carbs=float(macros.get("carbs") or 0.0),
            fats=float(macros.get("fats") or 0.0),
        ),
        bristol_score=float(row.get("bristol_score") or 0.0),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
