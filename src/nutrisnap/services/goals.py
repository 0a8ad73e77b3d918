"""User goals with lazily-created defaults."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrisnap.domain.goals import UserGoals, default_goals

_logger = logging.getLogger(__name__)


class GoalsRepository(Protocol):
    """Persistence interface for user goals."""

    def get_goals(self, user_id: UUID) -> UserGoals | None:
        """Return the stored goals for a user, if any."""

    def save_goals(self, user_id: UUID, goals: UserGoals) -> None:
        """Persist goals for a user."""


@dataclass
class GoalsService:
    """Application service for reading user goals."""

    repository: GoalsRepository

    def get_goals(self, user_id: UUID) -> UserGoals:
        """Return the user's goals, storing the defaults on first read."""
        existing = self.repository.get_goals(user_id)
        if existing:
            return existing

        goals = default_goals()
        self.repository.save_goals(user_id, goals)
        _logger.info("Created default goals", extra={"user_id": user_id})
        return goals
