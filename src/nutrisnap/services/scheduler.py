"""Weekly driver that generates summaries for every known user."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from nutrisnap.services.summaries import WeeklySummaryService

SUMMARY_PERIOD = timedelta(days=7)

_logger = logging.getLogger(__name__)


class UserDirectory(Protocol):
    """Source of all known user ids."""

    def list_user_ids(self) -> list[UUID]:
        """Return every user id, across all pages."""


@dataclass
class WeeklyRunReport:
    """Outcome of one weekly run, for logs and the job endpoint."""

    period_start: datetime
    succeeded: list[UUID] = field(default_factory=list)
    failed: list[UUID] = field(default_factory=list)


@dataclass
class WeeklySummaryJob:
    """Runs the weekly aggregation for each user in turn."""

    user_directory: UserDirectory
    summary_service: WeeklySummaryService

    async def run(self, now: datetime | None = None) -> WeeklyRunReport:
        """Generate last period's summary for each user, one user at a time.

        Users are processed sequentially to bound concurrent model calls. A
        failing user is logged and skipped.
        """
        now = now or datetime.now(tz=UTC)
        report = WeeklyRunReport(period_start=now - SUMMARY_PERIOD)
        try:
            user_ids = self.user_directory.list_user_ids()
        except Exception:
            _logger.exception("Error fetching users")
            return report

        _logger.info("Starting weekly analysis for %s users", len(user_ids))
        for user_id in user_ids:
            try:
                await self.summary_service.generate(
                    user_id, report.period_start, end=now
                )
            except Exception:
                _logger.exception("Error processing user %s", user_id)
                report.failed.append(user_id)
                continue
            _logger.info("Completed analysis for user %s", user_id)
            report.succeeded.append(user_id)

        _logger.info(
            "Weekly analysis completed: %s succeeded, %s failed",
            len(report.succeeded),
            len(report.failed),
        )
        return report
