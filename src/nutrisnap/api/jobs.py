"""Scheduled job endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from nutrisnap.api.auth import require_webhook_token

if TYPE_CHECKING:
    from nutrisnap.containers import AppContainer

router = APIRouter(
    prefix="/jobs",
    tags=["jobs"],
    dependencies=[Depends(require_webhook_token)],
)


@router.post("/weekly-summaries")
async def weekly_summaries(request: Request) -> dict[str, object]:
    """Generate last week's summary for every user."""
    container: AppContainer = request.app.state.container
    report = await container.weekly_job.run()
    return {
        "period_start": report.period_start.isoformat(),
        "succeeded": len(report.succeeded),
        "failed": [str(user_id) for user_id in report.failed],
    }
