"""Webhook endpoints for storage uploads and new records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from nutrisnap.api.auth import require_webhook_token
from nutrisnap.api.models import RecordEvent, StorageEvent

if TYPE_CHECKING:
    from nutrisnap.containers import AppContainer

router = APIRouter(
    prefix="/events",
    tags=["events"],
    dependencies=[Depends(require_webhook_token)],
)

_logger = logging.getLogger(__name__)

_INSERT_EVENT = "INSERT"


@router.post("/storage")
async def storage_event(event: StorageEvent, request: Request) -> dict[str, object]:
    """Create a record for a newly uploaded image."""
    container: AppContainer = request.app.state.container
    record_id = container.upload_intake.handle_upload(event.path)
    if record_id is None:
        return {"status": "ignored"}
    return {"status": "created", "record_id": str(record_id)}


@router.post("/records")
async def record_event(event: RecordEvent, request: Request) -> dict[str, object]:
    """Process a newly inserted meal or digestion record."""
    container: AppContainer = request.app.state.container
    if event.type != _INSERT_EVENT or not event.record:
        return {"status": "ignored"}
    record_id = _parse_record_id(event.record.get("id"))
    if record_id is None:
        _logger.info("Record event without a valid id", extra={"table": event.table})
        return {"status": "ignored"}

    processor = container.record_processor
    if event.table == "meal_records":
        result = await processor.process_meal_record(record_id)
    elif event.table == "digestion_records":
        result = await processor.process_digestion_record(record_id)
    else:
        return {"status": "ignored"}

    if result is None:
        return {"status": "ignored"}
    return {"status": result.value, "record_id": str(record_id)}


def _parse_record_id(value: object) -> UUID | None:
    try:
        return UUID(str(value))
    except ValueError:
        return None
