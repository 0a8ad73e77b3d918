"""Pydantic models for Supabase webhook payloads."""

from pydantic import BaseModel, Field


class StorageObject(BaseModel):
    """Storage object row as sent by a storage.objects trigger."""

    name: str | None = None
    bucket_id: str | None = None


class StorageEvent(BaseModel):
    """Upload notification, either flat or wrapped in a database webhook."""

    name: str | None = None
    record: StorageObject | None = None

    @property
    def path(self) -> str | None:
        if self.name:
            return self.name
        if self.record:
            return self.record.name
        return None


class RecordEvent(BaseModel):
    """Supabase database webhook payload."""

    type: str
    table: str
    record: dict[str, object] | None = None
    schema_name: str | None = Field(default=None, alias="schema")
    old_record: dict[str, object] | None = None
