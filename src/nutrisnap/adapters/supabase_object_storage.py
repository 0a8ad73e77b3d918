"""Supabase Storage access to uploaded images."""

from dataclasses import dataclass

from supabase import Client

from nutrisnap.services.processing import ObjectStorage


@dataclass
class SupabaseObjectStorage(ObjectStorage):
    """Reads uploaded images from a Supabase Storage bucket."""

    client: Client
    bucket: str

    def exists(self, path: str) -> bool:
        """Return True when the bucket holds an object at the path."""
        folder, _, name = path.rpartition("/")
        entries = self.client.storage.from_(self.bucket).list(
            folder, {"search": name}
        )
        return any(entry.get("name") == name for entry in entries or [])

    def download(self, path: str) -> bytes:
        """Return the object's bytes."""
        return self.client.storage.from_(self.bucket).download(path)
