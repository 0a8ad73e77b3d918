"""Lists user ids from Supabase Auth."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrisnap.services.scheduler import UserDirectory

DEFAULT_PAGE_SIZE = 1000


@dataclass
class SupabaseUserDirectory(UserDirectory):
    """Pages through Supabase Auth users with the service role key."""

    client: Client
    page_size: int = DEFAULT_PAGE_SIZE

    def list_user_ids(self) -> list[UUID]:
        """Return the ids of all registered users."""
        user_ids: list[UUID] = []
        page = 1
        while True:
            users = self.client.auth.admin.list_users(
                page=page, per_page=self.page_size
            )
            user_ids.extend(UUID(str(user.id)) for user in users)
            if len(users) < self.page_size:
                return user_ids
            page += 1
