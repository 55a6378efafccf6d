"""Supabase repository for the public users table."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from biteqube.domain.models import UserProfile
from biteqube.services.profile import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        response = (
            self.client.table("users")
            .select("*")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserProfile(
            id=UUID(str(row["id"])),
            email=row.get("email"),
            name=row.get("name"),
            theme=row.get("theme"),
        )

    def set_theme(self, user_id: UUID, theme: str) -> None:
        response = (
            self.client.table("users")
            .update({"theme": theme})
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update theme")
