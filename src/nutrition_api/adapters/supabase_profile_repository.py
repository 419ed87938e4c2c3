"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nutrition_api.domain.profiles import UserProfile
from nutrition_api.services.profiles import ProfileRepository

_TABLE = "user_profiles"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get(self, user_id: str) -> UserProfile | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = {
            key: value
            for key, value in response.data[0].items()
            if key in UserProfile.model_fields
        }
        return UserProfile.model_validate(row)

    def put(self, profile: UserProfile) -> None:
        """Insert or fully replace the profile row for the user."""
        row = profile.model_dump(mode="json")
        row["updated_at"] = datetime.now(tz=UTC).isoformat()
        self.client.table(_TABLE).upsert(row, on_conflict="user_id").execute()
