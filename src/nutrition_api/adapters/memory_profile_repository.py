"""In-memory profile repository."""

from dataclasses import dataclass, field

from nutrition_api.domain.profiles import UserProfile
from nutrition_api.services.profiles import ProfileRepository


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """Process-local profile store; the last write for a user wins."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)

    def get(self, user_id: str) -> UserProfile | None:
        """Return the stored profile for a user."""
        return self.profiles.get(user_id)

    def put(self, profile: UserProfile) -> None:
        """Replace the stored profile for the user."""
        self.profiles[profile.user_id] = profile
