"""User profile validation and storage."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Protocol

from pydantic import BaseModel

from nutrition_api.domain.profiles import (
    ActivityLevel,
    Gender,
    GoalType,
    MacroFocus,
    Number,
    UserProfile,
)
from nutrition_api.errors import MissingIdentifier, NotFound, ValidationError

_logger = logging.getLogger(__name__)

MIN_BIRTH_YEAR = 1920
MIN_AGE = 13
WEIGHT_RANGE_KG = (30, 200)
HEIGHT_RANGE_CM = (100, 250)
MACRO_PERCENT_TOTAL = 100


class ProfilePayload(BaseModel):
    """Profile fields as submitted by a client."""

    user_id: str | None = None
    gender: str | None = None
    birth_year: int | None = None
    weight_kg: Number | None = None
    height_cm: Number | None = None
    activity_level: str | None = None
    goal_type: str | None = None
    goal_weight_kg: Number | None = None
    goal_weeks: Number | None = None
    daily_calories: Number | None = None
    macro_focus: str | None = None
    protein_percent: Number | None = None
    carbs_percent: Number | None = None
    fat_percent: Number | None = None
    protein_grams: Number | None = None
    carbs_grams: Number | None = None
    fat_grams: Number | None = None
    notifications_enabled: bool | None = None


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get(self, user_id: str) -> UserProfile | None:
        """Return the profile stored for a user, if any."""

    def put(self, profile: UserProfile) -> None:
        """Store a profile, replacing any previous one for the user."""


@dataclass(frozen=True)
class SavedProfile:
    """Result of a profile write."""

    profile: UserProfile
    created: bool

    @property
    def message(self) -> str:
        """Return a human-readable status message."""
        if self.created:
            return "Profile created successfully"
        return "Profile updated successfully"


def _utc_today() -> date:
    return datetime.now(tz=UTC).date()


@dataclass
class ProfileService:
    """Application service for reading and writing user profiles."""

    repository: ProfileRepository
    clock: Callable[[], date] = _utc_today

    def get_profile(self, user_id: str | None) -> UserProfile:
        """Return the stored profile for a user."""
        if not user_id:
            raise MissingIdentifier()
        profile = self.repository.get(user_id)
        if profile is None:
            raise NotFound(
                error="Profile not found",
                extra={"message": "The user has not completed onboarding yet"},
            )
        return profile

    def save_profile(self, payload: ProfilePayload) -> SavedProfile:
        """Validate and store a profile, replacing any existing one."""
        profile = self.validate(payload)
        created = self.repository.get(profile.user_id) is None
        self.repository.put(profile)
        _logger.info(
            "Profile %s for user_id: %s",
            "created" if created else "updated",
            profile.user_id,
        )
        return SavedProfile(profile=profile, created=created)

    def validate(self, payload: ProfilePayload) -> UserProfile:
        """Check a submitted profile and return the model to store."""
        if not payload.user_id:
            raise ValidationError("user_id is required")
        if not (
            payload.gender
            and payload.birth_year
            and payload.weight_kg
            and payload.height_cm
        ):
            raise ValidationError(
                "Missing required fields: gender, birth_year, weight_kg, height_cm"
            )

        current_year = self.clock().year
        if not MIN_BIRTH_YEAR <= payload.birth_year <= current_year:
            raise ValidationError(
                "Invalid birth year. Must be between "
                f"{MIN_BIRTH_YEAR} and {current_year}"
            )
        if current_year - payload.birth_year < MIN_AGE:
            raise ValidationError(f"Minimum age is {MIN_AGE} years")

        min_weight, max_weight = WEIGHT_RANGE_KG
        if not min_weight <= payload.weight_kg <= max_weight:
            raise ValidationError(
                f"Weight must be between {min_weight} and {max_weight} kg"
            )
        min_height, max_height = HEIGHT_RANGE_CM
        if not min_height <= payload.height_cm <= max_height:
            raise ValidationError(
                f"Height must be between {min_height} and {max_height} cm"
            )

        percents = (
            payload.protein_percent,
            payload.carbs_percent,
            payload.fat_percent,
        )
        if any(value is None for value in percents):
            raise ValidationError(
                "Macronutrient percentages must add up to 100%. "
                "Missing: protein_percent, carbs_percent, fat_percent"
            )
        total = sum(percents)
        if total != MACRO_PERCENT_TOTAL:
            raise ValidationError(
                f"Macronutrient percentages must add up to 100%. Current: {total}%"
            )

        return UserProfile(
            user_id=payload.user_id,
            gender=_check_enum(Gender, payload.gender, "gender"),
            birth_year=payload.birth_year,
            weight_kg=payload.weight_kg,
            height_cm=payload.height_cm,
            activity_level=_check_optional_enum(
                ActivityLevel, payload.activity_level, "activity_level"
            ),
            goal_type=_check_optional_enum(GoalType, payload.goal_type, "goal_type"),
            goal_weight_kg=payload.goal_weight_kg,
            goal_weeks=payload.goal_weeks,
            daily_calories=payload.daily_calories,
            macro_focus=_check_optional_enum(
                MacroFocus, payload.macro_focus, "macro_focus"
            ),
            protein_percent=payload.protein_percent,
            carbs_percent=payload.carbs_percent,
            fat_percent=payload.fat_percent,
            protein_grams=payload.protein_grams,
            carbs_grams=payload.carbs_grams,
            fat_grams=payload.fat_grams,
            notifications_enabled=(
                True
                if payload.notifications_enabled is None
                else payload.notifications_enabled
            ),
        )


def _check_enum(enum_type: type[StrEnum], value: str, field_name: str) -> str:
    """Return the value unchanged once it names a member of the enum."""
    try:
        enum_type(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_type)
        raise ValidationError(
            f"Invalid {field_name}: {value}. Allowed values: {allowed}"
        ) from exc
    return value


def _check_optional_enum(
    enum_type: type[StrEnum], value: str | None, field_name: str
) -> str | None:
    if not value:
        return value
    return _check_enum(enum_type, value, field_name)
