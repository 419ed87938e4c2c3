"""Tests for profile service."""

import pytest

from nutrition_api.adapters.memory_profile_repository import InMemoryProfileRepository
from nutrition_api.errors import MissingIdentifier, NotFound, ValidationError
from nutrition_api.services.profiles import ProfilePayload, ProfileService
from tests.conftest import FIXED_TODAY, profile_payload


def _service(
    repository: InMemoryProfileRepository | None = None,
) -> ProfileService:
    return ProfileService(
        repository or InMemoryProfileRepository(), clock=lambda: FIXED_TODAY
    )


def test_save_creates_then_replaces() -> None:
    repository = InMemoryProfileRepository()
    service = _service(repository)

    first = service.save_profile(ProfilePayload(**profile_payload()))
    second = service.save_profile(ProfilePayload(**profile_payload(weight_kg=78)))

    assert first.created is True
    assert first.message == "Profile created successfully"
    assert second.created is False
    assert second.message == "Profile updated successfully"
    assert repository.profiles["user-1"].weight_kg == 78


def test_read_returns_last_written_profile() -> None:
    service = _service()
    service.save_profile(ProfilePayload(**profile_payload()))
    saved = service.save_profile(
        ProfilePayload(**profile_payload(macro_focus="cetogenico"))
    )

    profile = service.get_profile("user-1")

    assert profile == saved.profile
    assert profile.macro_focus == "cetogenico"


def test_save_keeps_alias_values_as_written() -> None:
    payload = profile_payload(gender="female", activity_level="very_active")
    payload.pop("notifications_enabled")

    profile = _service().save_profile(ProfilePayload(**payload)).profile

    assert profile.gender == "female"
    assert profile.activity_level == "very_active"
    assert profile.notifications_enabled is True


def test_get_requires_identifier() -> None:
    with pytest.raises(MissingIdentifier):
        _service().get_profile(None)


def test_get_unknown_user_not_found() -> None:
    with pytest.raises(NotFound) as excinfo:
        _service().get_profile("nobody")

    assert excinfo.value.status_code == 404
    assert "onboarding" in str(excinfo.value.to_payload()["message"])


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"user_id": None}, "user_id is required"),
        ({"gender": None}, "Missing required fields"),
        ({"height_cm": None}, "Missing required fields"),
        ({"birth_year": 1900}, "Invalid birth year"),
        ({"birth_year": 2026}, "Invalid birth year"),
        ({"birth_year": 2015}, "Minimum age"),
        ({"weight_kg": 29}, "Weight must be between 30 and 200 kg"),
        ({"weight_kg": 201}, "Weight must be between 30 and 200 kg"),
        ({"height_cm": 99}, "Height must be between 100 and 250 cm"),
        ({"height_cm": 251}, "Height must be between 100 and 250 cm"),
        ({"fat_percent": 21}, "Current: 101%"),
        ({"carbs_percent": 49}, "Current: 99%"),
        ({"fat_percent": None}, "must add up to 100%"),
        ({"gender": "other"}, "Invalid gender"),
        ({"macro_focus": "paleo"}, "Invalid macro_focus"),
    ],
)
def test_invalid_profiles_rejected(overrides: dict[str, object], message: str) -> None:
    repository = InMemoryProfileRepository()

    with pytest.raises(ValidationError, match=message):
        _service(repository).save_profile(
            ProfilePayload(**profile_payload(**overrides))
        )

    assert repository.profiles == {}


def test_boundary_values_accepted() -> None:
    service = _service()

    saved = service.save_profile(
        ProfilePayload(
            **profile_payload(birth_year=1920, weight_kg=30, height_cm=250)
        )
    )

    assert saved.profile.birth_year == 1920
