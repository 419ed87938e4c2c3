"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrition_api.adapters.memory_profile_repository import InMemoryProfileRepository
from nutrition_api.adapters.openai_chat_client import OpenAIChatClient
from nutrition_api.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from nutrition_api.config import Settings
from nutrition_api.services.identity import IdentityResolver, TrustedHeaderIdentity
from nutrition_api.services.profiles import ProfileRepository, ProfileService
from nutrition_api.services.recalculation import RecalculationService
from nutrition_api.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    vision_service: VisionService
    recalculation_service: RecalculationService
    profile_service: ProfileService
    identity_resolver: IdentityResolver
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    chat_client = OpenAIChatClient.create(
        resolved_settings.openai_api_key,
        base_url=resolved_settings.openai_base_url,
    )
    vision_service = VisionService(
        client=chat_client,
        model=resolved_settings.openai_vision_model,
        temperature=resolved_settings.vision_temperature,
    )
    recalculation_service = RecalculationService(
        client=chat_client,
        model=resolved_settings.openai_text_model,
        temperature=resolved_settings.recalculation_temperature,
        max_tokens=resolved_settings.recalculation_max_tokens,
    )
    profile_service = ProfileService(_build_profile_repository(resolved_settings))

    async def close_resources() -> None:
        await chat_client.close()

    return AppContainer(
        settings=resolved_settings,
        vision_service=vision_service,
        recalculation_service=recalculation_service,
        profile_service=profile_service,
        identity_resolver=TrustedHeaderIdentity(),
        close_resources=close_resources,
    )


def _build_profile_repository(settings: Settings) -> ProfileRepository:
    """Use Supabase when configured, otherwise a process-local store."""
    if settings.durable_profiles:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseProfileRepository(client)
    return InMemoryProfileRepository()
