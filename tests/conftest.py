"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from datetime import date

import pytest

from nutrition_api.adapters.memory_profile_repository import InMemoryProfileRepository
from nutrition_api.config import Settings
from nutrition_api.containers import AppContainer
from nutrition_api.domain.completions import CompletionResult
from nutrition_api.services.identity import TrustedHeaderIdentity
from nutrition_api.services.llm import CompletionClient
from nutrition_api.services.profiles import ProfileService
from nutrition_api.services.recalculation import RecalculationService
from nutrition_api.services.vision import VisionService

FIXED_TODAY = date(2025, 6, 1)

ANALYSIS_PAYLOAD: dict[str, object] = {
    "nome_do_prato": "Grilled chicken with rice",
    "calorias_totais": 520,
    "proteinas_g": 42,
    "carboidratos_g": 55,
    "gorduras_g": 12,
    "fibras_g": 3,
    "ingredientes_identificados": [
        {
            "nome": "chicken breast",
            "quantidade_estimada": "150 g",
            "calorias": 248,
            "proteinas": 46,
            "carboidratos": 0,
            "gorduras": 5,
            "fibras": 0,
        },
        {
            "nome": "white rice",
            "quantidade_estimada": "200 g",
            "calorias": 272,
            "proteinas": 5,
            "carboidratos": 55,
            "gorduras": 1,
            "fibras": 3,
        },
    ],
    "observacoes_nutricionais": "Balanced plate.",
}


@dataclass
class FakeCompletionClient(CompletionClient):
    """Fake completion client that records calls."""

    content: str | None = field(default_factory=lambda: json.dumps(ANALYSIS_PAYLOAD))
    finish_reason: str | None = "stop"
    usage: dict[str, object] = field(
        default_factory=lambda: {
            "prompt_tokens": 900,
            "completion_tokens": 300,
            "total_tokens": 1200,
        }
    )
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        temperature: float,
        max_tokens: int | None = None,
        json_output: bool = True,
    ) -> CompletionResult:
        self.calls.append(
            {
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "json_output": json_output,
            }
        )
        if self.error is not None:
            raise self.error
        return CompletionResult(
            content=self.content,
            finish_reason=self.finish_reason,
            model=model,
            usage=self.usage,
        )


def profile_payload(**overrides: object) -> dict[str, object]:
    """Return a valid profile write payload."""
    payload: dict[str, object] = {
        "user_id": "user-1",
        "gender": "masculino",
        "birth_year": 1990,
        "weight_kg": 80,
        "height_cm": 180,
        "activity_level": "moderadamente_ativo",
        "goal_type": "perder",
        "goal_weight_kg": 75,
        "goal_weeks": 10,
        "daily_calories": 2200,
        "macro_focus": "equilibrado",
        "protein_percent": 30,
        "carbs_percent": 50,
        "fat_percent": 20,
        "protein_grams": 165,
        "carbs_grams": 275,
        "fat_grams": 48.9,
        "notifications_enabled": False,
    }
    payload.update(overrides)
    return payload


def goal_payload(**overrides: object) -> dict[str, object]:
    """Return a valid goal calculation payload."""
    payload: dict[str, object] = {
        "gender": "masculino",
        "birth_year": 1995,
        "weight_kg": 70,
        "height_cm": 175,
        "activity_level": "sedentario",
        "goal_type": "perder",
        "goal_weight_kg": 65,
        "goal_weeks": 10,
        "macro_focus": "equilibrado",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key")


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def container(
    settings: Settings,
    completion_client: FakeCompletionClient,
    profile_repository: InMemoryProfileRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        vision_service=VisionService(
            client=completion_client,
            model=settings.openai_vision_model,
            temperature=settings.vision_temperature,
        ),
        recalculation_service=RecalculationService(
            client=completion_client,
            model=settings.openai_text_model,
            temperature=settings.recalculation_temperature,
            max_tokens=settings.recalculation_max_tokens,
        ),
        profile_service=ProfileService(profile_repository),
        identity_resolver=TrustedHeaderIdentity(),
        close_resources=close_resources,
    )
