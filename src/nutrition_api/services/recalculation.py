"""Nutrition recalculation from an edited ingredient list."""

import json
import logging
from dataclasses import dataclass

from nutrition_api.domain.analysis import summarize
from nutrition_api.errors import (
    ApiError,
    InvalidUpstreamSchema,
    UnknownError,
    ValidationError,
)
from nutrition_api.services.llm import CompletionClient

_logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a nutritionist specialized in nutrition analysis. "
    "Return ONLY valid JSON, without markdown or additional text."
)

_PROMPT_TEMPLATE = """You are a specialist nutritionist. Recalculate the TOTAL \
nutrition values of the dish based EXACTLY on the ingredients listed below.

DISH INGREDIENTS:
{ingredients}

INSTRUCTIONS:
1. Analyze each ingredient and estimate its most likely quantity
2. Calculate the nutrition values of each ingredient
3. Sum all values to get the dish TOTAL
4. Return ONLY valid JSON, without additional text

RESPONSE FORMAT (JSON):
{{
  "nome_do_prato": "Descriptive dish name",
  "calorias_totais": number (total kcal of the dish),
  "proteinas_g": number (total grams),
  "carboidratos_g": number (total grams),
  "gorduras_g": number (total grams),
  "fibras_g": number (total grams),
  "ingredientes_identificados": [
    {{
      "nome": "ingredient name",
      "quantidade_estimada": "quantity with unit",
      "calorias": number,
      "proteinas_g": number,
      "carboidratos_g": number,
      "gorduras_g": number,
      "fibras_g": number
    }}
  ],
  "observacoes": "Notes about the estimates or nutrition considerations"
}}"""


def build_prompt(ingredients: list[str]) -> str:
    """Render the recalculation prompt with a numbered ingredient list."""
    numbered = "\n".join(
        f"{index}. {ingredient}" for index, ingredient in enumerate(ingredients, 1)
    )
    return _PROMPT_TEMPLATE.format(ingredients=numbered)


@dataclass
class RecalculationService:
    """Service that recomputes nutrition totals with a text-only model."""

    client: CompletionClient
    model: str
    temperature: float = 0.3
    max_tokens: int = 1500

    async def recalculate(self, ingredients: object) -> dict[str, object]:
        """Return nutrition totals for the given ingredient descriptions."""
        if not isinstance(ingredients, list) or not ingredients:
            raise ValidationError("An ingredient list is required.")

        _logger.info("Recalculating nutrition for %s ingredients", len(ingredients))
        try:
            result = await self.client.complete(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(ingredients)},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except ApiError:
            raise
        except Exception as exc:
            _logger.exception("Recalculation request failed")
            raise UnknownError(
                str(exc) or "Unknown error",
                error="Failed to recalculate nutrition values.",
            ) from exc

        response_text = (result.content or "").strip()
        try:
            nutrition = json.loads(response_text)
        except json.JSONDecodeError as exc:
            _logger.error("Recalculation returned invalid JSON: %s", exc)
            raise InvalidUpstreamSchema(
                str(exc), error="Failed to recalculate nutrition values."
            ) from exc
        if not isinstance(nutrition, dict):
            raise InvalidUpstreamSchema(
                "The model response is not a JSON object.",
                error="Failed to recalculate nutrition values.",
            )

        summary = summarize(nutrition)
        _logger.info(
            "Recalculation complete: dish=%s calories=%s ingredients=%s",
            summary.dish_name,
            summary.total_calories,
            summary.ingredient_count,
        )
        return nutrition
