"""Photo nutrition analysis using a vision-capable language model."""

import base64
import binascii
import json
import logging
from dataclasses import dataclass

from nutrition_api.domain.analysis import has_expected_fields, summarize
from nutrition_api.errors import (
    InvalidUpstreamSchema,
    UpstreamEmptyResponse,
    ValidationError,
)
from nutrition_api.services.llm import CompletionClient, classify_upstream_error

_logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a specialist nutrition analyst. Analyze food images \
following this step-by-step process:

1. IDENTIFICATION: List every food and ingredient visible in the image.
2. QUANTITY ESTIMATE: For each item, estimate its weight or volume in grams/ml \
from its visual size and typical portions.
3. PER-ITEM CALCULATION: Compute the macronutrients of each ingredient from the \
estimated quantity, using your knowledge of nutrition tables.
4. CONSOLIDATION: Sum all values and return them as JSON.

The final JSON must contain:
- nome_do_prato: string (descriptive dish name)
- calorias_totais: number (total calories)
- proteinas_g: number (total protein in grams)
- carboidratos_g: number (total carbohydrates in grams)
- gorduras_g: number (total fat in grams)
- fibras_g: number (total fiber in grams)
- ingredientes_identificados: array of objects with:
  {
    nome: string,
    quantidade_estimada: string,
    calorias: number,
    proteinas: number,
    carboidratos: number,
    gorduras: number,
    fibras: number
  }
- observacoes_nutricionais: string (notes about the meal, nutrition tips)

Be precise in your estimates and transparent about your reasoning."""

USER_PROMPT = (
    "Analyze this food image and provide a detailed nutrition analysis "
    "following the step-by-step process described."
)

_EMPTY_CONTENTS = {"", "{}"}


@dataclass
class VisionService:
    """Service that asks a vision model for a nutrition estimate."""

    client: CompletionClient
    model: str
    temperature: float = 0.7

    async def analyze(
        self,
        image: str | None,
        user_id: str | None = None,
        timestamp: object = None,
    ) -> dict[str, object]:
        """Return the parsed nutrition estimate for an image."""
        if not image or not image.strip():
            raise ValidationError('The "image" field is required.')

        _logger.info(
            "Analyzing image", extra={"user_id": user_id, "timestamp": timestamp}
        )
        messages: list[dict[str, object]] = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": USER_PROMPT},
                    {"type": "image_url", "image_url": {"url": to_image_url(image)}},
                ],
            },
        ]
        try:
            result = await self.client.complete(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
            )
        except Exception as exc:
            _logger.exception("Vision request failed", extra={"user_id": user_id})
            raise classify_upstream_error(exc) from exc

        content = result.content
        if content is None or content.strip() in _EMPTY_CONTENTS:
            _logger.error(
                "Model returned an empty analysis: model=%s finish_reason=%s usage=%s",
                result.model,
                result.finish_reason,
                result.usage,
            )
            raise UpstreamEmptyResponse(
                "The model returned an empty response. Possible causes: exhausted "
                "credits, rate limiting or an API key problem.",
                extra={
                    "debug": {
                        "model": result.model,
                        "finish_reason": result.finish_reason,
                        "usage": result.usage,
                    }
                },
            )

        analysis = _parse_json_object(content)
        if not has_expected_fields(analysis):
            _logger.error("Analysis response is missing the expected fields")
            raise InvalidUpstreamSchema(
                "The analysis did not return the expected nutrition fields.",
                extra={"raw_response": analysis},
            )

        summary = summarize(analysis)
        _logger.info(
            "Analysis complete: user_id=%s dish=%s calories=%s ingredients=%s "
            "tokens=%s",
            user_id,
            summary.dish_name,
            summary.total_calories,
            summary.ingredient_count,
            result.total_tokens,
        )
        return analysis


def _parse_json_object(content: str) -> dict[str, object]:
    """Parse model output that must be a JSON object."""
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as exc:
        raise InvalidUpstreamSchema(str(exc)) from exc
    if not isinstance(parsed, dict):
        raise InvalidUpstreamSchema("The model response is not a JSON object.")
    return parsed


def to_image_url(image: str) -> str:
    """Return a URL the model can fetch: remote, data URL, or wrapped base64."""
    value = image.strip()
    if value.startswith(("http://", "https://", "data:")):
        return value
    try:
        image_bytes = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return value
    return _to_data_url(image_bytes)


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
