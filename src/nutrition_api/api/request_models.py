"""Pydantic models for analysis request payloads."""

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeRequest(BaseModel):
    """Photo analysis payload."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    image: str | None = None
    user_id: str | None = Field(default=None, alias="userId")
    timestamp: str | int | float | None = None


class RecalculateRequest(BaseModel):
    """Edited ingredient list payload."""

    ingredientes: list[str] | None = None
