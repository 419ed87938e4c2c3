"""Models for nutrition estimates produced by the language model."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class IngredientEstimate(BaseModel):
    """Per-ingredient estimate inside a nutrition analysis."""

    model_config = ConfigDict(extra="allow")

    name: str | None = Field(default=None, validation_alias=AliasChoices("nome", "name"))
    estimated_quantity: str | None = Field(
        default=None,
        validation_alias=AliasChoices("quantidade_estimada", "estimated_quantity"),
    )
    calories: float | None = Field(
        default=None, validation_alias=AliasChoices("calorias", "calories")
    )
    protein_g: float | None = Field(
        default=None,
        validation_alias=AliasChoices("proteinas", "proteinas_g", "protein_g"),
    )
    carbs_g: float | None = Field(
        default=None,
        validation_alias=AliasChoices("carboidratos", "carboidratos_g", "carbs_g"),
    )
    fat_g: float | None = Field(
        default=None, validation_alias=AliasChoices("gorduras", "gorduras_g", "fat_g")
    )
    fiber_g: float | None = Field(
        default=None, validation_alias=AliasChoices("fibras", "fibras_g", "fiber_g")
    )


class NutritionEstimate(BaseModel):
    """Structured nutrition estimate for a dish."""

    model_config = ConfigDict(extra="allow")

    dish_name: str | None = Field(
        default=None, validation_alias=AliasChoices("nome_do_prato", "dish_name")
    )
    total_calories: float | None = Field(
        default=None,
        validation_alias=AliasChoices("calorias_totais", "total_calories"),
    )
    protein_g: float | None = Field(
        default=None, validation_alias=AliasChoices("proteinas_g", "protein_g")
    )
    carbs_g: float | None = Field(
        default=None, validation_alias=AliasChoices("carboidratos_g", "carbs_g")
    )
    fat_g: float | None = Field(
        default=None, validation_alias=AliasChoices("gorduras_g", "fat_g")
    )
    fiber_g: float | None = Field(
        default=None, validation_alias=AliasChoices("fibras_g", "fiber_g")
    )
    ingredients: list[IngredientEstimate] = Field(
        default_factory=list,
        validation_alias=AliasChoices("ingredientes_identificados", "ingredients"),
    )
    notes: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "observacoes_nutricionais", "observacoes", "notes"
        ),
    )

    @property
    def ingredient_count(self) -> int:
        """Return the number of identified ingredients."""
        return len(self.ingredients)


DISH_NAME_KEYS = ("nome_do_prato", "dish_name")
TOTAL_CALORIES_KEYS = ("calorias_totais", "total_calories")


def has_expected_fields(raw: dict[str, object]) -> bool:
    """Return True when a dish name or a calorie total is present."""
    return any(raw.get(key) for key in (*DISH_NAME_KEYS, *TOTAL_CALORIES_KEYS))


def summarize(raw: dict[str, object]) -> NutritionEstimate:
    """Read an estimate leniently, ignoring fields with unexpected types."""
    try:
        return NutritionEstimate.model_validate(raw)
    except ValueError:
        return NutritionEstimate.model_construct(
            dish_name=_text(raw, *DISH_NAME_KEYS),
            total_calories=_number(raw, *TOTAL_CALORIES_KEYS),
            ingredients=[],
        )


def _text(raw: dict[str, object], *keys: str) -> str | None:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _number(raw: dict[str, object], *keys: str) -> float | None:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, int | float) and not isinstance(value, bool):
            return float(value)
    return None
