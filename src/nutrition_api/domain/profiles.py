"""User nutrition profile models."""

from enum import StrEnum

from pydantic import BaseModel

Number = int | float


class _AliasedEnum(StrEnum):
    """String enum that also accepts English aliases."""

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {}

    @classmethod
    def _missing_(cls, value: object) -> "_AliasedEnum | None":
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        canonical = cls._aliases().get(normalized, normalized)
        for member in cls:
            if member.value == canonical:
                return member
        return None


class Gender(_AliasedEnum):
    """Biological sex used by the BMR formula."""

    MASCULINO = "masculino"
    FEMININO = "feminino"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {"male": "masculino", "female": "feminino"}


class ActivityLevel(_AliasedEnum):
    """Self-reported activity level."""

    SEDENTARIO = "sedentario"
    LEVEMENTE_ATIVO = "levemente_ativo"
    MODERADAMENTE_ATIVO = "moderadamente_ativo"
    MUITO_ATIVO = "muito_ativo"
    SUPER_ATIVO = "super_ativo"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {
            "sedentary": "sedentario",
            "lightly_active": "levemente_ativo",
            "moderately_active": "moderadamente_ativo",
            "very_active": "muito_ativo",
            "super_active": "super_ativo",
        }


class GoalType(_AliasedEnum):
    """Direction of the weight goal."""

    GANHAR = "ganhar"
    PERDER = "perder"
    MANTER = "manter"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {"gain": "ganhar", "lose": "perder", "maintain": "manter"}


class MacroFocus(_AliasedEnum):
    """Named macro split, or a custom one."""

    EQUILIBRADO = "equilibrado"
    PERDA_GORDURA = "perda_gordura"
    GANHO_MASSA = "ganho_massa"
    BAIXO_CARB = "baixo_carb"
    CETOGENICO = "cetogenico"
    PERSONALIZADO = "personalizado"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {
            "balanced": "equilibrado",
            "fat_loss": "perda_gordura",
            "muscle_gain": "ganho_massa",
            "low_carb": "baixo_carb",
            "ketogenic": "cetogenico",
            "custom": "personalizado",
        }


class UserProfile(BaseModel):
    """Stored nutrition profile for a user.

    Enumerated fields keep the value the client wrote; they are checked
    against the enums above before storage.
    """

    user_id: str
    gender: str
    birth_year: int
    weight_kg: Number
    height_cm: Number
    activity_level: str | None = None
    goal_type: str | None = None
    goal_weight_kg: Number | None = None
    goal_weeks: Number | None = None
    daily_calories: Number | None = None
    macro_focus: str | None = None
    protein_percent: Number
    carbs_percent: Number
    fat_percent: Number
    protein_grams: Number | None = None
    carbs_grams: Number | None = None
    fat_grams: Number | None = None
    notifications_enabled: bool = True
