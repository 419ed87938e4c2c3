"""Models for calorie and macro goal calculations."""

from pydantic import BaseModel

from nutrition_api.domain.profiles import GoalType, Number


class GoalRequest(BaseModel):
    """Anthropometric and goal inputs for a calculation."""

    gender: str | None = None
    birth_year: int | None = None
    weight_kg: Number | None = None
    height_cm: Number | None = None
    activity_level: str | None = None
    goal_type: str | None = None
    goal_weight_kg: Number | None = None
    goal_weeks: Number | None = None
    macro_focus: str | None = None


class MacroTarget(BaseModel):
    """Daily target for one macronutrient."""

    grams: float
    percent: Number
    calories: int


class MacroTargets(BaseModel):
    """Daily targets for all macronutrients."""

    protein: MacroTarget
    carbs: MacroTarget
    fat: MacroTarget


class GoalCalculation(BaseModel):
    """Derived calorie and macro targets."""

    age: int
    bmi_current: float
    bmi_current_category: str
    bmi_goal: float
    bmi_goal_category: str
    bmr: int
    tmb: int
    tdee: int
    weight_change_kg: float
    kg_per_week: float
    goal_type: GoalType
    daily_calories: int
    calorie_adjustment: int
    macros: MacroTargets
    warnings: list[str]
    estimated_completion_date: str
