"""Calorie and macro goal calculations.

BMR uses Mifflin-St Jeor; TDEE scales it by an activity multiplier, and the
weekly weight change is converted to a daily calorie adjustment assuming
7700 kcal per kg of body fat. Figures are rounded half-up.
"""

import math
from datetime import UTC, date, datetime, timedelta

from nutrition_api.domain.goals import (
    GoalCalculation,
    GoalRequest,
    MacroTarget,
    MacroTargets,
)
from nutrition_api.domain.profiles import ActivityLevel, Gender, GoalType, MacroFocus
from nutrition_api.errors import ValidationError

MIN_AGE = 13
KCAL_PER_KG_FAT = 7700
MAX_DAILY_CALORIES = 5000
MIN_DAILY_CALORIES = {Gender.MASCULINO: 1500, Gender.FEMININO: 1200}
KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARIO: 1.2,
    ActivityLevel.LEVEMENTE_ATIVO: 1.375,
    ActivityLevel.MODERADAMENTE_ATIVO: 1.55,
    ActivityLevel.MUITO_ATIVO: 1.725,
    ActivityLevel.SUPER_ATIVO: 1.9,
}

MACRO_PRESETS: dict[MacroFocus, dict[str, int]] = {
    MacroFocus.EQUILIBRADO: {"protein": 30, "carbs": 50, "fat": 20},
    MacroFocus.PERDA_GORDURA: {"protein": 35, "carbs": 40, "fat": 25},
    MacroFocus.GANHO_MASSA: {"protein": 35, "carbs": 45, "fat": 20},
    MacroFocus.BAIXO_CARB: {"protein": 30, "carbs": 30, "fat": 40},
    MacroFocus.CETOGENICO: {"protein": 25, "carbs": 5, "fat": 70},
}

_REQUIRED_BASE = ("gender", "birth_year", "weight_kg", "height_cm", "activity_level")
_REQUIRED_GOAL = ("goal_weight_kg", "goal_weeks")


def calculate_goals(
    payload: GoalRequest, today: date | None = None
) -> GoalCalculation:
    """Compute BMI, BMR, TDEE and daily calorie/macro targets."""
    _require(payload, _REQUIRED_BASE, "Missing required fields")
    _require(payload, _REQUIRED_GOAL, "Missing goal fields")

    today = today or datetime.now(tz=UTC).date()
    age = today.year - payload.birth_year
    if age < MIN_AGE:
        raise ValidationError(f"Minimum age is {MIN_AGE} years.")

    gender = _resolve_gender(payload.gender)
    weight_kg = payload.weight_kg
    height_cm = payload.height_cm

    height_m = height_cm / 100
    bmi_current = weight_kg / (height_m * height_m)
    bmi_goal = payload.goal_weight_kg / (height_m * height_m)

    bmr = basal_metabolic_rate(gender, weight_kg, height_cm, age)
    multiplier = _activity_multiplier(payload.activity_level)
    tdee = bmr * multiplier

    weight_change_kg = payload.goal_weight_kg - weight_kg
    kg_per_week = weight_change_kg / payload.goal_weeks
    calorie_adjustment = (kg_per_week * KCAL_PER_KG_FAT) / 7
    daily_calories = round_half_up(tdee + calorie_adjustment)

    warnings: list[str] = []
    rate = abs(kg_per_week)
    if rate > 1:
        warnings.append(
            f"Weight change rate is too fast ({rate:.2f} kg/week). "
            "Recommended: at most 1 kg/week for health."
        )
    elif rate < 0.25:
        warnings.append(
            f"Weight change rate is very slow ({rate:.2f} kg/week). "
            "Consider a shorter period for more visible results."
        )

    min_calories = MIN_DAILY_CALORIES[gender]
    if daily_calories < min_calories:
        warnings.append(
            f"Calories adjusted to the safe minimum ({min_calories} kcal/day)."
        )
        daily_calories = min_calories
    elif daily_calories > MAX_DAILY_CALORIES:
        warnings.append(
            "Calories adjusted to the recommended maximum "
            f"({MAX_DAILY_CALORIES} kcal/day)."
        )
        daily_calories = MAX_DAILY_CALORIES

    if bmi_goal < 18.5:
        warnings.append(
            "Goal BMI is below the healthy range (< 18.5). Consult a nutritionist."
        )
    elif bmi_goal > 30:
        warnings.append(
            "Goal BMI is above the healthy range (> 30). "
            "Consider an intermediate goal."
        )

    rounded_bmr = round_half_up(bmr)
    return GoalCalculation(
        age=age,
        bmi_current=round_half_up(bmi_current, 1),
        bmi_current_category=bmi_category(bmi_current),
        bmi_goal=round_half_up(bmi_goal, 1),
        bmi_goal_category=bmi_category(bmi_goal),
        bmr=rounded_bmr,
        tmb=rounded_bmr,
        tdee=round_half_up(tdee),
        weight_change_kg=round_half_up(weight_change_kg, 1),
        kg_per_week=round_half_up(kg_per_week, 2),
        goal_type=_derive_goal_type(weight_change_kg),
        daily_calories=daily_calories,
        calorie_adjustment=round_half_up(calorie_adjustment),
        macros=macro_targets(daily_calories, payload.macro_focus),
        warnings=warnings,
        estimated_completion_date=(
            today + timedelta(days=payload.goal_weeks * 7)
        ).isoformat(),
    )


def basal_metabolic_rate(
    gender: Gender, weight_kg: float, height_cm: float, age: int
) -> float:
    """Return the Mifflin-St Jeor basal metabolic rate in kcal/day."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if gender is Gender.MASCULINO else base - 161


def bmi_category(bmi: float) -> str:
    """Classify a BMI value."""
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal weight"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def macro_targets(daily_calories: int, macro_focus: str | None) -> MacroTargets:
    """Split daily calories into macro grams using a named preset."""
    percents = MACRO_PRESETS.get(
        _resolve_macro_focus(macro_focus), MACRO_PRESETS[MacroFocus.EQUILIBRADO]
    )
    targets: dict[str, MacroTarget] = {}
    for macro, percent in percents.items():
        calories = daily_calories * (percent / 100)
        targets[macro] = MacroTarget(
            grams=round_half_up(calories / KCAL_PER_GRAM[macro], 1),
            percent=percent,
            calories=round_half_up(calories),
        )
    return MacroTargets(**targets)


def round_half_up(value: float, digits: int = 0) -> float | int:
    """Round with halves going up, returning an int when digits is zero."""
    factor = 10**digits
    rounded = math.floor(value * factor + 0.5)
    if digits == 0:
        return int(rounded)
    return rounded / factor


def _require(payload: GoalRequest, fields: tuple[str, ...], message: str) -> None:
    missing = [name for name in fields if not getattr(payload, name)]
    if missing:
        raise ValidationError(f"{message}: {', '.join(fields)}")


def _resolve_gender(value: str | None) -> Gender:
    try:
        return Gender(value)
    except ValueError:
        return Gender.FEMININO


def _activity_multiplier(value: str | None) -> float:
    try:
        return ACTIVITY_MULTIPLIERS[ActivityLevel(value)]
    except ValueError as exc:
        raise ValidationError("Invalid activity level.") from exc


def _resolve_macro_focus(value: str | None) -> MacroFocus | None:
    try:
        return MacroFocus(value)
    except ValueError:
        return None


def _derive_goal_type(weight_change_kg: float) -> GoalType:
    if weight_change_kg > 0:
        return GoalType.GANHAR
    if weight_change_kg < 0:
        return GoalType.PERDER
    return GoalType.MANTER
