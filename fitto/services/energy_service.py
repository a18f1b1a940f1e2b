"""
Energy Budget Service

Derives basal metabolic rate, total daily energy expenditure and macro
targets from profile attributes and goal settings. Everything here is pure:
no database access, no request context.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fitto.services.fitness_constants import (
    ACTIVITY_MULTIPLIERS,
    BMR_OFFSET_MALE,
    BMR_OFFSET_OTHER,
    CALORIES_PER_GRAM_CARBS,
    CALORIES_PER_GRAM_FAT,
    CALORIES_PER_GRAM_PROTEIN,
    CARBS_PERCENTAGE,
    FAT_PERCENTAGE,
    PROTEIN_PERCENTAGE,
    VALID_GENDERS,
)
from fitto.utils.enums import ActivityLevel, Gender, Goal
from fitto.utils.errors import ValidationError


@dataclass(frozen=True)
class EnergyBudget:
    bmr: float
    tdee: float

    def to_dict(self) -> Dict[str, float]:
        return {"bmr": self.bmr, "tdee": self.tdee}


@dataclass(frozen=True)
class MacroTargets:
    carbs_g: int
    protein_g: int
    fat_g: int

    def to_dict(self) -> Dict[str, int]:
        return {"carbs_g": self.carbs_g, "protein_g": self.protein_g, "fat_g": self.fat_g}


def _require_positive(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number", field=name)
    if value <= 0:
        raise ValidationError(f"{name} must be greater than 0", field=name)
    return float(value)


def _parse_activity_level(value: Any) -> ActivityLevel:
    try:
        return ActivityLevel(value)
    except ValueError:
        raise ValidationError(f"Unknown activity level '{value}'", field="activityLevel")


def _parse_goal(value: Any) -> Goal:
    try:
        return Goal(value)
    except ValueError:
        raise ValidationError(f"Unknown goal '{value}'", field="goal")


def calculate_bmr(age: float, height_cm: float, weight_kg: float, gender: str) -> float:
    """Mifflin-St Jeor BMR in kcal/day."""
    age = _require_positive("age", age)
    height_cm = _require_positive("height", height_cm)
    weight_kg = _require_positive("weight", weight_kg)
    if gender not in VALID_GENDERS:
        raise ValidationError(f"Unknown gender '{gender}'", field="gender")

    offset = BMR_OFFSET_MALE if gender == Gender.MALE.value else BMR_OFFSET_OTHER
    return (10 * weight_kg) + (6.25 * height_cm) - (5 * age) + offset


def calculate_tdee(bmr: float, activity_level: str) -> float:
    multiplier = ACTIVITY_MULTIPLIERS[_parse_activity_level(activity_level)]
    return bmr * multiplier


def adjust_for_goal(tdee: float, goal: str, rate: Optional[float]) -> float:
    """Apply the goal's percentage deficit or surplus to a TDEE."""
    goal_enum = _parse_goal(goal)
    if goal_enum is Goal.MAINTAIN:
        return tdee

    rate = _require_positive("rate", rate)
    if goal_enum is Goal.LOSE:
        return tdee - (tdee * (rate / 100))
    return tdee + (tdee * (rate / 100))


def calculate_energy_budget(
    age: float,
    height: float,
    weight: float,
    gender: str,
    activity_level: str,
    goal: str,
    rate: Optional[float] = None,
) -> EnergyBudget:
    """
    Compute BMR and goal-adjusted TDEE for a profile.

    All inputs are checked before any arithmetic, so a bad enum or a
    missing rate raises ``ValidationError`` instead of yielding NaN.

    Returns:
        EnergyBudget with bmr and tdee in kcal/day
    """
    # Validate enums up front; calculate_* re-check the numeric fields
    _parse_activity_level(activity_level)
    goal_enum = _parse_goal(goal)
    if goal_enum is not Goal.MAINTAIN:
        _require_positive("rate", rate)

    bmr = calculate_bmr(age, height, weight, gender)
    tdee = calculate_tdee(bmr, activity_level)
    tdee = adjust_for_goal(tdee, goal, rate)
    return EnergyBudget(bmr=bmr, tdee=tdee)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_macro_targets(tdee: Optional[float]) -> Optional[MacroTargets]:
    """Split a daily calorie budget into whole grams of carbs, protein and fat."""
    if tdee is None:
        return None
    return MacroTargets(
        carbs_g=_round_half_up(tdee * CARBS_PERCENTAGE / CALORIES_PER_GRAM_CARBS),
        protein_g=_round_half_up(tdee * PROTEIN_PERCENTAGE / CALORIES_PER_GRAM_PROTEIN),
        fat_g=_round_half_up(tdee * FAT_PERCENTAGE / CALORIES_PER_GRAM_FAT),
    )
