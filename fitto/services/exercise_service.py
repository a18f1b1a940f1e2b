"""
Exercise Service

Exercise log CRUD. Calories burned come from the client or are derived
from a MET value and the user's stored weight.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fitto.extensions import db
from fitto.models.exercise import Exercise
from fitto.services.persistence import commit, get_user_or_404
from fitto.utils.errors import ForbiddenError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def calories_from_met(met: float, weight_kg: float, duration_min: float) -> float:
    """kcal = MET * kg * hours."""
    return met * weight_kg * (duration_min / 60)


def _derive_calories(met: Optional[float], weight_kg: Optional[float], duration: float) -> float:
    if met is None:
        raise ValidationError("caloriesBurned or MET is required", field="caloriesBurned")
    if not weight_kg:
        raise ValidationError(
            "Cannot derive caloriesBurned without a stored weight; complete setup or log a weight first",
            field="MET",
        )
    return calories_from_met(met, weight_kg, duration)


def _owned_exercise(user_id: int, exercise_id: int) -> Exercise:
    exercise = db.session.get(Exercise, exercise_id)
    if not exercise:
        raise NotFoundError("Exercise not found", code="EXERCISE_NOT_FOUND")
    if exercise.user_id != user_id:
        raise ForbiddenError("Unauthorized")
    return exercise


def list_exercises(user_id: int, owner_id: int) -> List[Dict[str, Any]]:
    if user_id != owner_id:
        raise ForbiddenError("Unauthorized")
    exercises = (
        Exercise.query
        .filter_by(user_id=owner_id)
        .order_by(Exercise.date.desc(), Exercise.id.desc())
        .all()
    )
    return [e.to_dict() for e in exercises]


def create_exercise(user_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Log an exercise.

    Args:
        user_id: User ID
        data: Loaded ``CreateExerciseSchema`` payload

    Returns:
        Dictionary with the saved exercise and the user's current tdee

    Raises:
        ValidationError: If calories can't be taken or derived
    """
    user = get_user_or_404(user_id)
    calories = data.get("calories_burned")
    if calories is None:
        calories = _derive_calories(data.get("met"), user.weight, data["duration"])

    exercise = Exercise(
        user_id=user.id,
        exercise_name=data["exercise_name"].strip(),
        duration=data["duration"],
        calories_burned=calories,
        met=data.get("met"),
        date=data.get("date") or datetime.utcnow(),
    )
    db.session.add(exercise)
    commit("save exercise")

    return {
        "message": "Exercise logged",
        "savedExercise": exercise.to_dict(),
        "updatedTDEE": user.tdee,
    }


def update_exercise(user_id: int, exercise_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    exercise = _owned_exercise(user_id, exercise_id)

    if "exercise_name" in data:
        exercise.exercise_name = data["exercise_name"].strip()
    if "met" in data:
        exercise.met = data["met"]
    if "duration" in data:
        exercise.duration = data["duration"]

    if data.get("calories_burned") is not None:
        exercise.calories_burned = data["calories_burned"]
    elif ("duration" in data or "met" in data) and exercise.met is not None:
        # Keep a MET-derived entry consistent with its new duration
        user = get_user_or_404(user_id)
        exercise.calories_burned = _derive_calories(exercise.met, user.weight, exercise.duration)

    commit("update exercise")
    return exercise.to_dict()


def delete_exercise(user_id: int, exercise_id: int) -> None:
    exercise = _owned_exercise(user_id, exercise_id)
    db.session.delete(exercise)
    commit("delete exercise")
