"""
Food Log Service

Food entries grouped by meal slot for one calendar day.
"""

from datetime import date, datetime, timedelta
from typing import Any, Dict, List

from fitto.extensions import db
from fitto.models.food_log import FoodLogEntry
from fitto.services.persistence import commit, get_user_or_404
from fitto.utils.enums import MealType
from fitto.utils.errors import NotFoundError, ValidationError


def _day_bounds(day: date):
    start = datetime.combine(day, datetime.min.time())
    return start, start + timedelta(days=1)


def get_food_log(user_id: int, day: date) -> Dict[str, Any]:
    """
    Food entries for one day, grouped by meal.

    Returns:
        Dictionary with date, foodLog (meal -> entries) and totals
    """
    get_user_or_404(user_id)
    start, end = _day_bounds(day)
    entries: List[FoodLogEntry] = (
        FoodLogEntry.query
        .filter(FoodLogEntry.user_id == user_id, FoodLogEntry.date >= start, FoodLogEntry.date < end)
        .order_by(FoodLogEntry.date, FoodLogEntry.id)
        .all()
    )

    grouped: Dict[str, List[Dict[str, Any]]] = {meal.value: [] for meal in MealType}
    totals = {"calories": 0.0, "carbs": 0.0, "protein": 0.0, "fat": 0.0}
    for entry in entries:
        grouped.setdefault(entry.meal, []).append(entry.to_dict())
        totals["calories"] += entry.calories or 0
        totals["carbs"] += entry.carbs or 0
        totals["protein"] += entry.protein or 0
        totals["fat"] += entry.fat or 0

    return {"date": day.isoformat(), "foodLog": grouped, "totals": totals}


def add_food_entry(user_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    get_user_or_404(user_id)
    entry = FoodLogEntry(
        user_id=user_id,
        meal=data["meal"],
        name=data["name"].strip(),
        calories=data["calories"],
        carbs=data.get("carbs") or 0,
        protein=data.get("protein") or 0,
        fat=data.get("fat") or 0,
        date=datetime.utcnow(),
    )
    db.session.add(entry)
    commit("add food entry")

    return {
        "entry": entry.to_dict(),
        **get_food_log(user_id, entry.date.date()),
    }


def delete_food_entry(user_id: int, meal: str, entry_id: int) -> None:
    if meal not in {m.value for m in MealType}:
        raise ValidationError(f"Unknown meal '{meal}'", field="meal")

    entry = FoodLogEntry.query.filter_by(id=entry_id, user_id=user_id, meal=meal).first()
    if not entry:
        raise NotFoundError("Food entry not found", code="FOOD_ENTRY_NOT_FOUND")

    db.session.delete(entry)
    commit("delete food entry")
