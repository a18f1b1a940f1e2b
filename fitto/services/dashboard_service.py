"""
Dashboard Service

Rule-based coaching alerts built from a user's recent food, weight and
exercise history. The rule functions are pure; ``get_dashboard_summary``
loads the history and hands it to them.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from fitto.extensions import db
from fitto.models.exercise import Exercise
from fitto.models.food_log import FoodLogEntry
from fitto.models.user import User
from fitto.models.weight_log import WeightLog
from fitto.services.fitness_constants import (
    CARDIO_ALERT,
    CARDIO_KEYWORDS,
    CARDIO_SHARE_THRESHOLD,
    HISTORY_WINDOW_DAYS,
    PLATEAU_ALERT,
    PLATEAU_DELTA_KG,
    UNDER_EATING_ALERT,
    UNDER_EATING_DAYS,
    UNDER_EATING_RATIO,
)
from fitto.utils.errors import NotFoundError

logger = logging.getLogger(__name__)


# ============================================================================
# Rules
# ============================================================================

def daily_calorie_totals(entries: Iterable[FoodLogEntry], today: date, days: int = UNDER_EATING_DAYS) -> List[float]:
    """Calories per calendar day for ``today`` and the ``days - 1`` days before it, newest first."""
    wanted = [today - timedelta(days=i) for i in range(days)]
    totals: Dict[date, float] = {d: 0.0 for d in wanted}
    for entry in entries:
        if entry.date is None:
            continue
        day = entry.date.date()
        if day in totals:
            totals[day] += float(entry.calories or 0)
    return [totals[d] for d in wanted]


def is_under_eating(day_totals: Sequence[float], tdee: Optional[float]) -> bool:
    # An empty day counts as 0 kcal and so always sits under the threshold
    if tdee is None or not day_totals:
        return False
    threshold = tdee * UNDER_EATING_RATIO
    return all(total < threshold for total in day_totals)


def is_plateau(weights_in_log_order: Sequence[float]) -> bool:
    """Compare the first and last weights in log order, not min/max."""
    if len(weights_in_log_order) < 2:
        return False
    return abs(weights_in_log_order[0] - weights_in_log_order[-1]) < PLATEAU_DELTA_KG


def is_cardio(exercise_name: str) -> bool:
    lower = (exercise_name or "").lower()
    return any(keyword in lower for keyword in CARDIO_KEYWORDS)


def is_cardio_heavy(exercise_names: Sequence[str]) -> bool:
    if not exercise_names:
        return False
    cardio_count = sum(1 for name in exercise_names if is_cardio(name))
    return (cardio_count / len(exercise_names)) > CARDIO_SHARE_THRESHOLD


def build_alerts(
    tdee: Optional[float],
    day_totals: Sequence[float],
    weights_in_log_order: Sequence[float],
    exercise_names: Sequence[str],
) -> List[str]:
    """Evaluate every rule independently; at most one alert per rule, in rule order."""
    alerts = []
    if is_under_eating(day_totals, tdee):
        alerts.append(UNDER_EATING_ALERT)
    if is_plateau(weights_in_log_order):
        alerts.append(PLATEAU_ALERT)
    if is_cardio_heavy(exercise_names):
        alerts.append(CARDIO_ALERT)
    return alerts


# ============================================================================
# Loader
# ============================================================================

def get_dashboard_summary(user_id: int, now: Optional[datetime] = None) -> Dict[str, List[str]]:
    """
    Build the dashboard alerts for a user.

    Args:
        user_id: User ID
        now: Reference time (UTC), defaults to the current time

    Returns:
        Dictionary with an ``alerts`` list

    Raises:
        NotFoundError: If the user does not exist
    """
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found", code="USER_NOT_FOUND")

    now = now or datetime.utcnow()
    today = now.date()
    window_start = now - timedelta(days=HISTORY_WINDOW_DAYS)
    first_day = datetime.combine(today - timedelta(days=UNDER_EATING_DAYS - 1), datetime.min.time())

    food_entries = (
        FoodLogEntry.query
        .filter(FoodLogEntry.user_id == user_id, FoodLogEntry.date >= first_day)
        .all()
    )
    weights = [
        w.weight for w in (
            WeightLog.query
            .filter(WeightLog.user_id == user_id, WeightLog.date >= window_start)
            .order_by(WeightLog.id)
            .all()
        )
    ]
    exercise_names = [
        e.exercise_name for e in (
            Exercise.query
            .filter(Exercise.user_id == user_id, Exercise.date >= window_start)
            .all()
        )
    ]

    day_totals = daily_calorie_totals(food_entries, today)
    alerts = build_alerts(user.tdee, day_totals, weights, exercise_names)
    logger.debug(f"Dashboard summary for user {user_id}: {len(alerts)} alert(s)")
    return {"alerts": alerts}
