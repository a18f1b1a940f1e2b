"""
Profile Service

Setup wizard completion, profile reads and target weight.
"""

import logging
from typing import Any, Dict

from fitto.extensions import db
from fitto.models.user import User
from fitto.models.weight_log import WeightLog
from fitto.services.energy_service import calculate_energy_budget, calculate_macro_targets
from fitto.services.persistence import commit, get_user_or_404

logger = logging.getLogger(__name__)


def recompute_energy_budget(user: User) -> None:
    """Recompute bmr and tdee together from the user's stored profile."""
    budget = calculate_energy_budget(
        age=user.age,
        height=user.height,
        weight=user.weight,
        gender=user.gender,
        activity_level=user.activity_level,
        goal=user.goal,
        rate=user.rate,
    )
    user.bmr = budget.bmr
    user.tdee = budget.tdee


def complete_setup(user_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Store the setup wizard profile and its energy budget.

    Args:
        user_id: User ID
        data: Loaded ``SetupSchema`` payload

    Returns:
        Dictionary with bmr and tdee

    Raises:
        NotFoundError: If the user does not exist
        ValidationError: If the profile cannot produce a budget
    """
    user = get_user_or_404(user_id, for_update=True)

    # Compute before touching the row so a bad profile leaves it unchanged
    budget = calculate_energy_budget(
        age=data["age"],
        height=data["height"],
        weight=data["weight"],
        gender=data["gender"],
        activity_level=data["activity_level"],
        goal=data["goal"],
        rate=data.get("rate"),
    )

    user.age = data["age"]
    user.height = data["height"]
    user.gender = data["gender"]
    user.activity_level = data["activity_level"]
    user.goal = data["goal"]
    user.rate = data.get("rate")
    user.bmr = budget.bmr
    user.tdee = budget.tdee
    user.is_setup_complete = True

    # The setup weight starts the weight log so the current weight mirrors it
    if user.weight != data["weight"] or not user.weight_logs:
        db.session.add(WeightLog(user_id=user.id, weight=data["weight"]))
    user.weight = data["weight"]

    commit("complete setup")
    logger.info(f"Setup completed for user {user_id}: bmr={budget.bmr:.1f} tdee={budget.tdee:.1f}")
    return budget.to_dict()


def get_profile(user_id: int) -> Dict[str, Any]:
    user = get_user_or_404(user_id)
    macros = calculate_macro_targets(user.tdee)
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "isSetupComplete": user.is_setup_complete,
        "age": user.age,
        "height": user.height,
        "weight": user.weight,
        "gender": user.gender,
        "activityLevel": user.activity_level,
        "goal": user.goal,
        "rate": user.rate,
        "targetWeight": user.target_weight,
        "bmr": user.bmr,
        "tdee": user.tdee,
        "macros": macros.to_dict() if macros else None,
    }


def get_target_weight(user_id: int):
    return get_user_or_404(user_id).target_weight


def set_target_weight(user_id: int, target_weight: float) -> float:
    user = get_user_or_404(user_id, for_update=True)
    user.target_weight = target_weight
    commit("update target weight")
    return user.target_weight
