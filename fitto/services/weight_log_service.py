"""
Weight Log Service

Keeps ``User.weight`` equal to the last weight-log entry in log order and
refreshes the energy budget whenever that weight changes.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fitto.extensions import db
from fitto.models.user import User
from fitto.models.weight_log import WeightLog
from fitto.services.persistence import commit, get_user_or_404
from fitto.services.profile_service import recompute_energy_budget
from fitto.utils.errors import NotFoundError

logger = logging.getLogger(__name__)


def _ordered_logs(user_id: int) -> List[WeightLog]:
    return WeightLog.query.filter_by(user_id=user_id).order_by(WeightLog.id).all()


def _sync_current_weight(user: User) -> None:
    logs = _ordered_logs(user.id)
    latest = logs[-1].weight if logs else None
    if latest is None or latest == user.weight:
        return
    user.weight = latest
    if user.is_setup_complete:
        recompute_energy_budget(user)
        logger.info(f"Energy budget refreshed for user {user.id} after weight change to {latest}")


def _payload(user: User) -> Dict[str, Any]:
    return {
        "weightLog": [w.to_dict() for w in _ordered_logs(user.id)],
        "currentWeight": user.weight,
    }


def list_weight_log(user_id: int) -> List[Dict[str, Any]]:
    get_user_or_404(user_id)
    return [w.to_dict() for w in _ordered_logs(user_id)]


def add_weight_entry(user_id: int, weight: float, logged_at: Optional[datetime] = None) -> Dict[str, Any]:
    user = get_user_or_404(user_id, for_update=True)
    entry = WeightLog(user_id=user.id, weight=weight, date=logged_at or datetime.utcnow())
    db.session.add(entry)
    db.session.flush()

    _sync_current_weight(user)
    commit("log weight")
    return _payload(user)


def update_weight_entry(user_id: int, entry_id: int, weight: float) -> Dict[str, Any]:
    user = get_user_or_404(user_id, for_update=True)
    entry = WeightLog.query.filter_by(id=entry_id, user_id=user.id).first()
    if not entry:
        raise NotFoundError("Weight entry not found", code="WEIGHT_ENTRY_NOT_FOUND")

    entry.weight = weight
    db.session.flush()

    _sync_current_weight(user)
    commit("update weight entry")
    return _payload(user)


def delete_weight_entry(user_id: int, entry_id: int) -> Dict[str, Any]:
    user = get_user_or_404(user_id, for_update=True)
    entry = WeightLog.query.filter_by(id=entry_id, user_id=user.id).first()
    if not entry:
        raise NotFoundError("Weight entry not found", code="WEIGHT_ENTRY_NOT_FOUND")

    db.session.delete(entry)
    db.session.flush()

    _sync_current_weight(user)
    commit("delete weight entry")
    return _payload(user)
