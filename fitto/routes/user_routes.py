from flask import Blueprint
from fitto.utils.auth import require_auth
from fitto.controllers.user_controller import (
    setup_complete_handler,
    profile_handler,
    dashboard_summary_handler,
    list_weight_log_handler,
    add_weight_handler,
    update_weight_handler,
    delete_weight_handler,
    get_target_weight_handler,
    set_target_weight_handler,
    get_food_log_handler,
    add_food_handler,
    delete_food_handler,
)

user_bp = Blueprint("user", __name__, url_prefix="/api/user")

@user_bp.put("/setup-complete")
@require_auth
def setup_complete():
    return setup_complete_handler()


@user_bp.get("/profile")
@require_auth
def profile():
    return profile_handler()


@user_bp.get("/dashboard-summary")
@require_auth
def dashboard_summary():
    return dashboard_summary_handler()


# Weight log
@user_bp.get("/weight-log")
@require_auth
def list_weight_log():
    return list_weight_log_handler()


@user_bp.post("/weight-log")
@require_auth
def add_weight():
    return add_weight_handler()


@user_bp.put("/weight-log/<int:entry_id>")
@require_auth
def update_weight(entry_id):
    return update_weight_handler(entry_id)


@user_bp.delete("/weight-log/<int:entry_id>")
@require_auth
def delete_weight(entry_id):
    return delete_weight_handler(entry_id)


@user_bp.get("/target-weight")
@require_auth
def get_target_weight():
    return get_target_weight_handler()


@user_bp.put("/target-weight")
@require_auth
def set_target_weight():
    return set_target_weight_handler()


# Food log
@user_bp.get("/food-log")
@require_auth
def get_food_log():
    return get_food_log_handler()


@user_bp.post("/food-log")
@require_auth
def add_food():
    return add_food_handler()


@user_bp.delete("/food-log/<meal>/<int:entry_id>")
@require_auth
def delete_food(meal, entry_id):
    return delete_food_handler(meal, entry_id)
