"""
User Controller Module

Handles user-scoped endpoints:
- Setup wizard completion and profile
- Weight log and target weight
- Food log
- Dashboard summary
"""

from datetime import datetime
from flask import request
from fitto.schemas.food_schema import CreateFoodLogSchema
from fitto.schemas.user_schema import SetupSchema, WeightEntrySchema, TargetWeightSchema
from fitto.services import profile_service, weight_log_service, food_log_service
from fitto.services.dashboard_service import get_dashboard_summary
from fitto.utils.http import ok, error, json_body, validate_schema, arg_str, parse_iso_date


# ============================================================================
# Setup & Profile
# ============================================================================

def setup_complete_handler():
    data, errors = validate_schema(SetupSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "All fields are required.", 400, fields=errors)

    budget = profile_service.complete_setup(request.user_id, data)
    return ok({"message": "Setup completed", **budget})


def profile_handler():
    return ok(profile_service.get_profile(request.user_id))


def dashboard_summary_handler():
    return ok(get_dashboard_summary(request.user_id))


# ============================================================================
# Weight Log
# ============================================================================

def list_weight_log_handler():
    return ok({"weightLog": weight_log_service.list_weight_log(request.user_id)})


def add_weight_handler():
    data, errors = validate_schema(WeightEntrySchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Weight is required", 400, fields=errors)

    result = weight_log_service.add_weight_entry(request.user_id, data["weight"], data.get("date"))
    return ok({"message": "Weight logged and profile updated successfully", **result}, 201)


def update_weight_handler(entry_id: int):
    data, errors = validate_schema(WeightEntrySchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Weight is required", 400, fields=errors)

    result = weight_log_service.update_weight_entry(request.user_id, entry_id, data["weight"])
    return ok({"message": "Weight entry updated", **result})


def delete_weight_handler(entry_id: int):
    result = weight_log_service.delete_weight_entry(request.user_id, entry_id)
    return ok({"message": "Weight entry deleted", **result})


def get_target_weight_handler():
    return ok({"targetWeight": profile_service.get_target_weight(request.user_id)})


def set_target_weight_handler():
    data, errors = validate_schema(TargetWeightSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Target weight is required.", 400, fields=errors)

    target = profile_service.set_target_weight(request.user_id, data["target_weight"])
    return ok({"message": "Target weight updated", "targetWeight": target})


# ============================================================================
# Food Log
# ============================================================================

def get_food_log_handler():
    raw_date = arg_str("date")
    day = parse_iso_date(raw_date) if raw_date else datetime.utcnow().date()
    if day is None:
        return error("VALIDATION_ERROR", "date must be in YYYY-MM-DD format", 400)
    return ok(food_log_service.get_food_log(request.user_id, day))


def add_food_handler():
    data, errors = validate_schema(CreateFoodLogSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Missing required fields", 400, fields=errors)

    result = food_log_service.add_food_entry(request.user_id, data)
    return ok({"message": "Food added", **result}, 201)


def delete_food_handler(meal: str, entry_id: int):
    food_log_service.delete_food_entry(request.user_id, meal, entry_id)
    return ok({"message": "Food deleted"})
