from flask import request
from fitto.schemas.exercise_schema import CreateExerciseSchema, UpdateExerciseSchema
from fitto.services import exercise_service
from fitto.services.exercise_lookup_service import lookup_exercise
from fitto.services.persistence import get_user_or_404
from fitto.utils.http import ok, error, json_body, validate_schema, arg_str, arg_number


def list_exercises_handler(owner_id: int):
    return ok(exercise_service.list_exercises(request.user_id, owner_id))


def create_exercise_handler():
    data, errors = validate_schema(CreateExerciseSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "exerciseName and duration are required", 400, fields=errors)

    return ok(exercise_service.create_exercise(request.user_id, data), 201)


def update_exercise_handler(exercise_id: int):
    data, errors = validate_schema(UpdateExerciseSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Invalid exercise fields", 400, fields=errors)
    if not data:
        return error("VALIDATION_ERROR", "Nothing to update", 400)

    return ok(exercise_service.update_exercise(request.user_id, exercise_id, data))


def delete_exercise_handler(exercise_id: int):
    exercise_service.delete_exercise(request.user_id, exercise_id)
    return ok({"message": "Exercise deleted"})


def lookup_exercise_handler():
    activity = (arg_str("activity") or "").strip()
    if not activity:
        return error("VALIDATION_ERROR", "activity is required", 400)

    try:
        duration = arg_number("duration")
    except ValueError:
        return error("VALIDATION_ERROR", "duration must be a number of minutes", 400, field="duration")

    user = get_user_or_404(request.user_id)
    return ok(lookup_exercise(activity, duration, user.weight))
