from flask import Blueprint
from fitto.utils.auth import require_auth
from fitto.controllers.exercise_controller import (
    list_exercises_handler,
    create_exercise_handler,
    update_exercise_handler,
    delete_exercise_handler,
    lookup_exercise_handler,
)

exercise_bp = Blueprint("exercise", __name__, url_prefix="/api")

@exercise_bp.get("/exercise-log/user/<int:user_id>")
@require_auth
def list_exercises(user_id):
    return list_exercises_handler(user_id)


@exercise_bp.post("/exercise-log")
@require_auth
def create_exercise():
    return create_exercise_handler()


@exercise_bp.put("/exercise-log/<int:exercise_id>")
@require_auth
def update_exercise(exercise_id):
    return update_exercise_handler(exercise_id)


@exercise_bp.delete("/exercise-log/<int:exercise_id>")
@require_auth
def delete_exercise(exercise_id):
    return delete_exercise_handler(exercise_id)


@exercise_bp.get("/exercise-lookup")
@require_auth
def lookup_exercise():
    return lookup_exercise_handler()
