from flask import request
from fitto.services.ai_service import ask_fitness_question
from fitto.services.energy_service import calculate_macro_targets
from fitto.services.food_search_service import search_foods
from fitto.services.persistence import get_user_or_404
from fitto.utils.enums import Goal
from fitto.utils.http import ok, error, json_body, arg_str, arg_number

MACRO_KEYS = ("carbs_g", "protein_g", "fat_g")


def ai_recommendation_handler():
    body = json_body()
    question = (body.get("question") or "").strip()
    if not question:
        return error("VALIDATION_ERROR", "question is required", 400)

    user = get_user_or_404(request.user_id)

    goal = body.get("userGoal") or user.goal
    if goal not in {g.value for g in Goal}:
        return error("VALIDATION_ERROR", f"Unknown goal '{goal}'", 400)

    macros = body.get("userMacros")
    if macros is None:
        targets = calculate_macro_targets(user.tdee)
        if targets is None:
            return error("SETUP_INCOMPLETE", "Complete setup or send userMacros", 400)
        macros = targets.to_dict()
    elif not isinstance(macros, dict) or any(
        isinstance(macros.get(k), bool) or not isinstance(macros.get(k), (int, float)) for k in MACRO_KEYS
    ):
        return error("VALIDATION_ERROR", "userMacros must include numeric carbs_g, protein_g and fat_g", 400)

    return ok({"message": ask_fitness_question(question, goal, macros)})


def food_search_handler():
    query = (arg_str("query") or "").strip()
    if not query:
        return error("VALIDATION_ERROR", "query is required", 400)

    try:
        limit = arg_number("limit", 10, cast=int)
    except ValueError:
        return error("VALIDATION_ERROR", "limit must be a whole number", 400, field="limit")
    limit = min(max(limit, 1), 50)
    return ok({"foods": search_foods(query, limit)})
