from flask import Blueprint
from fitto.utils.auth import require_auth
from fitto.controllers.ai_controller import ai_recommendation_handler, food_search_handler

ai_bp = Blueprint("ai", __name__, url_prefix="/api")

@ai_bp.post("/ai-recommendation")
@require_auth
def ai_recommendation():
    return ai_recommendation_handler()


@ai_bp.get("/food-search")
@require_auth
def food_search():
    return food_search_handler()
