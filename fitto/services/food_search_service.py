"""
Food Search Service

Thin proxy to the USDA FoodData Central search endpoint.
"""

from typing import Any, Dict, List, Optional

import requests
from flask import current_app

from fitto.utils.errors import UpstreamError

# USDA nutrient numbers (per 100 g)
NUTRIENT_CALORIES = "208"
NUTRIENT_PROTEIN = "203"
NUTRIENT_FAT = "204"
NUTRIENT_CARBS = "205"


def _nutrient(food: Dict[str, Any], number: str) -> Optional[float]:
    for nutrient in food.get("foodNutrients") or []:
        if str(nutrient.get("nutrientNumber")) == number:
            value = nutrient.get("value")
            return float(value) if value is not None else None
    return None


def serialize_food(food: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "fdcId": food.get("fdcId"),
        "name": food.get("description"),
        "brand": food.get("brandOwner"),
        "calories": _nutrient(food, NUTRIENT_CALORIES),
        "carbs": _nutrient(food, NUTRIENT_CARBS),
        "protein": _nutrient(food, NUTRIENT_PROTEIN),
        "fat": _nutrient(food, NUTRIENT_FAT),
    }


def search_foods(query: str, limit: int = 10) -> List[Dict[str, Any]]:
    api_key = current_app.config.get("USDA_API_KEY")
    if not api_key:
        raise UpstreamError("Food search API key is not configured")

    try:
        response = requests.get(
            current_app.config["USDA_API_URL"],
            params={"query": query, "pageSize": limit, "api_key": api_key},
            timeout=current_app.config.get("HTTP_TIMEOUT_SECONDS", 5),
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        current_app.logger.warning(f"USDA search failed for '{query}': {e}")
        raise UpstreamError("Food search is unavailable") from e

    foods = data.get("foods") if isinstance(data, dict) else None
    if not isinstance(foods, list):
        raise UpstreamError("Food search returned an unexpected payload")
    return [serialize_food(f) for f in foods[:limit]]
