"""
Exercise Lookup Service

Estimates calories burned for a free-text activity. Asks the api-ninjas
calories-burned endpoint first and falls back to a local MET table when the
upstream call fails or finds nothing.
"""

import logging
import re
from typing import Any, Dict, Optional

import requests
from flask import current_app

from fitto.services.fitness_constants import (
    DEFAULT_BODY_WEIGHT_KG,
    DEFAULT_LOOKUP_DURATION_MIN,
    MET_VALUES,
)
from fitto.utils.errors import NotFoundError, UpstreamError

logger = logging.getLogger(__name__)

AUXILIARY_VERBS = re.compile(r"\b(is|are|was|were|am|be|been|being)\b\s*")
VOWELS = "aeiou"


def to_gerund(activity: str) -> str:
    """
    Normalise a one-word activity to its -ing form ("run" -> "running",
    "bike" -> "biking"). Phrases are only stripped of auxiliary verbs.
    """
    term = AUXILIARY_VERBS.sub("", (activity or "").lower()).strip()
    if not term or " " in term or term.endswith("ing") or term in MET_VALUES:
        return term
    if term.endswith("e") and not term.endswith("ee"):
        return term[:-1] + "ing"
    # short consonant-vowel-consonant verbs double the final consonant
    if (
        3 <= len(term) <= 4
        and term[-1] not in VOWELS + "wxy"
        and term[-2] in VOWELS
        and term[-3] not in VOWELS
    ):
        return term + term[-1] + "ing"
    return term + "ing"


def fetch_calories_burned(activity: str) -> list:
    """Raw api-ninjas lookup. Raises UpstreamError on any transport or format problem."""
    api_key = current_app.config.get("NINJAS_API_KEY")
    if not api_key:
        raise UpstreamError("Exercise lookup API key is not configured")

    try:
        response = requests.get(
            current_app.config["NINJAS_API_URL"],
            params={"activity": activity},
            headers={"X-Api-Key": api_key},
            timeout=current_app.config.get("HTTP_TIMEOUT_SECONDS", 5),
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        raise UpstreamError(f"Exercise lookup failed: {e}") from e

    if not isinstance(data, list):
        raise UpstreamError("Exercise lookup returned an unexpected payload")
    return data


def estimate_from_met_table(activity: str, duration_min: float, weight_kg: float) -> Optional[Dict[str, Any]]:
    """Whole-word match against the MET table; None when nothing matches."""
    raw = (activity or "").lower().strip()
    for name, met in MET_VALUES.items():
        if re.search(rf"\b{re.escape(name)}\b", raw):
            calories = ((met * weight_kg * 3.5) / 200) * duration_min
            return {
                "exerciseName": name,
                "duration": duration_min,
                "caloriesBurned": calories,
                "MET": met,
                "source": "met_table",
            }
    return None


def lookup_exercise(activity: str, duration_min: Optional[float] = None, weight_kg: Optional[float] = None) -> Dict[str, Any]:
    """
    Estimate calories burned for an activity.

    Args:
        activity: Free-text activity, e.g. "running"
        duration_min: Minutes; non-positive or missing uses the default
        weight_kg: Body weight used by the MET fallback

    Returns:
        Dictionary with exerciseName, duration, caloriesBurned and source

    Raises:
        NotFoundError: If neither the API nor the MET table knows the activity
    """
    if not duration_min or duration_min <= 0:
        duration_min = DEFAULT_LOOKUP_DURATION_MIN
    weight_kg = weight_kg or DEFAULT_BODY_WEIGHT_KG
    term = to_gerund(activity) or activity

    try:
        results = fetch_calories_burned(term)
        if results:
            first = results[0]
            per_minute = float(first["total_calories"]) / float(first["duration_minutes"])
            return {
                "exerciseName": first.get("name", term),
                "duration": duration_min,
                "caloriesBurned": per_minute * duration_min,
                "MET": None,
                "source": "api",
            }
        logger.info(f"No API match for '{term}', using MET fallback")
    except (UpstreamError, KeyError, TypeError, ValueError, ZeroDivisionError) as e:
        logger.warning(f"Exercise lookup API unavailable, using MET fallback: {e}")

    estimate = (
        estimate_from_met_table(activity, duration_min, weight_kg)
        or estimate_from_met_table(term, duration_min, weight_kg)
    )
    if not estimate:
        raise NotFoundError("Exercise not found. Please try a different term.", code="EXERCISE_NOT_FOUND")
    return estimate
