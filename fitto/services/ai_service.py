"""
AI Recommendation Service

Free-text fitness Q&A answered by Gemini. The call carries an explicit
timeout and is retried a bounded number of times before giving up.
"""

import logging
from typing import Any, Dict, Optional

from flask import current_app
from google import genai
from google.genai import types

from fitto.utils.errors import UpstreamError

logger = logging.getLogger(__name__)

EMPTY_ANSWER = "Sorry, I couldn't generate a response."


def build_prompt(goal: str, macros: Dict[str, Any], question: str) -> str:
    return (
        "You are a fitness and nutrition expert. "
        f"The user is trying to {goal} weight.\n"
        "Their target macros per day are:\n"
        f"- Protein: {macros.get('protein_g')}g\n"
        f"- Carbs: {macros.get('carbs_g')}g\n"
        f"- Fat: {macros.get('fat_g')}g\n\n"
        f"Here's their question: {question}\n\n"
        "Please give a clear, short recommendation (max 2 sentences)."
    )


def _build_client() -> genai.Client:
    api_key = current_app.config.get("GEMINI_API_KEY")
    if not api_key:
        raise UpstreamError("AI service is not configured")
    timeout_ms = int(current_app.config.get("AI_TIMEOUT_SECONDS", 15) * 1000)
    return genai.Client(api_key=api_key, http_options=types.HttpOptions(timeout=timeout_ms))


def _generate_once(client: genai.Client, prompt: str) -> Optional[str]:
    response = client.models.generate_content(
        model=current_app.config.get("GEMINI_MODEL", "gemini-flash-latest"),
        contents=prompt,
        config=types.GenerateContentConfig(
            temperature=0.4,
            max_output_tokens=256,
        ),
    )
    if response and response.text:
        return response.text.strip()
    return None


def ask_fitness_question(question: str, goal: str, macros: Dict[str, Any]) -> str:
    """
    Ask Gemini for a short recommendation.

    Raises:
        UpstreamError: If the service is not configured or every attempt fails
    """
    prompt = build_prompt(goal, macros, question)
    client = _build_client()
    attempts = 1 + max(0, int(current_app.config.get("AI_MAX_RETRIES", 1)))

    last_error: Optional[Exception] = None
    for attempt in range(1, attempts + 1):
        try:
            answer = _generate_once(client, prompt)
        except Exception as e:  # google-genai raises transport and API errors alike
            last_error = e
            logger.warning(f"Gemini call failed (attempt {attempt}/{attempts}): {e}")
            continue

        if not answer:
            logger.warning(f"Empty response from Gemini for question: {question[:40]}")
            return EMPTY_ANSWER
        return answer

    logger.error(f"Gemini API Error after {attempts} attempt(s): {last_error}")
    raise UpstreamError("Failed to fetch AI recommendation")
