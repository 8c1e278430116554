"""
Gemini text-completion transport shared by the estimate and advice flows.

One request, one answer: no retries, no streaming, no caching. Any failure
(missing key, HTTP error, timeout, unexpected payload) surfaces as
AIServiceError so callers have a single thing to catch.
"""

import json
import logging
import re
import urllib.request
import urllib.error
from typing import Optional

from .config import settings

logger = logging.getLogger(__name__)

GEMINI_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "%s:generateContent?key=%s"
)


class AIServiceError(Exception):
    """The text-generation provider could not produce a usable answer."""


def call_gemini(prompt: str, model: Optional[str] = None) -> str:
    """Call Gemini API and return the raw response text."""
    api_key = settings.GEMINI_API_KEY
    if not api_key:
        raise AIServiceError("GEMINI_API_KEY not configured")
    if model is None:
        model = settings.GEMINI_MODEL

    payload = json.dumps({
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": 0.2,
            "responseMimeType": "application/json",
        },
    }).encode("utf-8")

    req = urllib.request.Request(
        GEMINI_URL % (model, api_key),
        data=payload,
        headers={"Content-Type": "application/json"},
        method="POST",
    )

    try:
        with urllib.request.urlopen(req, timeout=settings.AI_TIMEOUT_SECONDS) as response:
            result = json.loads(response.read())
            return result["candidates"][0]["content"]["parts"][0]["text"]
    except urllib.error.HTTPError as e:
        error_body = e.read().decode("utf-8", errors="replace")
        raise AIServiceError(f"Gemini API error {e.code}: {error_body}") from e
    except (urllib.error.URLError, OSError) as e:
        raise AIServiceError(f"Gemini call failed: {e}") from e
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise AIServiceError(f"Unexpected Gemini response: {e}") from e


def parse_json_object(response_text: str) -> dict:
    """Parse a JSON object from model output, tolerating markdown fences."""
    try:
        data = json.loads(response_text)
    except json.JSONDecodeError:
        # Try to extract the object from a ```json code block
        match = re.search(r'\{[\s\S]*\}', response_text or "")
        if not match:
            raise AIServiceError("Could not find JSON object in AI response")
        try:
            data = json.loads(match.group())
        except json.JSONDecodeError as e:
            raise AIServiceError("Failed to parse extracted JSON from AI response") from e
    except TypeError as e:
        raise AIServiceError("AI response is empty") from e

    if not isinstance(data, dict):
        raise AIServiceError("AI response is not a JSON object")
    return data
