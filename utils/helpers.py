"""Helpers: time and JSON extraction from model output."""

import json
from datetime import date, datetime, timezone
from typing import Any

from services.exceptions import AIResponseError

UTC = timezone.utc


def now_utc() -> datetime:
    """Current time in UTC (timezone-aware)."""
    return datetime.now(UTC)


def today_utc() -> date:
    return now_utc().date()


def extract_json_object(text: str | None) -> str | None:
    """
    Return the first balanced top-level ``{...}`` span in ``text``.

    Braces inside JSON string literals are ignored, so nested objects and
    values such as ``"{x}"`` do not end the span early. Surrounding prose and
    markdown fences are skipped. Returns None if no span closes.
    """
    if not text:
        return None

    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]

        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:index + 1]

    return None


def parse_json_object(text: str | None) -> dict[str, Any]:
    """
    Decode the first JSON object found in free-form model output.

    Raises:
        AIResponseError: no object found, invalid JSON, or not a JSON object
    """
    span = extract_json_object(text)
    if span is None:
        raise AIResponseError("No JSON object in AI response", raw_text=text)

    try:
        data = json.loads(span)
    except json.JSONDecodeError as e:
        raise AIResponseError(f"Invalid JSON in AI response: {e}", raw_text=text) from e

    if not isinstance(data, dict):
        raise AIResponseError("AI response JSON is not an object", raw_text=text)
    return data

