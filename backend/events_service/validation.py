"""
Input checks shared by the event and attendee routes.
"""

from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

# --- CONSTANTS FOR VALIDATION ---
NAME_MIN_LENGTH = 3
DESCRIPTION_MIN_LENGTH = 10
DATE_FORMAT = "%Y-%m-%d"


def parse_id(val: Any) -> Optional[int]:
    """
    Parse a path parameter as an integer id.

    Returns:
        int: The id, or None if `val` is not an integer.
    """
    try:
        return int(val)
    except (TypeError, ValueError):
        return None


def parse_date(val: Any) -> Optional[date]:
    """
    Parse a calendar date in YYYY-MM-DD form. No time component is accepted.
    """
    if not isinstance(val, str):
        return None
    try:
        return datetime.strptime(val, DATE_FORMAT).date()
    except ValueError:
        return None


def validate_event_payload(data: Any) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """
    Validate the body of a create or update request.

    All four fields are required; an update replaces them wholesale.

    Returns:
        tuple: (fields, error). `fields` holds name, description, event_date
               and location when valid; otherwise `error` explains why not.
    """
    if not isinstance(data, dict):
        return None, "Request body must be a JSON object"

    for key in ("name", "description", "date", "location"):
        if not isinstance(data.get(key, ""), str):
            return None, f"{key} must be a string"

    name = data.get("name", "").strip()
    description = data.get("description", "").strip()
    location = data.get("location", "").strip()
    raw_date = data.get("date")

    if not name or not description or not location or not raw_date:
        return None, "name, description, date, and location are required"

    if len(name) < NAME_MIN_LENGTH:
        return None, f"name must be at least {NAME_MIN_LENGTH} characters"
    if len(description) < DESCRIPTION_MIN_LENGTH:
        return None, f"description must be at least {DESCRIPTION_MIN_LENGTH} characters"

    event_date = parse_date(raw_date)
    if event_date is None:
        return None, "Invalid date format. Use YYYY-MM-DD."

    return {
        "name": name,
        "description": description,
        "event_date": event_date,
        "location": location,
    }, None
