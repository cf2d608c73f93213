"""Lenient field parsers shared by the API schemas."""

import datetime as dt
from typing import Any


def localized(value: Any, lang: str = "en") -> str | None:
    """Pick one language out of {"en": ..., "fr": ...}; plain strings pass through."""
    if value is None:
        return None
    if isinstance(value, dict):
        text = value.get(lang) or next((v for v in value.values() if v), None)
        return text or None
    text = str(value).strip()
    return text or None


def parse_date(value: Any) -> dt.date | None:
    """ISO date or datetime string to date; anything unparseable becomes None."""
    if value in (None, ""):
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value
