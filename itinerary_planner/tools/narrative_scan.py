"""Line-based scan of free-form itinerary prose."""
from __future__ import annotations

import logging
import os
import re
from typing import Dict, List

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("ITINERARY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

_MIN_TEXT = 100
_MAX_TITLE = 100
_WINDOW = 10
_MAX_DESCRIPTION = 200


def scan_day_overrides(text: str, days: int) -> Dict[int, Dict[str, str]]:
    """Return ``{day_number: {"title"?, "description"?}}`` gleaned from ``text``.

    Purely decorative: any day may be missing from the result, and any
    problem with the input yields an empty mapping instead of an error.
    """
    try:
        return _scan(text, days)
    except Exception:
        logger.warning("Narrative scan failed; keeping placeholder content", exc_info=True)
        return {}


def _scan(text: str, days: int) -> Dict[int, Dict[str, str]]:
    if not text or len(text) <= _MIN_TEXT:
        return {}

    lines: List[str] = text.split("\n")
    overrides: Dict[int, Dict[str, str]] = {}
    for index in range(days):
        if len(lines) <= index * 5:
            break
        day_number = index + 1
        found: Dict[str, str] = {}

        title = _title_line(lines, day_number)
        if title:
            found["title"] = title

        if len(lines) > _WINDOW:
            start = min(index * _WINDOW, len(lines) - _WINDOW)
            fragment = " ".join(
                line.strip() for line in lines[start:start + _WINDOW] if len(line.strip()) > 10
            )
            if len(fragment) > 30:
                found["description"] = fragment[:_MAX_DESCRIPTION]

        if found:
            overrides[day_number] = found
    return overrides


def _title_line(lines: List[str], day_number: int) -> str | None:
    # "day 1" must not match "day 10"
    pattern = re.compile(rf"\bday\s+{day_number}\b", re.IGNORECASE)
    for line in lines:
        if len(line) < _MAX_TITLE and pattern.search(line):
            cleaned = line.strip().strip("#*").strip()
            if cleaned:
                return cleaned
    return None
