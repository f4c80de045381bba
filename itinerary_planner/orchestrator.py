# itinerary_planner/orchestrator.py
from __future__ import annotations

import os
import random
import logging
from typing import List, Optional, Set

from itinerary_planner.agents.itinerary_generator import generate_itinerary
from itinerary_planner.errors import CityNotFound, GenerationFailed, ItineraryNotFound, QuotaExceeded
from itinerary_planner.llm import is_quota_error
from itinerary_planner.schemas import CompleteItinerary, ItineraryDay
from itinerary_planner.storage import MemStorage

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("ITINERARY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

QUOTA_FALLBACK_REASON = (
    "AI itinerary generation is temporarily unavailable because the provider's usage quota "
    "or rate limit was reached. Showing a stored itinerary instead."
)
GENERIC_FALLBACK_REASON = "AI itinerary generation failed. Showing a stored itinerary instead."
SKIPPED_FALLBACK_REASON = "AI itinerary generation was skipped. Showing a stored itinerary instead."

QUOTA_TERMINAL_MESSAGE = (
    "AI itinerary service is at capacity right now. Try again shortly or request the stored itinerary."
)


class _SkippedGeneration(Exception):
    """Stands in for an AI failure when the caller asks to skip generation."""

    def __init__(self) -> None:
        super().__init__("skipped")


async def orchestrate_itinerary(
    storage: MemStorage,
    city_slug: str,
    days: int,
    *,
    use_ai: bool = True,
    skip_ai: bool = False,
) -> CompleteItinerary:
    """Resolve one itinerary request: AI when asked, stored data otherwise or on failure."""
    logger.info("Itinerary request: city=%s days=%d use_ai=%s skip_ai=%s", city_slug, days, use_ai, skip_ai)

    city = await storage.get_city_by_slug(city_slug)
    if city is None:
        raise CityNotFound("City not found")

    if not use_ai:
        stored = await storage.get_itinerary(city_slug, days)
        if stored is None:
            raise ItineraryNotFound("Itinerary not found")
        return stored

    # Fetched up front so a failure below never needs a second lookup.
    stored = await storage.get_itinerary(city_slug, days)

    failure: Exception
    if skip_ai:
        logger.info("AI generation skipped for %s; resolving via fallback", city_slug)
        failure = _SkippedGeneration()
    else:
        try:
            generated = await generate_itinerary(city.name, city.description, days)
        except Exception as exc:
            logger.warning("AI generation failed for %s: %s", city_slug, exc)
            failure = exc
        else:
            logger.info("AI itinerary generated for %s (%d day(s))", city_slug, len(generated))
            return CompleteItinerary(city=city, days=_assign_missing_ids(generated))

    return _resolve_fallback(failure, stored, city_slug)


def _resolve_fallback(
    failure: Exception,
    stored: Optional[CompleteItinerary],
    city_slug: str,
) -> CompleteItinerary:
    quota = is_quota_error(failure)
    if stored is not None:
        if isinstance(failure, _SkippedGeneration):
            reason = SKIPPED_FALLBACK_REASON
        elif quota:
            reason = QUOTA_FALLBACK_REASON
        else:
            reason = GENERIC_FALLBACK_REASON
        logger.info("Serving stored itinerary for %s as fallback (quota=%s)", city_slug, quota)
        return stored.model_copy(update={"fallback": True, "fallback_reason": reason})

    logger.error("No stored itinerary to fall back on for %s", city_slug)
    if quota:
        raise QuotaExceeded(QUOTA_TERMINAL_MESSAGE, use_stored_itinerary=True) from failure
    detail = getattr(failure, "message", None) or str(failure)
    if isinstance(failure, _SkippedGeneration):
        detail = "AI generation was skipped"
    raise GenerationFailed(
        f"Failed to generate itinerary: {detail}", use_stored_itinerary=True
    ) from failure


def _assign_missing_ids(days: List[ItineraryDay]) -> List[ItineraryDay]:
    """Give every activity a unique id; the first holder of a repeated id keeps it."""
    used: Set[int] = {a.id for day in days for a in day.activities if a.id is not None}
    seen: Set[int] = set()
    result: List[ItineraryDay] = []
    for day in days:
        activities = []
        for activity in day.activities:
            if activity.id is None or activity.id in seen:
                new_id = _random_id(used)
                used.add(new_id)
                activity = activity.model_copy(update={"id": new_id})
            seen.add(activity.id)
            activities.append(activity)
        result.append(day.model_copy(update={"activities": activities}))
    return result


def _random_id(used: Set[int]) -> int:
    while True:
        candidate = random.randint(1, 1_000_000)
        if candidate not in used:
            return candidate
