"""Two-stage LLM itinerary generation.

Stage one asks the model for a free-form narrative plan; stage two asks it to
restate that narrative as JSON matching :class:`ItineraryDay`. Whatever stage
two yields is reconciled to exactly the requested number of days, and a stage
two failure of any kind degrades to placeholder days rather than an error.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List

from pydantic import ValidationError

from itinerary_planner.errors import GenerationFailed, QuotaExceeded
from itinerary_planner.llm import CompletionRequest, complete, is_quota_error
from itinerary_planner.schemas import ItineraryActivity, ItineraryDay
from itinerary_planner.tools.narrative_scan import scan_day_overrides

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("ITINERARY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

ACTIVITIES_PER_DAY = 3

NARRATIVE_SYSTEM = """You are a local travel expert who knows {city}, Canada street by street.
Write a {days}-day itinerary for {city}. For every day give:
  1) a short themed title for the day
  2) exactly three activities: morning, afternoon and evening
For every activity give:
  - a title starting with "Morning:", "Afternoon:" or "Evening:"
  - start time, end time and duration
  - a detailed description of what the traveller will do and why it matters locally
  - a specific location (street address, venue or neighbourhood, never just "downtown")
  - a cost in CAD with a concrete range; never a bare "Free" or "Varies" without saying why
  - a traveller tip with a short title and a practical explanation
Keep each day to a distinct area or theme and allow for transit time between stops.

City background: {description}
"""

NARRATIVE_USER = """Please plan {days} day(s) in {city}, Canada, mixing well-known sights with places locals go.
Include actual venue and restaurant names, addresses and CAD prices for every activity."""

STRUCTURING_TEMPLATE = """Convert the travel itinerary for {city}, Canada below into JSON with exactly this shape:
{{
  "days": [
    {{
      "dayNumber": 1,
      "title": "Theme of the day",
      "activities": [
        {{
          "id": 1,
          "startTime": "9:00 AM",
          "endTime": "11:30 AM",
          "duration": "2.5 hours",
          "title": "Morning: Activity name",
          "description": "What the traveller does",
          "location": "Specific address in {city}",
          "cost": "$20-30 CAD per person",
          "tipTitle": "Short tip title",
          "tipDescription": "Practical tip"
        }}
      ]
    }}
  ]
}}
Rules:
- one entry in "days" per day of the itinerary, {days} in total
- exactly 3 activities per day, titles prefixed "Morning:", "Afternoon:", "Evening:"
- activity ids are sequential: (dayNumber - 1) * 3 + 1, + 2, + 3
- costs in CAD with concrete figures; never a bare "Free" or "Varies"
- keep locations specific; infer reasonably where the text is vague
Return ONLY the JSON object.

Itinerary text:
{narrative}
"""

# (day part, start, end, duration)
_PLACEHOLDER_SLOTS = (
    ("Morning", "9:00 AM", "12:00 PM", "3 hours"),
    ("Afternoon", "1:00 PM", "4:00 PM", "3 hours"),
    ("Evening", "6:00 PM", "9:00 PM", "3 hours"),
)


async def generate_itinerary(city_name: str, city_description: str, days: int) -> List[ItineraryDay]:
    """Return exactly ``days`` itinerary days for ``city_name``.

    Raises :class:`QuotaExceeded` when the narrative call is refused for
    capacity reasons and :class:`GenerationFailed` for any other narrative
    failure. Structuring failures never escape.
    """
    logger.info("Generating %d-day itinerary for %s", days, city_name)
    narrative = await _narrative_stage(city_name, city_description, days)

    try:
        structured = await _structuring_stage(city_name, days, narrative)
    except Exception:
        logger.warning(
            "Structuring stage failed for %s; emitting placeholder itinerary", city_name, exc_info=True
        )
        return synthetic_itinerary(city_name, days, narrative)

    logger.info("Structured itinerary parsed with %d day(s) for %s", len(structured), city_name)
    return reconcile_days(structured, city_name, days)


async def _narrative_stage(city_name: str, city_description: str, days: int) -> str:
    request = CompletionRequest(
        system_prompt=NARRATIVE_SYSTEM.format(city=city_name, days=days, description=city_description),
        user_prompt=NARRATIVE_USER.format(city=city_name, days=days),
        temperature=0.7,
        max_tokens=3000,
    )
    try:
        return await complete(request)
    except Exception as exc:
        detail = getattr(exc, "message", None) or str(exc)
        if is_quota_error(exc):
            logger.warning("Narrative stage hit provider quota for %s: %s", city_name, detail)
            raise QuotaExceeded(f"OpenAI API quota exceeded: {detail}") from exc
        logger.error("Narrative stage failed for %s: %s", city_name, detail)
        raise GenerationFailed(f"Failed to generate itinerary: {detail}") from exc


async def _structuring_stage(city_name: str, days: int, narrative: str) -> List[ItineraryDay]:
    request = CompletionRequest(
        user_prompt=STRUCTURING_TEMPLATE.format(city=city_name, days=days, narrative=narrative),
        temperature=0.2,
        max_tokens=4000,
        json_mode=True,
    )
    raw = await complete(request)
    return parse_days(raw, city_name)


def parse_days(raw: str, city_name: str) -> List[ItineraryDay]:
    """Parse a structuring completion into days; raise ``ValueError`` on bad shape.

    Days are validated one by one; a day that does not fit the schema is
    replaced by a placeholder for the same position.
    """
    payload: Any = json.loads(raw)
    if isinstance(payload, dict):
        payload = payload.get("days")
    if not isinstance(payload, list):
        raise ValueError("structured itinerary has no 'days' array")
    parsed: List[ItineraryDay] = []
    for index, day in enumerate(payload, 1):
        try:
            parsed.append(ItineraryDay.model_validate(day))
        except ValidationError as exc:
            logger.warning(
                "Structured day %d for %s failed validation; using placeholder (%d error(s))",
                index,
                city_name,
                exc.error_count(),
            )
            parsed.append(placeholder_day(city_name, index))
    return parsed


def reconcile_days(days_in: List[ItineraryDay], city_name: str, days: int) -> List[ItineraryDay]:
    """Truncate or pad to exactly ``days`` entries numbered 1..days."""
    reconciled = list(days_in[:days])
    if len(days_in) > days:
        logger.info("Truncating structured itinerary from %d to %d day(s)", len(days_in), days)
    for index, day in enumerate(reconciled):
        if day.day_number != index + 1:
            reconciled[index] = _renumber(day, index + 1)
    if len(reconciled) < days:
        logger.info(
            "Padding structured itinerary for %s with %d placeholder day(s)",
            city_name,
            days - len(reconciled),
        )
        reconciled.extend(placeholder_day(city_name, n) for n in range(len(reconciled) + 1, days + 1))
    return reconciled


def _renumber(day: ItineraryDay, day_number: int) -> ItineraryDay:
    """Move ``day`` to ``day_number``, re-deriving its activity ids from the new slot."""
    base_id = (day_number - 1) * ACTIVITIES_PER_DAY
    activities = [
        activity.model_copy(update={"id": base_id + offset})
        for offset, activity in enumerate(day.activities, 1)
    ]
    return day.model_copy(update={"day_number": day_number, "activities": activities})


def synthetic_itinerary(city_name: str, days: int, narrative: str = "") -> List[ItineraryDay]:
    """Placeholder days, decorated with whatever the narrative scan recovers."""
    result = [placeholder_day(city_name, n) for n in range(1, days + 1)]
    overrides = scan_day_overrides(narrative, days)
    for day in result:
        found: Dict[str, str] = overrides.get(day.day_number, {})
        if found.get("title"):
            day.title = found["title"]
        if found.get("description") and day.activities:
            day.activities[0].description = found["description"]
    return result


def placeholder_day(city_name: str, day_number: int) -> ItineraryDay:
    base_id = (day_number - 1) * ACTIVITIES_PER_DAY
    details = _placeholder_details(city_name)
    activities = [
        ItineraryActivity(
            id=base_id + offset,
            start_time=start,
            end_time=end,
            duration=duration,
            **details[part],
        )
        for offset, (part, start, end, duration) in enumerate(_PLACEHOLDER_SLOTS, 1)
    ]
    return ItineraryDay(day_number=day_number, title=f"Day {day_number} in {city_name}", activities=activities)


def _placeholder_details(city: str) -> Dict[str, Dict[str, str]]:
    return {
        "Morning": {
            "title": f"Morning: Exploring {city}'s Main Attractions",
            "description": (
                f"Begin the morning at the best-known landmarks of {city}. Take time over the "
                "architecture and history of each site; the early hours are quieter and give the "
                "best light for photographs before the midday crowds arrive."
            ),
            "location": f"{city} City Centre, main tourist district",
            "cost": "$10-25 CAD per person for attraction entry fees",
            "tip_title": "Morning Visitor Advantage",
            "tip_description": (
                "Arrive around 9 AM when most attractions open to beat the queues and enjoy the "
                "sights at a relaxed pace."
            ),
        },
        "Afternoon": {
            "title": f"Afternoon: Cultural Experience in {city}",
            "description": (
                f"Spend the afternoon with the museums, galleries and markets of {city}. It is a "
                "chance to meet local artisans and see how the city's heritage shapes everyday life."
            ),
            "location": f"{city} arts and culture district",
            "cost": "$15-30 CAD for museum entry and local experiences",
            "tip_title": "Local Transportation Insight",
            "tip_description": (
                "Buy a transit day pass (around $10 CAD) for unlimited rides between stops; it is "
                "cheaper than single fares."
            ),
        },
        "Evening": {
            "title": f"Evening: Dining and Entertainment in {city}",
            "description": (
                f"Close the day at one of {city}'s well-regarded restaurants, then enjoy the "
                "evening atmosphere as locals and visitors head out for the night."
            ),
            "location": f"{city} restaurant and entertainment district",
            "cost": "$25-50 CAD per person for dinner, excluding drinks",
            "tip_title": "Dining Reservation Strategy",
            "tip_description": (
                "Book popular restaurants one or two days ahead, especially for weekend evenings."
            ),
        },
    }
