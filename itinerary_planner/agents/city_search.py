"""LLM-assisted city search with a deterministic substring fallback."""
from __future__ import annotations

import json
import logging
import os
from typing import Any, List, Sequence

from itinerary_planner.llm import CompletionRequest, complete, is_quota_error
from itinerary_planner.schemas import City

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("ITINERARY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False

SEARCH_TEMPLATE = """You help travellers find Canadian cities that match what they are looking for.

The traveller is searching for: "{query}"

Available cities:
{cities}

Consider city names, descriptions, landmarks and the kind of trip each city suits.
Respond ONLY with JSON of the form {{"cities": ["slug-one", "slug-two"]}} listing the slugs
of the best matches, best first. Use an empty array when nothing fits.
"""


async def search_cities(query: str, city_list: Sequence[City]) -> List[City]:
    """Return the members of ``city_list`` matching ``query``."""
    if not query or not query.strip():
        return list(city_list)

    try:
        raw = await complete(
            CompletionRequest(
                user_prompt=SEARCH_TEMPLATE.format(
                    query=query.strip(),
                    cities=json.dumps([c.model_dump(mode="json", by_alias=True) for c in city_list], indent=2),
                ),
                temperature=0.3,
                max_tokens=500,
                json_mode=True,
            )
        )
    except Exception as exc:
        if is_quota_error(exc):
            logger.warning("LLM quota exceeded for search; using basic search instead")
        else:
            logger.warning("LLM search failed (%s); using basic search instead", exc)
        return basic_search(query, city_list)

    slugs = _extract_slugs(raw)
    if slugs:
        matches = [city for city in city_list if city.slug in slugs]
        if matches:
            logger.info("LLM search for '%s' matched %d city(ies)", query, len(matches))
            return matches
        logger.info("LLM search for '%s' returned unknown slugs %s; using basic search", query, slugs)
    else:
        logger.info("LLM search for '%s' returned no usable slugs; using basic search", query)
    return basic_search(query, city_list)


def basic_search(query: str, city_list: Sequence[City]) -> List[City]:
    """Case-insensitive substring match over name and description.

    A city matches when the whole query occurs in either field, or when every
    word of the query does ("mountain lakes" finds "Rocky Mountains with
    pristine lakes").
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(city_list)
    terms = needle.split()
    matches: List[City] = []
    for city in city_list:
        haystack = f"{city.name}\n{city.description}".lower()
        if needle in city.name.lower() or needle in city.description.lower():
            matches.append(city)
        elif all(term in haystack for term in terms):
            matches.append(city)
    return matches


def _extract_slugs(raw: str) -> List[str]:
    try:
        payload: Any = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if isinstance(payload, dict):
        payload = payload.get("cities") or payload.get("slugs") or payload.get("matches")
    if not isinstance(payload, list):
        return []
    return [item for item in payload if isinstance(item, str) and item]
