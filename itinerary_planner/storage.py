"""In-memory city catalog and stored itinerary repository."""
from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional

from itinerary_planner import seed_data
from itinerary_planner.schemas import (
    Attraction,
    AttractionCreate,
    City,
    CityCreate,
    CompleteItinerary,
    DayHeader,
    DayHeaderCreate,
    ItineraryActivity,
    ItineraryDay,
    ItineraryItem,
    ItineraryItemCreate,
)

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("ITINERARY_PLANNER_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False


class MemStorage:
    """Id-indexed tables, one per record type, each with its own id counter.

    Writes are expected only while the store is being populated at startup;
    afterwards every method is a read and safe to call concurrently.
    """

    def __init__(self) -> None:
        self._cities: Dict[int, City] = {}
        self._attractions: Dict[int, Attraction] = {}
        self._day_headers: Dict[int, DayHeader] = {}
        self._items: Dict[int, ItineraryItem] = {}
        self._next_ids: Dict[str, int] = {"city": 1, "attraction": 1, "day_header": 1, "item": 1}

    @classmethod
    def seeded(cls) -> "MemStorage":
        store = cls()
        store.load_seed_data()
        return store

    def _next_id(self, table: str) -> int:
        value = self._next_ids[table]
        self._next_ids[table] = value + 1
        return value

    # ---------- cities ----------
    async def get_all_cities(self) -> List[City]:
        return list(self._cities.values())

    async def get_city_by_id(self, city_id: int) -> Optional[City]:
        return self._cities.get(city_id)

    async def get_city_by_slug(self, slug: str) -> Optional[City]:
        return next((c for c in self._cities.values() if c.slug == slug), None)

    async def create_city(self, city: CityCreate) -> City:
        return self._insert_city(city)

    # ---------- attractions ----------
    async def get_attraction_by_id(self, attraction_id: int) -> Optional[Attraction]:
        return self._attractions.get(attraction_id)

    async def get_attractions_by_city_id(self, city_id: int) -> List[Attraction]:
        return [a for a in self._attractions.values() if a.city_id == city_id]

    async def create_attraction(self, attraction: AttractionCreate) -> Attraction:
        return self._insert_attraction(attraction)

    # ---------- day headers ----------
    async def get_day_headers_by_city_id(self, city_id: int) -> List[DayHeader]:
        headers = [h for h in self._day_headers.values() if h.city_id == city_id]
        return sorted(headers, key=lambda h: h.day_number)

    async def create_day_header(self, header: DayHeaderCreate) -> DayHeader:
        return self._insert_day_header(header)

    # ---------- itinerary items ----------
    async def get_itinerary_items_by_city_and_day(self, city_id: int, day_number: int) -> List[ItineraryItem]:
        items = [i for i in self._items.values() if i.city_id == city_id and i.day_number == day_number]
        # duplicate sort orders are tolerated; insertion order breaks ties
        return sorted(items, key=lambda i: (i.sort_order, i.id))

    async def create_itinerary_item(self, item: ItineraryItemCreate) -> ItineraryItem:
        return self._insert_item(item)

    # ---------- assembled ----------
    async def get_itinerary(self, city_slug: str, days: int) -> Optional[CompleteItinerary]:
        """Assemble the stored itinerary for days ``1..days``.

        Days without a header are skipped rather than padded, so the result
        may be shorter than requested. Returns ``None`` for an unknown city or
        when no day at all could be assembled.
        """
        city = await self.get_city_by_slug(city_slug)
        if city is None:
            return None

        headers = {h.day_number: h for h in await self.get_day_headers_by_city_id(city.id)}
        itinerary_days: List[ItineraryDay] = []
        for day_number in range(1, days + 1):
            header = headers.get(day_number)
            if header is None:
                continue
            activities: List[ItineraryActivity] = []
            for item in await self.get_itinerary_items_by_city_and_day(city.id, day_number):
                attraction = await self.get_attraction_by_id(item.attraction_id)
                if attraction is None:
                    logger.warning("Itinerary item %d references missing attraction %d", item.id, item.attraction_id)
                    continue
                activities.append(
                    ItineraryActivity(
                        id=item.id,
                        start_time=item.start_time,
                        end_time=item.end_time,
                        duration=item.duration,
                        title=item.title,
                        description=attraction.description,
                        location=attraction.location,
                        cost=attraction.cost,
                        tip_title=attraction.tip_title,
                        tip_description=attraction.tip_description,
                    )
                )
            itinerary_days.append(ItineraryDay(day_number=day_number, title=header.title, activities=activities))

        if not itinerary_days:
            logger.info("No stored itinerary content for %s", city_slug)
            return None
        return CompleteItinerary(city=city, days=itinerary_days)

    # ---------- inserts ----------
    def _insert_city(self, data: CityCreate) -> City:
        if any(c.slug == data.slug for c in self._cities.values()):
            raise ValueError(f"City slug already exists: {data.slug}")
        city = City(id=self._next_id("city"), **data.model_dump())
        self._cities[city.id] = city
        return city

    def _insert_attraction(self, data: AttractionCreate) -> Attraction:
        attraction = Attraction(id=self._next_id("attraction"), **data.model_dump())
        self._attractions[attraction.id] = attraction
        return attraction

    def _insert_day_header(self, data: DayHeaderCreate) -> DayHeader:
        if any(h.city_id == data.city_id and h.day_number == data.day_number for h in self._day_headers.values()):
            raise ValueError(f"Day {data.day_number} already has a header for city {data.city_id}")
        header = DayHeader(id=self._next_id("day_header"), **data.model_dump())
        self._day_headers[header.id] = header
        return header

    def _insert_item(self, data: ItineraryItemCreate) -> ItineraryItem:
        item = ItineraryItem(id=self._next_id("item"), **data.model_dump())
        self._items[item.id] = item
        return item

    def load_seed_data(self) -> None:
        """Populate the store with the built-in dataset (synchronous, startup only)."""
        city_ids: Dict[str, int] = {}
        for entry in seed_data.CITIES:
            fields = {k: v for k, v in entry.items() if k != "key"}
            city_ids[entry["key"]] = self._insert_city(CityCreate(**fields)).id

        attraction_ids: Dict[str, int] = {}
        for entry in seed_data.ATTRACTIONS:
            fields = {k: v for k, v in entry.items() if k not in ("key", "city")}
            created = self._insert_attraction(AttractionCreate(city_id=city_ids[entry["city"]], **fields))
            attraction_ids[entry["key"]] = created.id

        for entry in seed_data.DAY_HEADERS:
            self._insert_day_header(
                DayHeaderCreate(city_id=city_ids[entry["city"]], day_number=entry["day_number"], title=entry["title"])
            )

        for city, attraction, day, start, end, duration, title, sort_order in seed_data.ITINERARY_ITEMS:
            self._insert_item(
                ItineraryItemCreate(
                    city_id=city_ids[city],
                    attraction_id=attraction_ids[attraction],
                    day_number=day,
                    start_time=start,
                    end_time=end,
                    duration=duration,
                    title=title,
                    sort_order=sort_order,
                )
            )
        logger.info(
            "Seeded %d cities, %d attractions, %d itinerary items",
            len(self._cities),
            len(self._attractions),
            len(self._items),
        )
