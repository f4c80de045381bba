import asyncio

import pytest

from itinerary_planner.schemas import (
    AttractionCreate,
    CityCreate,
    DayHeaderCreate,
    ItineraryItemCreate,
)
from itinerary_planner.storage import MemStorage


@pytest.fixture
def storage():
    return MemStorage.seeded()


def test_seeded_catalog_has_six_cities(storage):
    cities = asyncio.run(storage.get_all_cities())

    assert [c.slug for c in cities] == ["toronto", "vancouver", "montreal", "quebec", "banff", "halifax"]
    assert len({c.id for c in cities}) == 6


def test_toronto_two_day_itinerary(storage):
    itinerary = asyncio.run(storage.get_itinerary("toronto", 2))

    assert itinerary is not None
    assert itinerary.city.slug == "toronto"
    assert [d.day_number for d in itinerary.days] == [1, 2]
    day_one = itinerary.days[0]
    assert day_one.title == "Exploring Downtown Toronto"
    assert len(day_one.activities) == 4
    assert day_one.activities[0].title == "CN Tower Experience"
    assert day_one.activities[0].location == "290 Bremner Blvd"
    assert day_one.activities[-1].title == "Distillery District & Dinner"


def test_stored_itinerary_never_exceeds_available_days(storage):
    vancouver = asyncio.run(storage.get_itinerary("vancouver", 3))
    toronto = asyncio.run(storage.get_itinerary("toronto", 7))

    assert [d.day_number for d in vancouver.days] == [1]
    assert [d.day_number for d in toronto.days] == list(range(1, 8))
    assert toronto.days[6].activities == []


def test_city_without_stored_content_has_no_itinerary(storage):
    assert asyncio.run(storage.get_itinerary("banff", 5)) is None
    assert asyncio.run(storage.get_itinerary("atlantis", 1)) is None


def test_stored_payload_omits_unset_fields(storage):
    payload = asyncio.run(storage.get_itinerary("toronto", 1)).to_payload()

    assert "_fallback" not in payload
    assert payload["city"]["imageUrl"].startswith("https://")
    assert payload["days"][0]["activities"][0]["startTime"] == "9:00 AM"


def test_duplicate_slug_and_day_header_rejected(storage):
    toronto = asyncio.run(storage.get_city_by_slug("toronto"))

    with pytest.raises(ValueError):
        asyncio.run(storage.create_city(CityCreate(name="Toronto 2", slug="toronto", description="", image_url="")))
    with pytest.raises(ValueError):
        asyncio.run(storage.create_day_header(DayHeaderCreate(city_id=toronto.id, day_number=1, title="Again")))


def test_items_with_duplicate_sort_order_keep_insertion_order():
    async def run():
        store = MemStorage()
        city = await store.create_city(
            CityCreate(name="Yellowknife", slug="yellowknife", description="Northern lights", image_url="x")
        )
        attraction = await store.create_attraction(
            AttractionCreate(city_id=city.id, name="Aurora viewing", description="Lights", location="Aurora Village")
        )
        await store.create_day_header(DayHeaderCreate(city_id=city.id, day_number=1, title="Aurora night"))
        for title, order in (("Second", 2), ("First A", 1), ("First B", 1)):
            await store.create_itinerary_item(
                ItineraryItemCreate(
                    city_id=city.id,
                    attraction_id=attraction.id,
                    day_number=1,
                    start_time="9:00 PM",
                    end_time="11:00 PM",
                    duration="2 hours",
                    title=title,
                    sort_order=order,
                )
            )
        return await store.get_itinerary("yellowknife", 1)

    itinerary = asyncio.run(run())

    assert [a.title for a in itinerary.days[0].activities] == ["First A", "First B", "Second"]
    assert itinerary.days[0].activities[0].cost is None
