"""Built-in Canadian city dataset loaded by ``MemStorage.seeded()``.

Attractions and itinerary items refer to cities and attractions by key; the
store resolves keys to the ids it assigns at insert time.
"""
from __future__ import annotations

from typing import Any, Dict, List

_UNSPLASH = "https://images.unsplash.com/{photo}?ixlib=rb-1.2.1&auto=format&fit=crop&w=1500&q=80"

CITIES: List[Dict[str, Any]] = [
    {
        "key": "toronto",
        "name": "Toronto",
        "slug": "toronto",
        "description": "Explore Canada's largest city with iconic landmarks, cultural diversity, and urban adventures.",
        "image_url": _UNSPLASH.format(photo="photo-1517090504586-fde19ea6066f"),
    },
    {
        "key": "vancouver",
        "name": "Vancouver",
        "slug": "vancouver",
        "description": "Discover the west coast gem with stunning nature, mountains, and ocean all in one breathtaking city.",
        "image_url": _UNSPLASH.format(photo="photo-1560813962-ff3d8fcf59ba"),
    },
    {
        "key": "montreal",
        "name": "Montreal",
        "slug": "montreal",
        "description": "Experience the European charm of Canada with rich history, french culture, and amazing food.",
        "image_url": _UNSPLASH.format(photo="photo-1519178614-68673b201f36"),
    },
    {
        "key": "quebec",
        "name": "Quebec City",
        "slug": "quebec",
        "description": "Step back in time with cobblestone streets, historic architecture, and French heritage.",
        "image_url": _UNSPLASH.format(photo="photo-1557456170-0cf4f4d0d362"),
    },
    {
        "key": "banff",
        "name": "Banff",
        "slug": "banff",
        "description": "Immerse yourself in the majestic Rocky Mountains with pristine lakes, wildlife, and outdoor activities.",
        "image_url": _UNSPLASH.format(photo="photo-1527153818091-1a9638521e2a"),
    },
    {
        "key": "halifax",
        "name": "Halifax",
        "slug": "halifax",
        "description": "Enjoy maritime charm with coastal views, friendly locals, and fresh seafood in Nova Scotia's capital.",
        "image_url": _UNSPLASH.format(photo="photo-1588732570005-5012ee9c0224"),
    },
]

_TIP = "Traveler Tip"

ATTRACTIONS: List[Dict[str, Any]] = [
    {
        "key": "cn_tower",
        "city": "toronto",
        "name": "CN Tower Experience",
        "description": "Start your Toronto adventure with spectacular views from one of the world's tallest free-standing structures. Take the glass elevator to the observation deck and walk on the glass floor if you dare!",
        "location": "290 Bremner Blvd",
        "cost": "$40 CAD per person",
        "tip_title": _TIP,
        "tip_description": "Purchase tickets online in advance to avoid long lines. For the best experience, try to visit early in the morning to avoid crowds.",
    },
    {
        "key": "ripleys",
        "city": "toronto",
        "name": "Ripley's Aquarium of Canada",
        "description": "Located at the base of the CN Tower, this aquarium features a moving walkway through an underwater tunnel, where you can observe sharks, rays, and colorful fish swimming overhead.",
        "location": "288 Bremner Blvd",
        "cost": "$35 CAD per person",
        "tip_title": _TIP,
        "tip_description": "Check the feeding schedule upon arrival to catch these exciting events. The Dangerous Lagoon tunnel is a must-see attraction!",
    },
    {
        "key": "rom",
        "city": "toronto",
        "name": "Royal Ontario Museum",
        "description": "Explore Canada's largest museum of world cultures and natural history. The ROM features extensive galleries of art, archaeology and natural science from around the world and across the ages.",
        "location": "100 Queen's Park",
        "cost": "$23 CAD per person",
        "tip_title": _TIP,
        "tip_description": "Don't miss the dinosaur exhibit and the crystal architecture of the Michael Lee-Chin Crystal. On Wednesdays, admission is discounted during the last hour before closing.",
    },
    {
        "key": "distillery",
        "city": "toronto",
        "name": "Distillery District & Dinner",
        "description": "End your day at this historic and pedestrian-only village set in beautifully restored Victorian industrial buildings. Enjoy boutique shops, art galleries, and dine at one of the many restaurants.",
        "location": "55 Mill St",
        "cost": "$30-50 CAD for dinner",
        "tip_title": _TIP,
        "tip_description": "Try the Mill Street Brewery for local craft beers or El Catrin for excellent Mexican food with a beautiful patio during summer months.",
    },
    {
        "key": "islands",
        "city": "toronto",
        "name": "Toronto Islands Day Trip",
        "description": "Take the ferry to the Toronto Islands for a day of relaxation away from the city bustle. Enjoy beaches, picnic areas, walking trails, and fantastic skyline views.",
        "location": "Jack Layton Ferry Terminal",
        "cost": "$8.50 CAD round trip",
        "tip_title": _TIP,
        "tip_description": "Bring a picnic lunch and plenty of water. Rent bikes on the island to explore more efficiently.",
    },
    {
        "key": "kensington",
        "city": "toronto",
        "name": "Kensington Market & Chinatown",
        "description": "Explore these vibrant multicultural neighborhoods with their unique shops, international cuisine, and street art.",
        "location": "Kensington Ave & Spadina Ave",
        "cost": "Free (shopping/food extra)",
        "tip_title": _TIP,
        "tip_description": "Visit on the last Sunday of the month in summer when the streets are closed to vehicles for Pedestrian Sundays.",
    },
    {
        "key": "casa_loma",
        "city": "toronto",
        "name": "Casa Loma",
        "description": "Explore this Gothic Revival castle and gardens in midtown Toronto, complete with towers, secret passages, and elegant rooms.",
        "location": "1 Austin Terrace",
        "cost": "$30 CAD per person",
        "tip_title": _TIP,
        "tip_description": "Don't miss the stunning views of the city from the towers and the beautiful gardens during summer.",
    },
    {
        "key": "high_park",
        "city": "toronto",
        "name": "High Park Exploration",
        "description": "Toronto's largest public park features hiking trails, sports facilities, a zoo, playgrounds, and beautiful cherry blossoms in spring.",
        "location": "1873 Bloor St W",
        "cost": "Free",
        "tip_title": _TIP,
        "tip_description": "Visit in late April or early May to see the famous cherry blossoms, but get there early as it gets very crowded.",
    },
    {
        "key": "st_lawrence",
        "city": "toronto",
        "name": "St. Lawrence Market",
        "description": "One of the world's great food markets, featuring over 120 vendors selling fresh food, prepared foods, and unique non-food items.",
        "location": "93 Front St E",
        "cost": "Free (food costs extra)",
        "tip_title": _TIP,
        "tip_description": "Try the peameal bacon sandwich at Carousel Bakery, a Toronto specialty. The market is closed on Mondays and Sundays.",
    },
    {
        "key": "stanley_park",
        "city": "vancouver",
        "name": "Stanley Park Seawall",
        "description": "Enjoy a scenic walk, bike ride, or rollerblade along the 8.8km seawall that surrounds Vancouver's urban park with ocean views.",
        "location": "Stanley Park",
        "cost": "Free",
        "tip_title": _TIP,
        "tip_description": "Rent a bike at the park entrance and plan for 2-3 hours to complete the full loop.",
    },
]

DAY_HEADERS: List[Dict[str, Any]] = [
    {"city": "toronto", "day_number": 1, "title": "Exploring Downtown Toronto"},
    {"city": "toronto", "day_number": 2, "title": "Nature & Island Adventure"},
    {"city": "toronto", "day_number": 3, "title": "Cultural Exploration"},
    {"city": "toronto", "day_number": 4, "title": "Historic Toronto"},
    {"city": "toronto", "day_number": 5, "title": "Artistic Adventures"},
    {"city": "toronto", "day_number": 6, "title": "Neighborhood Discoveries"},
    {"city": "toronto", "day_number": 7, "title": "Relaxation & Recreation"},
    {"city": "vancouver", "day_number": 1, "title": "Vancouver's Natural Beauty"},
]

# (city, attraction, day, start, end, duration, title, sort order)
ITINERARY_ITEMS: List[tuple] = [
    ("toronto", "cn_tower", 1, "9:00 AM", "11:00 AM", "2 hours", "CN Tower Experience", 1),
    ("toronto", "ripleys", 1, "11:30 AM", "1:30 PM", "2 hours", "Ripley's Aquarium of Canada", 2),
    ("toronto", "rom", 1, "2:00 PM", "5:00 PM", "3 hours", "Royal Ontario Museum", 3),
    ("toronto", "distillery", 1, "6:00 PM", "9:00 PM", "3 hours", "Distillery District & Dinner", 4),
    ("toronto", "islands", 2, "10:00 AM", "3:00 PM", "5 hours", "Toronto Islands Day Trip", 1),
    ("toronto", "distillery", 2, "4:00 PM", "7:00 PM", "3 hours", "Shopping & Dinner at Eaton Centre", 2),
    ("toronto", "kensington", 3, "9:00 AM", "11:00 AM", "2 hours", "Kensington Market & Chinatown", 1),
    ("toronto", "casa_loma", 3, "12:00 PM", "3:00 PM", "3 hours", "Casa Loma", 2),
    ("toronto", "st_lawrence", 4, "9:00 AM", "11:00 AM", "2 hours", "St. Lawrence Market", 1),
    ("toronto", "high_park", 4, "1:00 PM", "5:00 PM", "4 hours", "High Park Exploration", 2),
    ("vancouver", "stanley_park", 1, "9:00 AM", "12:00 PM", "3 hours", "Stanley Park Exploration", 1),
]
