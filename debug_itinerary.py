# debug_itinerary.py
import asyncio
import json
import sys

from itinerary_planner.errors import ItineraryError
from itinerary_planner.orchestrator import orchestrate_itinerary
from itinerary_planner.storage import MemStorage


async def main(city: str = "toronto", days: int = 3, use_ai: bool = True):
    storage = MemStorage.seeded()
    try:
        result = await orchestrate_itinerary(storage, city, days, use_ai=use_ai)
    except ItineraryError as exc:
        print(f"Orchestrator raised {type(exc).__name__} ({exc.status_code}):\n")
        print(json.dumps(exc.to_payload(), indent=2))
        return

    print("Orchestrator returned:\n")
    print(json.dumps(result.to_payload(), indent=2))


if __name__ == "__main__":
    # usage: python debug_itinerary.py [city] [days] [--stored]
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    city = args[0] if args else "toronto"
    days = int(args[1]) if len(args) > 1 else 3
    asyncio.run(main(city, days, use_ai="--stored" not in sys.argv))
