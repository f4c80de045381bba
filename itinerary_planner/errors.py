"""Error taxonomy surfaced by the itinerary pipeline.

The HTTP layer maps each class onto a status code via ``status_code``;
``use_stored_itinerary`` tells the caller a retry with ``useAI=false`` may
succeed.
"""
from __future__ import annotations

from typing import Any, Dict


class ItineraryError(Exception):
    status_code: int = 500

    def __init__(self, message: str, *, use_stored_itinerary: bool = False) -> None:
        super().__init__(message)
        self.message = message
        self.use_stored_itinerary = use_stored_itinerary

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"message": self.message}
        if self.use_stored_itinerary:
            payload["useStoredItinerary"] = True
        return payload


class CityNotFound(ItineraryError):
    status_code = 404


class ItineraryNotFound(ItineraryError):
    status_code = 404


class QuotaExceeded(ItineraryError):
    status_code = 429


class GenerationFailed(ItineraryError):
    status_code = 500
