from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

# ------- Stored records -------
class CityCreate(BaseModel):
    model_config = _CAMEL

    name: str
    slug: str
    description: str
    image_url: str

class City(CityCreate):
    id: int

class AttractionCreate(BaseModel):
    model_config = _CAMEL

    city_id: int
    name: str
    description: str
    location: str
    cost: Optional[str] = None
    tip_title: Optional[str] = None
    tip_description: Optional[str] = None

class Attraction(AttractionCreate):
    id: int

class DayHeaderCreate(BaseModel):
    model_config = _CAMEL

    city_id: int
    day_number: int = Field(..., ge=1)
    title: str

class DayHeader(DayHeaderCreate):
    id: int

class ItineraryItemCreate(BaseModel):
    model_config = _CAMEL

    city_id: int
    attraction_id: int
    day_number: int = Field(..., ge=1)
    start_time: str
    end_time: str
    duration: str
    title: str
    sort_order: int

class ItineraryItem(ItineraryItemCreate):
    id: int

# ------- Assembled itinerary -------
class ItineraryActivity(BaseModel):
    model_config = ConfigDict(**_CAMEL, coerce_numbers_to_str=True)  # models sometimes emit "cost": 0

    id: Optional[int] = None  # LLM output may omit it; filled before responding
    start_time: str
    end_time: str
    duration: str
    title: str
    description: str
    location: str
    cost: Optional[str] = None
    tip_title: Optional[str] = None
    tip_description: Optional[str] = None

class ItineraryDay(BaseModel):
    model_config = _CAMEL

    day_number: int
    title: str
    activities: List[ItineraryActivity] = Field(default_factory=list)

class CompleteItinerary(BaseModel):
    model_config = _CAMEL

    city: City
    days: List[ItineraryDay] = Field(default_factory=list)
    fallback: Optional[bool] = Field(default=None, alias="_fallback")
    fallback_reason: Optional[str] = Field(default=None, alias="_fallbackReason")

    def to_payload(self) -> dict:
        """Wire representation: camelCase keys, unset optionals dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
