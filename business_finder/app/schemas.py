from typing import List, Optional
from pydantic import BaseModel, Field

from ..models import Coordinate


class Geometry(BaseModel):
    location: Coordinate

    class Config:
        extra = "allow"


class Review(BaseModel):
    author_name: Optional[str] = None
    rating: Optional[float] = None
    text: Optional[str] = None
    time: Optional[int] = None

    class Config:
        extra = "allow"


class OpeningHours(BaseModel):
    weekday_text: Optional[List[str]] = None

    class Config:
        extra = "allow"


class AddressComponent(BaseModel):
    long_name: Optional[str] = None
    short_name: Optional[str] = None
    types: Optional[List[str]] = None


class PlaceDetail(BaseModel):
    place_id: str
    name: Optional[str] = None
    formatted_address: Optional[str] = None
    formatted_phone_number: Optional[str] = None
    international_phone_number: Optional[str] = None
    website: Optional[str] = None
    rating: Optional[float] = Field(None, description="Average rating, 0-5.")
    user_ratings_total: Optional[int] = None
    reviews: Optional[List[Review]] = None
    types: Optional[List[str]] = None
    opening_hours: Optional[OpeningHours] = None
    address_components: Optional[List[AddressComponent]] = None
    geometry: Geometry

    class Config:
        extra = "allow"


class Meta(BaseModel):
    incomplete_count: int = 0


class PlacesResponse(BaseModel):
    results: List[PlaceDetail] = []
    meta: Optional[Meta] = None
    error: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "results": [
                    {
                        "place_id": "ChIJ7bk6mRq5yhQRmkIY1NqrmIE",
                        "name": "Karaköy Güllüoğlu",
                        "formatted_address": "Kemankeş Karamustafa Paşa, Kemankeş Cd. No:67, 34425 Beyoğlu/İstanbul",
                        "formatted_phone_number": "(0212) 293 09 10",
                        "rating": 4.5,
                        "user_ratings_total": 48211,
                        "geometry": {"location": {"lat": 41.0226, "lng": 28.9764}}
                    }
                ],
                "meta": {"incomplete_count": 0}
            }
        }


class ErrorResponse(BaseModel):
    error: str
    results: Optional[List[PlaceDetail]] = None
