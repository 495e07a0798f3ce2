import asyncio
from dataclasses import dataclass
from typing import AsyncIterator, List, Union

import googlemaps
from googlemaps.exceptions import ApiError
from loguru import logger

from . import config
from .models import Coordinate
from .errors import GeocodeFailure, Misconfigured, UpstreamDenied, UpstreamFailure

API_KEY = config.GOOGLE_PLACES_API_KEY


@dataclass(frozen=True)
class Detail:
    """Place record returned by a successful detail lookup."""
    record: dict


@dataclass(frozen=True)
class Incomplete:
    """Discovery stub whose detail lookup did not succeed."""
    stub: dict


Enriched = Union[Detail, Incomplete]


class PlacesClient:
    """
    Async facade over the Google Maps web services.

    googlemaps is blocking, so each call runs in a worker thread.
    googlemaps raises ApiError for any status other than OK and
    ZERO_RESULTS; those are folded back into a {status, error_message}
    body so callers can branch on the status string.
    """

    def __init__(self, gmaps: googlemaps.Client):
        self.gmaps = gmaps

    async def _request(self, method, *args, **kwargs) -> dict:
        try:
            body = await asyncio.to_thread(method, *args, **kwargs)
        except ApiError as e:
            return {"status": e.status, "error_message": e.message}
        return body if isinstance(body, dict) else {}

    async def geocode(self, location: str) -> Coordinate:
        """Resolve free text to coordinates or raise GeocodeFailure."""
        try:
            results = await asyncio.to_thread(self.gmaps.geocode, location)
        except ApiError as e:
            raise GeocodeFailure(e.status, e.message) from e

        if not results:
            raise GeocodeFailure("ZERO_RESULTS")
        latlng = (results[0].get("geometry") or {}).get("location") or {}
        if "lat" not in latlng or "lng" not in latlng:
            raise GeocodeFailure("OK", "no geometry in geocode result")

        logger.info(f"Geocoded {location!r} to ({latlng['lat']}, {latlng['lng']})")
        return Coordinate(lat=latlng["lat"], lng=latlng["lng"])

    async def nearby_pages(self, coord: Coordinate, keyword: str, radius: int) -> AsyncIterator[List[dict]]:
        """
        Yield nearby search pages in order, at most MAX_PAGES of them.

        A continuation token only becomes valid after a short delay, so
        every follow-up request waits PAGE_TOKEN_DELAY seconds first.
        REQUEST_DENIED on any page aborts with UpstreamDenied, any other
        non-OK status ends the sequence.
        """
        page_token = None
        for page in range(1, config.MAX_PAGES + 1):
            if page_token:
                await asyncio.sleep(config.PAGE_TOKEN_DELAY)

            data = await self._request(
                self.gmaps.places_nearby,
                location=(coord.lat, coord.lng),
                radius=radius,
                keyword=keyword,
                page_token=page_token,
            )
            status = data.get("status")
            results = data.get("results")
            logger.info(f"Nearby page {page} status: {status}, results: {len(results or [])}")

            if status == "REQUEST_DENIED":
                logger.warning(f"Nearby search denied: {data.get('error_message')}")
                raise UpstreamDenied(data.get("error_message"))
            if status != "OK" or not isinstance(results, list):
                return

            yield results

            page_token = data.get("next_page_token")
            if not page_token:
                return

    async def nearby_search(self, coord: Coordinate, keyword: str, radius: int) -> List[dict]:
        """Concatenate all nearby pages (duplicates included)."""
        stubs = []
        async for page in self.nearby_pages(coord, keyword, radius):
            stubs.extend(page)
        logger.info(f"Total nearby results: {len(stubs)}")
        return stubs

    async def text_search(self, location: str, keyword: str) -> List[dict]:
        """Region-biased text search, used when the location cannot be geocoded."""
        query = f"{keyword} {location}"
        data = await self._request(self.gmaps.places, query=query, region=config.PLACES_REGION)
        status = data.get("status")
        results = data.get("results")
        logger.info(f"Text search {query!r} status: {status}, results: {len(results or [])}")

        if status == "ZERO_RESULTS":
            return []
        if status == "REQUEST_DENIED":
            logger.warning(f"Text search denied: {data.get('error_message')}")
            raise UpstreamDenied(data.get("error_message"))
        if status != "OK" or not isinstance(results, list):
            raise UpstreamFailure(data.get("error_message"))
        return results

    async def place_details(self, stub: dict) -> Enriched:
        place_id = stub.get("place_id")
        data = await self._request(self.gmaps.place, place_id, fields=config.DETAIL_FIELDS)
        result = data.get("result")
        if data.get("status") != "OK" or not isinstance(result, dict):
            logger.debug(f"Details unavailable for {place_id}: {data.get('status')}")
            return Incomplete(stub)

        record = dict(result)
        record.setdefault("place_id", place_id)
        return Detail(record)

    async def enrich(self, stubs: List[dict]) -> List[Enriched]:
        """Look up details for every stub concurrently, preserving order."""
        logger.info(f"Fetching details for {len(stubs)} places")
        return list(await asyncio.gather(*(self.place_details(s) for s in stubs)))


def get_places_client() -> PlacesClient:
    if not API_KEY:
        logger.error("Google Places API key not configured")
        raise Misconfigured("Google Places API key not configured")
    # OVER_QUERY_LIMIT must surface as an ApiError instead of a retry loop
    return PlacesClient(googlemaps.Client(key=API_KEY, retry_over_query_limit=False))
