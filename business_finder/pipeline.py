"""
Aggregation pipeline: (location, keyword, radius) -> enriched business list.

Geocode the location, page through nearby search, drop duplicate ids,
look up details for each survivor and keep only records with an id and
coordinates. When geocoding fails, a text search replaces the nearby
search and the rest of the pipeline is the same.
"""
from dataclasses import dataclass
from numbers import Real
from typing import Iterable, List, Optional, Tuple

from loguru import logger

from . import config
from .errors import BadRequest, GeocodeFailure
from .google_places import Detail, Enriched, PlacesClient


@dataclass(frozen=True)
class Query:
    location: str
    keyword: str
    radius: int = config.DEFAULT_RADIUS


def _parse_radius(radius: Optional[str]) -> int:
    try:
        value = int(radius) if radius not in (None, "") else config.DEFAULT_RADIUS
    except (TypeError, ValueError):
        value = config.DEFAULT_RADIUS
    return max(config.MIN_RADIUS, min(value, config.MAX_RADIUS))


def build_query(location: Optional[str], keyword: Optional[str], radius: Optional[str] = None) -> Query:
    location = (location or "").strip()
    keyword = (keyword or "").strip()
    if not location or not keyword:
        raise BadRequest("Location and keyword are required")
    return Query(location=location, keyword=keyword, radius=_parse_radius(radius))


def dedupe(records: Iterable[dict]) -> List[dict]:
    """Keep the first record for each place_id; drop records without one."""
    seen = set()
    unique = []
    for record in records:
        place_id = record.get("place_id")
        if not place_id or place_id in seen:
            continue
        seen.add(place_id)
        unique.append(record)
    return unique


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_valid(record: dict) -> bool:
    location = (record.get("geometry") or {}).get("location") or {}
    return bool(record.get("place_id")) and _is_number(location.get("lat")) and _is_number(location.get("lng"))


def validate(enriched: List[Enriched]) -> Tuple[List[dict], int]:
    """Split enrichment output into valid records and an incomplete count."""
    results = [e.record for e in enriched if isinstance(e, Detail) and _is_valid(e.record)]
    return results, len(enriched) - len(results)


async def _enrich_and_validate(client: PlacesClient, discovered: List[dict]) -> dict:
    places = dedupe(discovered)
    if not places:
        return {"results": []}

    enriched = await client.enrich(places)
    results, incomplete_count = validate(enriched)
    logger.info(f"Returning {len(results)} valid places, incomplete: {incomplete_count}")
    return {"results": results, "meta": {"incomplete_count": incomplete_count}}


async def search_businesses(query: Query, client: PlacesClient) -> dict:
    """
    Run the whole lookup for one query and return the response envelope.

    UpstreamDenied and UpstreamFailure propagate to the caller, which
    renders them as soft errors.
    """
    logger.info(f"Searching {query.keyword!r} near {query.location!r} (radius={query.radius}m)")

    try:
        coord = await client.geocode(query.location)
    except GeocodeFailure as e:
        logger.warning(f"Geocoding failed ({e}), falling back to text search")
        discovered = await client.text_search(query.location, query.keyword)
    else:
        discovered = await client.nearby_search(coord, query.keyword, query.radius)

    if not discovered:
        logger.info("No places found")
        return {"results": []}

    envelope = await _enrich_and_validate(client, discovered)
    logger.success(f"Search for {query.keyword!r} near {query.location!r} returned {len(envelope['results'])} places")
    return envelope
