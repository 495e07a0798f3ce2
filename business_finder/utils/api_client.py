"""
Helper functions for calling the places endpoint from other services.
"""
import httpx
from typing import Dict, Optional
from loguru import logger

API_URL = "http://localhost:8080/api/places"


async def fetch_places(
    location: str,
    keyword: str,
    radius: int = 3000,
    api_url: str = API_URL,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[Dict]:
    """
    Fetch businesses from the places endpoint.

    Args:
        location: Free-text location to search around
        keyword: What to look for, e.g. 'eczane' or 'cafe'
        radius: Search radius in meters
        api_url: Full URL of the /api/places endpoint
        client: Optional shared AsyncClient

    Returns:
        Response envelope, or None if the call failed. An 'error' field
        may be present even when the HTTP status is 200.
    """
    params = {"location": location, "keyword": keyword, "radius": radius}
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=60.0) as own_client:
                response = await own_client.get(api_url, params=params)
        else:
            response = await client.get(api_url, params=params)
        data = response.json()
    except httpx.HTTPError as e:
        logger.error(f"HTTP error fetching places: {e}")
        return None
    except ValueError as e:
        logger.error(f"Invalid JSON from places endpoint: {e}")
        return None

    if not isinstance(data, dict):
        logger.error(f"Unexpected payload from places endpoint: {type(data).__name__}")
        return None
    if isinstance(data.get("error"), str):
        logger.warning(f"Places endpoint returned error ({response.status_code}): {data['error']}")
        return data

    incomplete = (data.get("meta") or {}).get("incomplete_count", 0)
    if incomplete > 0:
        logger.warning(f"{incomplete} places came back without details or coordinates")
    return data


def summarize_places(places_data: Optional[Dict]) -> str:
    """
    One-line summary of a response envelope.

    Args:
        places_data: Envelope returned by fetch_places

    Returns:
        Brief summary string
    """
    if not places_data:
        return "Search failed."
    if places_data.get("error"):
        return f"Search failed: {places_data['error']}"

    places = places_data.get("results") or []
    if not places:
        return "No places found."

    rated = [p["rating"] for p in places if p.get("rating") is not None]
    summary = f"Found {len(places)} places"
    if rated:
        summary += f" (avg {sum(rated) / len(rated):.1f}★)"
    return summary + "."
