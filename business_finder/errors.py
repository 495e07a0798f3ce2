"""Error types for the places pipeline.

Request-shape and credential errors are fatal before any upstream call.
Upstream denials and failed searches are soft: they are reported in the
response body with HTTP 200 and an empty result list.
"""
from typing import Optional


class PlacesError(Exception):
    http_status = 500
    soft = False

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        if self.soft:
            return {"error": self.message, "results": []}
        return {"error": self.message}


class BadRequest(PlacesError):
    """A required query parameter is missing."""
    http_status = 400


class Misconfigured(PlacesError):
    """The upstream API credential is not configured."""
    http_status = 500


class UpstreamDenied(PlacesError):
    """Upstream answered REQUEST_DENIED (bad key, quota, billing)."""
    http_status = 200
    soft = True

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "API access denied")


class UpstreamFailure(PlacesError):
    """Fallback search returned an unexpected status or payload."""
    http_status = 200
    soft = True

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Search failed")


class GeocodeFailure(Exception):
    """Location could not be resolved; switches the pipeline to text search."""

    def __init__(self, status: str, message: Optional[str] = None):
        self.status = status
        self.message = message
        super().__init__(f"{status}: {message}" if message else status)


class InternalError(PlacesError):
    """Unexpected failure; details stay in the log."""
    http_status = 500
    soft = True

    def __init__(self):
        super().__init__("Internal server error")
