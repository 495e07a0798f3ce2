from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from .. import config
from ..errors import InternalError, PlacesError
from ..google_places import get_places_client
from ..pipeline import build_query, search_businesses
from .schemas import ErrorResponse, PlacesResponse

app = FastAPI(title="Business Finder API", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.FRONTEND_URL],
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(PlacesError)
async def places_error_handler(request: Request, exc: PlacesError):
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


@app.get(
    "/api/places",
    response_model=PlacesResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def find_places(location: Optional[str] = None, keyword: Optional[str] = None, radius: Optional[str] = None):
    logger.info(f"Request received: location={location!r}, keyword={keyword!r}, radius={radius!r}")
    query = build_query(location, keyword, radius)
    client = get_places_client()
    # Unexpected errors are rendered here, inside CORSMiddleware
    try:
        return PlacesResponse.model_validate(await search_businesses(query, client))
    except PlacesError:
        raise
    except Exception as e:
        logger.opt(exception=e).error(f"Error fetching places: {e}")
        raise InternalError() from e


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "Business Finder"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
