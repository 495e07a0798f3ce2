import os
from dotenv import load_dotenv

load_dotenv()

GOOGLE_PLACES_API_KEY = os.getenv("GOOGLE_PLACES_API_KEY") or os.getenv("GOOGLE_MAPS_API_KEY")

# Region bias for the text search fallback
PLACES_REGION = os.getenv("PLACES_REGION", "tr")

FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))

# SEARCH POLICY
DEFAULT_RADIUS = 3000
MIN_RADIUS = 100
MAX_RADIUS = 50000
MAX_PAGES = 3
PAGE_TOKEN_DELAY = 2.1  # next_page_token is not valid right away

DETAIL_FIELDS = [
    "place_id", "name", "formatted_address",
    "formatted_phone_number", "international_phone_number", "website",
    "rating", "user_ratings_total", "reviews",
    "geometry", "type", "opening_hours", "address_component",
]
