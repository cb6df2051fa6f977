"""Application-wide constants for the TaskMarket platform."""

from __future__ import annotations

BRAND_NAME = "TaskMarket"

# Pagination
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100

# Geography
EARTH_RADIUS_KM = 6371.0

# Ratings
MIN_RATING = 1
MAX_RATING = 5

# Money: every amount in the system is an integer count of minor currency
# units (kobo/cents). Conversion to display units happens in clients only.
CURRENCY_CODE = "NGN"
MINOR_UNITS_PER_MAJOR = 100

# Text constraints
MAX_HEADLINE_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_SLUG_LENGTH = 255
