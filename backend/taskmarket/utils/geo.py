"""Great-circle distance helpers."""

from __future__ import annotations

import math

from taskmarket.core.constants import EARTH_RADIUS_KM


def haversine_km(
    lat1: float,
    lng1: float,
    lat2: float,
    lng2: float,
    *,
    radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """Return the spherical great-circle distance between two points in km."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * radius_km * math.asin(min(1.0, math.sqrt(a)))
