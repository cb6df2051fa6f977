"""SQL great-circle distance expression."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, literal

from taskmarket.core.config import settings


def haversine_distance_km(
    lat_column: Any,
    lng_column: Any,
    latitude: float,
    longitude: float,
    *,
    radius_km: float | None = None,
) -> Any:
    """
    Haversine distance in km between a fixed point and a row's coordinates.

    Evaluated by the database, so it can be filtered and sorted on. Agrees
    with ``taskmarket.utils.geo.haversine_km`` to floating-point precision.
    """
    radius = radius_km if radius_km is not None else settings.earth_radius_km
    origin_lat = literal(float(latitude))
    origin_lng = literal(float(longitude))

    half_d_lat = func.radians(lat_column - origin_lat) / 2
    half_d_lng = func.radians(lng_column - origin_lng) / 2
    a = func.power(func.sin(half_d_lat), 2) + func.cos(func.radians(origin_lat)) * func.cos(
        func.radians(lat_column)
    ) * func.power(func.sin(half_d_lng), 2)
    return 2 * radius * func.asin(func.sqrt(a))
