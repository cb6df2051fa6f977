# backend/taskmarket/routes/v1/locations.py
"""
Saved location routes - API v1

Endpoints:
    POST /                  → Save a location
    GET /user/{user_id}     → A user's saved locations
    DELETE /{location_id}   → Remove a saved location
"""

from fastapi import APIRouter, Depends, status

from ...api.dependencies.services import get_location_service
from ...schemas.base_responses import DeleteResponse
from ...schemas.location import LocationCreate, LocationListResponse, LocationResponse
from ...services.location_service import LocationService
from .common import run_service

router = APIRouter(tags=["locations-v1"])


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_location(
    payload: LocationCreate, service: LocationService = Depends(get_location_service)
) -> LocationResponse:
    location = await run_service(service.create_location, payload)
    return LocationResponse.model_validate(location)


@router.get("/user/{user_id}", response_model=LocationListResponse)
async def list_user_locations(
    user_id: int, service: LocationService = Depends(get_location_service)
) -> LocationListResponse:
    locations = await run_service(service.list_for_user, user_id)
    items = [LocationResponse.model_validate(location) for location in locations]
    return LocationListResponse(items=items, total=len(items))


@router.delete("/{location_id}", response_model=DeleteResponse)
async def delete_location(
    location_id: int, service: LocationService = Depends(get_location_service)
) -> DeleteResponse:
    await run_service(service.delete_location, location_id)
    return DeleteResponse(message="Location deleted")
