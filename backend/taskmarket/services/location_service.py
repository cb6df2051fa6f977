# backend/taskmarket/services/location_service.py
"""
Location Service Layer

Saved user locations. A user has at most one default location; deleting a
location only stamps ``deleted_at`` so bookings and profiles that point at
it keep their reference.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from ..models.location import Location
from ..repositories.factory import RepositoryFactory
from ..schemas.location import LocationCreate
from .base import BaseService

logger = logging.getLogger(__name__)


class LocationService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_location_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)

    @BaseService.measure_operation("create_location")
    def create_location(self, data: LocationCreate) -> Location:
        self.require(self.user_repository.get_by_id(data.user_id), "User", data.user_id)
        with self.transaction():
            if data.is_default:
                self.repository.clear_default(data.user_id)
            location = self.repository.create(**data.model_dump())
        return location

    @BaseService.measure_operation("list_locations_for_user")
    def list_for_user(self, user_id: int) -> List[Location]:
        return self.repository.list_for_user(user_id)

    @BaseService.measure_operation("delete_location")
    def delete_location(self, location_id: int) -> bool:
        self.require(self.repository.get_active(location_id), "Location", location_id)
        with self.transaction():
            deleted = self.repository.soft_delete(location_id)
        self.log_operation("delete_location", location_id=location_id)
        return deleted
