# backend/taskmarket/repositories/location_repository.py
"""Repository for saved locations. Soft-deleted rows are never listed."""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.location import Location
from .base_repository import BaseRepository


class LocationRepository(BaseRepository[Location]):
    def __init__(self, db: Session):
        super().__init__(db, Location)

    def get_active(self, location_id: int) -> Optional[Location]:
        return (
            self.db.query(Location)
            .filter(Location.id == location_id, Location.deleted_at.is_(None))
            .first()
        )

    def list_for_user(self, user_id: int) -> List[Location]:
        return self._execute_query(
            self.db.query(Location)
            .filter(Location.user_id == user_id, Location.deleted_at.is_(None))
            .order_by(Location.is_default.desc(), Location.id)
        )

    def clear_default(self, user_id: int) -> int:
        """Unset ``is_default`` on every live location of a user."""
        return (
            self.db.query(Location)
            .filter(
                Location.user_id == user_id,
                Location.deleted_at.is_(None),
                Location.is_default.is_(True),
            )
            .update({Location.is_default: False}, synchronize_session="fetch")
        )

    def soft_delete(self, location_id: int) -> bool:
        location = self.get_active(location_id)
        if location is None:
            return False
        location.deleted_at = datetime.now(timezone.utc)
        location.is_default = False
        self.db.flush()
        return True
