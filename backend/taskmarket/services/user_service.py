# backend/taskmarket/services/user_service.py
"""
User Service Layer

Account records that taskers, tasks, bookings and locations hang off.
Emails are unique and stored lower-cased. Deleting a user removes the
row and lets the database cascade to everything that references it.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.exceptions import ConflictException
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..schemas.user import UserCreate, UserUpdate
from .base import BaseService

logger = logging.getLogger(__name__)


class UserService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_user_repository(db)

    @BaseService.measure_operation("list_users")
    def list_users(
        self,
        *,
        role: Optional[str] = None,
        include_inactive: bool = False,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[User], int]:
        return self.repository.list_users(
            role=role, include_inactive=include_inactive, offset=(page - 1) * limit, limit=limit
        )

    @BaseService.measure_operation("get_user")
    def get_user(self, user_id: int) -> User:
        return self.require(self.repository.get_by_id(user_id), "User", user_id)

    @BaseService.measure_operation("get_user_by_email")
    def get_by_email(self, email: str) -> User:
        return self.require(self.repository.get_by_email(email), "User", email)

    def _ensure_email_free(self, email: str, exclude_id: Optional[int] = None) -> None:
        if self.repository.email_taken(email, exclude_id=exclude_id):
            raise ConflictException(
                "Email already exists", code="EMAIL_EXISTS", details={"email": email}
            )

    @BaseService.measure_operation("create_user")
    def create_user(self, data: UserCreate) -> User:
        self._ensure_email_free(data.email)
        with self.transaction():
            user = self.repository.create(**data.model_dump())
        self.log_operation("create_user", user_id=user.id, role=user.role)
        return user

    @BaseService.measure_operation("update_user")
    def update_user(self, user_id: int, data: UserUpdate) -> User:
        self.get_user(user_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("email") is not None:
            self._ensure_email_free(changes["email"], exclude_id=user_id)
        with self.transaction():
            user = self.repository.update(user_id, **changes)
        return user

    @BaseService.measure_operation("delete_user")
    def delete_user(self, user_id: int) -> bool:
        self.get_user(user_id)
        with self.transaction():
            deleted = self.repository.hard_delete(user_id)
        self.log_operation("delete_user", user_id=user_id)
        return deleted
