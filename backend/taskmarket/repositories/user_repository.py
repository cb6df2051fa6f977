# backend/taskmarket/repositories/user_repository.py
"""Repository for user accounts."""

from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.user import User
from .base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.find_one_by(email=email.strip().lower())

    def email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(User.id).filter(User.email == email.strip().lower())
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return self._execute_scalar(query.limit(1)) is not None

    def list_users(
        self,
        *,
        role: Optional[str] = None,
        include_inactive: bool = False,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[User], int]:
        try:
            query = self.db.query(User)
            if role is not None:
                query = query.filter(User.role == role)
            if not include_inactive:
                query = query.filter(User.is_active.is_(True))
            total = query.count()
            items = query.order_by(User.id).offset(offset).limit(limit).all()
            return items, total
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing users: {str(e)}")
            raise RepositoryException(f"Failed to list users: {str(e)}")

    def hard_delete(self, user_id: int) -> bool:
        """Delete the row with a bulk statement so ``ON DELETE CASCADE`` removes dependents."""
        try:
            deleted = self.db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
            self.db.flush()
            return deleted > 0
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting user {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete user: {str(e)}")
