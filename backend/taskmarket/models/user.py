# backend/taskmarket/models/user.py
"""
User model for the TaskMarket platform.

Authentication is handled by a separate subsystem; this table only carries
the identity and role string that the marketplace needs to link taskers,
bookings, reviews and payments back to a person.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from ..core.enums import RoleName
from ..database import Base


class User(Base):
    """
    Marketplace account.

    Attributes:
        id: Primary key
        email: Unique email address
        first_name / last_name: Display name parts
        phone: Optional phone number
        role: One of ``user``, ``tasker`` or ``admin``
        is_active: Whether the account can transact

    Relationships:
        tasker: One-to-one tasker profile (taskers only)
        locations: Saved addresses
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=True)
    avatar_url = Column(String(512), nullable=True)
    role = Column(String(20), nullable=False, default=RoleName.USER.value)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    tasker = relationship("Tasker", back_populates="user", uselist=False)
    locations = relationship("Location", back_populates="user", foreign_keys="Location.user_id")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<User {self.email}>"
