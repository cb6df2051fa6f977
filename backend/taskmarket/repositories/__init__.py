"""
Repository layer for the TaskMarket platform.

Repositories own data access; services own business rules and transactions.
"""

from .base_repository import BaseRepository, SluggedRepository
from .factory import RepositoryFactory

__all__ = ["BaseRepository", "RepositoryFactory", "SluggedRepository"]
