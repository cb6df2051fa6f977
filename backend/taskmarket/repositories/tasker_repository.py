# backend/taskmarket/repositories/tasker_repository.py
"""
Repository for tasker profiles, skills and portfolio items.

Search lives in ``TaskerSearchRepository``; this module covers the
single-profile reads and writes behind profile management.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Query, Session, joinedload

from ..database.session_utils import nulls_last_order
from ..models.tasker import Tasker, TaskerPortfolioItem, TaskerSkill
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class TaskerRepository(BaseRepository[Tasker]):
    """Repository for Tasker and its owned child rows."""

    def __init__(self, db: Session):
        super().__init__(db, Tasker)
        self.skills = BaseRepository(db, TaskerSkill)
        self.portfolio = BaseRepository(db, TaskerPortfolioItem)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Tasker.user), joinedload(Tasker.location))

    def get_by_user_id(self, user_id: int) -> Optional[Tasker]:
        return self._apply_eager_loading(self.db.query(Tasker).filter(Tasker.user_id == user_id)).first()

    def get_top_taskers(self, limit: int) -> List[Tasker]:
        """Active elite taskers, best rated first."""
        return self._execute_query(
            self._apply_eager_loading(self.db.query(Tasker))
            .filter(Tasker.is_active.is_(True), Tasker.is_elite.is_(True))
            .order_by(*nulls_last_order(Tasker.average_rating, True, self.dialect_name), Tasker.id)
            .limit(limit)
        )

    # Skills

    def get_skill(self, tasker_id: int, skill_id: int) -> Optional[TaskerSkill]:
        return (
            self.db.query(TaskerSkill)
            .options(joinedload(TaskerSkill.service))
            .filter(TaskerSkill.id == skill_id, TaskerSkill.tasker_id == tasker_id)
            .first()
        )

    def find_skill_for_service(self, tasker_id: int, service_id: int) -> Optional[TaskerSkill]:
        """Any row for the pair, active or not; active rows win."""
        return (
            self.db.query(TaskerSkill)
            .filter(TaskerSkill.tasker_id == tasker_id, TaskerSkill.service_id == service_id)
            .order_by(TaskerSkill.is_active.desc(), TaskerSkill.id)
            .first()
        )

    def list_active_skills(self, tasker_id: int) -> List[TaskerSkill]:
        return self._execute_query(
            self.db.query(TaskerSkill)
            .options(joinedload(TaskerSkill.service))
            .filter(TaskerSkill.tasker_id == tasker_id, TaskerSkill.is_active.is_(True))
            .order_by(TaskerSkill.id)
        )

    # Portfolio

    def get_portfolio_item(self, tasker_id: int, item_id: int) -> Optional[TaskerPortfolioItem]:
        return (
            self.db.query(TaskerPortfolioItem)
            .filter(TaskerPortfolioItem.id == item_id, TaskerPortfolioItem.tasker_id == tasker_id)
            .first()
        )

    def list_portfolio(self, tasker_id: int) -> List[TaskerPortfolioItem]:
        return self._execute_query(
            self.db.query(TaskerPortfolioItem)
            .filter(TaskerPortfolioItem.tasker_id == tasker_id)
            .order_by(TaskerPortfolioItem.display_order, TaskerPortfolioItem.id)
        )

    def next_portfolio_order(self, tasker_id: int) -> int:
        current = self.portfolio.max_value(TaskerPortfolioItem.display_order, tasker_id=tasker_id)
        return 0 if current is None else int(current) + 1
