# backend/taskmarket/services/tasker_service.py
"""
Tasker Service Layer

Handles tasker profile management, skills with soft delete and
reactivation, portfolio ordering, rating aggregates and tasker discovery.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import ConflictException, NotFoundException
from ..models.tasker import Tasker, TaskerPortfolioItem, TaskerSkill
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from ..schemas.search import TaskerSearchParams
from ..schemas.tasker import (
    PortfolioItemCreate,
    PortfolioItemUpdate,
    SkillCreate,
    SkillUpdate,
    TaskerCreate,
    TaskerUpdate,
)
from ..utils.ratings import apply_rating
from .base import BaseService
from .search.results import SearchPage, TaskerSearchHit

logger = logging.getLogger(__name__)

TOP_TASKERS_LIMIT = 6
TASKERS_BY_SERVICE_LIMIT = 10


class TaskerService(BaseService):
    """
    Service layer for tasker-related operations.

    Centralizes business logic for:
    - Profile creation and updates
    - Skill soft delete and reactivation
    - Portfolio ordering
    - Rating and completion aggregates
    - Two-phase tasker search
    """

    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_tasker_repository(db)
        self.search_repository = RepositoryFactory.create_tasker_search_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.service_repository = RepositoryFactory.create_service_repository(db)

    # Profile

    @BaseService.measure_operation("get_tasker")
    def get_tasker(self, tasker_id: int) -> Tasker:
        return self.require(self.repository.get_by_id(tasker_id), "Tasker", tasker_id)

    @BaseService.measure_operation("get_tasker_by_user")
    def get_by_user_id(self, user_id: int) -> Tasker:
        tasker = self.repository.get_by_user_id(user_id)
        if tasker is None:
            raise NotFoundException(
                "Tasker profile not found", code="TASKER_NOT_FOUND", details={"user_id": user_id}
            )
        return tasker

    @BaseService.measure_operation("create_tasker")
    def create_tasker(self, data: TaskerCreate) -> Tasker:
        """
        Create a tasker profile for an existing user.

        Raises:
            NotFoundException: If the user does not exist
            ConflictException: If the user already has a profile
        """
        self.require(self.user_repository.get_by_id(data.user_id), "User", data.user_id)
        if self.repository.exists(user_id=data.user_id):
            raise ConflictException(
                "Tasker profile already exists for this user",
                code="TASKER_EXISTS",
                details={"user_id": data.user_id},
            )

        with self.transaction():
            tasker = self.repository.create(**data.model_dump())

        self.log_operation("create_tasker", tasker_id=tasker.id, user_id=data.user_id)
        return tasker

    @BaseService.measure_operation("update_tasker")
    def update_tasker(self, tasker_id: int, data: TaskerUpdate) -> Tasker:
        self.get_tasker(tasker_id)
        changes = data.model_dump(exclude_unset=True)
        with self.transaction():
            tasker = self.repository.update(tasker_id, **changes)
        self.log_operation("update_tasker", tasker_id=tasker_id, fields=sorted(changes))
        return tasker

    # Skills

    @BaseService.measure_operation("list_skills")
    def list_skills(self, tasker_id: int) -> List[TaskerSkill]:
        self.get_tasker(tasker_id)
        return self.repository.list_active_skills(tasker_id)

    @BaseService.measure_operation("add_skill")
    def add_skill(self, tasker_id: int, data: SkillCreate) -> TaskerSkill:
        """
        Add a catalog service to a tasker's skills.

        A previously removed skill for the same service is reactivated in
        place, keeping its primary key.

        Raises:
            NotFoundException: If the tasker or service does not exist
            ConflictException: If an active skill for the service exists
        """
        self.get_tasker(tasker_id)
        self.require(self.service_repository.get_by_id(data.service_id), "Service", data.service_id)

        existing = self.repository.find_skill_for_service(tasker_id, data.service_id)
        if existing is not None and existing.is_active:
            raise ConflictException(
                "Tasker already has this skill",
                code="SKILL_EXISTS",
                details={"tasker_id": tasker_id, "service_id": data.service_id},
            )

        with self.transaction():
            if existing is not None:
                skill = self.repository.skills.update(
                    existing.id, **data.model_dump(exclude={"service_id"}), is_active=True
                )
                reactivated = True
            else:
                skill = self.repository.skills.create(tasker_id=tasker_id, **data.model_dump())
                reactivated = False

        self.log_operation(
            "add_skill", tasker_id=tasker_id, skill_id=skill.id, reactivated=reactivated
        )
        return skill

    @BaseService.measure_operation("update_skill")
    def update_skill(self, tasker_id: int, skill_id: int, data: SkillUpdate) -> TaskerSkill:
        skill = self.repository.get_skill(tasker_id, skill_id)
        if skill is None or not skill.is_active:
            raise NotFoundException("Skill not found", code="SKILL_NOT_FOUND", details={"id": skill_id})
        with self.transaction():
            skill = self.repository.skills.update(skill_id, **data.model_dump(exclude_unset=True))
        return skill

    @BaseService.measure_operation("remove_skill")
    def remove_skill(self, tasker_id: int, skill_id: int) -> TaskerSkill:
        """Soft delete: the row stays and is reactivated by ``add_skill``."""
        skill = self.repository.get_skill(tasker_id, skill_id)
        if skill is None or not skill.is_active:
            raise NotFoundException("Skill not found", code="SKILL_NOT_FOUND", details={"id": skill_id})
        with self.transaction():
            skill = self.repository.skills.update(skill_id, is_active=False)
        self.log_operation("remove_skill", tasker_id=tasker_id, skill_id=skill_id)
        return skill

    # Portfolio

    @BaseService.measure_operation("list_portfolio")
    def list_portfolio(self, tasker_id: int) -> List[TaskerPortfolioItem]:
        self.get_tasker(tasker_id)
        return self.repository.list_portfolio(tasker_id)

    @BaseService.measure_operation("add_portfolio_item")
    def add_portfolio_item(self, tasker_id: int, data: PortfolioItemCreate) -> TaskerPortfolioItem:
        self.get_tasker(tasker_id)
        values = data.model_dump()
        if values["display_order"] is None:
            values["display_order"] = self.repository.next_portfolio_order(tasker_id)
        with self.transaction():
            item = self.repository.portfolio.create(tasker_id=tasker_id, **values)
        return item

    @BaseService.measure_operation("update_portfolio_item")
    def update_portfolio_item(
        self, tasker_id: int, item_id: int, data: PortfolioItemUpdate
    ) -> TaskerPortfolioItem:
        self.require(self.repository.get_portfolio_item(tasker_id, item_id), "Portfolio item", item_id)
        with self.transaction():
            item = self.repository.portfolio.update(item_id, **data.model_dump(exclude_unset=True))
        return item

    @BaseService.measure_operation("remove_portfolio_item")
    def remove_portfolio_item(self, tasker_id: int, item_id: int) -> bool:
        self.require(self.repository.get_portfolio_item(tasker_id, item_id), "Portfolio item", item_id)
        with self.transaction():
            return self.repository.portfolio.delete(item_id)

    # Aggregates

    @BaseService.measure_operation("update_tasker_rating")
    def update_rating(self, tasker_id: int, rating: float) -> Optional[Tasker]:
        """
        Fold one rating into the tasker's running average.

        Returns None when the tasker does not exist.
        """
        tasker = self.repository.get_by_id(tasker_id, load_relationships=False)
        if tasker is None:
            return None
        with self.transaction():
            apply_rating(tasker, rating)
        return tasker

    @BaseService.measure_operation("increment_tasks_completed")
    def increment_tasks_completed(self, tasker_id: int) -> Tasker:
        tasker = self.require(
            self.repository.get_by_id(tasker_id, load_relationships=False), "Tasker", tasker_id
        )
        with self.transaction():
            tasker.total_tasks_completed = (tasker.total_tasks_completed or 0) + 1
        return tasker

    # Discovery

    @BaseService.measure_operation("search_taskers")
    def search_taskers(self, params: TaskerSearchParams) -> SearchPage[TaskerSearchHit]:
        """
        Find taskers matching ``params``.

        Runs ``select_page`` for the ordered page keys, then
        ``hydrate_children`` to load exactly those taskers with their
        skills and portfolio.
        """
        keys = self.search_repository.select_page(params)
        items = self.search_repository.hydrate_children(keys)
        prometheus_metrics.record_search_total("tasker", keys.total)
        return SearchPage(items=items, page=keys.page, limit=keys.limit, total=keys.total)

    @BaseService.measure_operation("get_top_taskers")
    def get_top_taskers(self, limit: int = TOP_TASKERS_LIMIT) -> List[Tasker]:
        """Active elite taskers, best rated first."""
        return self.repository.get_top_taskers(limit)

    @BaseService.measure_operation("get_taskers_by_service")
    def get_taskers_by_service(
        self, service_id: int, limit: int = TASKERS_BY_SERVICE_LIMIT
    ) -> List[TaskerSearchHit]:
        params = TaskerSearchParams(service_id=service_id, limit=limit)
        return self.search_taskers(params).items

