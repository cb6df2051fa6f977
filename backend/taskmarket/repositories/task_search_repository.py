# backend/taskmarket/repositories/task_search_repository.py
"""
Task listing queries.

Every join from ``tasks`` is many-to-one, so the key query never fans out
and needs no grouping.
"""

from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ..database.session_utils import nulls_last_order
from ..models.category import ServiceCategory
from ..models.location import Location
from ..models.service import Service
from ..models.task import Task, TaskFaq, TaskQuestion
from ..schemas.search import TaskSearchParams, TaskSort
from ..services.search.distance import haversine_distance_km
from ..services.search.query_spec import SearchQuerySpec
from ..services.search.results import PageKeys, TaskSearchHit
from .search_repository import SearchRepository

_SORT_COLUMNS = {
    TaskSort.CREATED_AT: Task.created_at,
    TaskSort.NAME: Task.name,
    TaskSort.RATE: Task.base_rate,
    TaskSort.RATING: Task.average_rating,
    TaskSort.POPULAR: Task.total_completed,
}


class TaskSearchRepository(SearchRepository[Task, TaskSearchHit]):
    """Two-phase task search: ``select_page`` then ``hydrate_children``."""

    def __init__(self, db: Session):
        super().__init__(db, Task)

    def select_page(self, params: TaskSearchParams) -> PageKeys:
        service_id = params.service_id
        category_id = params.category_id

        if params.service_slug is not None:
            resolved = self.resolve_slug(Service, params.service_slug)
            if resolved is None or (service_id is not None and service_id != resolved):
                return PageKeys.empty(params.page, params.limit)
            service_id = resolved

        if params.category_slug is not None:
            resolved = self.resolve_slug(ServiceCategory, params.category_slug)
            if resolved is None or (category_id is not None and category_id != resolved):
                return PageKeys.empty(params.page, params.limit)
            category_id = resolved

        spec = SearchQuerySpec(Task)

        if not params.include_inactive:
            spec = spec.where(Task.is_active.is_(True))

        if params.query:
            term = f"%{params.query}%"
            spec = spec.where(
                or_(
                    Task.name.ilike(term),
                    Task.description.ilike(term),
                    Task.short_description.ilike(term),
                )
            )

        if service_id is not None:
            spec = spec.where(Task.service_id == service_id)
        if category_id is not None:
            spec = spec.join(Service, Task.service_id == Service.id).where(
                Service.category_id == category_id
            )
        if params.tasker_id is not None:
            spec = spec.where(Task.tasker_id == params.tasker_id)
        if params.location_id is not None:
            spec = spec.where(Task.location_id == params.location_id)
        if params.min_rate is not None:
            spec = spec.where(Task.base_rate >= params.min_rate)
        if params.max_rate is not None:
            spec = spec.where(Task.base_rate <= params.max_rate)
        if params.min_rating is not None:
            spec = spec.where(Task.average_rating >= params.min_rating)
        if params.is_featured is not None:
            spec = spec.where(Task.is_featured.is_(params.is_featured))
        if params.is_popular is not None:
            spec = spec.where(Task.is_popular.is_(params.is_popular))

        if params.has_geo_filter:
            distance = haversine_distance_km(
                Location.latitude, Location.longitude, params.latitude, params.longitude
            )
            spec = (
                spec.join(Location, Task.location_id == Location.id)
                .where(
                    Location.latitude.isnot(None),
                    Location.longitude.isnot(None),
                    Location.deleted_at.is_(None),
                    distance <= params.radius,
                )
                .with_distance(distance)
            )

        sort = params.sort
        if sort == TaskSort.DISTANCE:
            key = spec.distance if spec.distance is not None else _SORT_COLUMNS[TaskSearchParams.DEFAULT_SORT]
        else:
            key = _SORT_COLUMNS[sort]
        spec = spec.order_by(*nulls_last_order(key, params.descending, self.dialect_name), Task.id.asc())

        return self.execute_page(spec, params.page, params.limit)

    def hydrate_children(self, keys: PageKeys) -> List[TaskSearchHit]:
        """Load tasks (with service and location), questions and FAQs for one page."""
        if not keys:
            return []

        ids = list(keys.ids)
        tasks = self._execute_query(
            self.db.query(Task)
            .options(joinedload(Task.service), joinedload(Task.location))
            .filter(Task.id.in_(ids))
        )
        if not tasks:
            return []

        questions = self.group_rows(
            self.db.query(TaskQuestion)
            .filter(TaskQuestion.task_id.in_(ids))
            .order_by(TaskQuestion.display_order, TaskQuestion.id),
            "task_id",
        )
        faqs = self.group_rows(
            self.db.query(TaskFaq)
            .filter(TaskFaq.task_id.in_(ids))
            .order_by(TaskFaq.display_order, TaskFaq.id),
            "task_id",
        )

        return self.reassemble(
            keys,
            tasks,
            lambda task, distance: TaskSearchHit(
                task=task,
                questions=questions.get(task.id, []),
                faqs=faqs.get(task.id, []),
                distance_km=distance,
            ),
        )
