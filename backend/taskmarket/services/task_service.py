# backend/taskmarket/services/task_service.py
"""
Task Service Layer

Task listings: two-phase search, slugged create/update with owned
question and FAQ collections, status changes, tasker assignment and
rating aggregates.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from ..core.enums import TaskStatus
from ..core.exceptions import NotFoundException, ValidationException
from ..models.task import Task
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.base_repository import BaseRepository
from ..repositories.factory import RepositoryFactory
from ..schemas.search import TaskSearchParams
from ..schemas.task import TaskCreate, TaskQuestionIn, TaskUpdate
from ..utils.ratings import apply_rating
from .base import BaseService
from .search.results import PageKeys, SearchPage, TaskSearchHit
from .slug_policy import slug_for_create, slug_for_update

logger = logging.getLogger(__name__)

_CHILD_FIELDS = {"questions", "faqs"}


class TaskService(BaseService):
    """Service layer for task listings."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.repository = RepositoryFactory.create_task_repository(db)
        self.search_repository = RepositoryFactory.create_task_search_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.service_repository = RepositoryFactory.create_service_repository(db)
        self.tasker_repository = RepositoryFactory.create_tasker_repository(db)
        self.location_repository = RepositoryFactory.create_location_repository(db)

    # Reads

    @BaseService.measure_operation("search_tasks")
    def search_tasks(self, params: TaskSearchParams) -> SearchPage[TaskSearchHit]:
        """Run ``select_page`` then ``hydrate_children`` for one page of tasks."""
        keys = self.search_repository.select_page(params)
        items = self.search_repository.hydrate_children(keys)
        prometheus_metrics.record_search_total("task", keys.total)
        return SearchPage(items=items, page=keys.page, limit=keys.limit, total=keys.total)

    @BaseService.measure_operation("get_task")
    def get_task(self, task_id: int) -> TaskSearchHit:
        """Task with its questions and FAQs, hydrated the same way as search results."""
        hits = self.search_repository.hydrate_children(
            PageKeys(ids=(task_id,), total=1, page=1, limit=1)
        )
        if not hits:
            raise NotFoundException("Task not found", code="TASK_NOT_FOUND", details={"id": task_id})
        return hits[0]

    @BaseService.measure_operation("get_task_by_slug")
    def get_task_by_slug(self, slug: str) -> TaskSearchHit:
        task_id = self.search_repository.resolve_slug(Task, slug)
        if task_id is None:
            raise NotFoundException("Task not found", code="TASK_NOT_FOUND", details={"slug": slug})
        return self.get_task(task_id)

    @BaseService.measure_operation("list_tasks_by_user")
    def list_by_user(self, user_id: int, limit: Optional[int] = None) -> List[Task]:
        return self.repository.list_by(user_id=user_id, limit=limit)

    @BaseService.measure_operation("list_tasks_by_service")
    def list_by_service(self, service_id: int, limit: Optional[int] = None) -> List[Task]:
        return self.repository.list_by(service_id=service_id, is_active=True, limit=limit)

    @BaseService.measure_operation("list_tasks_by_tasker")
    def list_by_tasker(self, tasker_id: int, limit: Optional[int] = None) -> List[Task]:
        return self.repository.list_by(tasker_id=tasker_id, limit=limit)

    # Writes

    @BaseService.measure_operation("create_task")
    def create_task(self, data: TaskCreate) -> TaskSearchHit:
        """
        Create a task with its questions and FAQs in one transaction.

        Raises:
            NotFoundException: If a referenced user, service, tasker or location is missing
            SlugConflictException: If another task already owns the derived slug
        """
        self._check_references(
            user_id=data.user_id,
            service_id=data.service_id,
            tasker_id=data.tasker_id,
            location_id=data.location_id,
        )
        slug = slug_for_create(self.repository, "Task", data.name)

        values = data.model_dump(exclude=_CHILD_FIELDS | {"metadata"})
        with self.transaction():
            task = self.repository.create(**values, slug=slug, extra_metadata=data.metadata)
            self._sync_children(self.repository.questions, task.id, [], data.questions)
            self._sync_children(self.repository.faqs, task.id, [], data.faqs)

        self.log_operation("create_task", task_id=task.id, slug=slug)
        return self.get_task(task.id)

    @BaseService.measure_operation("update_task")
    def update_task(self, task_id: int, data: TaskUpdate) -> TaskSearchHit:
        """
        Apply a partial update.

        A rename whose slug collides with another task gets ``"{slug}-{id}"``;
        an explicit colliding slug is rejected. Present ``questions``/``faqs``
        lists replace the stored collections.
        """
        task = self.require(self.repository.get_by_id(task_id, load_relationships=False), "Task", task_id)
        changes = data.model_dump(exclude_unset=True, exclude=_CHILD_FIELDS | {"slug"})
        self._check_references(
            service_id=changes.get("service_id"), location_id=changes.get("location_id")
        )

        slug = slug_for_update(
            self.repository, "Task", task, name=data.name, explicit=data.slug
        )
        if slug is not None:
            changes["slug"] = slug
        if "metadata" in changes:
            changes["extra_metadata"] = changes.pop("metadata")

        with self.transaction():
            self.repository.update(task_id, **changes)
            if data.questions is not None:
                self._sync_children(
                    self.repository.questions,
                    task_id,
                    self.repository.list_questions(task_id),
                    data.questions,
                )
            if data.faqs is not None:
                self._sync_children(
                    self.repository.faqs, task_id, self.repository.list_faqs(task_id), data.faqs
                )

        self.log_operation("update_task", task_id=task_id, fields=sorted(changes))
        return self.get_task(task_id)

    @BaseService.measure_operation("delete_task")
    def delete_task(self, task_id: int) -> bool:
        self.require(self.repository.get_by_id(task_id, load_relationships=False), "Task", task_id)
        with self.transaction():
            self.repository.delete_children(task_id)
            self.repository.delete(task_id)
        self.log_operation("delete_task", task_id=task_id)
        return True

    @BaseService.measure_operation("update_task_status")
    def update_status(self, task_id: int, status: TaskStatus) -> Task:
        task = self.require(self.repository.get_by_id(task_id), "Task", task_id)
        with self.transaction():
            task.status = TaskStatus(status).value
        return task

    @BaseService.measure_operation("assign_tasker")
    def assign_tasker(self, task_id: int, tasker_id: int) -> Task:
        """Attach a tasker to the task and mark it accepted."""
        task = self.require(self.repository.get_by_id(task_id), "Task", task_id)
        self.require(
            self.tasker_repository.get_by_id(tasker_id, load_relationships=False), "Tasker", tasker_id
        )
        with self.transaction():
            task.tasker_id = tasker_id
            task.status = TaskStatus.ACCEPTED.value
        self.log_operation("assign_tasker", task_id=task_id, tasker_id=tasker_id)
        return task

    @BaseService.measure_operation("update_task_rating")
    def update_rating(self, task_id: int, rating: float) -> Optional[Task]:
        """Fold one rating into the running average. None when the task is missing."""
        task = self.repository.get_by_id(task_id, load_relationships=False)
        if task is None:
            return None
        with self.transaction():
            apply_rating(task, rating)
        return task

    # Helpers

    def _check_references(self, **ids: Optional[int]) -> None:
        lookups = {
            "user_id": ("User", self.user_repository.get_by_id),
            "service_id": ("Service", self.service_repository.get_by_id),
            "tasker_id": ("Tasker", self.tasker_repository.get_by_id),
            "location_id": ("Location", lambda location_id, **_: self.location_repository.get_active(location_id)),
        }
        for field, value in ids.items():
            if value is None:
                continue
            label, fetch = lookups[field]
            self.require(fetch(value, load_relationships=False), label, value)

    @staticmethod
    def _sync_children(
        repository: BaseRepository,
        task_id: int,
        existing: Sequence[Any],
        incoming: Sequence[Any],
    ) -> None:
        """
        Make the stored child rows match ``incoming``.

        Items with an ``id`` update that row, items without one are
        inserted, and stored rows absent from ``incoming`` are deleted.
        """
        by_id: Dict[int, Any] = {row.id: row for row in existing}
        kept = set()
        for item in incoming:
            values = item.model_dump(exclude={"id"})
            if item.id is None:
                repository.create(task_id=task_id, **values)
                continue
            if item.id not in by_id:
                kind = "Question" if isinstance(item, TaskQuestionIn) else "FAQ"
                raise ValidationException(
                    f"{kind} {item.id} does not belong to this task",
                    code="UNKNOWN_CHILD_ID",
                    details={"task_id": task_id, "id": item.id},
                )
            repository.update(item.id, **values)
            kept.add(item.id)

        for row_id in by_id.keys() - kept:
            repository.delete(row_id)

