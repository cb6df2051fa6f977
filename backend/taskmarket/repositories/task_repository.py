# backend/taskmarket/repositories/task_repository.py
"""Repository for task listings and their questions and FAQs."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Query, Session, joinedload

from ..models.task import Task, TaskFaq, TaskQuestion
from .base_repository import BaseRepository, SluggedRepository

logger = logging.getLogger(__name__)


class TaskRepository(SluggedRepository[Task]):
    def __init__(self, db: Session):
        super().__init__(db, Task)
        self.questions = BaseRepository(db, TaskQuestion)
        self.faqs = BaseRepository(db, TaskFaq)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Task.service), joinedload(Task.location))

    def list_by(self, *, limit: Optional[int] = None, **criteria) -> List[Task]:
        """Tasks matching exact criteria, newest first."""
        query = (
            self._apply_eager_loading(self.db.query(Task))
            .filter_by(**criteria)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return self._execute_query(query)

    def list_questions(self, task_id: int) -> List[TaskQuestion]:
        return self._execute_query(
            self.db.query(TaskQuestion)
            .filter(TaskQuestion.task_id == task_id)
            .order_by(TaskQuestion.display_order, TaskQuestion.id)
        )

    def list_faqs(self, task_id: int) -> List[TaskFaq]:
        return self._execute_query(
            self.db.query(TaskFaq)
            .filter(TaskFaq.task_id == task_id)
            .order_by(TaskFaq.display_order, TaskFaq.id)
        )

    def delete_children(self, task_id: int) -> None:
        for model in (TaskQuestion, TaskFaq):
            self.db.query(model).filter(model.task_id == task_id).delete(synchronize_session=False)
