# backend/taskmarket/repositories/search_repository.py
"""
Shared machinery for the two-phase search repositories.

Phase one (``select_page``) runs the count query and the key query built
from a ``SearchQuerySpec``. Phase two (``hydrate_children``) loads full
rows and child collections for exactly those keys with ``IN`` queries and
reassembles them in key order. The phases are not transactional; a parent
deleted between them is skipped.
"""

import logging
import time
from typing import Any, Dict, Generic, List, Optional, Sequence, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from ..core.exceptions import RepositoryException
from ..services.search.query_spec import DISTANCE_LABEL, SearchQuerySpec
from ..services.search.results import PageKeys
from .base_repository import BaseRepository

T = TypeVar("T")
H = TypeVar("H")

logger = logging.getLogger(__name__)


class SearchRepository(BaseRepository[T], Generic[T, H]):
    """Base class for ``select_page`` / ``hydrate_children`` repositories."""

    def resolve_slug(self, model: Any, slug: str) -> Optional[int]:
        """Map a slug to its row id with one lookup query."""
        try:
            return self.db.query(model.id).filter(model.slug == slug).scalar()
        except SQLAlchemyError as e:
            self.logger.error(f"Error resolving {model.__name__} slug {slug}: {str(e)}")
            raise RepositoryException(f"Failed to resolve slug: {str(e)}")

    def execute_page(self, spec: SearchQuerySpec, page: int, limit: int) -> PageKeys:
        """
        Run the count query, then the paginated key query.

        A zero count short-circuits without issuing the key query.
        """
        start = time.time()
        try:
            total = int(self.db.execute(spec.to_count()).scalar_one() or 0)
            if total == 0:
                return PageKeys.empty(page, limit)

            rows = self.db.execute(spec.paginate(page, limit).to_select()).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error selecting {self.model.__name__} page: {str(e)}")
            raise RepositoryException(f"Failed to select {self.model.__name__} page: {str(e)}")

        ids = tuple(row.id for row in rows)
        distances: Dict[int, float] = {}
        if spec.distance is not None:
            distances = {row.id: float(getattr(row, DISTANCE_LABEL)) for row in rows}

        self.logger.debug(
            "%s page=%s limit=%s total=%s keys=%s in %.3fs",
            self.model.__name__,
            page,
            limit,
            total,
            len(ids),
            time.time() - start,
        )
        return PageKeys(ids=ids, total=total, page=page, limit=limit, distances=distances)

    def group_rows(self, query: Any, attribute: str) -> Dict[int, List[Any]]:
        """Execute a child query and bucket its rows by parent id, keeping query order."""
        grouped: Dict[int, List[Any]] = {}
        for row in self._execute_query(query):
            grouped.setdefault(getattr(row, attribute), []).append(row)
        return grouped

    @staticmethod
    def reassemble(keys: PageKeys, parents: Sequence[Any], build: Any) -> List[H]:
        """
        Rebuild hits strictly in page-key order.

        ``build(parent, distance_km)`` creates one hit. Keys without a
        loaded parent are dropped.
        """
        by_id = {parent.id: parent for parent in parents}
        hits: List[H] = []
        for key in keys.ids:
            parent = by_id.get(key)
            if parent is None:
                logger.debug("Search key %s vanished before hydration, skipping", key)
                continue
            hits.append(build(parent, keys.distances.get(key)))
        return hits
