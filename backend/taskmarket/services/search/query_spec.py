# backend/taskmarket/services/search/query_spec.py
"""
Immutable description of a filtered, sorted, paginated key query.

Search assembles its query by folding optional steps over a frozen
``SearchQuerySpec``. Every step returns a new spec; the SQLAlchemy
statement is only produced at the end by ``to_select`` / ``to_count``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

from sqlalchemy import Select, and_, distinct, func, select

DISTANCE_LABEL = "distance_km"


@dataclass(frozen=True)
class JoinClause:
    target: Any
    onclause: Any
    outer: bool = False


@dataclass(frozen=True)
class SearchQuerySpec:
    """
    Attributes:
        entity: Mapped class whose ``id`` forms the page key set
        joins: Joined tables, in join order, at most one per target
        predicates: AND-combined filter expressions
        distance: Optional computed distance expression (km)
        order: ORDER BY clauses
        grouping: GROUP BY expressions, used to collapse join fan-out
        limit / offset: Pagination window, None means unbounded
    """

    entity: Any
    joins: Tuple[JoinClause, ...] = ()
    predicates: Tuple[Any, ...] = ()
    distance: Optional[Any] = None
    order: Tuple[Any, ...] = ()
    grouping: Tuple[Any, ...] = ()
    limit: Optional[int] = None
    offset: int = 0

    def where(self, *predicates: Any) -> SearchQuerySpec:
        added = tuple(p for p in predicates if p is not None)
        if not added:
            return self
        return replace(self, predicates=self.predicates + added)

    def join(self, target: Any, onclause: Any, *, outer: bool = False) -> SearchQuerySpec:
        if self.has_join(target):
            return self
        return replace(self, joins=self.joins + (JoinClause(target, onclause, outer),))

    def has_join(self, target: Any) -> bool:
        return any(clause.target is target for clause in self.joins)

    def with_distance(self, expression: Any) -> SearchQuerySpec:
        return replace(self, distance=expression)

    def order_by(self, *clauses: Any) -> SearchQuerySpec:
        return replace(self, order=self.order + tuple(clauses))

    def group_by(self, *expressions: Any) -> SearchQuerySpec:
        added = tuple(e for e in expressions if not any(e is g for g in self.grouping))
        return replace(self, grouping=self.grouping + added)

    def paginate(self, page: int, limit: int) -> SearchQuerySpec:
        return replace(self, limit=limit, offset=(page - 1) * limit)

    @property
    def is_grouped(self) -> bool:
        return bool(self.grouping)

    def _apply_from(self, stmt: Select) -> Select:
        stmt = stmt.select_from(self.entity)
        for clause in self.joins:
            stmt = stmt.join(clause.target, clause.onclause, isouter=clause.outer)
        if self.predicates:
            stmt = stmt.where(and_(*self.predicates))
        return stmt

    def to_select(self) -> Select:
        """Compile to ``SELECT id[, distance_km]`` with ordering and pagination."""
        columns = [self.entity.id]
        if self.distance is not None:
            columns.append(self.distance.label(DISTANCE_LABEL))
        stmt = self._apply_from(select(*columns))
        if self.grouping:
            stmt = stmt.group_by(*self.grouping)
        if self.order:
            stmt = stmt.order_by(*self.order)
        if self.limit is not None:
            stmt = stmt.limit(self.limit).offset(self.offset)
        return stmt

    def to_count(self) -> Select:
        """Compile to ``COUNT(DISTINCT id)`` over the same joins and predicates."""
        return self._apply_from(select(func.count(distinct(self.entity.id))))
