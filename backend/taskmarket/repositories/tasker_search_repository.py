# backend/taskmarket/repositories/tasker_search_repository.py
"""
Tasker discovery queries.

Skill, rate, service and category filters join ``tasker_skills`` (active
rows only) and ``services``. A tasker can match through several skills, so
those queries group on ``taskers.id`` and the rate sort key becomes
``MIN``/``MAX`` of the matching hourly rates.
"""

from typing import List

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session, contains_eager, joinedload

from ..database.session_utils import nulls_last_order
from ..models.category import ServiceCategory
from ..models.location import Location
from ..models.service import Service
from ..models.tasker import Tasker, TaskerPortfolioItem, TaskerSkill
from ..schemas.search import TaskerSearchParams, TaskerSort
from ..services.search.distance import haversine_distance_km
from ..services.search.query_spec import SearchQuerySpec
from ..services.search.results import PageKeys, TaskerSearchHit
from .search_repository import SearchRepository

_ACTIVE_SKILL_JOIN = and_(TaskerSkill.tasker_id == Tasker.id, TaskerSkill.is_active.is_(True))


class TaskerSearchRepository(SearchRepository[Tasker, TaskerSearchHit]):
    """Two-phase tasker search: ``select_page`` then ``hydrate_children``."""

    def __init__(self, db: Session):
        super().__init__(db, Tasker)

    def select_page(self, params: TaskerSearchParams) -> PageKeys:
        """
        Return the ordered key set for one page of matching taskers.

        Slug filters are resolved first; a slug with no row yields an empty
        page without running the search queries.
        """
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

        spec = SearchQuerySpec(Tasker)
        spec = self._apply_profile_filters(spec, params)

        if params.has_skill_filter:
            spec = (
                spec.join(TaskerSkill, _ACTIVE_SKILL_JOIN)
                .join(Service, TaskerSkill.service_id == Service.id)
                .where(
                    TaskerSkill.service_id == service_id if service_id is not None else None,
                    Service.category_id == category_id if category_id is not None else None,
                    TaskerSkill.hourly_rate >= params.min_rate if params.min_rate is not None else None,
                    TaskerSkill.hourly_rate <= params.max_rate if params.max_rate is not None else None,
                )
                .group_by(Tasker.id)
            )

        if params.has_geo_filter:
            distance = haversine_distance_km(
                Location.latitude, Location.longitude, params.latitude, params.longitude
            )
            spec = (
                spec.join(Location, Tasker.location_id == Location.id)
                .where(
                    Location.latitude.isnot(None),
                    Location.longitude.isnot(None),
                    Location.deleted_at.is_(None),
                    distance <= params.radius,
                )
                .with_distance(distance)
            )

        spec = self._apply_sort(spec, params)

        if spec.is_grouped and spec.distance is not None:
            spec = spec.group_by(Location.id)

        return self.execute_page(spec, params.page, params.limit)

    def _apply_profile_filters(
        self, spec: SearchQuerySpec, params: TaskerSearchParams
    ) -> SearchQuerySpec:
        if not params.include_inactive:
            spec = spec.where(Tasker.is_active.is_(True))

        if params.query:
            term = f"%{params.query}%"
            spec = spec.where(or_(Tasker.headline.ilike(term), Tasker.bio.ilike(term)))

        if params.location_id is not None:
            spec = spec.where(Tasker.location_id == params.location_id)
        if params.min_rating is not None:
            spec = spec.where(Tasker.average_rating >= params.min_rating)
        if params.is_elite is not None:
            spec = spec.where(Tasker.is_elite.is_(params.is_elite))
        if params.is_background_checked is not None:
            spec = spec.where(Tasker.background_checked.is_(params.is_background_checked))
        if params.is_identity_verified is not None:
            spec = spec.where(Tasker.identity_verified.is_(params.is_identity_verified))
        return spec

    def _apply_sort(self, spec: SearchQuerySpec, params: TaskerSearchParams) -> SearchQuerySpec:
        sort = params.sort
        if sort == TaskerSort.DISTANCE and spec.distance is None:
            sort = TaskerSearchParams.DEFAULT_SORT

        if sort == TaskerSort.RATE:
            if not spec.has_join(TaskerSkill):
                # Unfiltered rate sort still needs the rate; taskers without
                # active skills stay in the result and sort last.
                spec = spec.join(TaskerSkill, _ACTIVE_SKILL_JOIN, outer=True).group_by(Tasker.id)
            aggregate = func.max if params.descending else func.min
            key = aggregate(TaskerSkill.hourly_rate)
        elif sort == TaskerSort.DISTANCE:
            key = spec.distance
        else:
            key = {
                TaskerSort.RATING: Tasker.average_rating,
                TaskerSort.COMPLETIONS: Tasker.total_tasks_completed,
                TaskerSort.RESPONSE_TIME: Tasker.response_time,
                TaskerSort.CREATED_AT: Tasker.created_at,
            }[sort]

        return spec.order_by(
            *nulls_last_order(key, params.descending, self.dialect_name), Tasker.id.asc()
        )

    def hydrate_children(self, keys: PageKeys) -> List[TaskerSearchHit]:
        """
        Load full tasker rows and their children for one page of keys.

        Three queries regardless of page size: taskers (with user and
        location), active skills with their service, portfolio items.
        """
        if not keys:
            return []

        ids = list(keys.ids)
        taskers = self._execute_query(
            self.db.query(Tasker)
            .options(joinedload(Tasker.user), joinedload(Tasker.location))
            .filter(Tasker.id.in_(ids))
        )
        if not taskers:
            return []

        skills_by_tasker = self.group_rows(
            self.db.query(TaskerSkill)
            .join(Service, TaskerSkill.service_id == Service.id)
            .options(contains_eager(TaskerSkill.service))
            .filter(TaskerSkill.tasker_id.in_(ids), TaskerSkill.is_active.is_(True))
            .order_by(TaskerSkill.tasker_id, TaskerSkill.id),
            "tasker_id",
        )
        portfolio_by_tasker = self.group_rows(
            self.db.query(TaskerPortfolioItem)
            .filter(TaskerPortfolioItem.tasker_id.in_(ids))
            .order_by(TaskerPortfolioItem.display_order, TaskerPortfolioItem.id),
            "tasker_id",
        )

        return self.reassemble(
            keys,
            taskers,
            lambda tasker, distance: TaskerSearchHit(
                tasker=tasker,
                skills=skills_by_tasker.get(tasker.id, []),
                portfolio=portfolio_by_tasker.get(tasker.id, []),
                distance_km=distance,
            ),
        )
