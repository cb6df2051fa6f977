"""Tests for CategoryService and CatalogService."""

import pytest

from taskmarket.core.exceptions import NotFoundException, SlugConflictException, ValidationException
from taskmarket.models.service import Service, ServiceFaq
from taskmarket.schemas.category import CategoryCreate, CategoryUpdate
from taskmarket.schemas.service import ServiceCreate, ServiceFaqIn, ServiceUpdate
from taskmarket.services.catalog_service import CatalogService
from taskmarket.services.category_service import CategoryService


@pytest.fixture
def categories(db):
    return CategoryService(db)


@pytest.fixture
def catalog(db):
    return CatalogService(db)


class TestCategories:
    def test_create_derives_slug(self, categories):
        category = categories.create_category(CategoryCreate(name="Home & Garden"))

        assert category.slug == "home-and-garden"
        assert categories.get_by_slug("home-and-garden").id == category.id

    def test_duplicate_name_conflicts(self, categories):
        categories.create_category(CategoryCreate(name="Moving"))

        with pytest.raises(SlugConflictException):
            categories.create_category(CategoryCreate(name="moving"))

    def test_explicit_slug_wins_over_name(self, categories):
        category = categories.create_category(CategoryCreate(name="Moving", slug="Relocation Help"))

        assert category.slug == "relocation-help"

    def test_category_cannot_be_its_own_parent(self, categories):
        category = categories.create_category(CategoryCreate(name="Repairs"))

        with pytest.raises(ValidationException) as exc:
            categories.update_category(category.id, CategoryUpdate(parent_id=category.id))

        assert exc.value.code == "INVALID_PARENT"

    def test_unknown_parent_is_not_found(self, categories):
        with pytest.raises(NotFoundException):
            categories.create_category(CategoryCreate(name="Repairs", parent_id=77))

    def test_list_filters_by_parent_and_hides_inactive(self, categories):
        parent = categories.create_category(CategoryCreate(name="Home"))
        child = categories.create_category(CategoryCreate(name="Kitchen", parent_id=parent.id))
        categories.create_category(CategoryCreate(name="Attic", parent_id=parent.id, is_active=False))

        children = categories.list_categories(parent_id=parent.id)

        assert [c.id for c in children] == [child.id]

    def test_toggle_flips_active_flag(self, categories):
        category = categories.create_category(CategoryCreate(name="Pets"))

        assert categories.toggle_active(category.id).is_active is False
        assert categories.toggle_active(category.id).is_active is True

    def test_search_with_blank_term_returns_nothing(self, categories):
        categories.create_category(CategoryCreate(name="Cleaning"))

        assert categories.search_categories("   ") == []
        assert [c.name for c in categories.search_categories("clean")] == ["Cleaning"]

    def test_delete_keeps_services_without_category(self, categories, seed, db):
        category = categories.create_category(CategoryCreate(name="Outdoor"))
        mowing = seed.service("Mowing", category=category)

        assert categories.delete_category(category.id) is True

        db.expire_all()
        assert db.get(Service, mowing.id).category_id is None


class TestCatalog:
    def test_create_service_with_faqs(self, catalog):
        service = catalog.create_service(
            ServiceCreate(
                name="Furniture Assembly",
                base_price=1500000,
                faqs=[
                    ServiceFaqIn(question="Tools?", answer="Bring them", display_order=1),
                    ServiceFaqIn(question="Time?", answer="Two hours", display_order=0),
                ],
            )
        )

        assert service.slug == "furniture-assembly"
        assert [f.question for f in catalog.get_faqs(service.id)] == ["Time?", "Tools?"]

    def test_update_replaces_faqs_when_sent(self, catalog):
        service = catalog.create_service(
            ServiceCreate(name="Mounting", faqs=[ServiceFaqIn(question="Walls?", answer="Any")])
        )

        catalog.update_service(
            service.id, ServiceUpdate(faqs=[ServiceFaqIn(question="TVs?", answer="Up to 85 inch")])
        )

        assert [f.question for f in catalog.get_faqs(service.id)] == ["TVs?"]

    def test_rename_collision_gets_id_suffix(self, catalog):
        catalog.create_service(ServiceCreate(name="Painting"))
        other = catalog.create_service(ServiceCreate(name="Wall Painting"))

        renamed = catalog.update_service(other.id, ServiceUpdate(name="Painting"))

        assert renamed.slug == f"painting-{other.id}"

    def test_delete_removes_faqs(self, catalog, db):
        service = catalog.create_service(
            ServiceCreate(name="Moving", faqs=[ServiceFaqIn(question="Trucks?", answer="Yes")])
        )

        assert catalog.delete_service(service.id) is True
        assert db.query(ServiceFaq).count() == 0
        with pytest.raises(NotFoundException):
            catalog.get_service(service.id)

    def test_listing_pages_and_filters(self, catalog, seed):
        home = seed.category("Home")
        for order in range(3):
            seed.service(f"Home Service {order}", category=home, display_order=order)
        seed.service("Hidden", category=home, is_active=False)
        seed.service("Elsewhere")

        items, total = catalog.list_services(category_id=home.id, page=2, limit=2)

        assert total == 3
        assert [s.name for s in items] == ["Home Service 2"]

    def test_listing_search_and_sort(self, catalog, seed):
        seed.service("Deep Cleaning", base_price=900000)
        seed.service("Window Cleaning", base_price=300000)
        seed.service("Plumbing", base_price=100000)

        items, total = catalog.list_services(search="cleaning", sort="price", descending=True)

        assert total == 2
        assert [s.name for s in items] == ["Deep Cleaning", "Window Cleaning"]

    def test_featured_and_popular(self, catalog, seed):
        featured = seed.service("Featured", is_featured=True)
        popular = seed.service("Popular", is_popular=True)
        seed.service("Retired", is_featured=True, is_active=False)

        assert [s.id for s in catalog.featured_services()] == [featured.id]
        assert [s.id for s in catalog.popular_services()] == [popular.id]

    def test_service_rating(self, catalog, seed):
        service = seed.service(average_rating=4.0, total_reviews=3)

        updated = catalog.update_rating(service.id, 5)

        assert updated.average_rating == pytest.approx(4.25)
        assert catalog.update_rating(999, 5) is None
