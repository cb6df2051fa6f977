"""Tests for TaskService writes, slugs and child collections."""

import pytest

from taskmarket.core.enums import TaskStatus
from taskmarket.core.exceptions import NotFoundException, SlugConflictException, ValidationException
from taskmarket.models.task import Task, TaskQuestion
from taskmarket.schemas.task import TaskCreate, TaskFaqIn, TaskQuestionIn, TaskUpdate
from taskmarket.services.task_service import TaskService


@pytest.fixture
def service(db):
    return TaskService(db)


@pytest.fixture
def owner(seed):
    return seed.user()


@pytest.fixture
def cleaning(seed):
    return seed.service("Cleaning")


def _create(service, owner, catalog_service, name="Home Cleaning", **extra):
    return service.create_task(
        TaskCreate(name=name, user_id=owner.id, service_id=catalog_service.id, **extra)
    )


def test_create_task_derives_slug_and_stores_children(service, owner, cleaning):
    hit = _create(
        service,
        owner,
        cleaning,
        metadata={"source": "web"},
        questions=[
            TaskQuestionIn(question="Rooms?", display_order=1),
            TaskQuestionIn(question="Pets?", display_order=0),
        ],
        faqs=[TaskFaqIn(question="Supplies?", answer="Included")],
    )

    assert hit.task.slug == "home-cleaning"
    assert hit.task.status == TaskStatus.PENDING.value
    assert hit.task.extra_metadata == {"source": "web"}
    assert [q.question for q in hit.questions] == ["Pets?", "Rooms?"]
    assert len(hit.faqs) == 1


def test_create_with_taken_slug_conflicts(service, owner, cleaning):
    _create(service, owner, cleaning)

    with pytest.raises(SlugConflictException) as exc:
        _create(service, owner, cleaning)

    assert exc.value.code == "SLUG_CONFLICT"
    assert exc.value.status_code == 409


def test_create_with_unsluggable_name_is_rejected(service, owner, cleaning):
    with pytest.raises(ValidationException) as exc:
        _create(service, owner, cleaning, name="!!!")

    assert exc.value.code == "INVALID_SLUG"


def test_create_with_missing_service_is_not_found(service, owner):
    with pytest.raises(NotFoundException) as exc:
        service.create_task(TaskCreate(name="Painting", user_id=owner.id, service_id=404))

    assert exc.value.code == "SERVICE_NOT_FOUND"


def test_rename_into_taken_slug_gets_id_suffix(service, owner, cleaning):
    _create(service, owner, cleaning, name="Home Cleaning")
    other = _create(service, owner, cleaning, name="Office Cleaning")

    renamed = service.update_task(other.task.id, TaskUpdate(name="Home Cleaning"))

    assert renamed.task.slug == f"home-cleaning-{other.task.id}"
    assert renamed.task.name == "Home Cleaning"


def test_explicit_taken_slug_on_update_conflicts(service, owner, cleaning):
    _create(service, owner, cleaning, name="Home Cleaning")
    other = _create(service, owner, cleaning, name="Office Cleaning")

    with pytest.raises(SlugConflictException):
        service.update_task(other.task.id, TaskUpdate(slug="home-cleaning"))


def test_update_without_name_change_keeps_slug(service, owner, cleaning):
    hit = _create(service, owner, cleaning)

    updated = service.update_task(hit.task.id, TaskUpdate(description="Two bedrooms"))

    assert updated.task.slug == "home-cleaning"
    assert updated.task.description == "Two bedrooms"


def test_question_list_replaces_stored_questions(service, owner, cleaning, db):
    hit = _create(
        service,
        owner,
        cleaning,
        questions=[TaskQuestionIn(question="Rooms?"), TaskQuestionIn(question="Pets?")],
    )
    rooms, pets = sorted(hit.questions, key=lambda q: q.id)

    updated = service.update_task(
        hit.task.id,
        TaskUpdate(
            questions=[
                TaskQuestionIn(id=rooms.id, question="How many rooms?"),
                TaskQuestionIn(question="Parking?", display_order=1),
            ]
        ),
    )

    assert [q.question for q in updated.questions] == ["How many rooms?", "Parking?"]
    assert updated.questions[0].id == rooms.id
    assert db.get(TaskQuestion, pets.id) is None


def test_question_from_another_task_is_rejected(service, owner, cleaning):
    first = _create(service, owner, cleaning, questions=[TaskQuestionIn(question="Rooms?")])
    second = _create(service, owner, cleaning, name="Deep Clean")

    with pytest.raises(ValidationException) as exc:
        service.update_task(
            second.task.id,
            TaskUpdate(questions=[TaskQuestionIn(id=first.questions[0].id, question="Stolen?")]),
        )

    assert exc.value.code == "UNKNOWN_CHILD_ID"


def test_omitted_children_are_left_alone(service, owner, cleaning):
    hit = _create(service, owner, cleaning, faqs=[TaskFaqIn(question="Supplies?", answer="Yes")])

    updated = service.update_task(hit.task.id, TaskUpdate(short_description="Quick"))

    assert len(updated.faqs) == 1


def test_delete_task_removes_children(service, owner, cleaning, db):
    hit = _create(service, owner, cleaning, questions=[TaskQuestionIn(question="Rooms?")])

    assert service.delete_task(hit.task.id) is True
    assert db.get(Task, hit.task.id) is None
    assert db.query(TaskQuestion).count() == 0

    with pytest.raises(NotFoundException):
        service.get_task(hit.task.id)


def test_get_task_by_slug(service, owner, cleaning):
    created = _create(service, owner, cleaning)

    assert service.get_task_by_slug("home-cleaning").task.id == created.task.id
    with pytest.raises(NotFoundException):
        service.get_task_by_slug("missing")


def test_assign_tasker_accepts_task(service, owner, cleaning, seed):
    hit = _create(service, owner, cleaning)
    tasker = seed.tasker()

    task = service.assign_tasker(hit.task.id, tasker.id)

    assert task.tasker_id == tasker.id
    assert task.status == TaskStatus.ACCEPTED.value


def test_update_status(service, owner, cleaning):
    hit = _create(service, owner, cleaning)

    task = service.update_status(hit.task.id, TaskStatus.COMPLETED)

    assert task.status == "completed"


def test_task_rating(service, owner, cleaning):
    hit = _create(service, owner, cleaning)

    task = service.update_rating(hit.task.id, 4)

    assert task.average_rating == pytest.approx(4.0)
    assert task.total_reviews == 1
    assert service.update_rating(9999, 4) is None
