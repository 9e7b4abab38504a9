import base64
from datetime import datetime, timedelta, timezone

import pytest
from sqlmodel import SQLModel, Session, create_engine
from sqlalchemy.pool import StaticPool

from lead_images.application.ports.image_repo import ProfileImageDto
from lead_images.application.ports.profile_repo import ProfileDto
from lead_images.application.services.image_service import ProfileImageService
from lead_images.application.services.profile_service import ProfileService
from lead_images.infrastructure.persistence.sqlalchemy.repositories.image_repository_sql import SqlImageRepository
from lead_images.infrastructure.persistence.sqlalchemy.repositories.profile_repository_sql import SqlProfileRepository


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as s:
        yield s


def _image(profile_id, order, uploaded_at=None, is_priority=True):
    return ProfileImageDto(
        id=None,
        profile_id=profile_id,
        image_data=b"\x89PNG\r\n\x1a\n",
        file_name=f"{order}.png",
        content_type="image/png",
        uploaded_at=uploaded_at or datetime(2024, 1, 1, tzinfo=timezone.utc),
        display_order=order,
        is_priority=is_priority,
    )


def test_profile_crud(session):
    repo = SqlProfileRepository(session)
    p = repo.add(ProfileDto(id=None, profile_type="lead", name="Ada", email="ada@example.com"))
    assert p.id is not None
    assert p.created_at is not None
    assert repo.exists(p.id) is True

    p.name = "Ada L."
    repo.update(p)
    assert repo.get_by_id(p.id).name == "Ada L."

    repo.delete(p.id)
    assert repo.exists(p.id) is False
    assert repo.get_by_id(p.id) is None


def test_profiles_listed_newest_first(session):
    repo = SqlProfileRepository(session)
    repo.add(ProfileDto(id=None, profile_type="lead", name="Old", email="o@example.com", created_at=datetime(2020, 1, 1, tzinfo=timezone.utc)))
    repo.add(ProfileDto(id=None, profile_type="lead", name="New", email="n@example.com", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc)))
    assert [p.name for p in repo.list_all()] == ["New", "Old"]


def test_images_listed_and_counted_per_profile(session):
    profiles = SqlProfileRepository(session)
    a = profiles.add(ProfileDto(id=None, profile_type="customer", name="A", email="a@example.com"))
    b = profiles.add(ProfileDto(id=None, profile_type="customer", name="B", email="b@example.com"))
    repo = SqlImageRepository(session)
    for order in (3, 1, 2):
        repo.add(_image(a.id, order))
    repo.add(_image(b.id, 1))

    assert [i.display_order for i in repo.list_for_profile(a.id)] == [1, 2, 3]
    assert repo.count_for_profile(a.id) == 3
    assert repo.count_for_profile(b.id) == 1
    assert repo.count_for_profile(999) == 0


def test_image_update_and_idempotent_delete(session):
    profiles = SqlProfileRepository(session)
    p = profiles.add(ProfileDto(id=None, profile_type="customer", name="A", email="a@example.com"))
    repo = SqlImageRepository(session)
    image = repo.add(_image(p.id, 1))
    assert repo.get_by_id(image.id).image_data == b"\x89PNG\r\n\x1a\n"

    image.is_priority = False
    repo.update(image)
    assert repo.get_by_id(image.id).is_priority is False

    repo.delete(image.id)
    repo.delete(image.id)
    assert repo.exists(image.id) is False


def test_deleting_profile_removes_its_images(session):
    profiles = SqlProfileRepository(session)
    p = profiles.add(ProfileDto(id=None, profile_type="customer", name="A", email="a@example.com"))
    repo = SqlImageRepository(session)
    for order in range(1, 4):
        repo.add(_image(p.id, order, uploaded_at=datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=order)))
    profiles.delete(p.id)
    assert repo.count_for_profile(p.id) == 0


def test_service_upload_persists_through_sql_store(session):
    profiles = SqlProfileRepository(session)
    p = profiles.add(ProfileDto(id=None, profile_type="customer", name="A", email="a@example.com"))
    svc = ProfileImageService(image_repo=SqlImageRepository(session), profile_repo=profiles)
    jpeg = base64.b64encode(b"\xff\xd8\xff\xe0" + b"\x00" * 16).decode()

    out = svc.upload(p.id, [jpeg, jpeg], ["a.jpg", "b.jpg"])

    assert out.success is True
    assert out.images[0].uploaded_at is not None
    stored = svc.list_for_profile(p.id)
    assert [i.file_name for i in stored] == ["a.jpg", "b.jpg"]
    assert [i.display_order for i in stored] == [1, 2]


def test_profile_service_create_persists_through_sql_store(session):
    svc = ProfileService(repo=SqlProfileRepository(session))
    p = svc.create_profile("lead", "Ada", "ada@example.com")
    assert svc.get_profile(p.id).created_at is not None
