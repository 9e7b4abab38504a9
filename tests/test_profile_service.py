from datetime import datetime, timezone

import pytest
from lead_images.application.services.profile_service import ProfileService
from lead_images.exceptions import NotFoundError


class FakeProfiles:
    def __init__(self):
        self._id = 1
        self.profiles = {}
        self.updates = []

    def list_all(self):
        return sorted(self.profiles.values(), key=lambda p: p.created_at, reverse=True)

    def get_by_id(self, profile_id):
        return self.profiles.get(profile_id)

    def add(self, profile):
        profile.id = self._id
        self._id += 1
        self.profiles[profile.id] = profile
        return profile

    def update(self, profile):
        self.updates.append(profile.id)
        self.profiles[profile.id] = profile

    def delete(self, profile_id):
        self.profiles.pop(profile_id, None)

    def exists(self, profile_id):
        return profile_id in self.profiles


def test_create_profile_assigns_timestamp():
    repo = FakeProfiles()
    svc = ProfileService(repo=repo)
    p = svc.create_profile("customer", "Ada", "ada@example.com")
    assert p.id == 1
    assert p.created_at is not None
    assert svc.profile_exists(1) is True


def test_list_profiles_newest_first():
    repo = FakeProfiles()
    svc = ProfileService(repo=repo)
    svc.create_profile("customer", "Ada", "ada@example.com")
    repo.profiles[1].created_at = datetime(2020, 1, 1, tzinfo=timezone.utc)
    svc.create_profile("lead", "Grace", "grace@example.com")
    assert [p.name for p in svc.list_profiles()][0] == "Grace"


def test_update_profile():
    repo = FakeProfiles()
    svc = ProfileService(repo=repo)
    svc.create_profile("lead", "Ada", "ada@example.com")
    p = svc.update_profile(1, "customer", "Ada L.", "ada@example.com")
    assert p.profile_type == "customer"
    assert repo.updates == [1]


def test_missing_profile():
    repo = FakeProfiles()
    svc = ProfileService(repo=repo)
    with pytest.raises(NotFoundError):
        svc.get_profile(5)
    with pytest.raises(NotFoundError):
        svc.update_profile(5, "lead", "x", "x@example.com")
    with pytest.raises(NotFoundError):
        svc.delete_profile(5)


def test_delete_profile():
    repo = FakeProfiles()
    svc = ProfileService(repo=repo)
    svc.create_profile("lead", "Ada", "ada@example.com")
    svc.delete_profile(1)
    assert svc.profile_exists(1) is False
