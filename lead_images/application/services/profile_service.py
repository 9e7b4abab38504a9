from dataclasses import dataclass
from typing import List
from datetime import datetime, timezone

from ...exceptions import NotFoundError
from ..ports.profile_repo import ProfileRepository, ProfileDto


@dataclass
class ProfileService:
    repo: ProfileRepository

    def list_profiles(self) -> List[ProfileDto]:
        return self.repo.list_all()

    def get_profile(self, profile_id: int) -> ProfileDto:
        profile = self.repo.get_by_id(profile_id)
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    def create_profile(self, profile_type: str, name: str, email: str) -> ProfileDto:
        profile = ProfileDto(
            id=None,
            profile_type=profile_type,
            name=name,
            email=email,
            created_at=datetime.now(timezone.utc),
        )
        return self.repo.add(profile)

    def update_profile(self, profile_id: int, profile_type: str, name: str, email: str) -> ProfileDto:
        profile = self.get_profile(profile_id)
        profile.profile_type = profile_type
        profile.name = name
        profile.email = email
        self.repo.update(profile)
        return profile

    def delete_profile(self, profile_id: int) -> None:
        if not self.repo.exists(profile_id):
            raise NotFoundError("Profile not found")
        self.repo.delete(profile_id)

    def profile_exists(self, profile_id: int) -> bool:
        return self.repo.exists(profile_id)
