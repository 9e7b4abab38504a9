from dataclasses import dataclass
from typing import List, Optional
from datetime import datetime


@dataclass
class ProfileDto:
    id: Optional[int]
    profile_type: str
    name: str
    email: str
    created_at: Optional[datetime] = None


class ProfileRepository:
    def list_all(self) -> List[ProfileDto]:
        ...

    def get_by_id(self, profile_id: int) -> Optional[ProfileDto]:
        ...

    def add(self, profile: ProfileDto) -> ProfileDto:
        ...

    def update(self, profile: ProfileDto) -> None:
        ...

    def delete(self, profile_id: int) -> None:
        ...

    def exists(self, profile_id: int) -> bool:
        ...
