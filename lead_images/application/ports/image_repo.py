from dataclasses import dataclass
from typing import List, Optional
from datetime import datetime


@dataclass
class ProfileImageDto:
    id: Optional[int]
    profile_id: int
    image_data: bytes
    file_name: str
    content_type: str
    uploaded_at: datetime
    display_order: int
    is_priority: bool


class ImageRepository:
    def get_by_id(self, image_id: int) -> Optional[ProfileImageDto]:
        ...

    def list_for_profile(self, profile_id: int) -> List[ProfileImageDto]:
        """Images of a profile ordered by display order ascending."""
        ...

    def count_for_profile(self, profile_id: int) -> int:
        ...

    def add(self, image: ProfileImageDto) -> ProfileImageDto:
        """Persist a new image and return it with its assigned id."""
        ...

    def update(self, image: ProfileImageDto) -> None:
        ...

    def delete(self, image_id: int) -> None:
        """Remove an image; absent ids are ignored."""
        ...

    def exists(self, image_id: int) -> bool:
        ...
