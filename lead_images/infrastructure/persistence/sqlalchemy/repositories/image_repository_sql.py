from typing import List, Optional
from sqlmodel import Session, select, func

from .....db.models import ProfileImage
from .....application.ports.image_repo import ImageRepository, ProfileImageDto


class SqlImageRepository(ImageRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, i: ProfileImage) -> ProfileImageDto:
        return ProfileImageDto(
            id=i.id,
            profile_id=i.profile_id,
            image_data=i.image_data,
            file_name=i.file_name,
            content_type=i.content_type,
            uploaded_at=i.uploaded_at,
            display_order=i.display_order,
            is_priority=i.is_priority,
        )

    def get_by_id(self, image_id: int) -> Optional[ProfileImageDto]:
        i = self.session.get(ProfileImage, image_id)
        return self._to_dto(i) if i else None

    def list_for_profile(self, profile_id: int) -> List[ProfileImageDto]:
        rows = self.session.exec(
            select(ProfileImage)
            .where(ProfileImage.profile_id == profile_id)
            .order_by(ProfileImage.display_order, ProfileImage.id)
        ).all()
        return [self._to_dto(r) for r in rows]

    def count_for_profile(self, profile_id: int) -> int:
        return self.session.exec(
            select(func.count(ProfileImage.id)).where(ProfileImage.profile_id == profile_id)
        ).first() or 0

    def add(self, image: ProfileImageDto) -> ProfileImageDto:
        record = ProfileImage(
            profile_id=image.profile_id,
            image_data=image.image_data,
            file_name=image.file_name,
            content_type=image.content_type,
            uploaded_at=image.uploaded_at,
            display_order=image.display_order,
            is_priority=image.is_priority,
        )
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return self._to_dto(record)

    def update(self, image: ProfileImageDto) -> None:
        record = self.session.get(ProfileImage, image.id)
        if not record:
            return
        record.file_name = image.file_name
        record.content_type = image.content_type
        record.display_order = image.display_order
        record.is_priority = image.is_priority
        self.session.add(record)
        self.session.commit()

    def delete(self, image_id: int) -> None:
        record = self.session.get(ProfileImage, image_id)
        if not record:
            return
        self.session.delete(record)
        self.session.commit()

    def exists(self, image_id: int) -> bool:
        return self.session.get(ProfileImage, image_id) is not None
