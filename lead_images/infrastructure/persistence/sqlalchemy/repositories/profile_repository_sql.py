from typing import List, Optional
from sqlmodel import Session, select

from .....db.models import Profile, ProfileImage
from .....application.ports.profile_repo import ProfileRepository, ProfileDto


class SqlProfileRepository(ProfileRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, p: Profile) -> ProfileDto:
        return ProfileDto(
            id=p.id,
            profile_type=p.profile_type,
            name=p.name,
            email=p.email,
            created_at=p.created_at,
        )

    def list_all(self) -> List[ProfileDto]:
        rows = self.session.exec(select(Profile).order_by(Profile.created_at.desc())).all()
        return [self._to_dto(r) for r in rows]

    def get_by_id(self, profile_id: int) -> Optional[ProfileDto]:
        p = self.session.get(Profile, profile_id)
        return self._to_dto(p) if p else None

    def add(self, profile: ProfileDto) -> ProfileDto:
        p = Profile(
            profile_type=profile.profile_type,
            name=profile.name,
            email=profile.email,
        )
        if profile.created_at is not None:
            p.created_at = profile.created_at
        self.session.add(p)
        self.session.commit()
        self.session.refresh(p)
        return self._to_dto(p)

    def update(self, profile: ProfileDto) -> None:
        p = self.session.get(Profile, profile.id)
        if not p:
            return
        p.profile_type = profile.profile_type
        p.name = profile.name
        p.email = profile.email
        self.session.add(p)
        self.session.commit()

    def delete(self, profile_id: int) -> None:
        p = self.session.get(Profile, profile_id)
        if not p:
            return
        images = self.session.exec(select(ProfileImage).where(ProfileImage.profile_id == profile_id)).all()
        for image in images:
            self.session.delete(image)
        self.session.delete(p)
        self.session.commit()

    def exists(self, profile_id: int) -> bool:
        return self.session.get(Profile, profile_id) is not None
