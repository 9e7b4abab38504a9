from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse
from sqlmodel import Session
import logging

from ..core.config import settings
from ..database import get_session
from ..exceptions import CapacityExhaustedError, NotFoundError, ProfileTypeMismatchError
from ..application.ports.profile_repo import ProfileDto
from ..application.services.image_service import ProfileImageService
from ..application.services.image_validation import ImageValidator
from ..application.services.profile_service import ProfileService
from ..infrastructure.locking.memory_profile_locks import InMemoryProfileLocks
from ..infrastructure.persistence.sqlalchemy.repositories.image_repository_sql import SqlImageRepository
from ..infrastructure.persistence.sqlalchemy.repositories.profile_repository_sql import SqlProfileRepository
from ..schemas.common.common import ErrorResponse
from ..schemas.images.image import (
    ImageCountResponse,
    PriorityUpdateRequest,
    PriorityUpdateResponse,
    ProfileImageResponse,
    UploadImagesRequest,
    UploadImagesResponse,
)
from .profiles_router import get_profile_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/{profile_type}/{profile_id}/images", tags=["Profile Images"])

# Shared by every request handled by this process
_profile_locks = InMemoryProfileLocks()


def get_image_service(session: Session = Depends(get_session)) -> ProfileImageService:
    return ProfileImageService(
        image_repo=SqlImageRepository(session),
        profile_repo=SqlProfileRepository(session),
        validator=ImageValidator(max_size=settings.MAX_IMAGE_SIZE),
        max_images=settings.MAX_IMAGES_PER_PROFILE,
        locks=_profile_locks if settings.SERIALIZE_PROFILE_UPLOADS else None,
    )


def require_profile(profile_type: str, profile_id: int, profile_service: ProfileService = Depends(get_profile_service)) -> ProfileDto:
    profile = profile_service.get_profile(profile_id)
    if profile.profile_type.lower() != profile_type.lower():
        raise ProfileTypeMismatchError()
    return profile


def _require_owned_image(image_service: ProfileImageService, profile: ProfileDto, image_id: int):
    image = image_service.get_image(image_id)
    if not image or image.profile_id != profile.id:
        raise NotFoundError("Image not found or does not belong to this profile")
    return image


@router.get("", response_model=List[ProfileImageResponse], responses={404: {"model": ErrorResponse}})
def list_images(
    profile: ProfileDto = Depends(require_profile),
    image_service: ProfileImageService = Depends(get_image_service),
):
    return [ProfileImageResponse.from_dto(i) for i in image_service.list_for_profile(profile.id)]


@router.post("", response_model=UploadImagesResponse, responses={404: {"model": ErrorResponse}})
def upload_images(
    request: UploadImagesRequest,
    profile: ProfileDto = Depends(require_profile),
    image_service: ProfileImageService = Depends(get_image_service),
):
    try:
        result = image_service.upload(profile.id, request.base64_images, request.file_names)
    except CapacityExhaustedError as e:
        body = UploadImagesResponse(
            success=False,
            message=e.detail,
            images_uploaded=0,
            remaining_slots=e.remaining_slots,
        )
        return JSONResponse(status_code=e.status_code, content=body.model_dump(mode="json"))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error uploading images for profile {profile.id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to upload images")

    if not result.success:
        remaining = max(0, image_service.capacity(profile.id).remaining_slots)
        body = UploadImagesResponse(
            success=False,
            message=result.message,
            images_uploaded=0,
            remaining_slots=remaining,
            evicted_image_ids=[i.id for i in result.evicted],
        )
        return JSONResponse(status_code=400, content=body.model_dump(mode="json"))

    logger.info(f"Profile {profile.id}: {result.message}")
    return UploadImagesResponse(
        success=True,
        message=result.message,
        images_uploaded=result.images_uploaded,
        remaining_slots=result.remaining_slots,
        images=[ProfileImageResponse.from_dto(i) for i in result.images],
        evicted_image_ids=[i.id for i in result.evicted],
    )


@router.get("/count", response_model=ImageCountResponse, responses={404: {"model": ErrorResponse}})
def get_image_count(
    profile: ProfileDto = Depends(require_profile),
    image_service: ProfileImageService = Depends(get_image_service),
):
    capacity = image_service.capacity(profile.id)
    return ImageCountResponse(
        count=capacity.count,
        max_allowed=capacity.max_allowed,
        remaining_slots=capacity.remaining_slots,
    )


@router.get("/{image_id}", response_model=ProfileImageResponse, responses={404: {"model": ErrorResponse}})
def get_image(
    image_id: int,
    profile: ProfileDto = Depends(require_profile),
    image_service: ProfileImageService = Depends(get_image_service),
):
    return ProfileImageResponse.from_dto(_require_owned_image(image_service, profile, image_id))


@router.delete("/{image_id}", status_code=204, responses={404: {"model": ErrorResponse}})
def delete_image(
    image_id: int,
    profile: ProfileDto = Depends(require_profile),
    image_service: ProfileImageService = Depends(get_image_service),
):
    _require_owned_image(image_service, profile, image_id)
    if not image_service.delete_image(image_id):
        raise NotFoundError("Image not found or does not belong to this profile")
    return Response(status_code=204)


@router.patch("/{image_id}/priority", response_model=PriorityUpdateResponse, responses={404: {"model": ErrorResponse}})
def set_image_priority(
    image_id: int,
    priority: PriorityUpdateRequest,
    profile: ProfileDto = Depends(require_profile),
    image_service: ProfileImageService = Depends(get_image_service),
):
    _require_owned_image(image_service, profile, image_id)
    image = image_service.set_priority(image_id, priority.is_priority)
    return PriorityUpdateResponse(
        message=f"Image priority {'set' if image.is_priority else 'removed'}",
        is_priority=image.is_priority,
    )
