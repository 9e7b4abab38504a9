from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session
import logging

from ..database import get_session
from ..application.services.profile_service import ProfileService
from ..infrastructure.persistence.sqlalchemy.repositories.profile_repository_sql import SqlProfileRepository
from ..schemas.profiles.profile import ProfileCreate, ProfileUpdate, ProfileResponse
from ..schemas.common.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profiles", tags=["Profiles"])


def get_profile_service(session: Session = Depends(get_session)) -> ProfileService:
    return ProfileService(repo=SqlProfileRepository(session))


def _to_response(p) -> ProfileResponse:
    return ProfileResponse(
        id=p.id,
        profile_type=p.profile_type,
        name=p.name,
        email=p.email,
        created_at=p.created_at,
    )


@router.get("", response_model=List[ProfileResponse])
def list_profiles(profile_service: ProfileService = Depends(get_profile_service)):
    return [_to_response(p) for p in profile_service.list_profiles()]


@router.get("/{profile_id}", response_model=ProfileResponse, responses={404: {"model": ErrorResponse}})
def get_profile(profile_id: int, profile_service: ProfileService = Depends(get_profile_service)):
    return _to_response(profile_service.get_profile(profile_id))


@router.post("", response_model=ProfileResponse, status_code=201)
def create_profile(profile_data: ProfileCreate, profile_service: ProfileService = Depends(get_profile_service)):
    try:
        profile = profile_service.create_profile(
            profile_type=profile_data.profile_type,
            name=profile_data.name,
            email=profile_data.email,
        )
        logger.info(f"Created {profile.profile_type} profile {profile.id}")
        return _to_response(profile)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating profile: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to create profile")


@router.put("/{profile_id}", response_model=ProfileResponse, responses={404: {"model": ErrorResponse}})
def update_profile(profile_id: int, profile_data: ProfileUpdate, profile_service: ProfileService = Depends(get_profile_service)):
    profile = profile_service.update_profile(
        profile_id,
        profile_type=profile_data.profile_type,
        name=profile_data.name,
        email=profile_data.email,
    )
    return _to_response(profile)


@router.delete("/{profile_id}", status_code=204, responses={404: {"model": ErrorResponse}})
def delete_profile(profile_id: int, profile_service: ProfileService = Depends(get_profile_service)):
    profile_service.delete_profile(profile_id)
    logger.info(f"Deleted profile {profile_id}")
    return Response(status_code=204)
