"""
API endpoints for profile-related operations.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.api.dependencies import unwrap
from medlink.crud import career as career_crud
from medlink.crud import connection as connection_crud
from medlink.crud import follow as follow_crud
from medlink.crud import post as post_crud
from medlink.crud import profile as profile_crud
from medlink.db.session import get_db
from medlink.schemas.api import ActionResponse, EnsureProfileRequest, ProfileViewRequest
from medlink.schemas.career import (
    EducationBase,
    EducationCreate,
    EducationRead,
    ExperienceBase,
    ExperienceCreate,
    ExperienceRead,
)
from medlink.schemas.post import PostWithAuthor
from medlink.schemas.profile import ProfileRead, ProfileUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/profiles",
    tags=["profiles"],
)


@router.post("/ensure", response_model=ProfileRead)
async def ensure_profile_endpoint(body: EnsureProfileRequest, db: AsyncSession = Depends(get_db)):
    """
    Get the caller's profile, creating a minimal one on first sign-in.
    """
    result = await profile_crud.ensure_profile_exists(db, body.id, body.email, body.full_name)
    return unwrap(result)


@router.get("/{profile_id}", response_model=ProfileRead)
async def get_profile_endpoint(profile_id: str, db: AsyncSession = Depends(get_db)):
    return unwrap(await profile_crud.get_profile(db, profile_id))


@router.patch("/{profile_id}", response_model=Optional[ProfileRead])
async def update_profile_endpoint(profile_id: str, body: ProfileUpdate, db: AsyncSession = Depends(get_db)):
    result = await profile_crud.update_profile(db, profile_id, body)
    return unwrap(result, not_found_detail="Profile not found")


@router.post("/{profile_id}/views", response_model=ActionResponse)
async def record_view_endpoint(profile_id: str, body: ProfileViewRequest, db: AsyncSession = Depends(get_db)):
    result = await profile_crud.record_profile_view(db, body.viewer_id, profile_id)
    return ActionResponse(success=unwrap(result))


@router.get("/{profile_id}/posts", response_model=List[PostWithAuthor])
async def get_profile_posts_endpoint(profile_id: str, db: AsyncSession = Depends(get_db)):
    return unwrap(await post_crud.get_posts_by_author(db, profile_id))


@router.get("/{profile_id}/experiences", response_model=List[ExperienceRead])
async def get_experiences_endpoint(profile_id: str, db: AsyncSession = Depends(get_db)):
    return unwrap(await career_crud.get_experiences(db, profile_id))


@router.post("/{profile_id}/experiences", response_model=Optional[ExperienceRead], status_code=201)
async def add_experience_endpoint(profile_id: str, body: ExperienceBase, db: AsyncSession = Depends(get_db)):
    experience_in = ExperienceCreate(profile_id=profile_id, **body.model_dump())
    return unwrap(await career_crud.add_experience(db, experience_in))


@router.get("/{profile_id}/education", response_model=List[EducationRead])
async def get_education_endpoint(profile_id: str, db: AsyncSession = Depends(get_db)):
    return unwrap(await career_crud.get_education(db, profile_id))


@router.post("/{profile_id}/education", response_model=Optional[EducationRead], status_code=201)
async def add_education_endpoint(profile_id: str, body: EducationBase, db: AsyncSession = Depends(get_db)):
    education_in = EducationCreate(profile_id=profile_id, **body.model_dump())
    return unwrap(await career_crud.add_education(db, education_in))


@router.get("/{profile_id}/suggested-connections", response_model=List[ProfileRead])
async def suggested_connections_endpoint(
    profile_id: str,
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    return unwrap(await connection_crud.get_suggested_connections(db, profile_id, limit))


@router.get("/{profile_id}/suggested-institutions", response_model=List[ProfileRead])
async def suggested_institutions_endpoint(
    profile_id: str,
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    return unwrap(await follow_crud.get_suggested_institutions(db, profile_id, limit))
