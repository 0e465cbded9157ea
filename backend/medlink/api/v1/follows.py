"""
API endpoints for following profiles.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.api.dependencies import unwrap
from medlink.crud import follow as follow_crud
from medlink.db.session import get_db
from medlink.schemas.api import ActionResponse, FollowStatusResponse
from medlink.schemas.network import FollowCreate, FollowRead, FollowWithProfile

router = APIRouter(
    prefix="/follows",
    tags=["follows"],
)


@router.post("/", response_model=Optional[FollowRead], status_code=status.HTTP_201_CREATED)
async def follow_endpoint(body: FollowCreate, db: AsyncSession = Depends(get_db)):
    if body.follower_id == body.following_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot follow yourself")
    result = await follow_crud.follow_user(
        db, body.follower_id, body.following_id, body.follower_type, body.following_type
    )
    return unwrap(result)


@router.delete("/", response_model=ActionResponse)
async def unfollow_endpoint(
    follower_id: str = Query(...),
    following_id: str = Query(...),
    db: AsyncSession = Depends(get_db),
):
    return ActionResponse(success=unwrap(await follow_crud.unfollow_user(db, follower_id, following_id)))


@router.get("/status", response_model=FollowStatusResponse)
async def follow_status_endpoint(
    follower_id: str = Query(...),
    following_id: str = Query(...),
    db: AsyncSession = Depends(get_db),
):
    return FollowStatusResponse(following=unwrap(await follow_crud.is_following(db, follower_id, following_id)))


@router.get("/{user_id}/followers", response_model=List[FollowWithProfile])
async def followers_endpoint(user_id: str, db: AsyncSession = Depends(get_db)):
    return unwrap(await follow_crud.get_followers(db, user_id))


@router.get("/{user_id}/following", response_model=List[FollowWithProfile])
async def following_endpoint(user_id: str, db: AsyncSession = Depends(get_db)):
    return unwrap(await follow_crud.get_following(db, user_id))
