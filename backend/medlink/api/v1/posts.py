"""
API endpoints for posts, comments and likes.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.api.dependencies import unwrap
from medlink.crud import post as post_crud
from medlink.db.session import get_db
from medlink.schemas.api import ActionResponse, CommentBody, LikeBody, LikeStatusResponse
from medlink.schemas.post import CommentCreate, CommentRead, CommentWithAuthor, PostCreate, PostRead, PostWithAuthor

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/posts",
    tags=["posts"],
)


@router.get("/", response_model=List[PostWithAuthor])
async def list_posts_endpoint(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    limit: int = Query(10, ge=1, le=100, description="Posts per page"),
    db: AsyncSession = Depends(get_db),
):
    """
    Feed page, newest first. Pages past the end are empty.
    """
    return unwrap(await post_crud.get_posts(db, page=page, limit=limit))


@router.post("/", response_model=Optional[PostRead], status_code=status.HTTP_201_CREATED)
async def create_post_endpoint(body: PostCreate, db: AsyncSession = Depends(get_db)):
    logger.info(f"Creating post for author {body.author_id}")
    return unwrap(await post_crud.create_post(db, body))


@router.get("/{post_id}/comments", response_model=List[CommentWithAuthor])
async def list_comments_endpoint(post_id: str, db: AsyncSession = Depends(get_db)):
    return unwrap(await post_crud.get_post_comments(db, post_id))


@router.post("/{post_id}/comments", response_model=Optional[CommentRead], status_code=status.HTTP_201_CREATED)
async def create_comment_endpoint(post_id: str, body: CommentBody, db: AsyncSession = Depends(get_db)):
    comment_in = CommentCreate(post_id=post_id, author_id=body.author_id, content=body.content)
    return unwrap(await post_crud.create_comment(db, comment_in), not_found_detail="Post not found")


@router.post("/{post_id}/likes", response_model=ActionResponse)
async def like_post_endpoint(post_id: str, body: LikeBody, db: AsyncSession = Depends(get_db)):
    return ActionResponse(success=unwrap(await post_crud.like_post(db, post_id, body.user_id)))


@router.delete("/{post_id}/likes/{user_id}", response_model=ActionResponse)
async def unlike_post_endpoint(post_id: str, user_id: str, db: AsyncSession = Depends(get_db)):
    return ActionResponse(success=unwrap(await post_crud.unlike_post(db, post_id, user_id)))


@router.get("/{post_id}/likes/{user_id}", response_model=LikeStatusResponse)
async def like_status_endpoint(post_id: str, user_id: str, db: AsyncSession = Depends(get_db)):
    return LikeStatusResponse(liked=unwrap(await post_crud.is_post_liked(db, post_id, user_id)))
