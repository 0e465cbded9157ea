"""
CRUD operations for follows.
"""
import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.core.config import settings
from medlink.db.models import Follow, Profile
from medlink.schemas.common import ProfileType
from medlink.schemas.network import FollowRead, FollowWithProfile
from medlink.schemas.profile import ProfileRead
from medlink.store.guard import StoreResult, guard
from medlink.store.relations import attach_related

logger = logging.getLogger(__name__)


async def follow_user(
    db: AsyncSession,
    follower_id: str,
    following_id: str,
    follower_type: ProfileType = ProfileType.INDIVIDUAL,
    following_type: ProfileType = ProfileType.INDIVIDUAL,
) -> StoreResult[Optional[FollowRead]]:
    """
    Follow a profile. Following again returns the existing row.
    """
    async def load(session: AsyncSession) -> Optional[Follow]:
        result = await session.execute(
            select(Follow).where(Follow.follower_id == follower_id, Follow.following_id == following_id)
        )
        return result.scalar_one_or_none()

    async def operation(session: AsyncSession) -> FollowRead:
        follow = await load(session)
        if follow is not None:
            return FollowRead.model_validate(follow)

        follow = Follow(
            follower_id=follower_id,
            following_id=following_id,
            follower_type=ProfileType(follower_type).value,
            following_type=ProfileType(following_type).value,
        )
        session.add(follow)
        try:
            await session.flush()
        except IntegrityError:
            # Followed concurrently; return the row that won
            await session.rollback()
            follow = await load(session)
            if follow is None:
                raise
            return FollowRead.model_validate(follow)

        await session.refresh(follow)
        return FollowRead.model_validate(follow)

    return await guard.run(db, "follow_user", operation, default=None, write=True)


async def unfollow_user(db: AsyncSession, follower_id: str, following_id: str) -> StoreResult[bool]:
    """
    Stop following. Returns True when a follow row was removed.
    """
    async def operation(session: AsyncSession) -> bool:
        result = await session.execute(
            delete(Follow)
            .where(Follow.follower_id == follower_id, Follow.following_id == following_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    return await guard.run(db, "unfollow_user", operation, default=False, write=True)


async def is_following(db: AsyncSession, follower_id: str, following_id: str) -> StoreResult[bool]:
    async def operation(session: AsyncSession) -> bool:
        follow_id = await session.scalar(
            select(Follow.id)
            .where(Follow.follower_id == follower_id, Follow.following_id == following_id)
            .limit(1)
        )
        return follow_id is not None

    return await guard.run(db, "is_following", operation, default=False)


async def get_followers(db: AsyncSession, user_id: str) -> StoreResult[List[FollowWithProfile]]:
    """
    Get who follows the user, newest first, with each follower's profile.
    """
    async def operation(session: AsyncSession) -> List[FollowWithProfile]:
        result = await session.execute(
            select(Follow).where(Follow.following_id == user_id).order_by(Follow.created_at.desc())
        )
        follows = [FollowRead.model_validate(row) for row in result.scalars().all()]
        return await attach_related(
            session, follows, FollowWithProfile,
            key="follower_id", field="follower", model=Profile, schema=ProfileRead,
        )

    return await guard.run(db, "get_followers", operation, default=list)


async def get_following(db: AsyncSession, user_id: str) -> StoreResult[List[FollowWithProfile]]:
    """
    Get who the user follows, newest first, with each followed profile.
    """
    async def operation(session: AsyncSession) -> List[FollowWithProfile]:
        result = await session.execute(
            select(Follow).where(Follow.follower_id == user_id).order_by(Follow.created_at.desc())
        )
        follows = [FollowRead.model_validate(row) for row in result.scalars().all()]
        return await attach_related(
            session, follows, FollowWithProfile,
            key="following_id", field="following", model=Profile, schema=ProfileRead,
        )

    return await guard.run(db, "get_following", operation, default=list)


async def get_suggested_institutions(
    db: AsyncSession,
    user_id: str,
    limit: Optional[int] = None,
) -> StoreResult[List[ProfileRead]]:
    """
    Get institution profiles the user does not follow yet, capped at ``limit``.
    """
    limit = limit or settings.DEFAULT_SUGGESTION_LIMIT

    async def operation(session: AsyncSession) -> List[ProfileRead]:
        followed = await session.execute(select(Follow.following_id).where(Follow.follower_id == user_id))
        followed_ids = [row[0] for row in followed.all()]

        query = (
            select(Profile)
            .where(Profile.profile_type == ProfileType.INSTITUTION.value, Profile.id != user_id)
            .limit(limit)
        )
        if followed_ids:
            query = query.where(Profile.id.not_in(followed_ids))

        result = await session.execute(query)
        return [ProfileRead.model_validate(row) for row in result.scalars().all()]

    return await guard.run(db, "get_suggested_institutions", operation, default=list)
