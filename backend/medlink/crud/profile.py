"""
CRUD operations for profiles and profile views.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.db.base import utcnow
from medlink.db.models import Profile, ProfileView
from medlink.schemas.profile import (
    ProfileRead,
    ProfileUpdate,
    missing_profile,
    placeholder_profile,
    profile_update_data,
)
from medlink.store.guard import Outcome, RecordNotFound, StoreResult, guard

logger = logging.getLogger(__name__)


async def _load(db: AsyncSession, profile_id: str) -> Optional[Profile]:
    result = await db.execute(select(Profile).where(Profile.id == profile_id))
    return result.scalar_one_or_none()


async def get_profile(db: AsyncSession, profile_id: str) -> StoreResult[ProfileRead]:
    """
    Get a profile by ID.

    Never returns None: when the store is unavailable or has no such row, a
    placeholder carrying ``profile_id`` is returned. Nothing is written.

    Args:
        db: Database session
        profile_id: Profile ID

    Returns:
        StoreResult[ProfileRead]: Stored profile or placeholder
    """
    async def operation(session: AsyncSession) -> ProfileRead:
        profile = await _load(session, profile_id)
        if profile is None:
            raise RecordNotFound(f"profile {profile_id}")
        return ProfileRead.model_validate(profile)

    return await guard.run(
        db,
        "get_profile",
        operation,
        default=lambda: placeholder_profile(profile_id),
        on_missing=lambda: missing_profile(profile_id),
    )


async def update_profile(
    db: AsyncSession,
    profile_id: str,
    obj_in: ProfileUpdate | Dict[str, Any],
) -> StoreResult[Optional[ProfileRead]]:
    """
    Update an existing profile.

    Args:
        db: Database session.
        profile_id: The profile to update.
        obj_in: ProfileUpdate schema or dict containing update data.

    Returns:
        The updated profile, or None when it does not exist or the write failed.
    """
    async def operation(session: AsyncSession) -> ProfileRead:
        update_data = profile_update_data(obj_in)
        profile = await _load(session, profile_id)
        if profile is None:
            raise RecordNotFound(f"profile {profile_id}")

        for field, value in update_data.items():
            setattr(profile, field, value)
        profile.updated_at = utcnow()

        await session.flush()
        await session.refresh(profile)
        return ProfileRead.model_validate(profile)

    return await guard.run(db, "update_profile", operation, default=None, write=True)


async def ensure_profile_exists(
    db: AsyncSession,
    profile_id: str,
    email: str,
    full_name: str,
) -> StoreResult[ProfileRead]:
    """
    Return the stored profile, creating a minimal one from email/name if absent.

    Calling it again returns the row the first call stored; existing rows are
    never overwritten. When the store is unavailable a placeholder seeded with
    email/name is returned and nothing is written.
    """
    async def operation(session: AsyncSession) -> ProfileRead:
        profile = await _load(session, profile_id)
        if profile is not None:
            logger.debug(f"Profile {profile_id} already exists")
            return ProfileRead.model_validate(profile)

        profile = Profile(id=profile_id, email=email, full_name=full_name)
        session.add(profile)
        try:
            await session.flush()
        except IntegrityError:
            # A concurrent call inserted the same id first; use its row
            await session.rollback()
            profile = await _load(session, profile_id)
            if profile is None:
                raise
            return ProfileRead.model_validate(profile)

        await session.refresh(profile)
        logger.info(f"Created profile {profile_id}")
        return ProfileRead.model_validate(profile)

    return await guard.run(
        db,
        "ensure_profile_exists",
        operation,
        default=lambda: placeholder_profile(profile_id, email=email, full_name=full_name),
        write=True,
    )


async def record_profile_view(db: AsyncSession, viewer_id: str, profile_id: str) -> StoreResult[bool]:
    """
    Log that ``viewer_id`` looked at ``profile_id``.

    Self-views are ignored without touching the store. A repeat view refreshes
    the existing row's timestamp. The profile_views counter is not changed here.

    Returns:
        StoreResult[bool]: True when a view row was written
    """
    if viewer_id == profile_id:
        return StoreResult(Outcome.SUCCESS, False)

    pair = (ProfileView.viewer_id == viewer_id, ProfileView.profile_id == profile_id)

    async def touch(session: AsyncSession) -> int:
        result = await session.execute(
            update(ProfileView)
            .where(*pair)
            .values(viewed_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def operation(session: AsyncSession) -> bool:
        existing = await session.scalar(select(ProfileView.id).where(*pair))
        if existing is not None:
            await touch(session)
            return True

        session.add(ProfileView(viewer_id=viewer_id, profile_id=profile_id, viewed_at=utcnow()))
        try:
            await session.flush()
        except IntegrityError:
            # Another request logged the same pair first; refresh its row instead
            await session.rollback()
            if await touch(session) == 0:
                raise
        return True

    return await guard.run(db, "record_profile_view", operation, default=False, write=True)
