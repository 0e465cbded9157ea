"""
CRUD operations for experience and education entries.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.db.models import Education, Experience
from medlink.schemas.career import EducationCreate, EducationRead, ExperienceCreate, ExperienceRead
from medlink.store.guard import StoreResult, guard


async def get_experiences(db: AsyncSession, profile_id: str) -> StoreResult[List[ExperienceRead]]:
    """
    Get a profile's work experience, most recent start date first.
    """
    async def operation(session: AsyncSession) -> List[ExperienceRead]:
        result = await session.execute(
            select(Experience)
            .where(Experience.profile_id == profile_id)
            .order_by(Experience.start_date.desc())
        )
        return [ExperienceRead.model_validate(row) for row in result.scalars().all()]

    return await guard.run(db, "get_experiences", operation, default=list)


async def get_education(db: AsyncSession, profile_id: str) -> StoreResult[List[EducationRead]]:
    """
    Get a profile's education, most recent start date first.
    """
    async def operation(session: AsyncSession) -> List[EducationRead]:
        result = await session.execute(
            select(Education)
            .where(Education.profile_id == profile_id)
            .order_by(Education.start_date.desc())
        )
        return [EducationRead.model_validate(row) for row in result.scalars().all()]

    return await guard.run(db, "get_education", operation, default=list)


async def add_experience(db: AsyncSession, experience_in: ExperienceCreate) -> StoreResult[Optional[ExperienceRead]]:
    async def operation(session: AsyncSession) -> ExperienceRead:
        experience = Experience(**experience_in.model_dump())
        session.add(experience)
        await session.flush()
        await session.refresh(experience)
        return ExperienceRead.model_validate(experience)

    return await guard.run(db, "add_experience", operation, default=None, write=True)


async def add_education(db: AsyncSession, education_in: EducationCreate) -> StoreResult[Optional[EducationRead]]:
    async def operation(session: AsyncSession) -> EducationRead:
        education = Education(**education_in.model_dump())
        session.add(education)
        await session.flush()
        await session.refresh(education)
        return EducationRead.model_validate(education)

    return await guard.run(db, "add_education", operation, default=None, write=True)
