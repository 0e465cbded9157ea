"""
CRUD operations for jobs and job applications.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.db.models import Institution, Job, JobApplication, Profile
from medlink.schemas.organization import (
    InstitutionRead,
    JobApplicationCreate,
    JobApplicationRead,
    JobCreate,
    JobRead,
    JobWithCompany,
)
from medlink.schemas.profile import ProfileRead
from medlink.store.guard import StoreResult, guard
from medlink.store.relations import attach_related


async def create_job(db: AsyncSession, job_in: JobCreate) -> StoreResult[Optional[JobRead]]:
    async def operation(session: AsyncSession) -> JobRead:
        job = Job(**job_in.model_dump())
        session.add(job)
        await session.flush()
        await session.refresh(job)
        return JobRead.model_validate(job)

    return await guard.run(db, "create_job", operation, default=None, write=True)


async def get_jobs(db: AsyncSession) -> StoreResult[List[JobWithCompany]]:
    """
    Get all jobs, newest first, with the offering institution and the posting
    profile attached when they exist.
    """
    async def operation(session: AsyncSession) -> List[JobWithCompany]:
        result = await session.execute(select(Job).order_by(Job.created_at.desc()))
        jobs = [JobRead.model_validate(row) for row in result.scalars().all()]
        shaped = await attach_related(
            session, jobs, JobWithCompany,
            key="company_id", field="company", model=Institution, schema=InstitutionRead,
        )
        return await attach_related(
            session, shaped, JobWithCompany,
            key="posted_by", field="posted_by_user", model=Profile, schema=ProfileRead,
        )

    return await guard.run(db, "get_jobs", operation, default=list)


async def apply_to_job(
    db: AsyncSession,
    application_in: JobApplicationCreate,
) -> StoreResult[Optional[JobApplicationRead]]:
    async def operation(session: AsyncSession) -> JobApplicationRead:
        application = JobApplication(**application_in.model_dump())
        session.add(application)
        await session.flush()
        await session.refresh(application)
        return JobApplicationRead.model_validate(application)

    return await guard.run(db, "apply_to_job", operation, default=None, write=True)
