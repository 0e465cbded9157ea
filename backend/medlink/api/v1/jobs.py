"""
API endpoints for job postings and applications.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.api.dependencies import unwrap
from medlink.crud import job as job_crud
from medlink.db.session import get_db
from medlink.schemas.organization import (
    JobApplicationBase,
    JobApplicationCreate,
    JobApplicationRead,
    JobCreate,
    JobRead,
    JobWithCompany,
)

router = APIRouter(
    prefix="/jobs",
    tags=["jobs"],
)


@router.get("/", response_model=List[JobWithCompany])
async def list_jobs_endpoint(db: AsyncSession = Depends(get_db)):
    """
    Active jobs, newest first, with the hiring institution and poster attached.
    """
    return unwrap(await job_crud.get_jobs(db))


@router.post("/", response_model=Optional[JobRead], status_code=status.HTTP_201_CREATED)
async def create_job_endpoint(body: JobCreate, db: AsyncSession = Depends(get_db)):
    return unwrap(await job_crud.create_job(db, body))


@router.post("/{job_id}/applications", response_model=Optional[JobApplicationRead], status_code=status.HTTP_201_CREATED)
async def apply_endpoint(job_id: str, body: JobApplicationBase, db: AsyncSession = Depends(get_db)):
    application_in = JobApplicationCreate(job_id=job_id, **body.model_dump())
    return unwrap(await job_crud.apply_to_job(db, application_in))
