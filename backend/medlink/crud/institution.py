"""
CRUD operations for institutions.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.db.models import Institution
from medlink.schemas.organization import InstitutionCreate, InstitutionRead
from medlink.store.guard import StoreResult, guard


async def create_institution(db: AsyncSession, institution_in: InstitutionCreate) -> StoreResult[Optional[InstitutionRead]]:
    """
    Create a new institution.

    Args:
        db: Database session
        institution_in: Institution data

    Returns:
        StoreResult[Optional[InstitutionRead]]: Created institution, None on failure
    """
    async def operation(session: AsyncSession) -> InstitutionRead:
        institution = Institution(**institution_in.model_dump())
        session.add(institution)
        await session.flush()
        await session.refresh(institution)
        return InstitutionRead.model_validate(institution)

    return await guard.run(db, "create_institution", operation, default=None, write=True)


async def get_institutions(db: AsyncSession) -> StoreResult[List[InstitutionRead]]:
    """
    Get all institutions, newest first.
    """
    async def operation(session: AsyncSession) -> List[InstitutionRead]:
        result = await session.execute(select(Institution).order_by(Institution.created_at.desc()))
        return [InstitutionRead.model_validate(row) for row in result.scalars().all()]

    return await guard.run(db, "get_institutions", operation, default=list)
