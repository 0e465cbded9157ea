"""
API endpoints for institutions.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.api.dependencies import unwrap
from medlink.crud import institution as institution_crud
from medlink.db.session import get_db
from medlink.schemas.organization import InstitutionCreate, InstitutionRead

router = APIRouter(
    prefix="/institutions",
    tags=["institutions"],
)


@router.get("/", response_model=List[InstitutionRead])
async def list_institutions_endpoint(db: AsyncSession = Depends(get_db)):
    return unwrap(await institution_crud.get_institutions(db))


@router.post("/", response_model=Optional[InstitutionRead], status_code=status.HTTP_201_CREATED)
async def create_institution_endpoint(body: InstitutionCreate, db: AsyncSession = Depends(get_db)):
    return unwrap(await institution_crud.create_institution(db, body))
