"""
API endpoints for events and registrations.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.api.dependencies import unwrap
from medlink.crud import event as event_crud
from medlink.db.session import get_db
from medlink.schemas.organization import (
    EventAttendeeRead,
    EventCreate,
    EventRead,
    EventRegistration,
    EventRegistrationBase,
    EventWithOrganizer,
)

router = APIRouter(
    prefix="/events",
    tags=["events"],
)


@router.get("/", response_model=List[EventWithOrganizer])
async def list_events_endpoint(db: AsyncSession = Depends(get_db)):
    return unwrap(await event_crud.get_events(db))


@router.post("/", response_model=Optional[EventRead], status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(body: EventCreate, db: AsyncSession = Depends(get_db)):
    return unwrap(await event_crud.create_event(db, body))


@router.post("/{event_id}/attendees", response_model=Optional[EventAttendeeRead], status_code=status.HTTP_201_CREATED)
async def register_endpoint(event_id: str, body: EventRegistrationBase, db: AsyncSession = Depends(get_db)):
    registration_in = EventRegistration(event_id=event_id, **body.model_dump())
    return unwrap(await event_crud.register_for_event(db, registration_in))
