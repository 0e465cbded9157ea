"""
CRUD operations for events and event registrations.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.db.models import Event, EventAttendee, Profile
from medlink.schemas.organization import (
    EventAttendeeRead,
    EventCreate,
    EventRead,
    EventRegistration,
    EventWithOrganizer,
)
from medlink.schemas.profile import ProfileRead
from medlink.store.guard import StoreResult, guard
from medlink.store.relations import attach_related


async def create_event(db: AsyncSession, event_in: EventCreate) -> StoreResult[Optional[EventRead]]:
    async def operation(session: AsyncSession) -> EventRead:
        event = Event(**event_in.model_dump())
        session.add(event)
        await session.flush()
        await session.refresh(event)
        return EventRead.model_validate(event)

    return await guard.run(db, "create_event", operation, default=None, write=True)


async def get_events(db: AsyncSession) -> StoreResult[List[EventWithOrganizer]]:
    """
    Get all events, soonest start first, with the organizer attached.
    """
    async def operation(session: AsyncSession) -> List[EventWithOrganizer]:
        result = await session.execute(select(Event).order_by(Event.start_date.asc()))
        events = [EventRead.model_validate(row) for row in result.scalars().all()]
        return await attach_related(
            session, events, EventWithOrganizer,
            key="organizer_id", field="organizer", model=Profile, schema=ProfileRead,
        )

    return await guard.run(db, "get_events", operation, default=list)


async def register_for_event(
    db: AsyncSession,
    registration_in: EventRegistration,
) -> StoreResult[Optional[EventAttendeeRead]]:
    async def operation(session: AsyncSession) -> EventAttendeeRead:
        attendee = EventAttendee(**registration_in.model_dump())
        session.add(attendee)
        await session.flush()
        await session.refresh(attendee)
        return EventAttendeeRead.model_validate(attendee)

    return await guard.run(db, "register_for_event", operation, default=None, write=True)
