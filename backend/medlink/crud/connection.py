"""
CRUD operations for connections between profiles.

A connection row may have either party as requester, so every pair lookup
matches the unordered pair {user, target}.
"""
import logging
from typing import List, Optional

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.core.config import settings
from medlink.db.base import utcnow
from medlink.db.models import Connection, Profile
from medlink.schemas.common import ConnectionState, ConnectionStatus
from medlink.schemas.network import ConnectionRead, ConnectionWithProfile
from medlink.schemas.profile import ProfileRead
from medlink.store.guard import Outcome, RecordNotFound, StoreResult, guard
from medlink.store.relations import attach_related, fetch_by_ids

logger = logging.getLogger(__name__)


def pair_clause(user_id: str, target_id: str):
    """WHERE clause matching a connection between the two ids in either direction."""
    return or_(
        and_(Connection.requester_id == user_id, Connection.recipient_id == target_id),
        and_(Connection.requester_id == target_id, Connection.recipient_id == user_id),
    )


async def _find_pair(db: AsyncSession, user_id: str, target_id: str) -> Optional[Connection]:
    result = await db.execute(
        select(Connection)
        .where(pair_clause(user_id, target_id))
        .order_by(Connection.updated_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_connections(db: AsyncSession, user_id: str) -> StoreResult[List[ProfileRead]]:
    """
    Get the profiles on the other side of the user's accepted connections.
    """
    async def operation(session: AsyncSession) -> List[ProfileRead]:
        result = await session.execute(
            select(Connection)
            .where(
                or_(Connection.requester_id == user_id, Connection.recipient_id == user_id),
                Connection.status == ConnectionStatus.ACCEPTED.value,
            )
            .order_by(Connection.updated_at.desc())
        )
        other_ids = [
            row.recipient_id if row.requester_id == user_id else row.requester_id
            for row in result.scalars().all()
        ]
        profiles = await fetch_by_ids(session, Profile, ProfileRead, other_ids)
        return [profiles[other_id] for other_id in other_ids if other_id in profiles]

    return await guard.run(db, "get_connections", operation, default=list)


async def get_connection_status(
    db: AsyncSession,
    user_id: str,
    target_id: str,
) -> StoreResult[Optional[ConnectionStatus]]:
    """
    Get the stored status of the connection between two profiles.

    The answer does not depend on argument order. None means no connection.
    """
    async def operation(session: AsyncSession) -> Optional[ConnectionStatus]:
        connection = await _find_pair(session, user_id, target_id)
        if connection is None:
            return None
        return ConnectionStatus(connection.status)

    return await guard.run(db, "get_connection_status", operation, default=None)


async def get_connection_state(db: AsyncSession, user_id: str, target_id: str) -> StoreResult[ConnectionState]:
    """
    Same lookup as get_connection_status, collapsed to none/pending/connected.
    """
    result = await get_connection_status(db, user_id, target_id)
    return StoreResult(result.outcome, ConnectionState.from_status(result.value), result.error)


async def send_connection_request(
    db: AsyncSession,
    requester_id: str,
    recipient_id: str,
) -> StoreResult[Optional[ConnectionRead]]:
    """
    Create a pending connection request.

    If the pair already has a connection row (in either direction) that row is
    returned and nothing is inserted. Concurrent requests for the same pair can
    still race; uniqueness of the pair is left to the store. A request to
    oneself is ignored and yields None.
    """
    if requester_id == recipient_id:
        logger.info(f"Ignoring connection request from {requester_id} to themselves")
        return StoreResult(Outcome.SUCCESS, None)

    async def operation(session: AsyncSession) -> ConnectionRead:
        existing = await _find_pair(session, requester_id, recipient_id)
        if existing is not None:
            logger.info(f"Connection between {requester_id} and {recipient_id} already exists ({existing.status})")
            return ConnectionRead.model_validate(existing)

        connection = Connection(
            requester_id=requester_id,
            recipient_id=recipient_id,
            status=ConnectionStatus.PENDING.value,
        )
        session.add(connection)
        await session.flush()
        await session.refresh(connection)
        return ConnectionRead.model_validate(connection)

    return await guard.run(db, "send_connection_request", operation, default=None, write=True)


async def get_connection_requests(db: AsyncSession, user_id: str) -> StoreResult[List[ConnectionWithProfile]]:
    """
    Get pending requests received by the user, newest first, with both profiles.
    """
    async def operation(session: AsyncSession) -> List[ConnectionWithProfile]:
        result = await session.execute(
            select(Connection)
            .where(
                Connection.recipient_id == user_id,
                Connection.status == ConnectionStatus.PENDING.value,
            )
            .order_by(Connection.created_at.desc())
        )
        requests = [ConnectionRead.model_validate(row) for row in result.scalars().all()]
        shaped = await attach_related(
            session, requests, ConnectionWithProfile,
            key="requester_id", field="requester", model=Profile, schema=ProfileRead,
        )
        return await attach_related(
            session, shaped, ConnectionWithProfile,
            key="recipient_id", field="recipient", model=Profile, schema=ProfileRead,
        )

    return await guard.run(db, "get_connection_requests", operation, default=list)


async def _set_status(db: AsyncSession, label: str, connection_id: str, status: ConnectionStatus) -> StoreResult[bool]:
    async def operation(session: AsyncSession) -> bool:
        result = await session.execute(
            update(Connection)
            .where(Connection.id == connection_id)
            .values(status=status.value, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise RecordNotFound(f"connection {connection_id}")
        return True

    return await guard.run(db, label, operation, default=False, write=True)


async def accept_connection_request(db: AsyncSession, connection_id: str) -> StoreResult[bool]:
    return await _set_status(db, "accept_connection_request", connection_id, ConnectionStatus.ACCEPTED)


async def reject_connection_request(db: AsyncSession, connection_id: str) -> StoreResult[bool]:
    return await _set_status(db, "reject_connection_request", connection_id, ConnectionStatus.REJECTED)


async def remove_connection(db: AsyncSession, user_id: str, target_id: str) -> StoreResult[bool]:
    """
    Delete the connection (or pending request) between two profiles, whichever
    side sent it.

    Returns:
        StoreResult[bool]: True when a row was removed
    """
    async def operation(session: AsyncSession) -> bool:
        result = await session.execute(
            delete(Connection)
            .where(pair_clause(user_id, target_id))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    return await guard.run(db, "remove_connection", operation, default=False, write=True)


async def get_suggested_connections(
    db: AsyncSession,
    user_id: str,
    limit: Optional[int] = None,
) -> StoreResult[List[ProfileRead]]:
    """
    Get up to ``limit`` profiles other than the user. Order is whatever the
    store returns; there is no ranking.
    """
    limit = limit or settings.DEFAULT_SUGGESTION_LIMIT

    async def operation(session: AsyncSession) -> List[ProfileRead]:
        result = await session.execute(select(Profile).where(Profile.id != user_id).limit(limit))
        return [ProfileRead.model_validate(row) for row in result.scalars().all()]

    return await guard.run(db, "get_suggested_connections", operation, default=list)
