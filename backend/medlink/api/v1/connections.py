"""
API endpoints for connections between profiles.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from medlink.api.dependencies import unwrap
from medlink.crud import connection as connection_crud
from medlink.db.session import get_db
from medlink.schemas.api import ActionResponse, ConnectionStatusResponse
from medlink.schemas.common import ConnectionState
from medlink.schemas.network import ConnectionRead, ConnectionRequestCreate, ConnectionWithProfile
from medlink.schemas.profile import ProfileRead
from medlink.store.guard import Outcome

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/connections",
    tags=["connections"],
)


# Fixed paths first so they are not captured by /{user_id}
@router.get("/status", response_model=ConnectionStatusResponse)
async def connection_status_endpoint(
    user_id: str = Query(..., description="Profile asking"),
    target_id: str = Query(..., description="Other profile"),
    db: AsyncSession = Depends(get_db),
):
    """
    Status of the connection between two profiles, in either direction.
    """
    stored = unwrap(await connection_crud.get_connection_status(db, user_id, target_id))
    return ConnectionStatusResponse(status=stored, state=ConnectionState.from_status(stored))


@router.post("/", response_model=Optional[ConnectionRead], status_code=status.HTTP_201_CREATED)
async def send_request_endpoint(body: ConnectionRequestCreate, db: AsyncSession = Depends(get_db)):
    if body.requester_id == body.recipient_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot connect to yourself")
    logger.info(f"Connection request from {body.requester_id} to {body.recipient_id}")
    return unwrap(await connection_crud.send_connection_request(db, body.requester_id, body.recipient_id))


@router.delete("/", response_model=ActionResponse)
async def remove_connection_endpoint(
    user_id: str = Query(...),
    target_id: str = Query(...),
    db: AsyncSession = Depends(get_db),
):
    return ActionResponse(success=unwrap(await connection_crud.remove_connection(db, user_id, target_id)))


async def _change_status(result) -> ActionResponse:
    if result.outcome is Outcome.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Connection not found")
    return ActionResponse(success=unwrap(result))


@router.post("/{connection_id}/accept", response_model=ActionResponse)
async def accept_request_endpoint(connection_id: str, db: AsyncSession = Depends(get_db)):
    return await _change_status(await connection_crud.accept_connection_request(db, connection_id))


@router.post("/{connection_id}/reject", response_model=ActionResponse)
async def reject_request_endpoint(connection_id: str, db: AsyncSession = Depends(get_db)):
    return await _change_status(await connection_crud.reject_connection_request(db, connection_id))


@router.get("/{user_id}", response_model=List[ProfileRead])
async def list_connections_endpoint(user_id: str, db: AsyncSession = Depends(get_db)):
    """
    Profiles the user is connected to (accepted connections only).
    """
    return unwrap(await connection_crud.get_connections(db, user_id))


@router.get("/{user_id}/requests", response_model=List[ConnectionWithProfile])
async def list_requests_endpoint(user_id: str, db: AsyncSession = Depends(get_db)):
    return unwrap(await connection_crud.get_connection_requests(db, user_id))
