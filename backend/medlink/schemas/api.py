"""
Small request/response bodies used by the HTTP API.
"""
from typing import Optional
from pydantic import BaseModel, Field

from medlink.schemas.common import ConnectionState, ConnectionStatus


class ActionResponse(BaseModel):
    """Response model for write operations that report a flag."""
    success: bool = Field(..., description="Whether the operation changed anything")


class EnsureProfileRequest(BaseModel):
    id: str = Field(..., description="Auth user id")
    email: str
    full_name: str


class ProfileViewRequest(BaseModel):
    viewer_id: str = Field(..., description="Profile doing the viewing")


class CommentBody(BaseModel):
    author_id: str
    content: str = Field(..., min_length=1)


class LikeBody(BaseModel):
    user_id: str


class LikeStatusResponse(BaseModel):
    liked: bool


class FollowStatusResponse(BaseModel):
    following: bool


class ConnectionStatusResponse(BaseModel):
    status: Optional[ConnectionStatus] = Field(None, description="Stored status, null when not connected")
    state: ConnectionState = Field(..., description="Collapsed none/pending/connected view")


class HealthResponse(BaseModel):
    status: str
    store_reachable: Optional[bool] = None
    version: str
