"""
Pydantic schemas for connections and follows.
"""
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime

from medlink.schemas.common import ConnectionStatus, ProfileType
from medlink.schemas.profile import ProfileRead


class ConnectionRead(BaseModel):
    """Schema for a connection row."""
    id: str
    requester_id: str
    recipient_id: str
    status: ConnectionStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ConnectionWithProfile(ConnectionRead):
    """A connection with both parties' profiles attached, when they exist."""
    requester: Optional[ProfileRead] = None
    recipient: Optional[ProfileRead] = None


class ConnectionRequestCreate(BaseModel):
    requester_id: str = Field(..., description="Profile sending the request")
    recipient_id: str = Field(..., description="Profile receiving the request")


class FollowCreate(BaseModel):
    follower_id: str
    following_id: str
    follower_type: ProfileType = ProfileType.INDIVIDUAL
    following_type: ProfileType = ProfileType.INDIVIDUAL


class FollowRead(BaseModel):
    id: str
    follower_id: str
    following_id: str
    follower_type: ProfileType
    following_type: ProfileType
    created_at: datetime

    class Config:
        from_attributes = True


class FollowWithProfile(FollowRead):
    """Follow row with the profile on the interesting side attached."""
    follower: Optional[ProfileRead] = None
    following: Optional[ProfileRead] = None
