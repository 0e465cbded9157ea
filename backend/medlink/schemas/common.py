"""
Enumerations shared by the record schemas.
"""
from enum import Enum


class ProfileType(str, Enum):
    INDIVIDUAL = "individual"
    STUDENT = "student"
    INSTITUTION = "institution"


class Visibility(str, Enum):
    PUBLIC = "public"
    CONNECTIONS = "connections"
    PRIVATE = "private"


class ConnectionStatus(str, Enum):
    """Status as stored on a connection row."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ConnectionState(str, Enum):
    """Three-state view of a connection shown to users."""
    NONE = "none"
    PENDING = "pending"
    CONNECTED = "connected"

    @classmethod
    def from_status(cls, status) -> "ConnectionState":
        """
        Collapse a stored status into the user-facing state.

        Rejected requests keep showing as pending to the requester.
        """
        if status is None:
            return cls.NONE
        if ConnectionStatus(status) is ConnectionStatus.ACCEPTED:
            return cls.CONNECTED
        return cls.PENDING
