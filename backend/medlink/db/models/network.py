"""
Connection and follow models.
"""
from sqlalchemy import Column, String, ForeignKey, UniqueConstraint

from ..base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin


class Connection(Base, UUIDMixin, TimestampMixin):
    """
    Symmetric relation between two profiles. Either side may be the requester,
    so lookups match the unordered pair.
    """
    __tablename__ = "connections"

    requester_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    recipient_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    status = Column(String(32), default="pending", nullable=False, index=True)


class Follow(Base, UUIDMixin, CreatedAtMixin):
    """
    Directed relation; the row existing is the follow.
    """
    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follows_follower_following"),
    )

    follower_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    following_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    follower_type = Column(String(32), default="individual", nullable=False)
    following_type = Column(String(32), default="individual", nullable=False)
