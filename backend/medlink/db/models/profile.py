"""
Profile and profile-view models.
"""
from sqlalchemy import Column, String, Integer, Text, Boolean, DateTime, ForeignKey, JSON, UniqueConstraint

from ..base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin, utcnow


class Profile(Base, UUIDMixin, TimestampMixin):
    """
    A member of the network: an individual clinician, a student or an institution.
    The id is shared with the auth provider's user id.
    """
    __tablename__ = "profiles"

    email = Column(String(255), index=True)
    full_name = Column(String(255))
    headline = Column(String(255))
    bio = Column(Text)
    location = Column(String(255))
    avatar_url = Column(Text)
    banner_url = Column(Text)
    website = Column(Text)
    phone = Column(String(64))
    specialization = Column(JSON, default=list)
    is_premium = Column(Boolean, default=False, nullable=False)
    profile_views = Column(Integer, default=0, nullable=False)
    user_type = Column(String(32), default="individual", nullable=False)
    profile_type = Column(String(32), default="individual", nullable=False, index=True)


class ProfileView(Base, UUIDMixin, CreatedAtMixin):
    """
    Log of who looked at which profile; one row per (viewer, profile), refreshed on revisit.
    """
    __tablename__ = "profile_views"
    __table_args__ = (
        UniqueConstraint("viewer_id", "profile_id", name="uq_profile_views_viewer_profile"),
    )

    viewer_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    profile_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    viewed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
