"""
Import all models to ensure they are registered with SQLAlchemy.
"""
from ..base import Base
from .profile import Profile, ProfileView
from .post import Post, PostComment, PostLike
from .network import Connection, Follow
from .career import Experience, Education
from .organization import Institution, Job, JobApplication, Event, EventAttendee

__all__ = [
    "Base",
    "Profile",
    "ProfileView",
    "Post",
    "PostComment",
    "PostLike",
    "Connection",
    "Follow",
    "Experience",
    "Education",
    "Institution",
    "Job",
    "JobApplication",
    "Event",
    "EventAttendee",
]
